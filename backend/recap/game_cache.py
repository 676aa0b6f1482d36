"""
In-memory cache of each player's season game log and computed report.

Entries expire after a fixed TTL. Nothing survives a restart.
"""
import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Optional

from . import config
from .chess_com_client import ChessComClient
from .game_data import GameLog
from .models import Report, ReportView
from .normalizer import normalize_archives
from .report import build_report_view, compose_report
from .section_analyzer import report_timezone

logger = logging.getLogger(__name__)


def load_game_log(client: ChessComClient, username: str, season: int) -> GameLog:
    """Fetch a player's archives for one season and normalize them into a sorted log."""
    batches = client.fetch_season_games(username, season)
    games = normalize_archives(batches)
    logger.info(f"Loaded {len(games)} games for {username} in {season}")
    return games


@dataclass
class CacheEntry:
    captured_at: float
    games: GameLog
    report: Optional[Report] = None


@dataclass
class KeyLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0  # Callers holding or waiting on the lock


class GameLogCache:
    """
    Per-player cache of the game log and its report.

    A per-username lock makes concurrent requests for the same player wait
    for a single fetch and a single report computation.
    """

    def __init__(self, client: ChessComClient,
                 ttl_seconds: float = config.CACHE_TTL_SECONDS,
                 season: Optional[int] = config.SEASON_YEAR,
                 timezone: Optional[str] = None,
                 clock: Callable[[], float] = time.time):
        self.client = client
        self.ttl_seconds = ttl_seconds
        self.season = season
        self.timezone = timezone
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._key_locks: Dict[str, KeyLock] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _make_cache_key(username: str) -> str:
        return username.lower()

    def _current_season(self) -> int:
        if self.season is not None:
            return self.season
        return datetime.fromtimestamp(self.clock(), report_timezone(self.timezone)).year

    @contextmanager
    def _locked(self, key: str):
        """Hold the lock for one username. The lock is dropped once no caller uses it."""
        with self._lock:
            key_lock = self._key_locks.get(key)
            if key_lock is None:
                key_lock = KeyLock()
                self._key_locks[key] = key_lock
            key_lock.users += 1

        try:
            with key_lock.lock:
                yield
        finally:
            with self._lock:
                key_lock.users -= 1
                if key_lock.users == 0:
                    del self._key_locks[key]

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.captured_at > self.ttl_seconds

    def _fresh_entry(self, key: str) -> Optional[CacheEntry]:
        """Return the entry for key if unexpired, evicting it otherwise."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._is_expired(entry, self.clock()):
                del self._entries[key]
                logger.info(f"Cache EXPIRED: {key}")
                return None
            return entry

    def _load_entry(self, username: str) -> CacheEntry:
        """Return a fresh entry, fetching the games on a miss. Caller holds the key lock."""
        key = self._make_cache_key(username)
        entry = self._fresh_entry(key)
        if entry is not None:
            logger.info(f"Cache HIT: {key}")
            return entry

        logger.info(f"Cache MISS: {key}")
        games = load_game_log(self.client, username, self._current_season())
        entry = CacheEntry(captured_at=self.clock(), games=games)
        self.cleanup_expired()
        with self._lock:
            self._entries[key] = entry
        return entry

    def get(self, username: str) -> GameLog:
        """Get the player's season games, fetching them if absent or expired."""
        with self._locked(self._make_cache_key(username)):
            return self._load_entry(username).games

    def get_report(self, username: str) -> Report:
        """Get the player's report, computing it once per cache entry."""
        with self._locked(self._make_cache_key(username)):
            entry = self._load_entry(username)
            if entry.report is None:
                entry.report = compose_report(entry.games, username, self.timezone)
            return entry.report

    def get_report_view(self, username: str) -> ReportView:
        """Get the rating-free projection of the player's cached report."""
        return build_report_view(self.get_report(username))

    def cleanup_expired(self) -> int:
        """
        Drop every expired entry.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self.clock()
            expired = [key for key, entry in self._entries.items() if self._is_expired(entry, now)]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.info(f"Cleaned up {len(expired)} expired cache entries")
        return len(expired)

    def invalidate(self, username: str):
        with self._lock:
            self._entries.pop(self._make_cache_key(username), None)

    def clear(self):
        with self._lock:
            self._entries.clear()
