"""
Chess.com API client for fetching user game data.
"""
import concurrent.futures
import logging
import re
import time
from typing import Any, Dict, List, Optional

import requests

from . import config
from .errors import SubjectNotFound, UpstreamUnavailable
from .game_data import CATEGORIES
from .models import Country, UserProfile

logger = logging.getLogger(__name__)


class ChessComClient:
    """Client for interacting with Chess.com Published Data API."""

    RATE_LIMIT_DELAY = 0.1  # Delay between requests in seconds

    def __init__(self, base_url: str = config.CHESS_COM_BASE_URL,
                 max_workers: int = config.ARCHIVE_FETCH_WORKERS,
                 timeout: float = config.REQUEST_TIMEOUT,
                 session: Optional[requests.Session] = None):
        """
        Initialize the Chess.com API client.

        Args:
            base_url: Root of the published data API
            max_workers: Number of archives fetched in parallel
            timeout: Per-request timeout in seconds
            session: Optional preconfigured session
        """
        self.base_url = base_url.rstrip('/')
        self.max_workers = max(1, max_workers)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': 'SeasonRecap/1.0'
        })

    def _make_request(self, url: str, username: Optional[str] = None) -> Dict[str, Any]:
        """
        Make an API request with error handling and rate limiting.

        A 404 raises SubjectNotFound when the request is about a player,
        every other failure raises UpstreamUnavailable. Every endpoint used
        here answers with a JSON object, anything else counts as a failure.
        """
        time.sleep(self.RATE_LIMIT_DELAY)
        try:
            response = self.session.get(url, timeout=self.timeout)
            if response.status_code == 404 and username is not None:
                raise SubjectNotFound(username)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.warning(f"HTTP error fetching {url}: {e}")
            raise UpstreamUnavailable(url, f"HTTP {status}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error fetching {url}: {str(e)}")
            raise UpstreamUnavailable(url, str(e)) from e
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {str(e)}")
            raise UpstreamUnavailable(url, "invalid JSON") from e

        if not isinstance(data, dict):
            logger.error(f"Unexpected payload from {url}: {type(data).__name__}")
            raise UpstreamUnavailable(url, "expected a JSON object")
        return data

    # ============================================
    # Game archives
    # ============================================

    def list_archives(self, username: str) -> List[str]:
        """Get the list of monthly archive URLs for a user."""
        url = f"{self.base_url}/player/{username}/games/archives"
        data = self._make_request(url, username=username)
        archives = data.get('archives')
        if not isinstance(archives, list):
            raise UpstreamUnavailable(url, "missing archives list")
        return archives

    def list_season_archives(self, username: str, year: int) -> List[str]:
        """Get the monthly archive URLs of a user that fall in the given year."""
        pattern = re.compile(rf'/games/{year}/\d{{2}}/?$')
        return [url for url in self.list_archives(username) if pattern.search(url)]

    def fetch_archive(self, archive_url: str) -> List[Dict[str, Any]]:
        """Get the raw games of one monthly archive."""
        data = self._make_request(archive_url)
        games = data.get('games', [])
        if not isinstance(games, list):
            raise UpstreamUnavailable(archive_url, "malformed games list")
        return games

    def fetch_archives(self, archive_urls: List[str]) -> List[List[Dict[str, Any]]]:
        """
        Fetch several archives concurrently.

        An archive that fails is logged and skipped; the others still complete.
        Batches are returned in the order of archive_urls.
        """
        if not archive_urls:
            return []

        batches: Dict[str, List[Dict[str, Any]]] = {}
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_url = {
                executor.submit(self.fetch_archive, url): url
                for url in archive_urls
            }
            for future in concurrent.futures.as_completed(future_to_url):
                url = future_to_url[future]
                try:
                    batches[url] = future.result()
                except UpstreamUnavailable as e:
                    logger.warning(f"Skipping archive {url}: {e}")

        skipped = len(archive_urls) - len(batches)
        if skipped > 0:
            logger.info(f"Skipped {skipped} of {len(archive_urls)} archives")

        return [batches[url] for url in archive_urls if url in batches]

    def fetch_season_games(self, username: str, year: int) -> List[List[Dict[str, Any]]]:
        """Fetch every archive batch a user played in the given year."""
        archives = self.list_season_archives(username, year)
        logger.info(f"Fetching {len(archives)} archives for {username} in {year}")
        return self.fetch_archives(archives)

    # ============================================
    # Profile
    # ============================================

    def fetch_profile(self, username: str) -> Dict[str, Any]:
        return self._make_request(f"{self.base_url}/player/{username}", username=username)

    def fetch_stats(self, username: str) -> Dict[str, Any]:
        return self._make_request(f"{self.base_url}/player/{username}/stats", username=username)

    def fetch_country(self, country_code: str) -> Optional[str]:
        data = self._make_request(f"{self.base_url}/country/{country_code}")
        return data.get('name')

    def get_profile(self, username: str) -> UserProfile:
        """
        Verify a username and build its profile.

        The country lookup is best effort: when it fails the country fields
        are left empty.
        """
        player = self.fetch_profile(username)
        stats = self.fetch_stats(username)

        country_code = None
        country_name = None
        country_url = player.get('country')
        if country_url:
            # "https://api.chess.com/pub/country/US" -> "US"
            country_code = country_url.rstrip('/').split('/')[-1] or None
            if country_code:
                try:
                    country_name = self.fetch_country(country_code)
                except UpstreamUnavailable as e:
                    logger.warning(f"Could not resolve country {country_code}: {e}")

        ratings = {}
        for category in CATEGORIES:
            last = (stats.get(f"chess_{category}") or {}).get('last') or {}
            ratings[category] = last.get('rating') or None

        return UserProfile(
            username=player.get('username') or username,
            name=player.get('name') or None,
            avatar=player.get('avatar') or None,
            country=Country(name=country_name, code=country_code),
            ratings=ratings,
        )
