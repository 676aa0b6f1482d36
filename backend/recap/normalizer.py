"""
Converts raw Chess.com archive games into canonical GameRecords.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from .game_data import (
    CATEGORIES,
    UNKNOWN_ECO,
    UNKNOWN_OPENING,
    GameLog,
    GameRecord,
    PlayerSide,
)
from .pgn_parser import count_moves, opening_name_from_url, parse_headers

logger = logging.getLogger(__name__)


def _player_side(raw_side: Any) -> Optional[PlayerSide]:
    if not isinstance(raw_side, dict):
        return None
    username = raw_side.get('username')
    result = raw_side.get('result')
    if not isinstance(username, str) or not isinstance(result, str):
        return None
    if not username or not result:
        return None
    try:
        rating = int(raw_side.get('rating') or 0)
    except (TypeError, ValueError):
        return None
    return PlayerSide(username=username, rating=rating, result=result)


def _accuracy(accuracies: Any, color: str) -> Optional[float]:
    if not isinstance(accuracies, dict):
        return None
    value = accuracies.get(color)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def normalize_game(raw: Dict[str, Any]) -> Optional[GameRecord]:
    """
    Normalize a single archive entry.

    Returns None for variant games, games outside the supported time classes,
    and games with a missing or malformed player, rating or end time.
    """
    category = raw.get('time_class')
    if category not in CATEGORIES:
        return None

    # Skip variants (chess960, bughouse, ...)
    if raw.get('rules', 'chess') != 'chess':
        return None

    white = _player_side(raw.get('white'))
    black = _player_side(raw.get('black'))
    if white is None or black is None:
        return None

    try:
        end_time = int(raw.get('end_time') or 0)
    except (TypeError, ValueError):
        return None

    pgn = raw.get('pgn') or ""
    if not isinstance(pgn, str):
        return None
    headers = parse_headers(pgn)
    opening = (
        opening_name_from_url(headers.get('ECOUrl'))
        or opening_name_from_url(raw.get('eco'))
        or UNKNOWN_OPENING
    )

    return GameRecord(
        category=category,
        white=white,
        black=black,
        url=raw.get('url') or "",
        end_time=end_time,
        eco=headers.get('ECO') or UNKNOWN_ECO,
        opening=opening,
        termination=headers.get('Termination') or "",
        pgn=pgn,
        move_count=count_moves(pgn),
        white_accuracy=_accuracy(raw.get('accuracies'), 'white'),
        black_accuracy=_accuracy(raw.get('accuracies'), 'black'),
    )


def normalize_archives(batches: Iterable[List[Dict[str, Any]]]) -> GameLog:
    """Normalize every archive batch and return one chronologically sorted log."""
    games: List[GameRecord] = []
    dropped = 0

    for batch in batches:
        for raw in batch:
            game = normalize_game(raw) if isinstance(raw, dict) else None
            if game is None:
                dropped += 1
                continue
            games.append(game)

    if dropped > 0:
        logger.debug(f"Dropped {dropped} unsupported or malformed games")

    games.sort(key=lambda g: g.end_time)
    return tuple(games)
