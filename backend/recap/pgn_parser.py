"""
PGN parsing utilities - lightweight version.
"""
import re
from io import StringIO
from typing import Dict, Optional

import chess.pgn

SAN_MOVE_PATTERN = re.compile(r'[KQRBN]?[a-h]?[1-8]?x?[a-h][1-8](?:=[QRBN])?[+#]?|O-O-O|O-O')


def parse_headers(pgn_string: str) -> Dict[str, str]:
    """Read the PGN tag pairs of a game. Returns an empty dict for empty or unreadable text."""
    if not pgn_string:
        return {}
    headers = chess.pgn.read_headers(StringIO(pgn_string))
    if headers is None:
        return {}
    return dict(headers)


def count_moves(pgn_string: str) -> int:
    """Count full moves in the move text of a PGN."""
    if not pgn_string:
        return 0

    move_text = re.sub(r'\[[^\]]*\]', '', pgn_string)  # Remove headers
    move_text = re.sub(r'\{[^}]*\}', '', move_text)    # Remove comments (clock annotations)
    move_text = re.sub(r'\([^)]*\)', '', move_text)    # Remove variations

    half_moves = len(SAN_MOVE_PATTERN.findall(move_text))
    return (half_moves + 1) // 2


def opening_name_from_url(url: Optional[str]) -> Optional[str]:
    """
    Turn a Chess.com opening URL into a readable name.

    "https://www.chess.com/openings/Sicilian-Defense-Najdorf" -> "Sicilian Defense Najdorf"
    """
    if not isinstance(url, str) or not url:
        return None
    slug = url.rstrip('/').split('/')[-1]
    if not slug:
        return None
    return slug.replace('-', ' ')
