"""
Data models for normalized chess games.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

CATEGORIES = ("rapid", "blitz", "bullet")

UNKNOWN_ECO = "Unknown"
UNKNOWN_OPENING = "Unknown"

# Chess.com per-side result codes that end a game in a draw
DRAW_RESULTS = frozenset({
    "agreed",
    "repetition",
    "stalemate",
    "insufficient",
    "timevsinsufficient",
    "50move",
})


@dataclass(frozen=True)
class PlayerSide:
    """One side of a game."""
    username: str
    rating: int
    result: str  # Chess.com result code: "win", "checkmated", "agreed", ...


@dataclass(frozen=True)
class GameRecord:
    """A single normalized game."""
    category: str  # "rapid", "blitz" or "bullet"
    white: PlayerSide
    black: PlayerSide
    url: str
    end_time: int  # Seconds since epoch
    eco: str = UNKNOWN_ECO
    opening: str = UNKNOWN_OPENING
    termination: str = ""
    pgn: str = ""
    move_count: int = 0  # Full moves in the move text
    white_accuracy: Optional[float] = None
    black_accuracy: Optional[float] = None

    def side_of(self, username: str) -> Tuple[PlayerSide, PlayerSide, bool]:
        """Return (player, opponent, player_is_white) for the given username."""
        if self.white.username.lower() == username.lower():
            return self.white, self.black, True
        return self.black, self.white, False

    def accuracy_of(self, is_white: bool) -> Optional[float]:
        return self.white_accuracy if is_white else self.black_accuracy


# Chronologically sorted games for one player
GameLog = Tuple[GameRecord, ...]


def outcome_of(result_code: str) -> str:
    """Map a Chess.com result code to "win", "draw" or "loss"."""
    if result_code == "win":
        return "win"
    if result_code in DRAW_RESULTS:
        return "draw"
    return "loss"
