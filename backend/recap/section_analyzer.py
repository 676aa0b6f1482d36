"""
Shared pieces for the report section analyzers.

Every analyzer sees the player's games one at a time, in chronological order,
through a GameContext, and builds its section at the end.
"""
import math
from datetime import datetime
from typing import Dict, Optional, Union
from zoneinfo import ZoneInfo

from pydantic import BaseModel

from . import config
from .game_data import GameRecord, outcome_of

MINUTES_PER_MOVE = 0.5  # Estimated thinking time per full move


def percentage(part: int, whole: int) -> int:
    """Integer percentage rounded half up. Returns 0 when whole is 0."""
    if whole <= 0:
        return 0
    return int(math.floor(part * 100 / whole + 0.5))


def round1(value: float) -> float:
    return round(value, 1)


def estimated_duration(game: GameRecord) -> float:
    """Estimated game length in minutes, derived from the move count."""
    return game.move_count * MINUTES_PER_MOVE


class GameContext:
    """Context information available to analyzers for each game."""

    def __init__(self, game: GameRecord, username: str, tz: ZoneInfo):
        self.game = game
        self.player, self.opponent, self.is_white = game.side_of(username)
        self.outcome = outcome_of(self.player.result)
        self.played_at = datetime.fromtimestamp(game.end_time, tz)

        # Lazy evaluation
        self._date = None

    @property
    def category(self) -> str:
        return self.game.category

    @property
    def date(self) -> str:
        """Calendar day the game ended, as YYYY-MM-DD."""
        if self._date is None:
            self._date = self.played_at.strftime("%Y-%m-%d")
        return self._date

    @property
    def month(self) -> str:
        return self.date[:7]

    @property
    def won(self) -> bool:
        return self.outcome == "win"

    @property
    def duration(self) -> float:
        return estimated_duration(self.game)

    @property
    def accuracy(self) -> Optional[float]:
        return self.game.accuracy_of(self.is_white)


def report_timezone(name: Optional[str] = None) -> ZoneInfo:
    return ZoneInfo(name or config.REPORT_TIMEZONE)


class SectionAnalyzerBase:
    """Base class for analyzers that build one report section."""

    def __init__(self, username: str):
        self.username = username.lower()

    def process_game(self, context: GameContext):
        """Process a single game. Analyzers override this."""
        pass

    def get_final_results(self) -> Union[BaseModel, Dict[str, BaseModel]]:
        """Build the section after all games have been processed."""
        raise NotImplementedError
