"""
Analyzer for when the player plays and how well: time of day, day of week,
daily volume and the longest game.
"""
from typing import Dict, List, Optional, Set

from ..models import BucketStats, DayOfWeek, LongestGame, PlayingPatternsSection, TimeOfDay
from ..section_analyzer import GameContext, SectionAnalyzerBase, percentage, round1

TIME_BUCKETS = ("morning", "afternoon", "evening", "night")
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

MIN_BUCKET_GAMES = 5
DEFAULT_BEST_TIME = "evening"
DEFAULT_BEST_DAY = "saturday"


def time_bucket(hour: int) -> str:
    if 5 <= hour <= 11:
        return "morning"
    if 12 <= hour <= 16:
        return "afternoon"
    if 17 <= hour <= 21:
        return "evening"
    return "night"


def best_bucket(buckets: Dict[str, BucketStats], order, default: str) -> str:
    """Highest win rate among buckets with enough games; earlier buckets win ties."""
    best: Optional[str] = None
    for name in order:
        stats = buckets[name]
        if stats.games < MIN_BUCKET_GAMES:
            continue
        if best is None or stats.winRate > buckets[best].winRate:
            best = name
    return best or default


class PlayingPatternAnalyzer(SectionAnalyzerBase):
    """
    Buckets games by local hour and weekday.

    Durations are estimates from the move count, not clock measurements.
    """

    def __init__(self, username: str):
        super().__init__(username)
        self.time_games = {name: [0, 0] for name in TIME_BUCKETS}  # [games, wins]
        self.day_games = {name: [0, 0] for name in WEEKDAYS}
        self.days_played: Set[str] = set()
        self.total_games = 0
        self.total_duration = 0.0
        self.longest: Optional[LongestGame] = None

    def process_game(self, context: GameContext):
        self.total_games += 1
        self.days_played.add(context.date)

        for counter in (
            self.time_games[time_bucket(context.played_at.hour)],
            self.day_games[WEEKDAYS[context.played_at.weekday()]],
        ):
            counter[0] += 1
            if context.won:
                counter[1] += 1

        duration = context.duration
        self.total_duration += duration
        if self.longest is None or duration > self.longest.duration:
            self.longest = LongestGame(
                opponent=context.opponent.username,
                date=context.date,
                format=context.category,
                result=context.outcome,
                duration=duration,
                url=context.game.url,
            )

    @staticmethod
    def _bucket_stats(counters: Dict[str, List[int]]) -> Dict[str, BucketStats]:
        return {
            name: BucketStats(games=games, winRate=percentage(wins, games))
            for name, (games, wins) in counters.items()
        }

    def get_final_results(self) -> PlayingPatternsSection:
        time_stats = self._bucket_stats(self.time_games)
        day_stats = self._bucket_stats(self.day_games)

        days = len(self.days_played)
        average_per_day = round1(self.total_games / days) if days else 0.0
        average_duration = round1(self.total_duration / self.total_games) if self.total_games else 0.0

        return PlayingPatternsSection(
            timeOfDay=TimeOfDay(
                bestTimeToPlay=best_bucket(time_stats, TIME_BUCKETS, DEFAULT_BEST_TIME),
                **time_stats,
            ),
            dayOfWeek=DayOfWeek(
                bestDayToPlay=best_bucket(day_stats, WEEKDAYS, DEFAULT_BEST_DAY),
                **day_stats,
            ),
            averageGamesPerDay=average_per_day,
            totalPlayingTime=round1(self.total_duration),
            averageGameDuration=average_duration,
            longestGame=self.longest or LongestGame(),
        )
