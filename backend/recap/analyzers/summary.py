"""
Analyzer for the intro section: volume, favorite format, busiest days and
months, longest streak and longest break.
"""
from datetime import date, timedelta
from typing import Dict, List, Tuple

from ..game_data import CATEGORIES
from ..models import (
    ActiveMonths,
    Break,
    DayCount,
    FavoriteFormat,
    FormatCount,
    IntroSection,
    MonthCount,
    Streak,
)
from ..section_analyzer import GameContext, SectionAnalyzerBase, percentage

ACTIVE_MONTHS_LIMIT = 3


class SummaryAnalyzer(SectionAnalyzerBase):
    """
    Counts games per format, per day and per month.

    The favorite format is decided in the order formats first appear in the
    log: a later format only takes over with a strictly greater game count.
    """

    def __init__(self, username: str):
        super().__init__(username)
        self.total_games = 0
        self.format_counts = {category: 0 for category in CATEGORIES}
        self.format_wins = {category: 0 for category in CATEGORIES}
        self.format_order: List[str] = []
        self.daily_counts: Dict[str, int] = {}
        self.monthly_counts: Dict[str, int] = {}

    def process_game(self, context: GameContext):
        category = context.category
        self.total_games += 1
        self.format_counts[category] += 1
        if context.won:
            self.format_wins[category] += 1
        if category not in self.format_order:
            self.format_order.append(category)

        self.daily_counts[context.date] = self.daily_counts.get(context.date, 0) + 1
        self.monthly_counts[context.month] = self.monthly_counts.get(context.month, 0) + 1

    def _most_games_in_day(self) -> DayCount:
        best = DayCount()
        for day in sorted(self.daily_counts):
            if self.daily_counts[day] > best.count:
                best = DayCount(date=day, count=self.daily_counts[day])
        return best

    def _active_months(self) -> ActiveMonths:
        months = [
            MonthCount(month=month, gamesPlayed=self.monthly_counts[month])
            for month in sorted(self.monthly_counts)
        ]
        # sorted() is stable, so equal counts keep calendar order
        most = sorted(months, key=lambda m: -m.gamesPlayed)[:ACTIVE_MONTHS_LIMIT]
        least = sorted(months, key=lambda m: m.gamesPlayed)[:ACTIVE_MONTHS_LIMIT]
        return ActiveMonths(most=most, least=least)

    def _favorite_format(self) -> FavoriteFormat:
        favorite = FavoriteFormat()
        for category in self.format_order:
            count = self.format_counts[category]
            if count > favorite.gamesPlayed:
                favorite = FavoriteFormat(
                    format=category,
                    gamesPlayed=count,
                    winRate=percentage(self.format_wins[category], count),
                )
        return favorite

    def _streak_and_break(self) -> Tuple[Streak, Break]:
        days = [date.fromisoformat(day) for day in sorted(self.daily_counts)]
        if not days:
            return Streak(), Break()

        first_day = days[0]
        streak_start = first_day
        streak_days = 1
        streak_games = self.daily_counts[first_day.isoformat()]

        longest_streak = Streak(
            startDate=first_day.isoformat(),
            endDate=first_day.isoformat(),
            days=1,
            gamesPlayed=streak_games,
        )
        longest_break = Break()

        for previous_day, day in zip(days, days[1:]):
            delta = (day - previous_day).days
            games = self.daily_counts[day.isoformat()]

            if delta == 1:
                streak_days += 1
                streak_games += games
                if streak_days > longest_streak.days:
                    longest_streak = Streak(
                        startDate=streak_start.isoformat(),
                        endDate=day.isoformat(),
                        days=streak_days,
                        gamesPlayed=streak_games,
                    )
            else:
                gap = delta - 1
                if gap > longest_break.days:
                    longest_break = Break(
                        startDate=(previous_day + timedelta(days=1)).isoformat(),
                        endDate=(day - timedelta(days=1)).isoformat(),
                        days=gap,
                    )
                streak_start = day
                streak_days = 1
                streak_games = games

        return longest_streak, longest_break

    def get_final_results(self) -> IntroSection:
        breakdown = {
            category: FormatCount(
                count=self.format_counts[category],
                percentage=percentage(self.format_counts[category], self.total_games),
            )
            for category in CATEGORIES
        }
        longest_streak, longest_break = self._streak_and_break()

        return IntroSection(
            totalGames=self.total_games,
            formatBreakdown=breakdown,
            mostGamesInDay=self._most_games_in_day(),
            activeMonths=self._active_months(),
            favoriteFormat=self._favorite_format(),
            longestStreak=longest_streak,
            longestBreak=longest_break,
        )
