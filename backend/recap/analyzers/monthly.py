"""
Analyzer for the monthly distribution of games per format.
"""
from typing import Dict

from ..game_data import CATEGORIES
from ..models import MonthDistribution, MonthGames, MonthlyGamesSection
from ..section_analyzer import GameContext, SectionAnalyzerBase


class MonthlyDistributionAnalyzer(SectionAnalyzerBase):
    """Games per calendar month, split by format."""

    def __init__(self, username: str):
        super().__init__(username)
        self.months: Dict[str, Dict[str, int]] = {}

    def process_game(self, context: GameContext):
        counts = self.months.setdefault(context.month, {category: 0 for category in CATEGORIES})
        counts[context.category] += 1

    def get_final_results(self) -> MonthlyGamesSection:
        distribution = []
        for month in sorted(self.months):
            counts = self.months[month]
            distribution.append(MonthDistribution(
                month=month,
                total=sum(counts.values()),
                **counts,
            ))

        most_active = MonthGames()
        least_active = MonthGames()
        for entry in distribution:
            if entry.total > most_active.games:
                most_active = MonthGames(month=entry.month, games=entry.total)
            if least_active.month is None or entry.total < least_active.games:
                least_active = MonthGames(month=entry.month, games=entry.total)

        return MonthlyGamesSection(
            mostActive=most_active,
            leastActive=least_active,
            distribution=distribution,
        )
