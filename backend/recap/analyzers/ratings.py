"""
Analyzer for rating progression per format.
"""
from typing import Dict, List, Optional

from ..game_data import CATEGORIES
from ..models import (
    BestRatingDay,
    PeakRating,
    RatingGain,
    RatingLoss,
    RatingMetadata,
    RatingPoint,
    RatingsSection,
)
from ..section_analyzer import GameContext, SectionAnalyzerBase


class RatingProgressionAnalyzer(SectionAnalyzerBase):
    """
    Walks each format's games in order, tracking the rating after every game,
    the peak, and the net rating change per calendar day.

    The first game of a format is the baseline and contributes no change.
    Ties on peak, best gain and worst loss go to the earliest date.
    """

    def __init__(self, username: str):
        super().__init__(username)
        self.progress: Dict[str, List[RatingPoint]] = {category: [] for category in CATEGORIES}
        self.peaks: Dict[str, Optional[PeakRating]] = {category: None for category in CATEGORIES}
        self.daily_change: Dict[str, Dict[str, int]] = {category: {} for category in CATEGORIES}
        self.first_game_date: Optional[str] = None
        self.last_game_date: Optional[str] = None
        self.total_games = 0

    def process_game(self, context: GameContext):
        category = context.category
        rating = context.player.rating
        points = self.progress[category]

        change = rating - points[-1].rating if points else 0
        day_changes = self.daily_change[category]
        day_changes[context.date] = day_changes.get(context.date, 0) + change

        points.append(RatingPoint(date=context.date, rating=rating))

        peak = self.peaks[category]
        if peak is None or rating > peak.rating:
            self.peaks[category] = PeakRating(rating=rating, date=context.date)

        if self.first_game_date is None:
            self.first_game_date = context.date
        self.last_game_date = context.date
        self.total_games += 1

    def _best_gain(self, category: str) -> Optional[RatingGain]:
        best = None
        for day, change in self.daily_change[category].items():
            if change > 0 and (best is None or change > best.gain):
                best = RatingGain(date=day, gain=change)
        return best

    def _worst_loss(self, category: str) -> Optional[RatingLoss]:
        worst = None
        for day, change in self.daily_change[category].items():
            if change < 0 and (worst is None or -change > worst.loss):
                worst = RatingLoss(date=day, loss=-change)
        return worst

    def get_final_results(self) -> RatingsSection:
        best_gains = {category: self._best_gain(category) for category in CATEGORIES}

        best_day = BestRatingDay()
        for category in CATEGORIES:
            gain = best_gains[category]
            if gain is not None and gain.gain > best_day.gain:
                best_day = BestRatingDay(date=gain.date, format=category, gain=gain.gain)

        return RatingsSection(
            currentRatings={
                category: points[-1].rating if points else None
                for category, points in self.progress.items()
            },
            ratingProgress={category: list(points) for category, points in self.progress.items()},
            bestRatingGains=best_gains,
            worstRatingLosses={category: self._worst_loss(category) for category in CATEGORIES},
            bestRatingDay=best_day,
            peakRatings=dict(self.peaks),
            metadata=RatingMetadata(
                firstGameDate=self.first_game_date,
                lastGameDate=self.last_game_date,
                totalGamesAnalyzed=self.total_games,
            ),
        )
