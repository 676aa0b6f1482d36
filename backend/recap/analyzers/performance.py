"""
Analyzer for average accuracy, overall and per format.
"""
from typing import Dict, List, Optional

from ..game_data import CATEGORIES
from ..models import AccuracyStats, PerformanceSection
from ..section_analyzer import GameContext, SectionAnalyzerBase, round1

MIN_ACCURACY_SAMPLES = 3


def average_accuracy(samples: List[float]) -> Optional[float]:
    """Mean accuracy, or None when there are too few samples to say anything."""
    if len(samples) < MIN_ACCURACY_SAMPLES:
        return None
    return round1(sum(samples) / len(samples))


class PerformanceAnalyzer(SectionAnalyzerBase):
    """Averages the player's own accuracy over games that report one."""

    def __init__(self, username: str):
        super().__init__(username)
        self.samples: List[float] = []
        self.format_samples: Dict[str, List[float]] = {category: [] for category in CATEGORIES}

    def process_game(self, context: GameContext):
        accuracy = context.accuracy
        if accuracy is None:
            return
        self.samples.append(accuracy)
        self.format_samples[context.category].append(accuracy)

    def get_final_results(self) -> PerformanceSection:
        return PerformanceSection(
            accuracy=AccuracyStats(
                overall=average_accuracy(self.samples),
                byFormat={
                    category: average_accuracy(samples)
                    for category, samples in self.format_samples.items()
                },
            )
        )
