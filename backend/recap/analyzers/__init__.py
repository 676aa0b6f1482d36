"""Report section analyzers."""

from .summary import SummaryAnalyzer
from .monthly import MonthlyDistributionAnalyzer
from .ratings import RatingProgressionAnalyzer
from .format_specific import FormatSpecificAnalyzer
from .playing_patterns import PlayingPatternAnalyzer
from .openings import OpeningAnalyzer
from .opponents import OpponentAnalyzer
from .performance import PerformanceAnalyzer

__all__ = [
    'SummaryAnalyzer',
    'MonthlyDistributionAnalyzer',
    'RatingProgressionAnalyzer',
    'FormatSpecificAnalyzer',
    'PlayingPatternAnalyzer',
    'OpeningAnalyzer',
    'OpponentAnalyzer',
    'PerformanceAnalyzer',
]
