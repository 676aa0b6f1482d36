"""
Report composer: runs every section analyzer over a game log in one pass and
assembles the season recap.
"""
import logging
from typing import Dict, Optional

from .analyzers import (
    FormatSpecificAnalyzer,
    MonthlyDistributionAnalyzer,
    OpeningAnalyzer,
    OpponentAnalyzer,
    PerformanceAnalyzer,
    PlayingPatternAnalyzer,
    RatingProgressionAnalyzer,
    SummaryAnalyzer,
)
from .game_data import GameLog
from .models import FormatOpenings, FormatStatsView, Report, ReportView
from .section_analyzer import GameContext, SectionAnalyzerBase, report_timezone

logger = logging.getLogger(__name__)

VIEW_OPENINGS_LIMIT = 3

# Report section -> analyzer class
SECTION_ANALYZERS = {
    'intro': SummaryAnalyzer,
    'monthlyGames': MonthlyDistributionAnalyzer,
    'ratings': RatingProgressionAnalyzer,
    'formatSpecific': FormatSpecificAnalyzer,
    'playingPatterns': PlayingPatternAnalyzer,
    'openings': OpeningAnalyzer,
    'opponents': OpponentAnalyzer,
    'performance': PerformanceAnalyzer,
}


class ReportComposer:
    """Main composer that feeds every game to each registered section analyzer."""

    def __init__(self, username: str, timezone: Optional[str] = None):
        self.username = username
        self.tz = report_timezone(timezone)
        self.analyzers: Dict[str, SectionAnalyzerBase] = {}

    def register_analyzer(self, section: str, analyzer: SectionAnalyzerBase):
        """Register an analyzer that produces the given report section."""
        self.analyzers[section] = analyzer

    def analyze_games(self, games: GameLog) -> Dict[str, object]:
        """Run all registered analyzers over the games and collect their sections."""
        for game in games:
            context = GameContext(game, self.username, self.tz)
            for analyzer in self.analyzers.values():
                analyzer.process_game(context)

        return {
            section: analyzer.get_final_results()
            for section, analyzer in self.analyzers.items()
        }


def compose_report(games: GameLog, username: str, timezone: Optional[str] = None) -> Report:
    """Build the full report. The same games and username always give the same report."""
    composer = ReportComposer(username, timezone)
    for section, analyzer_class in SECTION_ANALYZERS.items():
        composer.register_analyzer(section, analyzer_class(username))

    sections = composer.analyze_games(games)
    logger.info(f"Composed report for {username} from {len(games)} games")
    return Report(**sections)


def build_report_view(report: Report) -> ReportView:
    """
    Project a report without rating detail.

    Drops the ratings section, and in each format section drops rating
    progress, best win and worst loss and keeps at most 3 openings per color.
    """
    format_views = {}
    for category, stats in report.formatSpecific.items():
        format_views[category] = FormatStatsView(
            gamesPlayed=stats.gamesPlayed,
            winRate=stats.winRate,
            openings=FormatOpenings(
                asWhite=[o.model_copy() for o in stats.openings.asWhite[:VIEW_OPENINGS_LIMIT]],
                asBlack=[o.model_copy() for o in stats.openings.asBlack[:VIEW_OPENINGS_LIMIT]],
            ),
            results=stats.results.model_copy(deep=True),
            averageGameDuration=stats.averageGameDuration,
        )

    return ReportView(
        intro=report.intro.model_copy(deep=True),
        monthlyGames=report.monthlyGames.model_copy(deep=True),
        formatSpecific=format_views,
        playingPatterns=report.playingPatterns.model_copy(deep=True),
        openings=report.openings.model_copy(deep=True),
        opponents=report.opponents.model_copy(deep=True),
        performance=report.performance.model_copy(deep=True),
    )
