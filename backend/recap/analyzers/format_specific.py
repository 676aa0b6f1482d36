"""
Analyzer for per-format deep dives: results by termination, estimated game
length, best win, worst loss and the openings played in that format.
"""
from typing import Dict, List, Optional

from ..game_data import CATEGORIES
from ..models import (
    DecisiveResults,
    DrawResults,
    FormatOpenings,
    FormatResults,
    FormatStats,
    NotableGame,
    OpeningStat,
    RatingPoint,
)
from ..section_analyzer import GameContext, SectionAnalyzerBase, percentage, round1

MIN_FORMAT_GAMES = 15
MIN_FORMAT_SHARE = 0.10
FORMAT_OPENINGS_LIMIT = 5

# First matching keyword wins
DECISIVE_KEYWORDS = (
    ("resignation", "byResignation"),
    ("time", "onTime"),
    ("checkmate", "byCheckmate"),
)
DRAW_KEYWORDS = (
    ("agreement", "byAgreement"),
    ("repetition", "byRepetition"),
    ("stalemate", "byStalemate"),
    ("insufficient", "byInsufficientMaterial"),
)


def classify_termination(termination: str, keywords) -> Optional[str]:
    """Return the result field a termination descriptor counts towards, if any."""
    text = termination.lower()
    for keyword, field in keywords:
        if keyword in text:
            return field
    return None


def is_format_eligible(format_games: int, total_games: int) -> bool:
    """A format gets its own section with 15+ games or more than 10% of all games."""
    if format_games <= 0:
        return False
    return format_games >= MIN_FORMAT_GAMES or format_games / total_games > MIN_FORMAT_SHARE


class _FormatTally:
    """Running totals for one format."""

    def __init__(self):
        self.games = 0
        self.wins = {"total": 0, "byResignation": 0, "onTime": 0, "byCheckmate": 0}
        self.losses = {"total": 0, "byResignation": 0, "onTime": 0, "byCheckmate": 0}
        self.draws = {
            "total": 0,
            "byAgreement": 0,
            "byRepetition": 0,
            "byStalemate": 0,
            "byInsufficientMaterial": 0,
        }
        self.total_duration = 0.0
        self.rating_progress: List[RatingPoint] = []
        self.openings = {"white": {}, "black": {}}  # name -> [count, wins]
        self.best_win: Optional[NotableGame] = None
        self.worst_loss: Optional[NotableGame] = None


class FormatSpecificAnalyzer(SectionAnalyzerBase):
    """
    Builds a stats block for every format the player played enough of.

    Best win is the win against the highest rated opponent, worst loss the
    loss against the lowest rated one; the earliest game wins ties.
    """

    def __init__(self, username: str):
        super().__init__(username)
        self.tallies: Dict[str, _FormatTally] = {category: _FormatTally() for category in CATEGORIES}
        self.total_games = 0

    def process_game(self, context: GameContext):
        tally = self.tallies[context.category]
        game = context.game
        opponent = context.opponent

        self.total_games += 1
        tally.games += 1
        tally.total_duration += context.duration
        tally.rating_progress.append(RatingPoint(date=context.date, rating=context.player.rating))

        notable = NotableGame(
            opponent=opponent.username,
            opponentRating=opponent.rating,
            date=context.date,
            url=game.url,
        )

        if context.outcome == "win":
            self._count_result(tally.wins, game.termination, DECISIVE_KEYWORDS)
            if tally.best_win is None or opponent.rating > tally.best_win.opponentRating:
                tally.best_win = notable
        elif context.outcome == "loss":
            self._count_result(tally.losses, game.termination, DECISIVE_KEYWORDS)
            if tally.worst_loss is None or opponent.rating < tally.worst_loss.opponentRating:
                tally.worst_loss = notable
        else:
            self._count_result(tally.draws, game.termination, DRAW_KEYWORDS)

        color_openings = tally.openings["white" if context.is_white else "black"]
        stats = color_openings.setdefault(f"{game.eco} - {game.opening}", [0, 0])
        stats[0] += 1
        if context.won:
            stats[1] += 1

    @staticmethod
    def _count_result(counter: Dict[str, int], termination: str, keywords):
        counter["total"] += 1
        field = classify_termination(termination, keywords)
        if field is not None:
            counter[field] += 1

    @staticmethod
    def _ranked_openings(openings: Dict[str, List[int]]) -> List[OpeningStat]:
        ranked = sorted(openings.items(), key=lambda item: (-item[1][0], item[0]))
        return [
            OpeningStat(name=name, count=count, winRate=percentage(wins, count))
            for name, (count, wins) in ranked[:FORMAT_OPENINGS_LIMIT]
        ]

    def get_final_results(self) -> Dict[str, FormatStats]:
        sections = {}
        for category in CATEGORIES:
            tally = self.tallies[category]
            if not is_format_eligible(tally.games, self.total_games):
                continue

            sections[category] = FormatStats(
                gamesPlayed=tally.games,
                winRate=percentage(tally.wins["total"], tally.games),
                ratingProgress=tally.rating_progress,
                openings=FormatOpenings(
                    asWhite=self._ranked_openings(tally.openings["white"]),
                    asBlack=self._ranked_openings(tally.openings["black"]),
                ),
                results=FormatResults(
                    wins=DecisiveResults(**tally.wins),
                    draws=DrawResults(**tally.draws),
                    losses=DecisiveResults(**tally.losses),
                ),
                averageGameDuration=round1(tally.total_duration / tally.games),
                bestWin=tally.best_win,
                worstLoss=tally.worst_loss,
            )
        return sections
