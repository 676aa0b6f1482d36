"""
Analyzer for opponent history: most played, best and worst records.
"""
from typing import Dict

from ..game_data import CATEGORIES
from ..models import OpponentRank, OpponentRankings, OpponentsSection
from ..section_analyzer import GameContext, SectionAnalyzerBase, percentage

OPPONENTS_LIMIT = 3
MIN_OPPONENT_GAMES = 1
NO_OPPONENTS = "No opponents found"


class _OpponentTally:
    def __init__(self, username: str):
        self.username = username
        self.games = 0
        self.wins = 0
        self.losses = 0
        self.rating = None
        self.format = None


def _no_opponents() -> OpponentRank:
    return OpponentRank(
        username=NO_OPPONENTS,
        games=0,
        wins=0,
        losses=0,
        winRate=0,
        lossRate=0,
        percentage=0,
        minGames=MIN_OPPONENT_GAMES,
    )


def rank_opponents(tallies: Dict[str, _OpponentTally], total_games: int) -> OpponentRankings:
    """Build the three opponent rankings for one scope (overall or a single format)."""
    entries = [
        OpponentRank(
            username=tally.username,
            games=tally.games,
            wins=tally.wins,
            losses=tally.losses,
            winRate=percentage(tally.wins, tally.games),
            lossRate=percentage(tally.losses, tally.games),
            percentage=percentage(tally.games, total_games),
            rating=tally.rating,
            format=tally.format,
            minGames=MIN_OPPONENT_GAMES,
        )
        for tally in tallies.values()
        if tally.games >= MIN_OPPONENT_GAMES
    ]

    if not entries:
        return OpponentRankings(
            mostPlayed=[_no_opponents()],
            bestPerformance=[_no_opponents()],
            worstPerformance=[_no_opponents()],
        )

    most_played = sorted(entries, key=lambda e: (-e.games, e.username.lower()))
    best = sorted(entries, key=lambda e: (-e.winRate, -e.games, e.username.lower()))
    worst = sorted(entries, key=lambda e: (-e.lossRate, -e.games, e.username.lower()))

    # Copies keep the three rankings independent of each other
    return OpponentRankings(
        mostPlayed=[e.model_copy() for e in most_played[:OPPONENTS_LIMIT]],
        bestPerformance=[e.model_copy() for e in best[:OPPONENTS_LIMIT]],
        worstPerformance=[e.model_copy() for e in worst[:OPPONENTS_LIMIT]],
    )


class OpponentAnalyzer(SectionAnalyzerBase):
    """
    Tracks every opponent, overall and per format.

    Draws count as games but neither as wins nor losses. The rating and
    format reported for an opponent are the ones from the latest game.
    """

    def __init__(self, username: str):
        super().__init__(username)
        self.overall: Dict[str, _OpponentTally] = {}
        self.by_format: Dict[str, Dict[str, _OpponentTally]] = {category: {} for category in CATEGORIES}
        self.total_games = 0
        self.format_games = {category: 0 for category in CATEGORIES}

    def process_game(self, context: GameContext):
        self.total_games += 1
        self.format_games[context.category] += 1

        for scope in (self.overall, self.by_format[context.category]):
            self._record(scope, context)

    @staticmethod
    def _record(scope: Dict[str, _OpponentTally], context: GameContext):
        opponent = context.opponent
        tally = scope.get(opponent.username.lower())
        if tally is None:
            tally = _OpponentTally(opponent.username)
            scope[opponent.username.lower()] = tally

        tally.username = opponent.username
        tally.games += 1
        if context.outcome == "win":
            tally.wins += 1
        elif context.outcome == "loss":
            tally.losses += 1
        tally.rating = opponent.rating
        tally.format = context.category

    def get_final_results(self) -> OpponentsSection:
        by_format = {
            category: rank_opponents(self.by_format[category], self.format_games[category])
            for category in CATEGORIES
            if self.format_games[category] > 0
        }
        return OpponentsSection(
            overall=rank_opponents(self.overall, self.total_games),
            byFormat=by_format,
        )
