"""
Analyzer for the opening repertoire by color.
"""
from typing import Dict, List

from ..models import ColorOpenings, OpeningRank, OpeningsByColor, OpeningsSection
from ..section_analyzer import GameContext, SectionAnalyzerBase, percentage

MIN_OPENING_GAMES = 2
OPENINGS_LIMIT = 3
NO_OPENINGS = "No openings recorded"


def _no_openings() -> OpeningRank:
    return OpeningRank(name=NO_OPENINGS, count=0, winRate=0, percentage=0)


class OpeningAnalyzer(SectionAnalyzerBase):
    """
    Ranks openings, keyed "<ECO> - <name>", by win rate for each color.

    Only openings played at least twice are ranked. Equal win rates are
    ordered by games played, then by name.
    """

    def __init__(self, username: str):
        super().__init__(username)
        self.openings: Dict[str, Dict[str, List[int]]] = {"white": {}, "black": {}}  # name -> [count, wins]
        self.color_games = {"white": 0, "black": 0}

    def process_game(self, context: GameContext):
        color = "white" if context.is_white else "black"
        game = context.game

        self.color_games[color] += 1
        stats = self.openings[color].setdefault(f"{game.eco} - {game.opening}", [0, 0])
        stats[0] += 1
        if context.won:
            stats[1] += 1

    def _rank_color(self, color: str) -> ColorOpenings:
        color_total = self.color_games[color]
        eligible = [
            OpeningRank(
                name=name,
                count=count,
                winRate=percentage(wins, count),
                percentage=percentage(count, color_total),
            )
            for name, (count, wins) in self.openings[color].items()
            if count >= MIN_OPENING_GAMES
        ]

        if not eligible:
            return ColorOpenings(topOpenings=[_no_openings()], worstOpenings=[_no_openings()])

        top = sorted(eligible, key=lambda o: (-o.winRate, -o.count, o.name))
        worst = sorted(eligible, key=lambda o: (o.winRate, -o.count, o.name))
        return ColorOpenings(
            topOpenings=top[:OPENINGS_LIMIT],
            worstOpenings=[o.model_copy() for o in worst[:OPENINGS_LIMIT]],
        )

    def get_final_results(self) -> OpeningsSection:
        return OpeningsSection(
            byColor=OpeningsByColor(
                asWhite=self._rank_color("white"),
                asBlack=self._rank_color("black"),
            )
        )
