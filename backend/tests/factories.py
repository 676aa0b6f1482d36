"""
Builders for raw archive games and normalized game records used across tests.
"""
import calendar
from typing import Optional
from zoneinfo import ZoneInfo

from recap.game_data import UNKNOWN_ECO, UNKNOWN_OPENING, GameRecord, PlayerSide
from recap.pgn_parser import opening_name_from_url
from recap.section_analyzer import GameContext

SUBJECT = "alice"

OWN_RESULTS = {"win": "win", "draw": "agreed", "loss": "resigned"}
OPPONENT_RESULTS = {"win": "resigned", "draw": "agreed", "loss": "win"}


def ts(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> int:
    """UTC timestamp in seconds."""
    return calendar.timegm((year, month, day, hour, minute, 0))


def make_pgn(eco: Optional[str] = "C50",
             opening_url: Optional[str] = "https://www.chess.com/openings/Italian-Game",
             termination: Optional[str] = None,
             moves: int = 30) -> str:
    headers = ['[Event "Live Chess"]', '[Site "Chess.com"]']
    if eco:
        headers.append(f'[ECO "{eco}"]')
    if opening_url:
        headers.append(f'[ECOUrl "{opening_url}"]')
    if termination:
        headers.append(f'[Termination "{termination}"]')

    move_text = []
    for number in range(1, moves + 1):
        white_move, black_move = ("Nf3", "Nf6") if number % 2 else ("Ng1", "Ng8")
        move_text.append(f"{number}. {white_move} {{[%clk 0:02:59]}} {number}... {black_move} {{[%clk 0:02:58]}}")
    return "\n".join(headers) + "\n\n" + " ".join(move_text) + " 1-0"


def make_raw_game(white: str = SUBJECT, black: str = "bob",
                  white_result: str = "win", black_result: str = "resigned",
                  white_rating: Optional[int] = 1500, black_rating: Optional[int] = 1500,
                  time_class: str = "blitz", end_time: int = 0,
                  url: str = "https://www.chess.com/game/live/1",
                  pgn: Optional[str] = None, accuracies: Optional[dict] = None,
                  eco: Optional[str] = None) -> dict:
    raw = {
        "url": url,
        "pgn": pgn if pgn is not None else make_pgn(),
        "time_control": "180",
        "end_time": end_time,
        "rated": True,
        "time_class": time_class,
        "rules": "chess",
        "white": {"username": white, "result": white_result},
        "black": {"username": black, "result": black_result},
    }
    if white_rating is not None:
        raw["white"]["rating"] = white_rating
    if black_rating is not None:
        raw["black"]["rating"] = black_rating
    if accuracies is not None:
        raw["accuracies"] = accuracies
    if eco is not None:
        raw["eco"] = eco
    return raw


def make_game(opponent: str = "bob", result: str = "win", category: str = "blitz",
              rating: int = 1500, opponent_rating: int = 1500,
              end_time: int = 0, color: str = "white",
              termination: str = "", eco: Optional[str] = "C50",
              opening_url: Optional[str] = "https://www.chess.com/openings/Italian-Game",
              moves: int = 30, accuracy: Optional[float] = None,
              url: str = "https://www.chess.com/game/live/1",
              player_result: Optional[str] = None) -> GameRecord:
    """Build a game from the subject's point of view."""
    own_result = player_result or OWN_RESULTS[result]
    other_result = OPPONENT_RESULTS[result]
    player = PlayerSide(username=SUBJECT, rating=rating, result=own_result)
    other = PlayerSide(username=opponent, rating=opponent_rating, result=other_result)
    white, black = (player, other) if color == "white" else (other, player)

    return GameRecord(
        category=category,
        white=white,
        black=black,
        url=url,
        end_time=end_time,
        eco=eco or UNKNOWN_ECO,
        opening=opening_name_from_url(opening_url) or UNKNOWN_OPENING,
        termination=termination,
        pgn=make_pgn(eco=eco, opening_url=opening_url, termination=termination, moves=moves),
        move_count=moves,
        white_accuracy=accuracy if color == "white" else None,
        black_accuracy=accuracy if color == "black" else None,
    )


def run_analyzer(analyzer, games):
    """Feed games to a single section analyzer in UTC and return its section."""
    tz = ZoneInfo("UTC")
    for game in games:
        analyzer.process_game(GameContext(game, SUBJECT, tz))
    return analyzer.get_final_results()
