"""
Tests for opponent rankings.
"""
from recap.analyzers import OpponentAnalyzer
from recap.analyzers.opponents import NO_OPPONENTS

from factories import SUBJECT, make_game, run_analyzer, ts


def opponents_of(games):
    return run_analyzer(OpponentAnalyzer(SUBJECT), games)


def series(opponent, results, category="blitz", start=0, rating=1500):
    return [
        make_game(opponent=opponent, result=result, category=category,
                  opponent_rating=rating, end_time=ts(2024, 1, 1) + start + i)
        for i, result in enumerate(results)
    ]


def test_bob_three_games_two_wins():
    games = series("bob", ["win", "loss", "win"]) + series("carol", ["win"], start=10)

    overall = opponents_of(games).overall

    bob = overall.mostPlayed[0]
    assert bob.username == "bob"
    assert bob.games == 3
    assert bob.wins == 2
    assert bob.losses == 1
    assert bob.winRate == 67
    assert bob.lossRate == 33
    assert bob.percentage == 75


def test_draws_count_in_neither_wins_nor_losses():
    games = series("dave", ["draw", "draw", "win", "loss"])

    dave = opponents_of(games).overall.mostPlayed[0]

    assert dave.games == 4
    assert dave.wins == 1
    assert dave.losses == 1
    assert dave.winRate == 25
    assert dave.lossRate == 25


def test_rankings_and_truncation():
    games = (
        series("bob", ["win", "loss", "win"], start=0)
        + series("carol", ["win", "win"], start=10)
        + series("dave", ["loss", "loss"], start=20)
        + series("erin", ["loss"], start=30)
        + series("frank", ["win"], start=40)
    )

    overall = opponents_of(games).overall

    assert [e.username for e in overall.mostPlayed] == ["bob", "carol", "dave"]
    assert [e.username for e in overall.bestPerformance] == ["carol", "frank", "bob"]
    assert [e.username for e in overall.worstPerformance] == ["dave", "erin", "bob"]
    assert all(e.minGames == 1 for e in overall.bestPerformance)


def test_usernames_match_case_insensitively_and_keep_latest_details():
    games = [
        make_game(opponent="Bob", category="blitz", opponent_rating=1400, end_time=ts(2024, 1, 1)),
        make_game(opponent="bob", category="rapid", opponent_rating=1450, end_time=ts(2024, 1, 2)),
    ]

    bob = opponents_of(games).overall.mostPlayed[0]

    assert bob.games == 2
    assert bob.username == "bob"
    assert bob.rating == 1450
    assert bob.format == "rapid"


def test_by_format_rankings():
    games = series("bob", ["win", "win"], category="rapid") + series("carol", ["loss"], category="bullet", start=10)

    by_format = opponents_of(games).byFormat

    assert set(by_format) == {"rapid", "bullet"}
    assert by_format["rapid"].mostPlayed[0].username == "bob"
    assert by_format["rapid"].mostPlayed[0].percentage == 100
    assert by_format["bullet"].worstPerformance[0].username == "carol"
    assert by_format["bullet"].worstPerformance[0].lossRate == 100


def test_empty_log_gives_sentinels():
    section = opponents_of([])

    for ranking in (section.overall.mostPlayed, section.overall.bestPerformance, section.overall.worstPerformance):
        assert len(ranking) == 1
        assert ranking[0].username == NO_OPPONENTS
        assert ranking[0].games == 0
    assert section.byFormat == {}
