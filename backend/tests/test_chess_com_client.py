"""
Tests for the Chess.com client using a fake HTTP session.
"""
import pytest
import requests

from recap.chess_com_client import ChessComClient
from recap.errors import SubjectNotFound, UpstreamUnavailable

from factories import make_raw_game, ts

BASE = "https://api.chess.com/pub"


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self.payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        if self.payload is None:
            raise ValueError("no JSON")
        return self.payload


class FakeSession:
    """Serves canned responses keyed by URL; unknown URLs return 404."""

    def __init__(self, routes):
        self.routes = routes
        self.headers = {}
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        route = self.routes.get(url)
        if isinstance(route, Exception):
            raise route
        if route is None:
            return FakeResponse(404)
        return route


@pytest.fixture(autouse=True)
def no_rate_limit(monkeypatch):
    monkeypatch.setattr(ChessComClient, "RATE_LIMIT_DELAY", 0)


def make_client(routes):
    return ChessComClient(base_url=BASE, max_workers=3, timeout=1, session=FakeSession(routes))


def archive_url(year, month):
    return f"{BASE}/player/alice/games/{year}/{month:02d}"


def test_list_archives_missing_user():
    client = make_client({})
    with pytest.raises(SubjectNotFound):
        client.list_archives("alice")


def test_list_archives_server_error():
    client = make_client({f"{BASE}/player/alice/games/archives": FakeResponse(500, {})})
    with pytest.raises(UpstreamUnavailable):
        client.list_archives("alice")


def test_list_archives_network_error():
    client = make_client({
        f"{BASE}/player/alice/games/archives": requests.exceptions.ConnectionError("down"),
    })
    with pytest.raises(UpstreamUnavailable):
        client.list_archives("alice")


def test_list_season_archives_filters_year():
    archives = [archive_url(2023, 12), archive_url(2024, 1), archive_url(2024, 2), archive_url(2025, 1)]
    client = make_client({
        f"{BASE}/player/alice/games/archives": FakeResponse(200, {"archives": archives}),
    })

    assert client.list_season_archives("alice", 2024) == [archive_url(2024, 1), archive_url(2024, 2)]


def test_fetch_archives_skips_failures_and_keeps_order():
    urls = [archive_url(2024, m) for m in (1, 2, 3, 4)]
    client = make_client({
        urls[0]: FakeResponse(200, {"games": [make_raw_game(end_time=ts(2024, 1, 5), url="jan")]}),
        urls[1]: FakeResponse(503, {}),
        urls[2]: requests.exceptions.Timeout("slow"),
        urls[3]: FakeResponse(200, {"games": [make_raw_game(end_time=ts(2024, 4, 5), url="apr")]}),
    })

    batches = client.fetch_archives(urls)

    assert [[g["url"] for g in batch] for batch in batches] == [["jan"], ["apr"]]
    assert sorted(client.session.requested) == sorted(urls)


def test_fetch_archive_rejects_non_object_payload():
    url = archive_url(2024, 1)
    client = make_client({url: FakeResponse(200, [make_raw_game()])})

    with pytest.raises(UpstreamUnavailable):
        client.fetch_archive(url)


def test_fetch_archives_skips_non_object_payload():
    urls = [archive_url(2024, 1), archive_url(2024, 2)]
    client = make_client({
        urls[0]: FakeResponse(200, [make_raw_game(url="stray")]),
        urls[1]: FakeResponse(200, {"games": [make_raw_game(url="feb")]}),
    })

    batches = client.fetch_archives(urls)

    assert [[g["url"] for g in batch] for batch in batches] == [["feb"]]


def test_fetch_archives_empty():
    assert make_client({}).fetch_archives([]) == []


def test_fetch_archive_missing_games_key():
    url = archive_url(2024, 1)
    client = make_client({url: FakeResponse(200, {})})
    assert client.fetch_archive(url) == []


def test_fetch_season_games():
    urls = [archive_url(2024, 1), archive_url(2024, 2)]
    client = make_client({
        f"{BASE}/player/alice/games/archives": FakeResponse(200, {"archives": [archive_url(2023, 5)] + urls}),
        urls[0]: FakeResponse(200, {"games": [make_raw_game(url="a")]}),
        urls[1]: FakeResponse(200, {"games": [make_raw_game(url="b"), make_raw_game(url="c")]}),
    })

    batches = client.fetch_season_games("alice", 2024)

    assert [len(batch) for batch in batches] == [1, 2]
    assert archive_url(2023, 5) not in client.session.requested


def test_get_profile():
    client = make_client({
        f"{BASE}/player/alice": FakeResponse(200, {
            "username": "Alice",
            "name": "Alice Liddell",
            "avatar": "https://images.chesscomfiles.com/alice.png",
            "country": f"{BASE}/country/GB",
        }),
        f"{BASE}/player/alice/stats": FakeResponse(200, {
            "chess_rapid": {"last": {"rating": 1520, "date": 1}},
            "chess_blitz": {"last": {"rating": 1310, "date": 1}},
        }),
        f"{BASE}/country/GB": FakeResponse(200, {"name": "United Kingdom", "code": "GB"}),
    })

    profile = client.get_profile("alice")

    assert profile.username == "Alice"
    assert profile.name == "Alice Liddell"
    assert profile.country.code == "GB"
    assert profile.country.name == "United Kingdom"
    assert profile.ratings == {"rapid": 1520, "blitz": 1310, "bullet": None}


def test_get_profile_country_failure_is_not_fatal():
    client = make_client({
        f"{BASE}/player/alice": FakeResponse(200, {"username": "alice", "country": f"{BASE}/country/XX"}),
        f"{BASE}/player/alice/stats": FakeResponse(200, {}),
        f"{BASE}/country/XX": FakeResponse(500, {}),
    })

    profile = client.get_profile("alice")

    assert profile.country.code == "XX"
    assert profile.country.name is None
    assert profile.name is None
    assert profile.avatar is None


def test_get_profile_unknown_user():
    with pytest.raises(SubjectNotFound):
        make_client({}).get_profile("ghost")
