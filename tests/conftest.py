"""Shared fixtures for the clubstats test suite."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from clubstats.config import settings
from clubstats.stats.client import ClubApiClient

# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: pure logic tests, no DB needed")
    config.addinivalue_line("markers", "integration: tests that hit DuckDB or the full API flow")
    config.addinivalue_line("markers", "smoke: quick sanity checks")


# ---------------------------------------------------------------------------
# Sample documents (shaped like the stored JSON — camelCase keys)
# ---------------------------------------------------------------------------

SAMPLE_ROSTER: list[dict] = [
    {
        "_id": "p1",
        "username": "rsharma",
        "name": "Rohit Sharma",
        "category": "Batsman",
        "image": "https://img.example.com/rsharma.jpg",
        "status": "approved",
        "likes": 12,
    },
    {
        "_id": "p2",
        "username": "jbumrah",
        "name": "Jasprit Bumrah",
        "category": "Bowler",
        "image": None,
        "status": "approved",
        "likes": 30,
    },
    {
        "_id": "p3",
        "username": "newbie",
        "name": "New Player",
        "category": "All-rounder",
        "status": "pending",
    },
    {
        "_id": "p4",
        "username": "rjadeja",
        "name": "Ravindra Jadeja",
        "category": "All-rounder",
        "status": "approved",
    },
]

SAMPLE_DETAILS: dict[str, dict] = {
    "rsharma": {
        "matches": 10,
        "runs": 480,
        "average": 48.0,
        "strikeRate": 139.5,
        "bestBatting": "105 (58)",
        "halfCenturies": 3,
        "centuries": 1,
        "thirties": 2,
        "wickets": 0,
        "economy": 0,
        "bestBowling": "0/0",
        "recentPerformance": [
            {"opponent": "Riverside CC", "runs": 105, "balls": 58, "wickets": 0, "result": "Won"}
        ],
    },
    "jbumrah": {
        "matches": 10,
        "runs": 35,
        "average": 3.5,
        "strikeRate": 90.0,
        "wickets": 21,
        "economy": 5.8,
        "bestBowling": "5/32",
        "maidens": 4,
        "threeWickets": 3,
        "fiveWickets": 1,
    },
    "rjadeja": {
        "matches": 9,
        "runs": 210,
        "average": 23.33,
        "strikeRate": 128.0,
        "halfCenturies": 1,
        "wickets": 11,
        "economy": 7.1,
        "bestBowling": "3/18",
        "threeWickets": 2,
    },
}


@pytest.fixture()
def sample_roster() -> list[dict]:
    return json.loads(json.dumps(SAMPLE_ROSTER))


@pytest.fixture()
def sample_details() -> dict[str, dict]:
    return json.loads(json.dumps(SAMPLE_DETAILS))


# ---------------------------------------------------------------------------
# HTTP client backed by httpx.MockTransport
# ---------------------------------------------------------------------------


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> ClubApiClient:
    """ClubApiClient whose requests are answered by ``handler``."""
    transport = httpx.MockTransport(handler)
    return ClubApiClient(
        client=httpx.AsyncClient(transport=transport, base_url="http://club.test/api")
    )


@pytest.fixture()
def club_api(sample_roster, sample_details) -> Callable[..., ClubApiClient]:
    """Factory for a mock club API serving the sample roster and details.

    ``failing`` names usernames whose detail fetch returns HTTP 500.
    """

    def factory(failing: tuple[str, ...] = ()) -> ClubApiClient:
        def handler(request: httpx.Request) -> httpx.Response:
            path = request.url.path
            if path == "/api/players":
                return httpx.Response(200, json=sample_roster)
            if path.startswith("/api/player-details/"):
                username = path.rsplit("/", 1)[-1]
                if username in failing:
                    return httpx.Response(500, json={"message": "Internal server error"})
                return httpx.Response(200, json=sample_details.get(username, {}))
            return httpx.Response(404, json={"message": "not found"})

        return make_client(handler)

    return factory


@pytest.fixture()
def mock_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], ClubApiClient]:
    """Build a ClubApiClient around an ad-hoc request handler."""
    return make_client


# ---------------------------------------------------------------------------
# FastAPI test client over a throwaway DuckDB file
# ---------------------------------------------------------------------------


@pytest.fixture()
def api_client(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """FastAPI TestClient backed by a fresh DuckDB file in tmp_path."""
    from clubstats.api import database as api_database
    from clubstats.api.app import app

    monkeypatch.setattr(settings, "duckdb_path", tmp_path / "club.duckdb")
    api_database.close_conn()

    with TestClient(app) as client:
        yield client

    api_database.close_conn()
