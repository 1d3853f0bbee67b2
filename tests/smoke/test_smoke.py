"""Smoke tests — verify the system isn't fundamentally broken."""

from __future__ import annotations

import pytest

from clubstats.config import settings

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@pytest.mark.smoke
class TestConfig:
    """Settings load correctly."""

    def test_project_root_exists(self) -> None:
        assert settings.project_root.exists()

    def test_timeouts_positive(self) -> None:
        assert settings.fetch_timeout > 0
        assert settings.save_timeout > 0

    def test_imports(self) -> None:
        """Core modules are importable without errors."""
        from clubstats.api import app, database  # noqa: F401
        from clubstats.stats import aggregator, client, milestones, ranker, store  # noqa: F401


# ---------------------------------------------------------------------------
# API surface
# ---------------------------------------------------------------------------


@pytest.mark.smoke
class TestRoutes:
    """The collaborator endpoints the stats client depends on are mounted."""

    @pytest.fixture(scope="class")
    def paths(self) -> set[str]:
        from clubstats.api.app import app

        return {route.path for route in app.routes}

    @pytest.mark.parametrize(
        "path",
        [
            "/api/players",
            "/api/players/{username}",
            "/api/players/approve",
            "/api/players/{username}/like",
            "/api/player-details",
            "/api/player-details/{username}",
            "/api/leaderboards/batting",
            "/api/leaderboards/bowling",
            "/api/leaderboards/milestones",
        ],
    )
    def test_route_registered(self, paths: set[str], path: str) -> None:
        assert path in paths

    def test_health(self, api_client) -> None:
        assert api_client.get("/").json() == {"status": "ok", "service": "clubstats-api"}


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@pytest.mark.smoke
def test_cli_prints_leaderboard(club_api, monkeypatch, capsys) -> None:
    from clubstats.stats import run

    monkeypatch.setattr(run, "ClubApiClient", lambda base_url: club_api())
    monkeypatch.setattr("sys.argv", ["clubstats-leaderboard", "--metric", "runs", "--milestones"])
    run.main()

    out = capsys.readouterr().out
    assert "Batting leaderboard (runs):" in out
    # structlog also writes to stdout, so look rows up by content
    (top_row,) = [line for line in out.splitlines() if "Rohit Sharma" in line]
    assert "gold" in top_row
    assert "480" in top_row
    assert "centuries" in out
