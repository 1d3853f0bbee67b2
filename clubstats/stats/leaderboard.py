"""End-to-end leaderboard and dashboard builders.

roster -> approved filter -> concurrent stat fetch -> rank / summarize.
"""

from __future__ import annotations

from typing import Any, Literal

import structlog

from clubstats.config import settings
from clubstats.stats.aggregator import aggregate, approved_players
from clubstats.stats.client import ClubApiClient
from clubstats.stats.milestones import summarize
from clubstats.stats.models import EnrichedRecord, RankedEntry
from clubstats.stats.ranker import batting_leaderboard, bowling_leaderboard, rank

logger = structlog.get_logger(__name__)

LeaderboardMetric = Literal["runs", "wickets"]


async def fetch_enriched(client: ClubApiClient) -> list[EnrichedRecord]:
    """Approved players joined with their stat records."""
    roster = await client.list_players()
    players = approved_players(roster)
    logger.info("roster_loaded", total=len(roster), approved=len(players))
    return await aggregate(players, client.get_player_details)


async def build_leaderboard(
    client: ClubApiClient,
    metric: LeaderboardMetric = "runs",
    limit: int | None = None,
) -> list[RankedEntry]:
    """Ranked leaderboard for runs (batting) or wickets (bowling)."""
    records = await fetch_enriched(client)
    return rank(records, metric, limit=limit)


async def build_dashboard(client: ClubApiClient, limit: int | None = None) -> dict[str, Any]:
    """Summary cards plus the top batting and bowling entries."""
    if limit is None:
        limit = settings.leaderboard_limit
    records = await fetch_enriched(client)
    return {
        "summary": summarize(records),
        "batting": [e.to_document() for e in batting_leaderboard(records, limit=limit)],
        "bowling": [e.to_document() for e in bowling_leaderboard(records, limit=limit)],
    }
