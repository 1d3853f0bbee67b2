"""Join the club roster with per-player stat records.

Every player's stats are fetched concurrently and all fetches are awaited
before building output. A fetch that fails or times out yields a zeroed
record for that player only; it never blocks or cancels the others.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable

import structlog

from clubstats.config import settings
from clubstats.stats.models import EnrichedRecord, PlayerIdentity, StatRecord

logger = structlog.get_logger(__name__)

StatFetcher = Callable[[str], Awaitable[StatRecord]]


def approved_players(roster: Iterable[PlayerIdentity]) -> list[PlayerIdentity]:
    """Players whose registration has been approved, in roster order."""
    return [p for p in roster if p.is_approved]


async def aggregate(
    roster: Iterable[PlayerIdentity],
    stat_fetcher: StatFetcher,
    timeout: float | None = None,
) -> list[EnrichedRecord]:
    """Fetch stats for every roster member and enrich them with identity data.

    Args:
        roster: Players to include. Output order follows this order.
        stat_fetcher: Coroutine function returning a player's StatRecord.
        timeout: Per-fetch timeout in seconds (default ``settings.fetch_timeout``).

    Returns:
        One EnrichedRecord per roster member. Failed fetches are zero-filled.
    """
    players = list(roster)
    if timeout is None:
        timeout = settings.fetch_timeout

    results = await asyncio.gather(
        *(asyncio.wait_for(stat_fetcher(p.username), timeout=timeout) for p in players),
        return_exceptions=True,
    )

    enriched: list[EnrichedRecord] = []
    failed = 0
    for player, result in zip(players, results, strict=True):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                # Cancellation of the caller; let it propagate
                raise result
            failed += 1
            logger.warning(
                "stat_fetch_failed",
                username=player.username,
                error=repr(result),
            )
            stats = StatRecord.zeroed()
        else:
            stats = result
        enriched.append(EnrichedRecord.from_parts(player, stats))

    logger.info("aggregation_complete", players=len(players), failed=failed)
    return enriched
