"""Leaderboard ranking."""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable

from clubstats.stats.models import Badge, EnrichedRecord, RankedEntry

PODIUM: tuple[Badge, ...] = ("gold", "silver", "bronze")

Metric = Callable[[EnrichedRecord], float] | str


def rank(
    records: Iterable[EnrichedRecord], metric: Metric, limit: int | None = None
) -> list[RankedEntry]:
    """Order records by a metric, highest first.

    Ties keep their input order (Python's sort is stable, including with
    ``reverse=True``). The top three get gold, silver and bronze badges.

    Args:
        records: Enriched player records.
        metric: Callable returning the sort value, or an attribute name.
        limit: Keep only the first ``limit`` entries.
    """
    key = operator.attrgetter(metric) if isinstance(metric, str) else metric
    ordered = sorted(records, key=key, reverse=True)
    if limit is not None:
        ordered = ordered[:limit]
    return [
        RankedEntry(
            rank=index + 1,
            badge=PODIUM[index] if index < len(PODIUM) else None,
            record=record,
        )
        for index, record in enumerate(ordered)
    ]


def batting_leaderboard(
    records: Iterable[EnrichedRecord], limit: int | None = None
) -> list[RankedEntry]:
    return rank(records, "runs", limit=limit)


def bowling_leaderboard(
    records: Iterable[EnrichedRecord], limit: int | None = None
) -> list[RankedEntry]:
    return rank(records, "wickets", limit=limit)
