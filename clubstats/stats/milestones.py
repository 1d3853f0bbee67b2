"""Milestone counts and summary figures for the club dashboard cards."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from clubstats.stats.models import StatRecord

Predicate = Callable[[StatRecord], bool]

# Keyed by the wire names shown on the summary cards
MILESTONES: dict[str, Predicate] = {
    "centuries": lambda r: r.centuries > 0,
    "halfCenturies": lambda r: r.half_centuries > 0,
    "fiveWickets": lambda r: r.five_wickets > 0,
}


def count_qualifying(records: Iterable[StatRecord], predicate: Predicate) -> int:
    """Number of players satisfying a milestone predicate."""
    return sum(1 for r in records if predicate(r))


def count_milestones(records: Sequence[StatRecord]) -> dict[str, int]:
    """Count players reaching each milestone at least once."""
    return {name: count_qualifying(records, pred) for name, pred in MILESTONES.items()}


def summarize(records: Sequence[StatRecord]) -> dict[str, Any]:
    """Totals and milestone counts for the dashboard summary."""
    return {
        "players": len(records),
        "totalRuns": sum(r.runs for r in records),
        "totalWickets": sum(r.wickets for r in records),
        "milestones": count_milestones(records),
    }
