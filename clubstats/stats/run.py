"""CLI entry point for club leaderboards.

Usage:
    # Top run scorers (default)
    python -m clubstats.stats.run

    # Top wicket takers, first 5 only
    python -m clubstats.stats.run --metric wickets --limit 5

    # Include milestone counts (centuries, fifties, five-wicket hauls)
    python -m clubstats.stats.run --milestones

    # Point at another deployment
    python -m clubstats.stats.run --base-url https://club.example.com/api
"""

from __future__ import annotations

import argparse

import structlog

from clubstats.config import settings
from clubstats.stats.client import ClubApiClient
from clubstats.stats.leaderboard import fetch_enriched
from clubstats.stats.milestones import summarize
from clubstats.stats.models import RankedEntry
from clubstats.stats.ranker import rank
from clubstats.utils import run_async

logger = structlog.get_logger(__name__)


def format_row(entry: RankedEntry, metric: str) -> str:
    r = entry.record
    value = getattr(r, metric)
    if metric == "runs":
        detail = f"avg {r.average:.1f}  SR {r.strike_rate:.1f}  HS {r.best_batting}"
    else:
        detail = f"econ {r.economy:.1f}  BB {r.best_bowling}"
    return f"  {entry.label:>7s}  {r.name:24s}  {value:>6d}  {detail}"


async def _run(base_url: str, metric: str, limit: int, milestones: bool) -> None:
    async with ClubApiClient(base_url=base_url) as client:
        records = await fetch_enriched(client)

    entries = rank(records, metric, limit=limit)
    print(f"{'Batting' if metric == 'runs' else 'Bowling'} leaderboard ({metric}):")
    for entry in entries:
        print(format_row(entry, metric))
    if not entries:
        print("  (no approved players)")

    if milestones:
        summary = summarize(records)
        print()
        print(f"Players: {summary['players']}")
        print(f"Total runs: {summary['totalRuns']}  Total wickets: {summary['totalWickets']}")
        for name, count in summary["milestones"].items():
            print(f"  {name:14s}  {count}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Club player leaderboards")
    parser.add_argument(
        "--metric",
        choices=["runs", "wickets"],
        default="runs",
        help="Rank by runs (batting) or wickets (bowling). Default: runs",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=settings.leaderboard_limit,
        help=f"Number of rows to show. Default: {settings.leaderboard_limit}",
    )
    parser.add_argument(
        "--base-url",
        default=settings.api_base_url,
        help="Club API base URL",
    )
    parser.add_argument(
        "--milestones",
        action="store_true",
        help="Also print milestone counts and totals",
    )
    args = parser.parse_args()

    logger.info("leaderboard_requested", metric=args.metric, base_url=args.base_url)
    run_async(_run(args.base_url, args.metric, args.limit, args.milestones))


if __name__ == "__main__":
    main()
