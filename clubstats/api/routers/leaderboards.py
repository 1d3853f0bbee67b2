"""Leaderboard and milestone endpoints, computed over approved players."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Query

from clubstats.api.database import DbQuery  # noqa: TC001 — runtime dep for FastAPI DI
from clubstats.api.queries import approved_roster, load_stat_record
from clubstats.stats.aggregator import aggregate
from clubstats.stats.errors import FetchError
from clubstats.stats.milestones import summarize
from clubstats.stats.models import EnrichedRecord, StatRecord
from clubstats.stats.ranker import batting_leaderboard, bowling_leaderboard
from clubstats.utils import run_async

router = APIRouter(prefix="/api/leaderboards", tags=["leaderboards"])


def _approved_records(db: DbQuery) -> list[EnrichedRecord]:
    """Aggregate approved players, loading each stat record on a worker thread."""

    async def fetch(username: str) -> StatRecord:
        record = await asyncio.to_thread(load_stat_record, db, username)
        if record is None:
            raise FetchError(username, "no stat record")
        return record

    return run_async(aggregate(approved_roster(db), fetch))


@router.get("/batting")
def top_run_scorers(db: DbQuery, limit: int = Query(10, ge=1, le=100)):
    """Approved players ranked by runs."""
    records = _approved_records(db)
    return [e.to_document() for e in batting_leaderboard(records, limit=limit)]


@router.get("/bowling")
def top_wicket_takers(db: DbQuery, limit: int = Query(10, ge=1, le=100)):
    """Approved players ranked by wickets."""
    records = _approved_records(db)
    return [e.to_document() for e in bowling_leaderboard(records, limit=limit)]


@router.get("/milestones")
def milestones(db: DbQuery):
    """Player counts per milestone plus club totals."""
    records = _approved_records(db)
    return summarize(records)
