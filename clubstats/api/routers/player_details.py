"""Player stat record endpoints."""

from __future__ import annotations

import json
from typing import Any

import duckdb
import structlog
from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from clubstats.api.database import DbQuery  # noqa: TC001 — runtime dep for FastAPI DI
from clubstats.api.queries import load_stat_record, save_stat_record
from clubstats.stats.models import StatRecord

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/player-details", tags=["player-details"])


@router.get("")
def list_player_details(db: DbQuery):
    """Every stored stat record, enriched with the player's name, image and category."""
    rows = db(
        """
        SELECT d.username, d.document, p.name, p.image, p.category
        FROM player_details d
        LEFT JOIN players p ON p.username = d.username
        ORDER BY d.username
        """,
        None,
    )
    return [
        {
            **StatRecord.model_validate(json.loads(r["document"])).to_document(),
            "username": r["username"],
            "name": r["name"] or r["username"],
            "image": r["image"],
            "category": r["category"] or "Unknown",
        }
        for r in rows
    ]


@router.get("/{username}")
def get_player_details(username: str, db: DbQuery):
    """A player's stat record, or zeroed defaults if none has been saved."""
    record = load_stat_record(db, username)
    if record is None:
        record = StatRecord.zeroed()
    return record.to_document()


@router.put("/{username}")
def put_player_details(username: str, db: DbQuery, payload: dict[str, Any] = Body(...)):
    """Overwrite a player's full stat record.

    Numeric fields are coerced leniently (malformed values become 0). There
    is no version check: concurrent editors overwrite each other.
    """
    try:
        record = StatRecord.model_validate(payload)
        save_stat_record(db, username, record)
    except (ValidationError, duckdb.Error) as exc:
        logger.error("player_details_save_failed", username=username, error=str(exc))
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Internal server error", "error": str(exc)},
        )
    logger.info("player_details_saved", username=username)
    return {"success": True, "message": "Player details updated successfully"}
