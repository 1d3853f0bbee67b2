"""Player endpoints: roster, registration, approval, likes."""

from __future__ import annotations

import uuid

import structlog
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field, field_validator

from clubstats.api.database import DbQuery, QueryFn  # noqa: TC001 — runtime dep for FastAPI DI
from clubstats.api.queries import PLAYER_COLUMNS, create_stat_record_if_missing, get_player_row
from clubstats.config import PLAYER_CATEGORIES, PLAYER_STATUSES

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/players", tags=["players"])


class PlayerRegistration(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(min_length=1)
    name: str
    category: str = "Batsman"
    image: str | None = None
    age: int | None = Field(None, ge=0)
    batting_style: str | None = Field(None, alias="battingStyle")
    bowling_style: str | None = Field(None, alias="bowlingStyle")

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        if value not in PLAYER_CATEGORIES:
            raise ValueError(f"category must be one of {', '.join(PLAYER_CATEGORIES)}")
        return value


class PlayerAction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    player_id: str | None = Field(None, alias="playerId")


class LikeRequest(BaseModel):
    liked: bool = True


@router.get("")
def list_players(
    db: DbQuery,
    status: str | None = Query(None, description="Filter by registration status"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    """List registered players in registration order."""
    if status:
        if status not in PLAYER_STATUSES:
            raise HTTPException(status_code=400, detail=f"Unknown status '{status}'")
        return db(
            f"""
            SELECT {PLAYER_COLUMNS} FROM players
            WHERE status = $1
            ORDER BY created_at, username
            LIMIT $2 OFFSET $3
            """,
            [status, limit, offset],
        )
    return db(
        f"SELECT {PLAYER_COLUMNS} FROM players ORDER BY created_at, username LIMIT $1 OFFSET $2",
        [limit, offset],
    )


@router.post("", status_code=201)
def register_player(player: PlayerRegistration, db: DbQuery):
    """Register a new player. Registrations start out pending."""
    if get_player_row(db, player.username) is not None:
        raise HTTPException(status_code=409, detail=f"Username '{player.username}' is taken")
    player_id = uuid.uuid4().hex
    db(
        """
        INSERT INTO players
            (id, username, name, category, image, status, age, batting_style, bowling_style)
        VALUES ($1, $2, $3, $4, $5, 'pending', $6, $7, $8)
        """,
        [
            player_id,
            player.username,
            player.name,
            player.category,
            player.image,
            player.age,
            player.batting_style,
            player.bowling_style,
        ],
    )
    logger.info("player_registered", username=player.username)
    return get_player_row(db, player.username)


def _set_status(db: QueryFn, action: PlayerAction, status: str) -> dict:
    if not action.player_id:
        raise HTTPException(status_code=400, detail="Player ID is required")
    rows = db("SELECT username FROM players WHERE id = $1", [action.player_id])
    if not rows:
        raise HTTPException(status_code=404, detail="Player not found")
    db(
        "UPDATE players SET status = $1, updated_at = current_timestamp WHERE id = $2",
        [status, action.player_id],
    )
    return rows[0]


@router.post("/approve")
def approve_player(action: PlayerAction, db: DbQuery):
    """Approve a registration and give the player a zeroed stat record."""
    row = _set_status(db, action, "approved")
    created = create_stat_record_if_missing(db, row["username"])
    logger.info("player_approved", username=row["username"], stats_created=created)
    return {"message": "Player approved successfully"}


@router.post("/reject")
def reject_player(action: PlayerAction, db: DbQuery):
    """Reject a registration. Existing stat records are left alone."""
    row = _set_status(db, action, "rejected")
    logger.info("player_rejected", username=row["username"])
    return {"message": "Player rejected successfully"}


@router.get("/{username}")
def get_player(username: str, db: DbQuery):
    """Get a specific player's profile."""
    row = get_player_row(db, username)
    if row is None:
        raise HTTPException(status_code=404, detail=f"Player '{username}' not found")
    return row


@router.post("/{username}/like")
def like_player(username: str, body: LikeRequest, db: DbQuery):
    """Add a like, or withdraw one (never below zero)."""
    row = get_player_row(db, username)
    if row is None:
        raise HTTPException(status_code=404, detail="Player not found")
    current = row["likes"] or 0
    likes = current + 1 if body.liked else max(0, current - 1)
    db("UPDATE players SET likes = $1 WHERE username = $2", [likes, username])
    return {"message": "Like updated successfully", "likes": likes}
