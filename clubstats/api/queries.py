"""SQL shared by the API routers."""

from __future__ import annotations

import json

from clubstats.api.database import QueryFn  # noqa: TC001
from clubstats.stats.models import PlayerIdentity, StatRecord

# Player columns aliased to the document keys clients expect
PLAYER_COLUMNS = """
    id AS _id, username, name, category, image, status, age,
    batting_style AS "battingStyle", bowling_style AS "bowlingStyle", likes
"""


def get_player_row(db: QueryFn, username: str) -> dict | None:
    rows = db(f"SELECT {PLAYER_COLUMNS} FROM players WHERE username = $1", [username])
    return rows[0] if rows else None


def approved_roster(db: QueryFn) -> list[PlayerIdentity]:
    """Approved players in registration order."""
    rows = db(
        f"""
        SELECT {PLAYER_COLUMNS} FROM players
        WHERE status = 'approved'
        ORDER BY created_at, username
        """,
        None,
    )
    return [PlayerIdentity.model_validate(r) for r in rows]


def load_stat_record(db: QueryFn, username: str) -> StatRecord | None:
    rows = db("SELECT document FROM player_details WHERE username = $1", [username])
    if not rows:
        return None
    return StatRecord.model_validate(json.loads(rows[0]["document"]))


def save_stat_record(db: QueryFn, username: str, record: StatRecord) -> None:
    """Upsert a player's full stat document. Last write wins."""
    db(
        """
        INSERT INTO player_details (username, document, updated_at)
        VALUES ($1, $2, current_timestamp)
        ON CONFLICT (username) DO UPDATE
        SET document = excluded.document, updated_at = excluded.updated_at
        """,
        [username, json.dumps(record.to_document())],
    )


def create_stat_record_if_missing(db: QueryFn, username: str) -> bool:
    """Give a newly approved player a zeroed record. Returns True if created."""
    if load_stat_record(db, username) is not None:
        return False
    save_stat_record(db, username, StatRecord.zeroed())
    return True
