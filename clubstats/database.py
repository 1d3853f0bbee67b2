"""Centralized DuckDB connection factory.

Single source of truth for all database connections in the project.
Provides read-write connections with schema bootstrapping and a
row-as-dict query helper.

Two tables back the club API:

- ``players``: one row per registered member (identity, status, likes).
- ``player_details``: one JSON stat document per username, loosely joined
  to ``players`` by username (no foreign key, nothing cascades).

Usage:
    from clubstats.database import fetch_dicts, get_write_conn

    conn = get_write_conn()  # creates data dir and tables
    rows = fetch_dicts(conn, "SELECT username FROM players WHERE status = $1", ["approved"])
    conn.close()
"""

from __future__ import annotations

import duckdb
import structlog

from clubstats.config import settings

logger = structlog.get_logger(__name__)

SCHEMA_DDL: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS players (
        id VARCHAR PRIMARY KEY,
        username VARCHAR NOT NULL UNIQUE,
        name VARCHAR,
        category VARCHAR,
        image VARCHAR,
        status VARCHAR NOT NULL DEFAULT 'pending',
        age INTEGER,
        batting_style VARCHAR,
        bowling_style VARCHAR,
        likes INTEGER NOT NULL DEFAULT 0,
        created_at TIMESTAMP DEFAULT current_timestamp,
        updated_at TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS player_details (
        username VARCHAR PRIMARY KEY,
        document VARCHAR NOT NULL,
        updated_at TIMESTAMP
    )
    """,
)


def init_schema(conn: duckdb.DuckDBPyConnection) -> None:
    """Create the club tables if they don't exist."""
    for ddl in SCHEMA_DDL:
        conn.execute(ddl)


def get_write_conn() -> duckdb.DuckDBPyConnection:
    """Get a read-write DuckDB connection.

    Creates the data directory and club tables if they don't exist.
    """
    settings.duckdb_path.parent.mkdir(parents=True, exist_ok=True)
    conn = duckdb.connect(str(settings.duckdb_path))
    init_schema(conn)
    logger.info("duckdb_opened", path=str(settings.duckdb_path))
    return conn


def fetch_dicts(conn: duckdb.DuckDBPyConnection, sql: str, params: list | None = None) -> list[dict]:
    """Execute SQL on a connection and return rows as dicts (empty for DML)."""
    result = conn.execute(sql, params or [])
    if result.description is None:
        return []
    columns = [desc[0] for desc in result.description]
    return [dict(zip(columns, row, strict=False)) for row in result.fetchall()]
