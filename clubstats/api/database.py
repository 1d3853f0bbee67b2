"""DuckDB connection manager for the API layer.

Wraps the centralized connection factory with a module-level singleton
for the API's hot path. The API both reads and writes (approvals, likes,
stat saves), so the singleton is a read-write connection; each call runs
on its own cursor so threadpool-dispatched handlers don't share one.

Dependency injection:
    Routers receive the ``query`` callable via ``Depends(get_query_fn)``.
    Tests can override ``get_query_fn`` with ``app.dependency_overrides``
    to inject a mock without touching the real database.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends

from clubstats.database import fetch_dicts, get_write_conn

# Module-level read-write connection
_conn = None

# Type alias for the query callable signature
QueryFn = Callable[[str, list | None], list[dict]]


def get_conn():
    """Get the shared DuckDB connection, creating one if needed."""
    global _conn
    if _conn is None:
        _conn = get_write_conn()
    return _conn


def close_conn() -> None:
    """Close the DuckDB connection."""
    global _conn
    if _conn is not None:
        _conn.close()
        _conn = None


def query(sql: str, params: list | None = None) -> list[dict]:
    """Execute a SQL statement and return result rows as a list of dicts."""
    cursor = get_conn().cursor()
    try:
        return fetch_dicts(cursor, sql, params)
    finally:
        cursor.close()


def get_query_fn() -> QueryFn:
    """FastAPI dependency that provides the query callable.

    Override in tests via ``app.dependency_overrides[get_query_fn]``.
    """
    return query


# Annotated dependency — use this in router signatures to avoid B008
DbQuery = Annotated[QueryFn, Depends(get_query_fn)]
