"""FastAPI application — serves the club's players, stat records and leaderboards."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from clubstats.api.database import close_conn, get_conn
from clubstats.api.routers import leaderboards, player_details, players


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage DuckDB connection lifecycle."""
    get_conn()  # open on startup
    yield
    close_conn()  # close on shutdown


app = FastAPI(
    title="Club Stats API",
    description="Cricket club roster, player stat records, leaderboards and milestones, backed by DuckDB.",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(players.router)
app.include_router(player_details.router)
app.include_router(leaderboards.router)


@app.get("/", tags=["health"])
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "clubstats-api"}
