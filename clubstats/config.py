"""Centralized configuration for the club stats project."""

from pathlib import Path

from pydantic_settings import BaseSettings

# Player categories offered on the registration form.
PLAYER_CATEGORIES: tuple[str, ...] = ("Batsman", "Bowler", "All-rounder", "Wicket-keeper")

# Registration lifecycle: pending until an admin approves or rejects.
PLAYER_STATUSES: tuple[str, ...] = ("pending", "approved", "rejected")


class Settings(BaseSettings):
    """Application settings, overridable via environment variables."""

    # Paths
    project_root: Path = Path(__file__).resolve().parent.parent
    data_dir: Path = project_root / "data"
    duckdb_path: Path = data_dir / "clubstats.duckdb"

    # Collaborator REST API (players + player-details endpoints)
    api_base_url: str = "http://localhost:8000/api"

    # Per-request timeouts in seconds. Stat fetches that exceed
    # fetch_timeout are treated as failed and zero-filled.
    fetch_timeout: float = 12.0
    save_timeout: float = 15.0

    # API server
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Leaderboards
    leaderboard_limit: int = 10

    model_config = {"env_prefix": "CLUBSTATS_"}


settings = Settings()
