"""Data models for players and their performance statistics.

Models accept both the camelCase keys used by the stored JSON documents
(``strikeRate``, ``halfCenturies``, ``_id``) and the snake_case attribute
names. ``to_document()`` serializes back to the camelCase wire shape.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    computed_field,
    field_validator,
)

from clubstats.stats.metrics import (
    DEFAULT_BEST_BATTING,
    DEFAULT_BEST_BOWLING,
    coerce_float,
    coerce_int,
    format_best_batting,
    format_best_bowling,
)

Badge = Literal["gold", "silver", "bronze"]

_WIRE_CONFIG = ConfigDict(populate_by_name=True, extra="ignore")


class _WireModel(BaseModel):
    model_config = _WIRE_CONFIG

    def to_document(self) -> dict[str, Any]:
        """Serialize with camelCase wire keys."""
        return self.model_dump(by_alias=True, mode="json")


class PlayerIdentity(_WireModel):
    """A registered club member."""

    id: str | None = Field(None, alias="_id")
    username: str
    name: str = ""
    category: str = "Unknown"
    image: str | None = None
    status: str = "pending"
    age: int | None = None
    batting_style: str | None = Field(None, alias="battingStyle")
    bowling_style: str | None = Field(None, alias="bowlingStyle")
    likes: int = 0

    @field_validator("likes", mode="before")
    @classmethod
    def _coerce_likes(cls, value: Any) -> int:
        return coerce_int(value)

    @field_validator("name", "category", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("age", mode="before")
    @classmethod
    def _lenient_age(cls, value: Any) -> int | None:
        if value is None or value == "":
            return None
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None

    @property
    def is_approved(self) -> bool:
        return self.status == "approved"


class PerformanceEntry(_WireModel):
    """One line of a player's recent match log (display only)."""

    opponent: str = ""
    runs: int = 0
    balls: int = 0
    wickets: int = 0
    result: str = ""

    @field_validator("runs", "balls", "wickets", mode="before")
    @classmethod
    def _coerce_counts(cls, value: Any) -> int:
        return coerce_int(value)

    @field_validator("opponent", "result", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value)


class StatRecord(_WireModel):
    """Career batting and bowling counters for one player."""

    # Batting
    matches: int = 0
    runs: int = 0
    average: float = 0.0
    strike_rate: float = Field(0.0, alias="strikeRate")
    best_batting: str = Field(DEFAULT_BEST_BATTING, alias="bestBatting")
    half_centuries: int = Field(0, alias="halfCenturies")
    centuries: int = 0
    thirties: int = 0

    # Bowling
    wickets: int = 0
    economy: float = 0.0
    best_bowling: str = Field(DEFAULT_BEST_BOWLING, alias="bestBowling")
    maidens: int = 0
    three_wickets: int = Field(0, alias="threeWickets")
    five_wickets: int = Field(0, alias="fiveWickets")

    recent_performance: list[PerformanceEntry] = Field(
        default_factory=list, alias="recentPerformance"
    )

    @field_validator(
        "matches",
        "runs",
        "half_centuries",
        "centuries",
        "thirties",
        "wickets",
        "maidens",
        "three_wickets",
        "five_wickets",
        mode="before",
    )
    @classmethod
    def _coerce_counters(cls, value: Any) -> int:
        return coerce_int(value)

    @field_validator("average", "strike_rate", "economy", mode="before")
    @classmethod
    def _coerce_rates(cls, value: Any) -> float:
        return coerce_float(value)

    @field_validator("best_batting", mode="before")
    @classmethod
    def _default_best_batting(cls, value: Any) -> str:
        return format_best_batting(str(value) if value is not None else None)

    @field_validator("best_bowling", mode="before")
    @classmethod
    def _default_best_bowling(cls, value: Any) -> str:
        return format_best_bowling(str(value) if value is not None else None)

    @field_validator("recent_performance", mode="before")
    @classmethod
    def _default_log(cls, value: Any) -> list[Any]:
        # Non-object entries are dropped
        if not isinstance(value, list):
            return []
        return [entry for entry in value if isinstance(entry, dict | PerformanceEntry)]

    @classmethod
    def zeroed(cls) -> StatRecord:
        """The record a newly approved player starts with."""
        return cls()

    def stats_only(self) -> StatRecord:
        """Strip any identity fields, returning a plain StatRecord."""
        return StatRecord.model_validate(self.model_dump(include=set(StatRecord.model_fields)))


class EnrichedRecord(StatRecord):
    """A StatRecord joined with the identity metadata shown on leaderboards."""

    username: str
    name: str = ""
    image: str | None = None
    category: str = "Unknown"

    @classmethod
    def from_parts(cls, player: PlayerIdentity, stats: StatRecord) -> EnrichedRecord:
        return cls(
            **stats.model_dump(include=set(StatRecord.model_fields)),
            username=player.username,
            name=player.name or player.username,
            image=player.image,
            category=player.category or "Unknown",
        )


class RankedEntry(BaseModel):
    """An EnrichedRecord with its leaderboard position."""

    rank: int
    badge: Badge | None = None
    record: EnrichedRecord

    @computed_field  # type: ignore[prop-decorator]
    @property
    def label(self) -> str:
        """Badge name for the podium, ``#<rank>`` for everyone else."""
        return self.badge or f"#{self.rank}"

    def to_document(self) -> dict[str, Any]:
        return {
            "rank": self.rank,
            "badge": self.badge,
            "label": self.label,
            "player": self.record.to_document(),
        }
