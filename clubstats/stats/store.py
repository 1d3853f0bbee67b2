"""Stat record editing: counter increments, direct field edits, and edit sessions.

The module-level functions are pure: each returns a new ``StatRecord`` and
leaves its input untouched. ``EditSession`` wraps them with the
open -> mutate -> commit | cancel lifecycle of an admin editing one player.

Only ``increment`` recomputes the batting average, and only when ``matches``
or ``runs`` changes. Typed overwrites never touch the average, and strike
rate and economy are always entered by hand.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from clubstats.stats.errors import CommitInProgressError, SaveError
from clubstats.stats.metrics import coerce_float, coerce_int, compute_average
from clubstats.stats.models import PerformanceEntry, StatRecord

logger = structlog.get_logger(__name__)

# Wire name -> attribute name
BATTING_COUNTERS: dict[str, str] = {
    "matches": "matches",
    "runs": "runs",
    "halfCenturies": "half_centuries",
    "centuries": "centuries",
    "thirties": "thirties",
}
BOWLING_COUNTERS: dict[str, str] = {
    "wickets": "wickets",
    "threeWickets": "three_wickets",
    "fiveWickets": "five_wickets",
    "maidens": "maidens",
}
BATTING_FIELDS: dict[str, str] = {
    "strikeRate": "strike_rate",
    "bestBatting": "best_batting",
}
BOWLING_FIELDS: dict[str, str] = {
    "economy": "economy",
    "bestBowling": "best_bowling",
}

_AVERAGE_INPUTS = frozenset({"matches", "runs"})
_FLOAT_FIELDS = frozenset({"strike_rate", "economy"})

Saver = Callable[[str, StatRecord], Awaitable[Any]]


def _resolve(name: str, table: dict[str, str]) -> str | None:
    """Map a wire or attribute name to the attribute name, or None if unknown."""
    if name in table:
        return table[name]
    if name in table.values():
        return name
    return None


def increment(record: StatRecord, stat_name: str, is_batting: bool = True) -> StatRecord:
    """Add 1 to a batting or bowling counter.

    Incrementing ``matches`` or ``runs`` also recomputes ``average``. Names
    outside the selected group are ignored and the record is returned as is.
    """
    attr = _resolve(stat_name, BATTING_COUNTERS if is_batting else BOWLING_COUNTERS)
    if attr is None:
        logger.debug("unknown_stat_ignored", stat=stat_name, is_batting=is_batting)
        return record

    update: dict[str, Any] = {attr: getattr(record, attr) + 1}
    if attr in _AVERAGE_INPUTS:
        runs = update.get("runs", record.runs)
        matches = update.get("matches", record.matches)
        update["average"] = compute_average(runs, matches)
    return record.model_copy(update=update)


def set_field(
    record: StatRecord, field_name: str, value: Any, is_batting: bool = True
) -> StatRecord:
    """Overwrite a field with a typed value.

    Rates (strike rate, economy) parse as floats and best figures are stored
    verbatim. Counters of the selected group may also be overwritten; they
    parse as ints. Malformed numbers become 0. Unknown names are ignored.
    """
    fields = BATTING_FIELDS if is_batting else BOWLING_FIELDS
    counters = BATTING_COUNTERS if is_batting else BOWLING_COUNTERS

    attr = _resolve(field_name, fields)
    if attr is not None:
        if attr in _FLOAT_FIELDS:
            return record.model_copy(update={attr: coerce_float(value)})
        return record.model_copy(update={attr: "" if value is None else str(value)})

    attr = _resolve(field_name, counters)
    if attr is not None:
        return record.model_copy(update={attr: coerce_int(value)})

    logger.debug("unknown_field_ignored", field=field_name, is_batting=is_batting)
    return record


def append_performance(
    record: StatRecord, entry: PerformanceEntry | dict[str, Any]
) -> StatRecord:
    """Append a match result to the recent performance log."""
    if not isinstance(entry, PerformanceEntry):
        entry = PerformanceEntry.model_validate(entry)
    return record.model_copy(update={"recent_performance": [*record.recent_performance, entry]})


class EditSession:
    """One admin's edit buffer for one player's stat record.

    Holds the last saved snapshot and the working copy. ``reset`` discards
    edits; ``commit`` persists the working copy through a saver coroutine.
    There is no version check on commit: the last write wins.
    """

    def __init__(self, username: str, record: StatRecord) -> None:
        self.username = username
        self.snapshot = record
        self.record = record
        self._saving = False

    @classmethod
    def open(cls, username: str, record: StatRecord | None = None) -> EditSession:
        return cls(username, record if record is not None else StatRecord.zeroed())

    @property
    def is_dirty(self) -> bool:
        return self.record != self.snapshot

    @property
    def is_saving(self) -> bool:
        return self._saving

    def increment(self, stat_name: str, is_batting: bool = True) -> StatRecord:
        self.record = increment(self.record, stat_name, is_batting)
        return self.record

    def set_field(self, field_name: str, value: Any, is_batting: bool = True) -> StatRecord:
        self.record = set_field(self.record, field_name, value, is_batting)
        return self.record

    def append_performance(self, entry: PerformanceEntry | dict[str, Any]) -> StatRecord:
        self.record = append_performance(self.record, entry)
        return self.record

    def reset(self) -> StatRecord:
        """Discard pending edits and return the last saved record."""
        self.record = self.snapshot
        return self.record

    async def commit(self, saver: Saver) -> StatRecord:
        """Persist the working copy.

        On success the working copy becomes the new snapshot. On failure
        the edits are kept and ``SaveError`` is raised so the caller can
        retry. Only one commit may be in flight per session.
        """
        if self._saving:
            raise CommitInProgressError(self.username)

        pending = self.record
        self._saving = True
        try:
            await saver(self.username, pending)
        except SaveError:
            logger.error("commit_failed", username=self.username)
            raise
        except Exception as exc:
            logger.error("commit_failed", username=self.username, error=str(exc))
            raise SaveError(self.username, str(exc)) from exc
        finally:
            self._saving = False

        self.snapshot = pending
        logger.info("commit_succeeded", username=self.username)
        return pending
