"""Exceptions raised by the stats engine and its HTTP client."""

from __future__ import annotations


class StatsError(Exception):
    """Base class for club stats errors."""


class FetchError(StatsError):
    """A player's stat record could not be fetched.

    The aggregator recovers from this by zero-filling the player's record.
    """

    def __init__(self, username: str, reason: str) -> None:
        super().__init__(f"Failed to fetch stats for '{username}': {reason}")
        self.username = username
        self.reason = reason


class SaveError(StatsError):
    """A stat record could not be persisted.

    Recoverable: the edit session keeps its in-memory changes so the save
    can be retried without re-entering data.
    """

    def __init__(self, username: str, reason: str) -> None:
        super().__init__(f"Failed to save stats for '{username}': {reason}")
        self.username = username
        self.reason = reason


class CommitInProgressError(SaveError):
    """A commit was requested while another commit for the session is in flight."""

    def __init__(self, username: str) -> None:
        super().__init__(username, "a save is already in progress")
