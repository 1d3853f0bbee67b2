"""Derived batting/bowling metrics and lenient numeric parsing.

All functions here are total: they accept anything a form field or a
stored document might contain and never raise.
"""

from __future__ import annotations

import math
from typing import Any

DEFAULT_BEST_BATTING = "0 (0)"
DEFAULT_BEST_BOWLING = "0/0"


def compute_average(runs: int, matches: int) -> float:
    """Batting average as runs per match, rounded to 2 places (0 with no matches)."""
    if matches > 0:
        return round(runs / matches, 2)
    return 0


def format_best_batting(value: str | None) -> str:
    """Best batting score, e.g. ``"105 (58)"``, or ``"0 (0)"`` when unset."""
    return value or DEFAULT_BEST_BATTING


def format_best_bowling(value: str | None) -> str:
    """Best bowling figures, e.g. ``"5/32"``, or ``"0/0"`` when unset."""
    return value or DEFAULT_BEST_BOWLING


def coerce_int(value: Any) -> int:
    """Parse a counter value, falling back to 0 on malformed input.

    Accepts ints, numeric strings (``"12"``, ``" 7 "``, ``"12.9"`` -> 12) and
    floats. Negative values clamp to 0 since counters never go below zero.
    """
    if value is None:
        return 0
    try:
        parsed = int(value)
    except (TypeError, ValueError, OverflowError):
        try:
            parsed = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return 0
    return max(parsed, 0)


def coerce_float(value: Any) -> float:
    """Parse a rate value (strike rate, economy), falling back to 0.0."""
    if value is None:
        return 0.0
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(parsed):
        return 0.0
    return parsed
