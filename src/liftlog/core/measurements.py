"""Helpers for optional numeric measurements (weight, reps)."""

from __future__ import annotations

import math


def finite_or_none(value: float | int | None) -> float | None:
    """Return ``value`` as a float, or None if absent or not finite.

    NaN and infinities are treated exactly like "not recorded" so they never
    leak into comparisons or statistics.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def has_measurement(weight: float | None, reps: float | None) -> bool:
    """True when at least one of weight/reps carries a finite value."""
    return finite_or_none(weight) is not None or finite_or_none(reps) is not None
