"""Calendar date utilities for workout dates.

Workout dates travel as zero-padded ``YYYY-MM-DD`` strings. Comparisons go
through real ``date`` objects so a malformed string fails loudly instead of
sorting in the wrong place.
"""

from __future__ import annotations

import re
from datetime import date, datetime

YMD_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_ymd(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a date.

    Args:
        value: Date string, zero-padded.

    Returns:
        The parsed calendar date.

    Raises:
        ValueError: If the string is not a zero-padded ``YYYY-MM-DD`` date
            or names a day that does not exist.
    """
    if not isinstance(value, str) or not YMD_PATTERN.match(value):
        raise ValueError(f"Expected YYYY-MM-DD date, got {value!r}")
    return date.fromisoformat(value)


def as_date(value: date | datetime) -> date:
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    return value
