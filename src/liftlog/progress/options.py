"""Selectors for progress aggregation: range window, bucket width, metric.

Each selector is a closed set of values with an explicit mapping to behavior
(day-counts, labels, units). Free-form input from query strings or the CLI is
mapped through the ``parse_*`` helpers, which fall back to the documented
default and log a warning for anything unrecognized.

Defaults:
- range window: ``"12w"`` (84 days)
- bucket width: 14 days
- metric: auto (weight when any weight is recorded, otherwise reps)
"""

from __future__ import annotations

import logging
from typing import Iterable, Literal, get_args

from pydantic import BaseModel, Field, field_validator

from liftlog.core.measurements import finite_or_none
from liftlog.models.domain import PerformancePoint

logger = logging.getLogger(__name__)

RangeWindow = Literal["12w", "6m", "all"]
BucketWidth = Literal[14, 28]
Metric = Literal["weight", "reps"]

RANGE_WINDOWS: tuple[RangeWindow, ...] = get_args(RangeWindow)
BUCKET_WIDTHS: tuple[BucketWidth, ...] = get_args(BucketWidth)
METRICS: tuple[Metric, ...] = get_args(Metric)

DEFAULT_RANGE: RangeWindow = "12w"
DEFAULT_BUCKET_WIDTH: BucketWidth = 14
DEFAULT_HISTORY_LIMIT = 180

# Lookback in days; None = unbounded
RANGE_DAYS: dict[RangeWindow, int | None] = {
    "12w": 84,
    "6m": 183,
    "all": None,
}

RANGE_LABELS: dict[RangeWindow, str] = {
    "12w": "Last 12 weeks",
    "6m": "Last 6 months",
    "all": "All time",
}

BUCKET_LABELS: dict[BucketWidth, str] = {
    14: "Every 2 weeks",
    28: "Every 4 weeks",
}

METRIC_LABELS: dict[Metric, str] = {
    "weight": "Weight",
    "reps": "Reps",
}

METRIC_UNITS: dict[Metric, str] = {
    "weight": "kg",
    "reps": "reps",
}

_AUTO_METRIC_TOKENS = {"", "auto"}


class ProgressConfig(BaseModel):
    """Caller-supplied configuration for progress aggregation.

    Day-counts are configuration, not law: a caller can widen or narrow a
    bounded window without touching the aggregation code.
    """

    range_days: dict[RangeWindow, int | None] = Field(
        default_factory=lambda: dict(RANGE_DAYS)
    )
    default_range: RangeWindow = DEFAULT_RANGE
    default_bucket_width: BucketWidth = DEFAULT_BUCKET_WIDTH
    history_limit: int = Field(default=DEFAULT_HISTORY_LIMIT, gt=0)

    @field_validator("range_days")
    @classmethod
    def _check_range_days(
        cls, value: dict[RangeWindow, int | None]
    ) -> dict[RangeWindow, int | None]:
        for window, days in value.items():
            if days is not None and days <= 0:
                raise ValueError(f"range {window!r} must have a positive day-count")
        # Windows not overridden keep their stock day-count
        return {**RANGE_DAYS, **value}

    def days_for(self, range_window: RangeWindow) -> int | None:
        """Return the lookback day-count for ``range_window`` (None = unbounded)."""
        return self.range_days[range_window]


def parse_range(value: str | None, default: RangeWindow = DEFAULT_RANGE) -> RangeWindow:
    """Map a free-form string to a range window, falling back to ``default``."""
    if value is None:
        return default
    token = str(value).strip().lower()
    if token in RANGE_WINDOWS:
        return token  # type: ignore[return-value]
    logger.warning(f"Unrecognized range window {value!r}, using {default!r}")
    return default


def parse_bucket_width(
    value: str | int | None, default: BucketWidth = DEFAULT_BUCKET_WIDTH
) -> BucketWidth:
    """Map a free-form value to a supported bucket width in days."""
    if value is None:
        return default
    try:
        days = int(str(value).strip())
    except ValueError:
        days = None
    if days in BUCKET_WIDTHS:
        return days  # type: ignore[return-value]
    logger.warning(f"Unsupported bucket width {value!r}, using {default} days")
    return default


def parse_metric(value: str | None) -> Metric | None:
    """Map a free-form string to a metric override.

    Returns None (auto-selection) for missing, ``"auto"`` or unrecognized input.
    """
    if value is None:
        return None
    token = str(value).strip().lower()
    if token in _AUTO_METRIC_TOKENS:
        return None
    if token in METRICS:
        return token  # type: ignore[return-value]
    logger.warning(f"Unrecognized metric {value!r}, selecting automatically")
    return None


def select_metric(
    points: Iterable[PerformancePoint],
    override: Metric | None = None,
) -> Metric:
    """Choose which measurement to chart for an exercise.

    Args:
        points: History of one exercise.
        override: Explicit metric; wins when given.

    Returns:
        ``"weight"`` if any point has a recorded weight, otherwise ``"reps"``.
    """
    if override is not None:
        return override
    if any(finite_or_none(p.weight) is not None for p in points):
        return "weight"
    return "reps"
