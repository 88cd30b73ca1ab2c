"""Progress pipeline and caller-owned result cache.

``compute_progress`` chains the aggregation steps for one exercise and
returns everything the presentation layer needs. ``ProgressCache`` lets a
caller memoize results per (user, exercise, selectors) and invalidate them
when the underlying history changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Iterable

from liftlog.core.measurements import has_measurement
from liftlog.models.domain import PerformancePoint
from liftlog.models.types import ChartPoint, ProgressSummary
from liftlog.progress.aggregate import bucketize, filter_by_range, sort_chronologically
from liftlog.progress.options import (
    BUCKET_WIDTHS,
    BucketWidth,
    Metric,
    ProgressConfig,
    RangeWindow,
    select_metric,
)
from liftlog.progress.summary import metric_value, round_one_decimal, summarize

logger = logging.getLogger(__name__)


@dataclass
class ProgressResult:
    """Aggregated progress of one exercise.

    Attributes:
        metric: Measurement charted and summarized.
        range_window: Lookback window that was applied.
        bucket_width_days: Width of each aggregation window.
        series: One representative point per window, chronological.
        chart: ``{date, value}`` pairs for points carrying the metric.
        summary: Numeric callouts (latest, best, deltas).
    """

    metric: Metric
    range_window: RangeWindow
    bucket_width_days: int
    series: list[PerformancePoint] = field(default_factory=list)
    chart: list[ChartPoint] = field(default_factory=list)
    summary: ProgressSummary = field(default_factory=ProgressSummary)


def build_chart(series: Iterable[PerformancePoint], metric: Metric) -> list[ChartPoint]:
    """Project a bucketed series into chart points, skipping missing values."""
    chart: list[ChartPoint] = []
    for point in series:
        value = metric_value(point, metric)
        if value is None:
            continue
        chart.append(
            ChartPoint(
                date=point.workout_date,
                value=round_one_decimal(value),
                workout_id=point.workout_id,
            )
        )
    return chart


def compute_progress(
    points: Iterable[PerformancePoint],
    range_window: RangeWindow | None = None,
    bucket_width: BucketWidth | None = None,
    metric: Metric | None = None,
    now: date | datetime | None = None,
    config: ProgressConfig | None = None,
) -> ProgressResult:
    """Aggregate one exercise's history into a bucketed series and summary.

    Args:
        points: History of one exercise for one user, in any order.
        range_window: Lookback window; defaults to ``config.default_range``.
        bucket_width: Window width in days, one of ``BUCKET_WIDTHS``;
            defaults to ``config.default_bucket_width``.
        metric: Explicit metric; None selects one from the data.
        now: Reference date for the range window; defaults to today.
        config: Day-counts and defaults.

    Returns:
        ProgressResult for display.

    Raises:
        ValueError: If ``bucket_width`` is not a supported width.
    """
    config = config or ProgressConfig()
    range_window = range_window or config.default_range
    width = config.default_bucket_width if bucket_width is None else bucket_width
    if isinstance(width, bool) or not isinstance(width, int) or width not in BUCKET_WIDTHS:
        raise ValueError(f"Unsupported bucket width {width!r}, expected one of {BUCKET_WIDTHS}")
    today = now if now is not None else date.today()

    history = list(points)
    # Chosen over the full history so switching ranges keeps the same axis
    selected = select_metric(history, metric)

    in_range = filter_by_range(history, range_window, today, config.range_days)

    # Points with neither weight nor reps have nothing to show
    displayable = [p for p in in_range if has_measurement(p.weight, p.reps)]
    if len(displayable) != len(in_range):
        logger.debug(f"Dropped {len(in_range) - len(displayable)} points without measurements")

    series = bucketize(sort_chronologically(displayable), width)

    logger.debug(
        f"Progress: {len(history)} points, {len(in_range)} in range {range_window!r}, "
        f"{len(series)} buckets, metric={selected}"
    )

    return ProgressResult(
        metric=selected,
        range_window=range_window,
        bucket_width_days=width,
        series=series,
        chart=build_chart(series, selected),
        summary=summarize(series, selected),
    )


@dataclass(frozen=True)
class ProgressKey:
    """Cache key for one aggregation request (``metric=None`` = auto)."""

    user_id: str
    exercise_id: str
    range_window: RangeWindow
    bucket_width_days: int
    metric: Metric | None = None


class ProgressCache:
    """Explicit memo of progress results, owned and invalidated by the caller.

    Not synchronized: share across threads only behind the caller's own lock.
    """

    def __init__(self) -> None:
        self._entries: dict[ProgressKey, ProgressResult] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: ProgressKey) -> ProgressResult | None:
        return self._entries.get(key)

    def put(self, key: ProgressKey, result: ProgressResult) -> None:
        self._entries[key] = result

    def get_or_compute(
        self,
        key: ProgressKey,
        compute: Callable[[], ProgressResult],
    ) -> ProgressResult:
        """Return the cached result for ``key``, computing and storing it on a miss."""
        cached = self._entries.get(key)
        if cached is not None:
            return cached
        result = compute()
        self._entries[key] = result
        return result

    def invalidate(self, user_id: str, exercise_id: str | None = None) -> int:
        """Evict every entry of a user, or of one exercise of that user.

        Returns:
            Number of evicted entries.
        """
        stale = [
            key
            for key in self._entries
            if key.user_id == user_id and (exercise_id is None or key.exercise_id == exercise_id)
        ]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cached progress results for user {user_id}")
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()
