"""Windowed aggregation of exercise performance history.

Turns an unordered list of performance points into a downsampled series with
one representative point per fixed-width day window:

1. ``filter_by_range`` drops points older than the range window
2. ``sort_chronologically`` orders by (workout_date, recorded_at)
3. ``bucketize`` walks the sorted points, folding each window through
   ``pick_better``

Domain logic is pure - no I/O and no shared state.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

from liftlog.core.dates import as_date, parse_ymd
from liftlog.core.measurements import finite_or_none
from liftlog.models.domain import PerformancePoint
from liftlog.progress.options import RANGE_DAYS, RangeWindow

logger = logging.getLogger(__name__)


def range_lower_bound(
    range_window: RangeWindow,
    now: date | datetime,
    range_days: dict[RangeWindow, int | None] | None = None,
) -> date | None:
    """Return the inclusive lower-bound date for a range window.

    Args:
        range_window: Lookback window.
        now: Reference "today"; injected rather than read from the clock.
        range_days: Optional day-count mapping overriding ``RANGE_DAYS``.

    Returns:
        Earliest date still inside the window, or None when unbounded.

    Raises:
        ValueError: If ``range_window`` is not a known window.
    """
    days_map = RANGE_DAYS if range_days is None else range_days
    if range_window not in days_map:
        raise ValueError(f"Unknown range window: {range_window!r}")
    days = days_map[range_window]
    if days is None:
        return None
    return as_date(now) - timedelta(days=days)


def filter_by_range(
    points: Iterable[PerformancePoint],
    range_window: RangeWindow,
    now: date | datetime,
    range_days: dict[RangeWindow, int | None] | None = None,
) -> list[PerformancePoint]:
    """Keep points whose workout_date falls on or after the window's lower bound.

    Input order is preserved; the input is not modified.
    """
    lower = range_lower_bound(range_window, now, range_days)
    if lower is None:
        return list(points)
    return [p for p in points if parse_ymd(p.workout_date) >= lower]


def sort_chronologically(points: Iterable[PerformancePoint]) -> list[PerformancePoint]:
    """Return points ordered by workout_date, then recorded_at.

    ``sorted`` is stable, so exact duplicates keep their input order.
    """
    return sorted(points, key=lambda p: (parse_ymd(p.workout_date), p.recorded_at))


def pick_better(
    current: PerformancePoint | None,
    candidate: PerformancePoint,
) -> PerformancePoint:
    """Return the better-performing of two points.

    Higher weight wins; on equal weight, higher reps wins; on an exact tie
    the incumbent ``current`` is kept, which makes folds order-stable.

    Args:
        current: Best point so far, or None at the start of a fold.
        candidate: Point to compare against it.

    Returns:
        Either ``current`` or ``candidate`` (never a new object).
    """
    if current is None:
        return candidate

    # -1 stands in for "not recorded" only within this comparison
    missing = -1.0

    def effective(value: float | None) -> float:
        number = finite_or_none(value)
        return missing if number is None else number

    current_weight = effective(current.weight)
    candidate_weight = effective(candidate.weight)
    if candidate_weight > current_weight:
        return candidate
    if candidate_weight < current_weight:
        return current

    if effective(candidate.reps) > effective(current.reps):
        return candidate
    return current


def bucketize(
    sorted_points: Sequence[PerformancePoint],
    bucket_width_days: int,
) -> list[PerformancePoint]:
    """Downsample a chronologically sorted series into day windows.

    Each window spans ``[anchor, anchor + bucket_width_days)`` where the anchor
    is the workout_date of the first point not yet consumed. The emitted point
    carries the best point's weight/reps but the last consumed point's date,
    timestamp and workout id, so the chart shows the window's latest activity.

    Args:
        sorted_points: Output of ``sort_chronologically``.
        bucket_width_days: Window width in whole days (>= 1).

    Returns:
        One point per non-empty window, in chronological order.

    Raises:
        ValueError: If ``bucket_width_days`` is not a whole number of days
            or is below 1.
    """
    if isinstance(bucket_width_days, bool) or not isinstance(bucket_width_days, int):
        raise ValueError(f"bucket_width_days must be an int, got {bucket_width_days!r}")
    width = bucket_width_days
    if width < 1:
        raise ValueError(f"bucket_width_days must be >= 1, got {bucket_width_days}")

    if len(sorted_points) <= 1:
        return list(sorted_points)

    dates = [parse_ymd(p.workout_date) for p in sorted_points]
    buckets: list[PerformancePoint] = []
    index = 0
    total = len(sorted_points)

    while index < total:
        end = dates[index] + timedelta(days=width)
        # The anchor point always opens its own window
        best = pick_better(None, sorted_points[index])
        last = best
        index += 1

        while index < total and dates[index] < end:
            point = sorted_points[index]
            best = pick_better(best, point)
            last = point
            index += 1

        buckets.append(replace(last, weight=best.weight, reps=best.reps))

    logger.debug(f"Bucketized {total} points into {len(buckets)} windows of {width} days")
    return buckets
