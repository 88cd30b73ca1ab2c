"""Summary statistics over a bucketed progress series.

Computes the numeric callouts shown next to the chart:
- latest: last value of the series
- best: maximum value
- delta_from_previous: latest minus the value before it
- delta_from_first: latest minus the first value

Values are rounded half away from zero at one decimal place, which keeps
plate increments such as 2.5 kg intact.
"""

from __future__ import annotations

import math
from typing import Iterable

from liftlog.core.measurements import finite_or_none
from liftlog.models.domain import PerformancePoint
from liftlog.models.types import ProgressSummary
from liftlog.progress.options import Metric


def round_one_decimal(value: float) -> float:
    """Round to one decimal place, halves away from zero.

    Examples:
        >>> round_one_decimal(0.25)
        0.3
        >>> round_one_decimal(-0.25)
        -0.3
    """
    scaled = math.floor(abs(value) * 10 + 0.5) / 10
    return math.copysign(scaled, value) if scaled else 0.0


def compute_delta(current: float, previous: float) -> float:
    """Signed difference ``current - previous`` rounded to one decimal."""
    return round_one_decimal(current - previous)


def metric_value(point: PerformancePoint, metric: Metric) -> float | None:
    """Return the chosen measurement of a point, None if absent or not finite."""
    raw = point.weight if metric == "weight" else point.reps
    return finite_or_none(raw)


def project_metric(series: Iterable[PerformancePoint], metric: Metric) -> list[float]:
    """Extract one measurement from each point, skipping missing values."""
    values: list[float] = []
    for point in series:
        value = metric_value(point, metric)
        if value is not None:
            values.append(value)
    return values


def summarize(series: Iterable[PerformancePoint], metric: Metric) -> ProgressSummary:
    """Compute summary statistics for a bucketed series.

    Args:
        series: Bucketed points in chronological order.
        metric: Measurement to summarize.

    Returns:
        ProgressSummary; fields stay None when the series is too short.
    """
    values = project_metric(series, metric)

    if not values:
        return ProgressSummary()

    latest = values[-1]
    summary = ProgressSummary(
        latest=round_one_decimal(latest),
        best=round_one_decimal(max(values)),
        count=len(values),
    )

    if len(values) >= 2:
        summary.delta_from_previous = compute_delta(latest, values[-2])
        summary.delta_from_first = compute_delta(latest, values[0])

    return summary
