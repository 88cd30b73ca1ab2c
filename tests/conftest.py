"""Shared pytest fixtures for liftlog tests."""

from datetime import date

import pytest

from liftlog.models.domain import PerformancePoint


def make_point(
    workout_date: str,
    weight: float | None = None,
    reps: float | None = None,
    recorded_at: str | None = None,
    workout_id: str | None = None,
) -> PerformancePoint:
    """Build a point with ids/timestamps derived from the date."""
    return PerformancePoint(
        workout_id=workout_id or f"w-{workout_date}",
        workout_date=workout_date,
        recorded_at=recorded_at or f"{workout_date}T09:00:00Z",
        weight=weight,
        reps=reps,
    )


@pytest.fixture
def point():
    """Factory fixture for performance points."""
    return make_point


@pytest.fixture
def today():
    """Fixed reference date for range filtering."""
    return date(2024, 6, 30)


@pytest.fixture
def three_workout_points():
    """Three points split by a 14-day window into two buckets."""
    return [
        make_point("2024-01-01", weight=50),
        make_point("2024-01-10", weight=55),
        make_point("2024-01-20", weight=52),
    ]
