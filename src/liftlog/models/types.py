"""Pydantic models for liftlog boundaries.

Input records are validated here before they reach the aggregation code;
output payloads are what the presentation layer consumes.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from liftlog.core.dates import parse_ymd
from liftlog.core.measurements import finite_or_none
from liftlog.models.domain import ExerciseHistoryItem, PerformancePoint, SetRecord


class PerformancePointRecord(BaseModel):
    """Raw performance record as supplied by a point source."""

    workout_id: str
    workout_date: str
    recorded_at: str = ""
    weight: float | None = None
    reps: float | None = None

    @field_validator("workout_date")
    @classmethod
    def _check_workout_date(cls, value: str) -> str:
        # Raises ValueError -> ValidationError for malformed dates
        parse_ymd(value)
        return value

    @field_validator("weight", "reps")
    @classmethod
    def _drop_non_finite(cls, value: float | None) -> float | None:
        return finite_or_none(value)

    def to_point(self) -> PerformancePoint:
        """Convert to the domain dataclass."""
        return PerformancePoint(
            workout_id=self.workout_id,
            workout_date=self.workout_date,
            recorded_at=self.recorded_at,
            weight=self.weight,
            reps=self.reps,
        )


class SetRecordInput(BaseModel):
    """One set of a workout history row.

    Values are range-checked later by ``pick_top_set``, which leaves out
    sets carrying NaN or infinity.
    """

    set_order: int | None = None
    weight: float | None = None
    reps: float | None = None


class HistoryRowRecord(BaseModel):
    """Raw per-workout exercise row carrying its sets."""

    workout_id: str
    workout_date: str
    workout_created_at: str = ""
    sets: list[SetRecordInput]

    @field_validator("workout_date")
    @classmethod
    def _check_workout_date(cls, value: str) -> str:
        parse_ymd(value)
        return value

    def to_item(self) -> ExerciseHistoryItem:
        """Convert to the domain dataclass; unordered sets keep file order."""
        return ExerciseHistoryItem(
            workout_id=self.workout_id,
            workout_date=self.workout_date,
            workout_created_at=self.workout_created_at,
            sets=[
                SetRecord(
                    set_order=index if s.set_order is None else s.set_order,
                    weight=s.weight,
                    reps=s.reps,
                )
                for index, s in enumerate(self.sets)
            ],
        )


class ChartPoint(BaseModel):
    """One ``{date, value}`` pair of the charted series."""

    date: str
    value: float
    workout_id: str


class ProgressSummary(BaseModel):
    """Numeric callouts derived from the bucketed series.

    All fields are None when there is not enough data; deltas need at
    least two values.
    """

    latest: float | None = None
    best: float | None = None
    delta_from_previous: float | None = None
    delta_from_first: float | None = None
    count: int = 0
