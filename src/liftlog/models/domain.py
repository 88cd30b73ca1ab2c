"""Domain models for liftlog.

Pure Python dataclasses representing workout history entities.
These models carry no validation or I/O and are used throughout
the aggregation code; boundary validation lives in ``models.types``.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ============================================================================
# Progress Domain
# ============================================================================


@dataclass(frozen=True)
class PerformancePoint:
    """One historical record of a performed exercise.

    Attributes:
        workout_id: Identifier of the workout the record belongs to.
        workout_date: Calendar date (``YYYY-MM-DD``), the timeline axis.
        recorded_at: Creation timestamp, only used to break same-day ties.
        weight: Recorded weight, None when not recorded.
        reps: Recorded repetitions, None when not recorded.
    """

    workout_id: str
    workout_date: str
    recorded_at: str
    weight: float | None = None
    reps: float | None = None


# ============================================================================
# Workout History Domain
# ============================================================================


@dataclass(frozen=True)
class SetRecord:
    """A single logged set within a workout exercise."""

    set_order: int
    weight: float | None = None
    reps: float | None = None


@dataclass(frozen=True)
class TopSet:
    """The heaviest set of an exercise within one workout."""

    weight: float | None
    reps: float | None


@dataclass
class ExerciseHistoryItem:
    """All sets of one exercise performed in one workout."""

    workout_id: str
    workout_date: str
    workout_created_at: str
    sets: list[SetRecord] = field(default_factory=list)
