"""Workout history to performance points.

A workout may log many sets of an exercise; progress tracking only looks at
the top set (heaviest weight, then most reps) of each workout. This module
groups raw per-workout rows, picks top sets, and converts the result into
``PerformancePoint`` records for the aggregation pipeline.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from liftlog.core.dates import parse_ymd
from liftlog.core.measurements import finite_or_none
from liftlog.models.domain import ExerciseHistoryItem, PerformancePoint, SetRecord, TopSet

logger = logging.getLogger(__name__)

DEFAULT_WORKOUT_LIMIT = 30


def pick_top_set(sets: Iterable[SetRecord]) -> TopSet | None:
    """Pick the heaviest set, breaking weight ties by reps.

    Unrecorded values rank below any real value. A set carrying a NaN or
    infinite value is left out entirely. The first set wins exact ties.

    Args:
        sets: Sets of one exercise within one workout.

    Returns:
        TopSet, or None when no set records a weight or reps.
    """
    best: TopSet | None = None
    best_weight = -1.0
    best_reps = -1.0

    for s in sets:
        weight = finite_or_none(s.weight)
        reps = finite_or_none(s.reps)
        if (s.weight is not None and weight is None) or (s.reps is not None and reps is None):
            continue
        w = -1.0 if weight is None else weight
        r = -1.0 if reps is None else reps

        if best is None or w > best_weight or (w == best_weight and r > best_reps):
            best_weight = w
            best_reps = r
            best = TopSet(weight=weight, reps=reps)

    if best is None or (best.weight is None and best.reps is None):
        return None
    return best


def _chronological_key(item: ExerciseHistoryItem) -> tuple:
    return (parse_ymd(item.workout_date), item.workout_created_at)


def merge_history_rows(
    rows: Iterable[ExerciseHistoryItem],
    limit: int = DEFAULT_WORKOUT_LIMIT,
) -> list[ExerciseHistoryItem]:
    """Group exercise rows by workout, newest workout first.

    The same exercise can appear more than once in a workout; its sets are
    merged and ordered by ``set_order``.

    Args:
        rows: Per-workout-exercise rows for one exercise.
        limit: Maximum number of workouts to return.

    Returns:
        One history item per workout, sorted by (workout_date, created_at)
        descending and truncated to ``limit``.
    """
    grouped: dict[str, ExerciseHistoryItem] = {}
    for row in rows:
        existing = grouped.get(row.workout_id)
        if existing is None:
            grouped[row.workout_id] = ExerciseHistoryItem(
                workout_id=row.workout_id,
                workout_date=row.workout_date,
                workout_created_at=row.workout_created_at,
                sets=sorted(row.sets, key=lambda s: s.set_order),
            )
        else:
            existing.sets = sorted([*existing.sets, *row.sets], key=lambda s: s.set_order)

    history = sorted(grouped.values(), key=_chronological_key, reverse=True)
    return history[:limit]


def history_to_points(history: Iterable[ExerciseHistoryItem]) -> list[PerformancePoint]:
    """Convert workout history into one performance point per workout.

    Workouts whose sets record nothing are skipped, so every returned point
    is displayable.
    """
    points: list[PerformancePoint] = []
    skipped = 0
    for item in history:
        top = pick_top_set(item.sets)
        if top is None:
            skipped += 1
            continue
        points.append(
            PerformancePoint(
                workout_id=item.workout_id,
                workout_date=item.workout_date,
                recorded_at=item.workout_created_at,
                weight=top.weight,
                reps=top.reps,
            )
        )
    if skipped:
        logger.debug(f"Skipped {skipped} workouts without recorded sets")
    return points


def previous_top_set(
    history: Sequence[ExerciseHistoryItem],
    before_date: str,
    before_created_at: str,
) -> TopSet | None:
    """Return the top set from the most recent workout before a given one.

    A workout counts as earlier when its date is earlier, or when it shares
    the date and was created earlier. Only the nearest earlier workout is
    inspected; if it recorded nothing the result is None.

    Args:
        history: Workout history of one exercise, in any order.
        before_date: Date of the reference workout (``YYYY-MM-DD``).
        before_created_at: Creation timestamp of the reference workout.

    Returns:
        TopSet of the previous workout, or None.
    """
    reference = (parse_ymd(before_date), before_created_at)
    earlier = [item for item in history if _chronological_key(item) < reference]
    if not earlier:
        return None
    previous = max(earlier, key=_chronological_key)
    return pick_top_set(previous.sets)


def _format_number(value: float) -> str:
    # 60.0 -> "60", 62.5 -> "62.5"
    return f"{value:g}"


def format_set_text(weight: float | None, reps: float | None) -> str:
    """Compact set label: ``60kg×10``, ``60kg``, ``×10`` or ``-``."""
    w = finite_or_none(weight)
    r = finite_or_none(reps)
    weight_text = "" if w is None else f"{_format_number(w)}kg"
    reps_text = "" if r is None else _format_number(r)
    if not weight_text and not reps_text:
        return "-"
    if weight_text and reps_text:
        return f"{weight_text}×{reps_text}"
    if weight_text:
        return weight_text
    return f"×{reps_text}"
