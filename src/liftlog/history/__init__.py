"""Workout history helpers.

Converts per-workout set logs into performance points (one top set per
workout) and formats sets for history listings.
"""

from liftlog.history.top_sets import (
    format_set_text,
    history_to_points,
    merge_history_rows,
    pick_top_set,
    previous_top_set,
)

__all__ = [
    "format_set_text",
    "history_to_points",
    "merge_history_rows",
    "pick_top_set",
    "previous_top_set",
]
