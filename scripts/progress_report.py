#!/usr/bin/env python3
"""Print the progress of one exercise from a JSON history export.

The input file holds a JSON list of either performance points::

    [{"workout_id": "w1", "workout_date": "2024-01-01",
      "recorded_at": "2024-01-01T09:00:00Z", "weight": 50, "reps": 8}, ...]

or workout history rows carrying their sets::

    [{"workout_id": "w1", "workout_date": "2024-01-01",
      "workout_created_at": "2024-01-01T09:00:00Z",
      "sets": [{"set_order": 1, "weight": 50, "reps": 8}]}, ...]

Usage:
    python scripts/progress_report.py history.json --range 6m --bucket 28

Environment:
    LIFTLOG_RANGE: default range window (12w, 6m, all)
    LIFTLOG_BUCKET_DAYS: default bucket width in days (14, 28)

Exit codes:
    0: Report printed
    1: Input could not be read or validated
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from pydantic import ValidationError  # noqa: E402

from liftlog.core.dates import parse_ymd  # noqa: E402
from liftlog.history import format_set_text, history_to_points, merge_history_rows  # noqa: E402
from liftlog.models.domain import PerformancePoint  # noqa: E402
from liftlog.models.types import HistoryRowRecord, PerformancePointRecord  # noqa: E402
from liftlog.progress import (  # noqa: E402
    ProgressConfig,
    compute_progress,
    parse_bucket_width,
    parse_metric,
    parse_range,
)
from liftlog.progress.options import (  # noqa: E402
    BUCKET_LABELS,
    METRIC_LABELS,
    METRIC_UNITS,
    RANGE_LABELS,
)


def load_points(path: Path, config: ProgressConfig) -> list[PerformancePoint]:
    """Read points (or history rows) from a JSON file.

    Raises:
        ValidationError: If a record is malformed.
        ValueError: If the file is not a JSON list.
    """
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError(f"Expected a JSON list in {path}")

    if raw and all(isinstance(item, dict) and "sets" in item for item in raw):
        rows = [HistoryRowRecord(**item).to_item() for item in raw]
        history = merge_history_rows(rows, limit=config.history_limit)
        return history_to_points(history)

    return [PerformancePointRecord(**item).to_point() for item in raw]


def format_value(value: float | None, unit: str) -> str:
    return "-" if value is None else f"{value:g} {unit}"


def format_delta(delta: float | None, unit: str) -> str:
    if delta is None:
        return "-"
    sign = "+" if delta > 0 else ""
    return f"{sign}{delta:g} {unit}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Exercise progress report")
    parser.add_argument("path", type=Path, help="JSON history export")
    parser.add_argument("--range", dest="range_window", default=os.environ.get("LIFTLOG_RANGE"))
    parser.add_argument("--bucket", default=os.environ.get("LIFTLOG_BUCKET_DAYS"))
    parser.add_argument("--metric", default=None, help="weight, reps or auto")
    parser.add_argument("--now", default=None, help="reference date (YYYY-MM-DD)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = ProgressConfig()
    try:
        points = load_points(args.path, config)
        now = parse_ymd(args.now) if args.now else date.today()
    except (OSError, KeyError, TypeError, ValueError, ValidationError) as e:
        print(f"FAIL: {e}")
        return 1

    result = compute_progress(
        points,
        range_window=parse_range(args.range_window, config.default_range),
        bucket_width=parse_bucket_width(args.bucket, config.default_bucket_width),
        metric=parse_metric(args.metric),
        now=now,
        config=config,
    )

    unit = METRIC_UNITS[result.metric]
    print("=" * 60)
    print(f"{METRIC_LABELS[result.metric]} progress")
    print(f"  Range:  {RANGE_LABELS[result.range_window]}")
    print(f"  Bucket: {BUCKET_LABELS.get(result.bucket_width_days, f'{result.bucket_width_days} days')}")
    print("=" * 60)

    if not result.series:
        print("No records in range.")
        return 0

    for point in reversed(result.series):
        print(f"  {point.workout_date}  {format_set_text(point.weight, point.reps)}")

    summary = result.summary
    print("-" * 60)
    print(f"  Latest:        {format_value(summary.latest, unit)}")
    print(f"  Best:          {format_value(summary.best, unit)}")
    print(f"  vs previous:   {format_delta(summary.delta_from_previous, unit)}")
    print(f"  vs first:      {format_delta(summary.delta_from_first, unit)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
