"""Progress aggregation for exercise history.

- aggregate: range filter, chronological sort, windowed best-point selection
- summary: latest / best / deltas over the bucketed series
- service: end-to-end pipeline and caller-owned cache
- options: range, bucket width and metric selectors

Pure computation: no database access, no shared state.
"""

from liftlog.progress.aggregate import (
    bucketize,
    filter_by_range,
    pick_better,
    range_lower_bound,
    sort_chronologically,
)
from liftlog.progress.options import (
    BucketWidth,
    Metric,
    ProgressConfig,
    RangeWindow,
    parse_bucket_width,
    parse_metric,
    parse_range,
    select_metric,
)
from liftlog.progress.service import (
    ProgressCache,
    ProgressKey,
    ProgressResult,
    build_chart,
    compute_progress,
)
from liftlog.progress.summary import compute_delta, round_one_decimal, summarize

__all__ = [
    # Aggregation
    "bucketize",
    "filter_by_range",
    "pick_better",
    "range_lower_bound",
    "sort_chronologically",
    # Summary
    "compute_delta",
    "round_one_decimal",
    "summarize",
    # Pipeline
    "ProgressCache",
    "ProgressKey",
    "ProgressResult",
    "build_chart",
    "compute_progress",
    # Options
    "BucketWidth",
    "Metric",
    "ProgressConfig",
    "RangeWindow",
    "parse_bucket_width",
    "parse_metric",
    "parse_range",
    "select_metric",
]
