"""Tests for the progress pipeline and result cache."""

from datetime import date

import pytest

from liftlog.models.types import ChartPoint
from liftlog.progress.options import ProgressConfig
from liftlog.progress.service import (
    ProgressCache,
    ProgressKey,
    ProgressResult,
    build_chart,
    compute_progress,
)


class TestComputeProgress:
    """Test compute_progress end to end."""

    def test_three_workouts_two_buckets(self, three_workout_points):
        result = compute_progress(
            list(reversed(three_workout_points)),
            range_window="all",
            bucket_width=14,
            now=date(2024, 2, 1),
        )

        assert result.metric == "weight"
        assert result.range_window == "all"
        assert result.bucket_width_days == 14
        assert [(p.workout_date, p.weight) for p in result.series] == [
            ("2024-01-10", 55),
            ("2024-01-20", 52),
        ]
        assert result.chart == [
            ChartPoint(date="2024-01-10", value=55, workout_id="w-2024-01-10"),
            ChartPoint(date="2024-01-20", value=52, workout_id="w-2024-01-20"),
        ]
        assert result.summary.latest == 52
        assert result.summary.best == 55
        assert result.summary.delta_from_previous == pytest.approx(-3.0)
        assert result.summary.delta_from_first == pytest.approx(-3.0)

    def test_range_window_applied(self, point, today):
        points = [
            point("2023-01-01", weight=100),
            point("2024-06-01", weight=60),
            point("2024-06-20", weight=62.5),
        ]
        result = compute_progress(points, range_window="12w", bucket_width=28, now=today)
        assert len(result.series) == 1
        assert result.summary.best == 62.5

    def test_defaults_come_from_config(self, point, today):
        config = ProgressConfig(default_range="all", default_bucket_width=28)
        result = compute_progress([point("2020-01-01", weight=10)], now=today, config=config)
        assert result.range_window == "all"
        assert result.bucket_width_days == 28
        assert len(result.series) == 1

    def test_points_without_measurements_are_dropped(self, point, today):
        points = [
            point("2024-06-01"),
            point("2024-06-20", reps=12),
        ]
        result = compute_progress(points, range_window="all", bucket_width=14, now=today)
        assert result.metric == "reps"
        assert len(result.series) == 1
        assert result.series[0].reps == 12

    def test_metric_selected_over_full_history(self, point, today):
        """Weight recorded outside the range still selects the weight axis."""
        points = [point("2020-01-01", weight=40), point("2024-06-20", reps=15)]
        result = compute_progress(points, range_window="12w", now=today)
        assert result.metric == "weight"
        assert result.chart == []
        assert result.summary.latest is None

    def test_explicit_metric_override(self, point, today):
        points = [point("2024-06-01", weight=40, reps=8), point("2024-06-10", weight=40, reps=10)]
        result = compute_progress(points, range_window="all", bucket_width=14, metric="reps", now=today)
        assert result.metric == "reps"
        assert [c.value for c in result.chart] == [10]

    def test_empty_input(self, today):
        result = compute_progress([], now=today)
        assert result.series == []
        assert result.chart == []
        assert result.summary.latest is None

    def test_invalid_bucket_width_raises(self, point, today):
        with pytest.raises(ValueError):
            compute_progress([point("2024-06-01", weight=1)], bucket_width=0, now=today)

    @pytest.mark.parametrize("width", [7, 14.9, 14.0, True])
    def test_unsupported_bucket_width_raises(self, point, today, width):
        """Widths outside 14/28 are rejected instead of truncated."""
        with pytest.raises(ValueError):
            compute_progress([point("2024-06-01", weight=1)], bucket_width=width, now=today)

    def test_input_is_not_mutated(self, three_workout_points, today):
        snapshot = list(three_workout_points)
        compute_progress(three_workout_points, range_window="all", now=today)
        assert three_workout_points == snapshot


class TestBuildChart:
    """Test chart projection."""

    def test_values_are_rounded(self, point):
        chart = build_chart([point("2024-01-01", weight=52.25)], "weight")
        assert chart[0].value == pytest.approx(52.3)

    def test_skips_points_without_metric(self, point):
        chart = build_chart([point("2024-01-01", reps=5)], "weight")
        assert chart == []


class TestProgressCache:
    """Test the caller-owned cache."""

    @staticmethod
    def _result() -> ProgressResult:
        return ProgressResult(metric="weight", range_window="12w", bucket_width_days=14)

    def test_get_or_compute_memoizes(self):
        cache = ProgressCache()
        key = ProgressKey("u1", "bench", "12w", 14)
        calls = []

        def compute():
            calls.append(1)
            return self._result()

        first = cache.get_or_compute(key, compute)
        second = cache.get_or_compute(key, compute)
        assert first is second
        assert len(calls) == 1
        assert key in cache

    def test_keys_distinguish_selectors(self):
        cache = ProgressCache()
        cache.put(ProgressKey("u1", "bench", "12w", 14), self._result())
        assert cache.get(ProgressKey("u1", "bench", "12w", 28)) is None
        assert cache.get(ProgressKey("u1", "bench", "12w", 14, metric="reps")) is None

    def test_invalidate_exercise(self):
        cache = ProgressCache()
        cache.put(ProgressKey("u1", "bench", "12w", 14), self._result())
        cache.put(ProgressKey("u1", "bench", "6m", 28), self._result())
        cache.put(ProgressKey("u1", "squat", "12w", 14), self._result())
        cache.put(ProgressKey("u2", "bench", "12w", 14), self._result())

        assert cache.invalidate("u1", "bench") == 2
        assert len(cache) == 2
        assert ProgressKey("u1", "squat", "12w", 14) in cache

    def test_invalidate_user(self):
        cache = ProgressCache()
        cache.put(ProgressKey("u1", "bench", "12w", 14), self._result())
        cache.put(ProgressKey("u1", "squat", "12w", 14), self._result())
        cache.put(ProgressKey("u2", "bench", "12w", 14), self._result())

        assert cache.invalidate("u1") == 2
        assert len(cache) == 1
        assert cache.invalidate("nobody") == 0

    def test_caches_are_independent(self):
        a = ProgressCache()
        b = ProgressCache()
        a.put(ProgressKey("u1", "bench", "12w", 14), self._result())
        assert len(b) == 0

    def test_clear(self):
        cache = ProgressCache()
        cache.put(ProgressKey("u1", "bench", "12w", 14), self._result())
        cache.clear()
        assert len(cache) == 0
