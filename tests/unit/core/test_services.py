"""Unit tests for the timestamp planner."""
from __future__ import annotations

import random

import pytest

from vidshot.core.exceptions import InvalidConfigError
from vidshot.core.services.timestamp_planner import TimestampPlanner, plan
from vidshot.core.value_objects.sampling import SamplingMode, SamplingParams

DURATIONS = [1, 7, 999, 1000, 12000, 10001, 3_600_000]


class TestEqualInterval:
    """Tests for equal-interval planning."""

    def test_twelve_seconds_every_three(self):
        result = plan(12000, SamplingMode.EQUAL_INTERVAL, SamplingParams(interval_ms=3000))
        assert list(result) == [0, 3000, 6000, 9000]

    @pytest.mark.parametrize("duration", DURATIONS)
    @pytest.mark.parametrize("interval", [1, 3, 250, 1000, 4000])
    def test_length_and_spacing(self, duration, interval):
        result = plan(duration, SamplingMode.EQUAL_INTERVAL, SamplingParams(interval_ms=interval))
        assert len(result) == max(1, duration // interval)
        assert all(b - a == interval for a, b in zip(result, result[1:]))
        assert all(0 <= ts < duration for ts in result)

    def test_interval_longer_than_video_yields_single_frame(self):
        result = plan(500, SamplingMode.EQUAL_INTERVAL, SamplingParams(interval_ms=3000))
        assert list(result) == [0]

    def test_remainder_is_not_sampled(self):
        result = plan(10000, SamplingMode.EQUAL_INTERVAL, SamplingParams(interval_ms=3000))
        assert list(result) == [0, 3000, 6000]


class TestRandom:
    """Tests for random planning."""

    @pytest.mark.parametrize("duration", DURATIONS)
    @pytest.mark.parametrize("count", [1, 5, 10, 2000])
    def test_length_order_and_bounds(self, duration, count):
        result = plan(duration, SamplingMode.RANDOM, SamplingParams(random_count=count), seed=duration + count)
        assert len(result) == min(count, duration)
        assert all(a < b for a, b in zip(result, result[1:]))
        assert all(0 <= ts < duration for ts in result)

    def test_count_capped_at_available_milliseconds(self):
        result = plan(5, SamplingMode.RANDOM, SamplingParams(random_count=50))
        assert list(result) == [0, 1, 2, 3, 4]

    def test_seed_makes_plan_reproducible(self):
        params = SamplingParams(random_count=20)
        first = plan(60000, SamplingMode.RANDOM, params, seed=42)
        second = plan(60000, SamplingMode.RANDOM, params, seed=42)
        assert first.timestamps == second.timestamps

    def test_min_spacing_is_respected(self):
        planner = TimestampPlanner(seed=7, min_spacing_ms=100)
        result = planner.plan(10000, SamplingMode.RANDOM, SamplingParams(random_count=80))
        assert len(result) == 80
        assert result.min_gap_ms >= 100
        assert result[-1] < 10000

    def test_min_spacing_caps_count(self):
        planner = TimestampPlanner(seed=7, min_spacing_ms=1000)
        result = planner.plan(5000, SamplingMode.RANDOM, SamplingParams(random_count=20))
        assert len(result) == 5
        assert result.min_gap_ms >= 1000
        assert result[-1] < 5000

    def test_injected_rng_is_used(self):
        rng = random.Random(3)
        expected = TimestampPlanner(rng=random.Random(3)).plan(
            9000, SamplingMode.RANDOM, SamplingParams(random_count=4)
        )
        result = TimestampPlanner(rng=rng).plan(9000, SamplingMode.RANDOM, SamplingParams(random_count=4))
        assert result.timestamps == expected.timestamps


class TestOrthogonal:
    """Tests for stratified planning."""

    def test_one_sample_per_stratum(self):
        result = plan(10000, SamplingMode.ORTHOGONAL, SamplingParams(orthogonal_count=5), seed=1)
        assert len(result) == 5
        for i, ts in enumerate(result):
            assert i * 2000 <= ts < (i + 1) * 2000

    @pytest.mark.parametrize("duration", DURATIONS)
    @pytest.mark.parametrize("count", [1, 3, 10, 999])
    def test_exact_count_when_strata_fit(self, duration, count):
        if count > duration:
            pytest.skip("strata narrower than a millisecond")
        result = plan(duration, SamplingMode.ORTHOGONAL, SamplingParams(orthogonal_count=count), seed=count)
        assert len(result) == count
        assert all(a < b for a, b in zip(result, result[1:]))
        for i, ts in enumerate(result):
            assert i * duration // count <= ts < (i + 1) * duration // count

    def test_count_capped_when_strata_too_narrow(self):
        result = plan(4, SamplingMode.ORTHOGONAL, SamplingParams(orthogonal_count=10))
        assert list(result) == [0, 1, 2, 3]

    def test_min_spacing_between_neighbouring_strata(self):
        planner = TimestampPlanner(seed=11, min_spacing_ms=500)
        result = planner.plan(10000, SamplingMode.ORTHOGONAL, SamplingParams(orthogonal_count=20))
        assert len(result) == 20
        assert result.min_gap_ms >= 500

    def test_differs_from_equal_interval(self):
        strat = plan(100000, SamplingMode.ORTHOGONAL, SamplingParams(orthogonal_count=10), seed=5)
        equal = plan(100000, SamplingMode.EQUAL_INTERVAL, SamplingParams(interval_ms=10000))
        assert strat.timestamps != equal.timestamps


class TestPlannerValidation:
    """Invalid inputs raise InvalidConfigError."""

    @pytest.mark.parametrize("duration", [0, -1, None, 0.5, 0.999])
    def test_non_positive_duration(self, duration):
        with pytest.raises(InvalidConfigError):
            plan(duration, SamplingMode.EQUAL_INTERVAL, SamplingParams())

    @pytest.mark.parametrize(
        "mode,params",
        [
            (SamplingMode.EQUAL_INTERVAL, SamplingParams(interval_ms=0)),
            (SamplingMode.RANDOM, SamplingParams(random_count=0)),
            (SamplingMode.ORTHOGONAL, SamplingParams(orthogonal_count=-3)),
        ],
    )
    def test_non_positive_parameter(self, mode, params):
        with pytest.raises(InvalidConfigError):
            plan(1000, mode, params)

    def test_irrelevant_parameter_is_ignored(self):
        result = plan(1000, SamplingMode.RANDOM, SamplingParams(interval_ms=0, random_count=2))
        assert len(result) == 2

    def test_mode_accepts_plain_string(self):
        result = TimestampPlanner().plan(6000, "interval", SamplingParams(interval_ms=2000))
        assert list(result) == [0, 2000, 4000]

    def test_min_spacing_below_one_rejected(self):
        with pytest.raises(InvalidConfigError):
            TimestampPlanner(min_spacing_ms=0)

    def test_fractional_duration_is_truncated(self):
        result = plan(2500.7, SamplingMode.EQUAL_INTERVAL, SamplingParams(interval_ms=1000))
        assert result.duration_ms == 2500
        assert list(result) == [0, 1000]
