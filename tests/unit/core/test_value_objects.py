"""Unit tests for core value objects."""
from __future__ import annotations

import pytest

from vidshot.core.value_objects.sampling import SamplingMode, SamplingParams
from vidshot.core.value_objects.sampling_plan import SamplingPlan


class TestSamplingParams:
    """Tests for SamplingParams."""

    def test_defaults(self):
        params = SamplingParams()
        assert params.interval_ms == 1000
        assert params.random_count == 10
        assert params.orthogonal_count == 10

    def test_value_for_each_mode(self):
        params = SamplingParams(interval_ms=250, random_count=7, orthogonal_count=3)
        assert params.value_for(SamplingMode.EQUAL_INTERVAL) == 250
        assert params.value_for(SamplingMode.RANDOM) == 7
        assert params.value_for(SamplingMode.ORTHOGONAL) == 3

    def test_field_for(self):
        assert SamplingParams.field_for(SamplingMode.RANDOM) == "random_count"

    def test_mode_values(self):
        assert SamplingMode("interval") is SamplingMode.EQUAL_INTERVAL
        assert SamplingMode("orthogonal") is SamplingMode.ORTHOGONAL


class TestSamplingPlan:
    """Tests for SamplingPlan."""

    def test_sequence_protocol(self):
        plan = SamplingPlan(SamplingMode.EQUAL_INTERVAL, 4000, (0, 1000, 2000))
        assert len(plan) == 3
        assert list(plan) == [0, 1000, 2000]
        assert plan[1] == 1000

    def test_list_is_frozen_to_tuple(self):
        plan = SamplingPlan(SamplingMode.RANDOM, 100, [5, 9])
        assert plan.timestamps == (5, 9)

    def test_timestamp_at_duration_rejected(self):
        with pytest.raises(ValueError):
            SamplingPlan(SamplingMode.RANDOM, 100, (10, 100))

    def test_negative_timestamp_rejected(self):
        with pytest.raises(ValueError):
            SamplingPlan(SamplingMode.RANDOM, 100, (-1, 10))

    def test_descending_rejected(self):
        with pytest.raises(ValueError):
            SamplingPlan(SamplingMode.RANDOM, 100, (50, 10))

    def test_min_gap(self):
        assert SamplingPlan(SamplingMode.RANDOM, 100, (1, 10, 12)).min_gap_ms == 2
        assert SamplingPlan(SamplingMode.RANDOM, 100, (1,)).min_gap_ms == 0
