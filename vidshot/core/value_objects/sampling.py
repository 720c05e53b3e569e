"""Sampling mode and its parameters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SamplingMode(str, Enum):
    EQUAL_INTERVAL = "interval"
    RANDOM = "random"
    ORTHOGONAL = "orthogonal"


@dataclass(frozen=True)
class SamplingParams:
    """Per-mode sampling parameters.

    Only the field matching the selected mode is consulted. ``interval_ms``
    is always expressed in milliseconds of source time.
    """

    interval_ms: int = 1000
    random_count: int = 10
    orthogonal_count: int = 10

    def value_for(self, mode: SamplingMode) -> int:
        if mode is SamplingMode.EQUAL_INTERVAL:
            return self.interval_ms
        if mode is SamplingMode.RANDOM:
            return self.random_count
        return self.orthogonal_count

    @staticmethod
    def field_for(mode: SamplingMode) -> str:
        return {
            SamplingMode.EQUAL_INTERVAL: "interval_ms",
            SamplingMode.RANDOM: "random_count",
            SamplingMode.ORTHOGONAL: "orthogonal_count",
        }[mode]
