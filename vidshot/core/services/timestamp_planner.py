"""
Timestamp planning - pure domain logic.
Turns (duration, mode, parameters) into the ordered capture timestamps of a job.
"""
from __future__ import annotations

import logging
import random
from typing import Optional

from vidshot.core.exceptions import InvalidConfigError
from vidshot.core.value_objects.sampling import SamplingMode, SamplingParams
from vidshot.core.value_objects.sampling_plan import SamplingPlan

logger = logging.getLogger(__name__)


class TimestampPlanner:
    """Builds sampling plans for the three export modes.

    All timestamps are integer milliseconds. ``min_spacing_ms`` is the
    smallest allowed distance between two random or stratified samples.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        min_spacing_ms: int = 1,
    ) -> None:
        if min_spacing_ms < 1:
            raise InvalidConfigError("min_spacing_ms must be >= 1")
        self._rng = rng or random.Random(seed)
        self._min_spacing = min_spacing_ms

    def plan(self, duration_ms: int, mode: SamplingMode, params: SamplingParams) -> SamplingPlan:
        if duration_ms is None or int(duration_ms) <= 0:
            raise InvalidConfigError(f"duration_ms must be > 0, got {duration_ms}")
        duration_ms = int(duration_ms)
        mode = SamplingMode(mode)
        value = params.value_for(mode)
        if value <= 0:
            raise InvalidConfigError(
                f"{SamplingParams.field_for(mode)} must be > 0, got {value}"
            )

        if mode is SamplingMode.EQUAL_INTERVAL:
            timestamps = self.equal_interval(duration_ms, value)
        elif mode is SamplingMode.RANDOM:
            timestamps = self.uniform_random(duration_ms, value)
        else:
            timestamps = self.orthogonal(duration_ms, value)

        logger.debug("Planned %d %s timestamps over %dms", len(timestamps), mode.value, duration_ms)
        return SamplingPlan(mode=mode, duration_ms=duration_ms, timestamps=tuple(timestamps))

    # -- Modes -----------------------------------------------------------------

    @staticmethod
    def equal_interval(duration_ms: int, interval_ms: int) -> list[int]:
        """``0, k, 2k, ...`` with ``floor(duration / k)`` entries, never fewer than one."""
        count = max(1, duration_ms // interval_ms)
        return [i * interval_ms for i in range(count)]

    def uniform_random(self, duration_ms: int, count: int) -> list[int]:
        """Uniform draw without replacement, sorted, respecting the minimum spacing.

        Sampling from the shrunken range ``duration - (n-1)*(s-1)`` and then
        spreading the sorted picks by ``i*(s-1)`` yields every spaced set with
        equal probability, so no collision retries are needed.
        """
        spacing = self._min_spacing
        slots = (duration_ms - 1) // spacing + 1
        if count > slots:
            logger.warning(
                "Requested %d random timestamps but only %d fit in %dms; capping",
                count, slots, duration_ms,
            )
            count = slots
        span = duration_ms - (count - 1) * (spacing - 1)
        picks = sorted(self._rng.sample(range(span), count))
        return [ts + i * (spacing - 1) for i, ts in enumerate(picks)]

    def orthogonal(self, duration_ms: int, count: int) -> list[int]:
        """One uniform draw from each of ``count`` equal-width strata, in stratum order."""
        spacing = self._min_spacing
        max_strata = max(1, duration_ms // spacing)
        if count > max_strata:
            logger.warning(
                "Requested %d strata but only %d fit in %dms; capping",
                count, max_strata, duration_ms,
            )
            count = max_strata

        timestamps: list[int] = []
        previous: Optional[int] = None
        for i in range(count):
            lo = i * duration_ms // count
            hi = (i + 1) * duration_ms // count
            if previous is not None:
                lo = max(lo, previous + spacing)
            ts = self._rng.randrange(lo, hi)
            timestamps.append(ts)
            previous = ts
        return timestamps


def plan(
    duration_ms: int,
    mode: SamplingMode,
    params: SamplingParams,
    seed: Optional[int] = None,
    min_spacing_ms: int = 1,
) -> SamplingPlan:
    """Convenience wrapper around :class:`TimestampPlanner`."""
    return TimestampPlanner(seed=seed, min_spacing_ms=min_spacing_ms).plan(duration_ms, mode, params)
