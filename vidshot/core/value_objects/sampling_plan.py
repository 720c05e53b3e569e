"""SamplingPlan value object - the ordered capture timestamps for one job."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from vidshot.core.value_objects.sampling import SamplingMode


@dataclass(frozen=True)
class SamplingPlan:
    """Immutable, ascending sequence of millisecond timestamps in ``[0, duration_ms)``."""

    mode: SamplingMode
    duration_ms: int
    timestamps: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamps", tuple(self.timestamps))
        previous = -1
        for ts in self.timestamps:
            if ts < 0 or ts >= self.duration_ms:
                raise ValueError(
                    f"timestamp {ts} is outside [0, {self.duration_ms})"
                )
            if ts < previous:
                raise ValueError("timestamps must be non-decreasing")
            previous = ts

    def __len__(self) -> int:
        return len(self.timestamps)

    def __iter__(self) -> Iterator[int]:
        return iter(self.timestamps)

    def __getitem__(self, index: int) -> int:
        return self.timestamps[index]

    @property
    def min_gap_ms(self) -> int:
        """Smallest distance between neighbouring timestamps (0 for a single entry)."""
        if len(self.timestamps) < 2:
            return 0
        return min(b - a for a, b in zip(self.timestamps, self.timestamps[1:]))
