"""CapturedFrame entity - one decoded frame in transit to the writer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class CaptureStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"


@dataclass
class CapturedFrame:
    """A decoded frame tagged with its position in the sampling plan.

    ``pixels`` is the raw ``numpy`` buffer (height x width [x channels]) as
    produced by the video source. Frames are handed to the writer once and
    then dropped.
    """

    sequence_index: int
    timestamp_ms: int
    pixels: Any

    @property
    def width(self) -> int:
        shape = getattr(self.pixels, "shape", ())
        return int(shape[1]) if len(shape) >= 2 else 0

    @property
    def height(self) -> int:
        shape = getattr(self.pixels, "shape", ())
        return int(shape[0]) if len(shape) >= 2 else 0

    @property
    def status(self) -> CaptureStatus:
        if self.pixels is None or getattr(self.pixels, "size", 0) == 0:
            return CaptureStatus.EMPTY
        if self.width == 0 or self.height == 0:
            return CaptureStatus.EMPTY
        return CaptureStatus.OK

    @property
    def is_usable(self) -> bool:
        return self.status is CaptureStatus.OK
