"""Test doubles shared across the unit tests."""
from __future__ import annotations

import threading
from typing import Optional

import numpy as np

from vidshot.core.entities.captured_frame import CapturedFrame
from vidshot.core.exceptions import VideoOpenError


class FakeVideoSource:
    """In-memory stand-in for the OpenCV video source.

    ``failures`` maps a timestamp to the exception class raised when it is
    sought. ``gate`` (optional) blocks every seek until it is set.
    """

    def __init__(
        self,
        duration_ms: int = 12000,
        failures: Optional[dict] = None,
        open_error: bool = False,
        gate: Optional[threading.Event] = None,
        empty_at: Optional[set] = None,
    ) -> None:
        self.duration_ms = duration_ms
        self.failures = failures or {}
        self.open_error = open_error
        self.gate = gate
        self.empty_at = empty_at or set()
        self.opened_path: Optional[str] = None
        self.seeks: list[int] = []
        self.closed = False

    def open(self, video_path: str) -> int:
        if self.open_error:
            raise VideoOpenError(video_path, "fake open failure")
        self.opened_path = video_path
        return self.duration_ms

    def seek_and_decode(self, timestamp_ms: int, timeout: float, sequence_index: int = 0) -> CapturedFrame:
        self.seeks.append(timestamp_ms)
        if self.gate is not None:
            self.gate.wait(5)
        if timestamp_ms in self.failures:
            raise self.failures[timestamp_ms](f"fake failure at {timestamp_ms}ms", timestamp_ms=timestamp_ms)
        if timestamp_ms in self.empty_at:
            pixels = np.zeros((0, 0, 3), dtype=np.uint8)
        else:
            pixels = np.full((8, 12, 3), sequence_index % 255, dtype=np.uint8)
        return CapturedFrame(sequence_index=sequence_index, timestamp_ms=timestamp_ms, pixels=pixels)

    def close(self) -> None:
        self.closed = True
