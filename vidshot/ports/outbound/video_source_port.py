"""Port for seeking and decoding frames from a video."""
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from vidshot.core.entities.captured_frame import CapturedFrame


@runtime_checkable
class VideoSourcePort(Protocol):
    def open(self, video_path: str) -> int: ...
    def seek_and_decode(self, timestamp_ms: int, timeout: float, sequence_index: int = 0) -> CapturedFrame: ...
    def close(self) -> None: ...
