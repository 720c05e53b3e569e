"""OpenCV-based video source adapter.

Implements :class:`~vidshot.ports.outbound.video_source_port.VideoSourcePort`.
Each seek+decode runs on its own daemon thread so the caller can bound it with
a timeout. A decode that overruns its timeout leaves its capture handle to the
stuck thread, which releases it once the read returns; the video is reopened
on a fresh handle for the next seek. Daemon threads never hold up interpreter
exit.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path
from typing import Any, Callable, Optional

import cv2

from vidshot.core.entities.captured_frame import CapturedFrame
from vidshot.core.exceptions import DecodeError, SeekTimeoutError, VideoOpenError

logger = logging.getLogger(__name__)


class OpenCVVideoSource:
    """Seeks and decodes single frames with ``cv2.VideoCapture``."""

    def __init__(self, capture_factory: Optional[Callable[[str], Any]] = None) -> None:
        self._capture_factory = capture_factory or cv2.VideoCapture
        self._path: Optional[str] = None
        self._cap: Any = None
        self._fps: float = 0.0
        self._frame_count: int = 0

    # -- Port interface --------------------------------------------------------

    def open(self, video_path: str) -> int:
        """Open *video_path* and return its duration in milliseconds."""
        if not Path(video_path).is_file():
            raise VideoOpenError(video_path, "file not found")

        cap = self._capture_factory(str(video_path))
        if not cap.isOpened():
            cap.release()
            raise VideoOpenError(video_path)

        fps: float = cap.get(cv2.CAP_PROP_FPS)
        frame_count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
        duration_ms = int(frame_count * 1000 / fps) if fps > 0 and frame_count > 0 else 0
        if duration_ms <= 0:
            cap.release()
            raise VideoOpenError(video_path, "duration is unknown")

        self.close()
        self._path = str(video_path)
        self._cap = cap
        self._fps = fps
        self._frame_count = frame_count
        logger.info(
            "Opened %s - FPS: %.2f, Total frames: %d, Duration: %dms",
            video_path, fps, frame_count, duration_ms,
        )
        return duration_ms

    def seek_and_decode(self, timestamp_ms: int, timeout: float, sequence_index: int = 0) -> CapturedFrame:
        if self._cap is None:
            raise DecodeError("Video source is not open", timestamp_ms=timestamp_ms)

        target_frame = min(int(timestamp_ms * self._fps / 1000), self._frame_count - 1)
        cap = self._cap
        future = self._submit_read(cap, target_frame)
        try:
            ok, pixels = future.result(timeout=timeout)
        except FutureTimeoutError:
            logger.warning("Seek to %dms timed out after %.1fs; reopening video", timestamp_ms, timeout)
            self._abandon_and_reopen(cap, future)
            raise SeekTimeoutError(
                f"Seek to {timestamp_ms}ms timed out after {timeout:.1f}s",
                timestamp_ms=timestamp_ms,
            )
        except cv2.error as exc:
            raise DecodeError(f"Decoder error at {timestamp_ms}ms: {exc}", timestamp_ms=timestamp_ms) from exc

        if not ok or pixels is None:
            raise DecodeError(
                f"Failed to read frame at {timestamp_ms}ms (frame {target_frame})",
                timestamp_ms=timestamp_ms,
            )
        return CapturedFrame(sequence_index=sequence_index, timestamp_ms=timestamp_ms, pixels=pixels)

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None

    # -- Private helpers -------------------------------------------------------

    @classmethod
    def _submit_read(cls, cap: Any, target_frame: int) -> Future:
        future: Future = Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(cls._read_frame(cap, target_frame))
            except BaseException as exc:
                future.set_exception(exc)

        threading.Thread(target=run, name="vidshot-decode", daemon=True).start()
        return future

    @staticmethod
    def _read_frame(cap: Any, target_frame: int) -> tuple[bool, Any]:
        cap.set(cv2.CAP_PROP_POS_FRAMES, target_frame)
        return cap.read()

    def _abandon_and_reopen(self, stuck_cap: Any, stuck_read: Future) -> None:
        self._cap = None
        stuck_read.add_done_callback(lambda _: self._release_abandoned(stuck_cap))

        cap = self._capture_factory(self._path)
        if not cap.isOpened():
            cap.release()
            logger.error("Could not reopen %s after a timed-out seek", self._path)
            return
        self._cap = cap

    @staticmethod
    def _release_abandoned(cap: Any) -> None:
        try:
            cap.release()
        except cv2.error:
            logger.warning("Failed to release abandoned capture", exc_info=True)
        else:
            logger.debug("Released capture abandoned by a timed-out seek")
