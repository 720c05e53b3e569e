"""Custom exception hierarchy for vidshot.

Every error carries an :class:`ErrorKind` and a ``fatal`` flag. Fatal errors
abort a whole export job; non-fatal ones are recorded per frame and the job
moves on to the next timestamp.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_CONFIG = "invalid_config"
    OPEN_ERROR = "open_error"
    SEEK_TIMEOUT = "seek_timeout"
    DECODE_ERROR = "decode_error"
    INVALID_FRAME = "invalid_frame"
    WRITE_ERROR = "write_error"
    INTERNAL_ERROR = "internal_error"


class VidshotError(Exception):
    """Base exception for all vidshot errors."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    fatal: bool = True


class InvalidConfigError(VidshotError):
    """Raised when job or sampling parameters are unusable."""

    kind = ErrorKind.INVALID_CONFIG


class VideoOpenError(VidshotError):
    """Raised when the video cannot be opened or has no usable duration."""

    kind = ErrorKind.OPEN_ERROR

    def __init__(self, video_path: str, reason: str = "") -> None:
        self.video_path = video_path
        message = f"Cannot open video file: {video_path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ExportInProgressError(VidshotError):
    """Raised when a controller is asked to start while a job is running."""


class FrameCaptureError(VidshotError):
    """Base for per-frame failures that do not stop the job."""

    fatal = False

    def __init__(self, message: str, timestamp_ms: Optional[int] = None) -> None:
        self.timestamp_ms = timestamp_ms
        super().__init__(message)


class SeekTimeoutError(FrameCaptureError):
    kind = ErrorKind.SEEK_TIMEOUT


class DecodeError(FrameCaptureError):
    kind = ErrorKind.DECODE_ERROR


class InvalidFrameError(FrameCaptureError):
    """Raised when a decoded buffer is empty or has zero dimensions."""

    kind = ErrorKind.INVALID_FRAME


class WriteError(FrameCaptureError):
    """Raised when an encoded frame cannot be persisted."""

    kind = ErrorKind.WRITE_ERROR
