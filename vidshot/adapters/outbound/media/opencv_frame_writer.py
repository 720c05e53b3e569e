"""OpenCV-based still image writer.

Implements :class:`~vidshot.ports.outbound.frame_writer_port.FrameWriterPort`.
Frames are encoded in memory and published with a temp-file-and-rename so a
failed write never leaves a truncated image behind.
"""
from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import Any

import cv2

from vidshot.core.entities.captured_frame import CapturedFrame
from vidshot.core.entities.export_job import ExportJob
from vidshot.core.exceptions import InvalidFrameError, WriteError

logger = logging.getLogger(__name__)

# Default configuration values used when keys are absent.
_DEFAULT_FORMAT: str = "jpg"
_DEFAULT_JPEG_QUALITY: int = 95
_DEFAULT_PNG_COMPRESSION: int = 3
_DEFAULT_WEBP_QUALITY: int = 90

_SUPPORTED_FORMATS = ("jpg", "png", "webp", "bmp")

# Created with mode 0o666 so the umask applies, as with cv2.imwrite.
_PART_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)


def _part_path(target: Path) -> str:
    return str(target.with_name(f".{target.stem}.{uuid.uuid4().hex[:8]}.part"))


class OpenCVFrameWriter:
    """Encodes captured frames with ``cv2.imencode`` and writes them atomically."""

    def __init__(self, config: dict[str, Any]) -> None:
        out_cfg = config.get("output", {})
        image_format = str(out_cfg.get("image_format", _DEFAULT_FORMAT)).lower().lstrip(".")
        if image_format == "jpeg":
            image_format = "jpg"
        if image_format not in _SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported image format: {image_format}")
        self._format = image_format
        self._jpeg_quality: int = out_cfg.get("jpeg_quality", _DEFAULT_JPEG_QUALITY)
        self._png_compression: int = out_cfg.get("png_compression", _DEFAULT_PNG_COMPRESSION)
        self._webp_quality: int = out_cfg.get("webp_quality", _DEFAULT_WEBP_QUALITY)

    @property
    def extension(self) -> str:
        return self._format

    # -- Port interface --------------------------------------------------------

    def write(self, frame: CapturedFrame, job: ExportJob, sequence_index: int) -> Path:
        """Write *frame* as ``{project}_{index:06d}_t{ms:09d}ms.{ext}`` under the job's project directory."""
        stem = f"{job.project_name}_{sequence_index:06d}_t{frame.timestamp_ms:09d}ms"
        return self.write_named(frame, job.project_dir, stem)

    def write_named(self, frame: CapturedFrame, directory: Path, stem: str) -> Path:
        data = self._encode(frame)
        target = Path(directory) / f"{stem}.{self._format}"
        self._write_atomic(data, target, frame.timestamp_ms)
        logger.debug("Wrote %s (%d bytes)", target, len(data))
        return target

    # -- Private helpers -------------------------------------------------------

    def _encode(self, frame: CapturedFrame) -> bytes:
        if not frame.is_usable:
            raise InvalidFrameError(
                f"Frame {frame.sequence_index} at {frame.timestamp_ms}ms is empty",
                timestamp_ms=frame.timestamp_ms,
            )
        try:
            ok, buffer = cv2.imencode(f".{self._format}", frame.pixels, self._encode_params())
        except cv2.error as exc:
            raise InvalidFrameError(
                f"Cannot encode frame at {frame.timestamp_ms}ms: {exc}",
                timestamp_ms=frame.timestamp_ms,
            ) from exc
        if not ok:
            raise InvalidFrameError(
                f"Encoder rejected frame at {frame.timestamp_ms}ms",
                timestamp_ms=frame.timestamp_ms,
            )
        return buffer.tobytes()

    def _encode_params(self) -> list[int]:
        if self._format == "jpg":
            return [cv2.IMWRITE_JPEG_QUALITY, int(self._jpeg_quality)]
        if self._format == "png":
            return [cv2.IMWRITE_PNG_COMPRESSION, int(self._png_compression)]
        if self._format == "webp":
            return [cv2.IMWRITE_WEBP_QUALITY, int(self._webp_quality)]
        return []

    @staticmethod
    def _write_atomic(data: bytes, target: Path, timestamp_ms: int) -> None:
        tmp_name = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            part = _part_path(target)
            fd = os.open(part, _PART_FLAGS, 0o666)
            tmp_name = part
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise WriteError(f"Cannot write {target}: {exc}", timestamp_ms=timestamp_ms) from exc
