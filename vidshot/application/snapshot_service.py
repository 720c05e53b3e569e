"""Single-frame snapshot use case."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from vidshot.core.entities.export_job import ExportJob
from vidshot.core.exceptions import InvalidConfigError

logger = logging.getLogger(__name__)


class SnapshotService:
    """Grabs one frame at a given timestamp and saves it under a time-stamped name.

    Files land in ``{export_dir}/{project_name}/{YYYYmmdd_HHMMSS}.{ext}``; a
    ``_N`` suffix is appended when several snapshots are taken in the same
    second.
    """

    def __init__(
        self,
        video_source_factory,  # Callable[[], VideoSourcePort]
        frame_writer,          # FrameWriterPort
        seek_timeout_seconds: float = 5.0,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._video_source_factory = video_source_factory
        self._writer = frame_writer
        self._timeout = seek_timeout_seconds
        self._clock = clock or datetime.now

    def take(self, video_path: str, timestamp_ms: int, export_dir: str, project_name: str) -> Path:
        job = ExportJob(video_path=video_path, export_dir=export_dir, project_name=project_name)
        job.validate()
        if timestamp_ms < 0:
            raise InvalidConfigError(f"timestamp_ms must be >= 0, got {timestamp_ms}")

        source = self._video_source_factory()
        try:
            duration_ms = source.open(video_path)
            if timestamp_ms >= duration_ms:
                raise InvalidConfigError(
                    f"timestamp {timestamp_ms}ms is beyond the video duration ({duration_ms}ms)"
                )
            frame = source.seek_and_decode(timestamp_ms, self._timeout)
        finally:
            source.close()

        stem = self._unique_stem(job.project_dir, self._clock().strftime("%Y%m%d_%H%M%S"))
        path = self._writer.write_named(frame, job.project_dir, stem)
        logger.info("Snapshot at %dms saved to %s", timestamp_ms, path)
        return path

    def _unique_stem(self, directory: Path, stem: str) -> str:
        candidate = stem
        n = 1
        while (directory / f"{candidate}.{self._writer.extension}").exists():
            candidate = f"{stem}_{n}"
            n += 1
        return candidate
