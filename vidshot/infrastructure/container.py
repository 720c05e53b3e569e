"""
Dependency container.
Wires the application services to their OpenCV adapters based on settings.
"""
from __future__ import annotations

from typing import Optional

from vidshot.infrastructure.config import Settings


class ApplicationContainer:
    """Simplified container that builds concrete instances from settings.

    Usage::

        container = ApplicationContainer(settings)
        controller = container.export_controller()
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._cache: dict[str, object] = {}

    def _get_or_create(self, key: str, factory):
        if key not in self._cache:
            self._cache[key] = factory(self.settings)
        return self._cache[key]

    # ── Lazy factory helpers ──────────────────────────────────────

    @staticmethod
    def _build_frame_writer(settings: Settings):
        from vidshot.adapters.outbound.media.opencv_frame_writer import OpenCVFrameWriter
        return OpenCVFrameWriter(config=settings.to_adapter_config())

    @staticmethod
    def _build_video_source_factory(settings: Settings):
        from vidshot.adapters.outbound.media.opencv_video_source import OpenCVVideoSource
        return OpenCVVideoSource

    # ── Public accessors ──────────────────────────────────────────

    def frame_writer(self):
        return self._get_or_create("frame_writer", self._build_frame_writer)

    def video_source_factory(self):
        """Callable returning a fresh video source; one per job."""
        return self._get_or_create("video_source_factory", self._build_video_source_factory)

    def export_controller(self):
        from vidshot.application.export_controller import ExportController
        return ExportController(
            video_source_factory=self.video_source_factory(),
            frame_writer=self.frame_writer(),
        )

    def snapshot_service(self):
        from vidshot.application.snapshot_service import SnapshotService
        return SnapshotService(
            video_source_factory=self.video_source_factory(),
            frame_writer=self.frame_writer(),
            seek_timeout_seconds=self.settings.export.seek_timeout_seconds,
        )
