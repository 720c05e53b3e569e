"""ExportJob entity - everything needed to run one frame export."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from vidshot.core.exceptions import InvalidConfigError
from vidshot.core.value_objects.sampling import SamplingMode, SamplingParams

_FORBIDDEN_NAME_CHARS = ("/", "\\", "\x00")


@dataclass(frozen=True)
class ExportJob:
    """Immutable description of a single-video export.

    ``duration_ms`` may be left unset, in which case the controller uses the
    duration reported by the video source when it is opened.
    """

    video_path: str
    export_dir: str
    project_name: str
    mode: SamplingMode = SamplingMode.EQUAL_INTERVAL
    params: SamplingParams = field(default_factory=SamplingParams)
    duration_ms: Optional[int] = None
    seed: Optional[int] = None
    seek_timeout_seconds: float = 5.0
    min_spacing_ms: int = 1
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def project_dir(self) -> Path:
        return Path(self.export_dir).expanduser() / self.project_name

    def validate(self) -> None:
        """Check the parameters that do not depend on the filesystem."""
        if not self.video_path:
            raise InvalidConfigError("video path must not be empty")
        if not self.export_dir:
            raise InvalidConfigError("export directory must not be empty")
        name = self.project_name.strip() if self.project_name else ""
        if not name:
            raise InvalidConfigError("project name must not be empty")
        if name in (".", "..") or any(c in name for c in _FORBIDDEN_NAME_CHARS):
            raise InvalidConfigError(
                f"project name {self.project_name!r} is not a valid directory name"
            )
        value = self.params.value_for(self.mode)
        if value <= 0:
            raise InvalidConfigError(
                f"{SamplingParams.field_for(self.mode)} must be > 0, got {value}"
            )
        if self.duration_ms is not None and self.duration_ms <= 0:
            raise InvalidConfigError(f"duration_ms must be > 0, got {self.duration_ms}")
        if self.seek_timeout_seconds <= 0:
            raise InvalidConfigError("seek_timeout_seconds must be > 0")
        if self.min_spacing_ms < 1:
            raise InvalidConfigError("min_spacing_ms must be >= 1")
