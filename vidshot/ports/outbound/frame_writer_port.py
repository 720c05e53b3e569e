"""Port for persisting decoded frames as still images."""
from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from vidshot.core.entities.captured_frame import CapturedFrame
    from vidshot.core.entities.export_job import ExportJob


@runtime_checkable
class FrameWriterPort(Protocol):
    @property
    def extension(self) -> str: ...
    def write(self, frame: CapturedFrame, job: ExportJob, sequence_index: int) -> Path: ...
    def write_named(self, frame: CapturedFrame, directory: Path, stem: str) -> Path: ...
