"""Inbound port for running a frame export job."""
from __future__ import annotations
from typing import TYPE_CHECKING, Callable, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from vidshot.core.entities.export_job import ExportJob
    from vidshot.core.entities.export_result import ExportResult


@runtime_checkable
class ExportFramesUseCase(Protocol):
    def start(
        self,
        job: ExportJob,
        on_progress: Optional[Callable[[int, int], None]] = None,
        on_complete: Optional[Callable[[ExportResult], None]] = None,
    ) -> None: ...
    def cancel(self) -> None: ...
    def wait(self, timeout: Optional[float] = None) -> Optional[ExportResult]: ...
