"""ExportResult aggregate - the outcome of one export job."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from vidshot.core.exceptions import ErrorKind, VidshotError


class ExportState(str, Enum):
    IDLE = "idle"
    PLANNING = "planning"
    CAPTURING = "capturing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ExportState.COMPLETED, ExportState.CANCELLED, ExportState.FAILED)


@dataclass(frozen=True)
class FrameFailure:
    sequence_index: int
    timestamp_ms: int
    kind: ErrorKind
    message: str = ""


@dataclass
class ExportResult:
    """Accumulates per-frame outcomes while a job runs.

    Written only by the export worker; callers read it from the completion
    callback or after :meth:`ExportController.wait` returns.
    """

    job_id: str = ""
    status: ExportState = ExportState.IDLE
    total_planned: int = 0
    succeeded: int = 0
    failures: list[FrameFailure] = field(default_factory=list)
    output_paths: list[str] = field(default_factory=list)
    error_kind: Optional[ErrorKind] = None
    error: Optional[str] = None
    started_at: datetime = field(default_factory=datetime.utcnow)
    finished_at: Optional[datetime] = None

    @property
    def completed(self) -> int:
        """Number of plan steps processed, successful or not."""
        return self.succeeded + len(self.failures)

    @property
    def failed_timestamps(self) -> list[int]:
        return [f.timestamp_ms for f in self.failures]

    @property
    def is_fatal(self) -> bool:
        return self.status is ExportState.FAILED

    def record_success(self, path: str) -> None:
        self.succeeded += 1
        self.output_paths.append(path)

    def record_failure(self, sequence_index: int, timestamp_ms: int, exc: VidshotError) -> None:
        self.failures.append(
            FrameFailure(
                sequence_index=sequence_index,
                timestamp_ms=timestamp_ms,
                kind=exc.kind,
                message=str(exc),
            )
        )

    def fail(self, kind: ErrorKind, message: str) -> None:
        self.status = ExportState.FAILED
        self.error_kind = kind
        self.error = message
        self.finished_at = datetime.utcnow()

    def finish(self, status: ExportState) -> None:
        self.status = status
        self.finished_at = datetime.utcnow()

    def summary(self) -> str:
        if self.status is ExportState.FAILED:
            return f"Export failed ({self.error_kind.value if self.error_kind else 'error'}): {self.error}"
        text = f"{self.succeeded} of {self.total_planned} frames captured"
        if self.status is ExportState.CANCELLED:
            text += " (cancelled)"
        if self.failures:
            stamps = ", ".join(f"{ts}ms" for ts in self.failed_timestamps)
            text += f", failures at timestamps {stamps}"
        return text

    def to_dict(self) -> dict:
        return {
            "job_id": self.job_id,
            "status": self.status.value,
            "total_planned": self.total_planned,
            "succeeded": self.succeeded,
            "failures": [
                {
                    "sequence_index": f.sequence_index,
                    "timestamp_ms": f.timestamp_ms,
                    "kind": f.kind.value,
                    "message": f.message,
                }
                for f in self.failures
            ],
            "output_paths": list(self.output_paths),
            "error_kind": self.error_kind.value if self.error_kind else None,
            "error": self.error,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
        }
