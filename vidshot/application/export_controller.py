"""
Frame export use case.
Plans capture timestamps, drives the video source on a background worker and
hands every decoded frame to the frame writer, reporting progress as it goes.
"""
from __future__ import annotations

import asyncio
import logging
import os
import threading
from pathlib import Path
from typing import Callable, Optional

from vidshot.core.entities.export_job import ExportJob
from vidshot.core.entities.export_result import ExportResult, ExportState
from vidshot.core.exceptions import (
    ErrorKind,
    ExportInProgressError,
    FrameCaptureError,
    InvalidConfigError,
    VidshotError,
)
from vidshot.core.services.timestamp_planner import TimestampPlanner
from vidshot.core.value_objects.sampling_plan import SamplingPlan

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
CompletionCallback = Callable[[ExportResult], None]


class ExportController:
    """Runs one export job at a time on a dedicated worker thread.

    State machine::

        IDLE -> PLANNING -> CAPTURING -> COMPLETED | CANCELLED | FAILED

    Both callbacks are invoked synchronously on the worker thread. Callers
    that need them on another thread must marshal them themselves. Calling
    :meth:`wait` from inside ``on_complete`` blocks forever.
    """

    def __init__(
        self,
        video_source_factory,  # Callable[[], VideoSourcePort]
        frame_writer,          # FrameWriterPort
        planner_factory: Optional[Callable[[ExportJob], TimestampPlanner]] = None,
    ):
        self._video_source_factory = video_source_factory
        self._writer = frame_writer
        self._planner_factory = planner_factory or self._default_planner
        self._lock = threading.Lock()
        self._cancel_requested = threading.Event()
        self._done = threading.Event()
        self._state = ExportState.IDLE
        self._result: Optional[ExportResult] = None
        self._thread: Optional[threading.Thread] = None

    # -- Public API ------------------------------------------------------------

    @property
    def state(self) -> ExportState:
        with self._lock:
            return self._state

    @property
    def result(self) -> Optional[ExportResult]:
        """The result of the last job once it has finished, otherwise ``None``."""
        if self._done.is_set():
            return self._result
        return None

    @property
    def is_running(self) -> bool:
        state = self.state
        return state is not ExportState.IDLE and not state.is_terminal

    def start(
        self,
        job: ExportJob,
        on_progress: Optional[ProgressCallback] = None,
        on_complete: Optional[CompletionCallback] = None,
    ) -> None:
        """Validate *job* and launch the export worker.

        Raises :class:`InvalidConfigError` after reporting an empty, failed
        result through ``on_complete`` when the job is unusable.
        """
        with self._lock:
            if self._state is not ExportState.IDLE and not self._state.is_terminal:
                raise ExportInProgressError("an export job is already running")
            self._state = ExportState.PLANNING
            self._cancel_requested.clear()
            self._done.clear()
            result = ExportResult(job_id=job.id, status=ExportState.PLANNING)
            self._result = result

        try:
            self._validate(job)
        except InvalidConfigError as exc:
            logger.error("Rejected export job %s: %s", job.id, exc)
            result.fail(exc.kind, str(exc))
            self._finish(result, on_complete)
            raise

        logger.info(
            "Starting export %s: %s -> %s (mode=%s)",
            job.id, job.video_path, job.project_dir, job.mode.value,
        )
        self._thread = threading.Thread(
            target=self._run,
            args=(job, result, on_progress, on_complete),
            name=f"vidshot-export-{job.id[:8]}",
            daemon=True,
        )
        self._thread.start()

    def cancel(self) -> None:
        """Ask the worker to stop before its next capture step."""
        self._cancel_requested.set()
        if self.is_running:
            logger.info("Cancellation requested")

    def wait(self, timeout: Optional[float] = None) -> Optional[ExportResult]:
        """Block until the current job has reported completion.

        Returns ``None`` when no job was started or the timeout expired.
        """
        if self._result is None:
            return None
        if not self._done.wait(timeout):
            return None
        return self._result

    async def wait_async(self, timeout: Optional[float] = None) -> Optional[ExportResult]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.wait, timeout)

    # -- Worker ----------------------------------------------------------------

    def _run(
        self,
        job: ExportJob,
        result: ExportResult,
        on_progress: Optional[ProgressCallback],
        on_complete: Optional[CompletionCallback],
    ) -> None:
        source = None
        try:
            source = self._video_source_factory()
            probed_ms = source.open(job.video_path)
            duration_ms = job.duration_ms or probed_ms
            plan = self._planner_factory(job).plan(duration_ms, job.mode, job.params)
            logger.info("Planned %d frames over %dms", len(plan), duration_ms)

            result.total_planned = len(plan)
            self._set_state(ExportState.CAPTURING)
            result.status = ExportState.CAPTURING
            if on_progress is not None:
                on_progress(0, len(plan))

            cancelled = self._capture_all(source, job, plan, result, on_progress)
            result.finish(ExportState.CANCELLED if cancelled else ExportState.COMPLETED)
            logger.info("Export %s finished: %s", job.id, result.summary())
        except VidshotError as exc:
            logger.error("Export %s failed: %s", job.id, exc)
            result.fail(exc.kind, str(exc))
        except Exception as exc:
            logger.exception("Unexpected error in export %s", job.id)
            result.fail(ErrorKind.INTERNAL_ERROR, str(exc))
        finally:
            if source is not None:
                self._close_source(source)
            self._finish(result, on_complete)

    def _capture_all(
        self,
        source,
        job: ExportJob,
        plan: SamplingPlan,
        result: ExportResult,
        on_progress: Optional[ProgressCallback],
    ) -> bool:
        """Capture every planned timestamp in order; return ``True`` if cancelled."""
        total = len(plan)
        for index, timestamp_ms in enumerate(plan):
            if self._cancel_requested.is_set():
                logger.info("Export %s cancelled after %d of %d steps", job.id, index, total)
                return True
            self._capture_step(source, job, index, timestamp_ms, result)
            if on_progress is not None:
                on_progress(result.completed, total)
        return False

    def _capture_step(self, source, job: ExportJob, index: int, timestamp_ms: int, result: ExportResult) -> None:
        try:
            frame = source.seek_and_decode(timestamp_ms, job.seek_timeout_seconds, sequence_index=index)
            path = self._writer.write(frame, job, index)
        except FrameCaptureError as exc:
            logger.warning("Frame %d at %dms skipped (%s): %s", index, timestamp_ms, exc.kind.value, exc)
            result.record_failure(index, timestamp_ms, exc)
            return
        result.record_success(str(path))
        logger.debug("Captured frame %d at %dms -> %s", index, timestamp_ms, path)

    # -- Helpers ---------------------------------------------------------------

    @staticmethod
    def _default_planner(job: ExportJob) -> TimestampPlanner:
        return TimestampPlanner(seed=job.seed, min_spacing_ms=job.min_spacing_ms)

    @staticmethod
    def _validate(job: ExportJob) -> None:
        job.validate()
        export_dir = Path(job.export_dir).expanduser()
        if export_dir.exists() and not export_dir.is_dir():
            raise InvalidConfigError(f"export path is not a directory: {export_dir}")
        try:
            export_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise InvalidConfigError(f"cannot create export directory {export_dir}: {exc}") from exc
        if not os.access(export_dir, os.R_OK | os.W_OK | os.X_OK):
            raise InvalidConfigError(f"export directory is not accessible: {export_dir}")

    @staticmethod
    def _close_source(source) -> None:
        try:
            source.close()
        except Exception:
            logger.warning("Failed to release video source", exc_info=True)

    def _set_state(self, state: ExportState) -> None:
        with self._lock:
            self._state = state

    def _finish(self, result: ExportResult, on_complete: Optional[CompletionCallback]) -> None:
        self._set_state(result.status)
        try:
            if on_complete is not None:
                on_complete(result)
        except Exception:
            logger.exception("Completion callback raised for export %s", result.job_id)
        finally:
            self._done.set()
