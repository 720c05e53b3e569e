from vidshot.core.entities.captured_frame import CapturedFrame, CaptureStatus
from vidshot.core.entities.export_job import ExportJob
from vidshot.core.entities.export_result import ExportResult, ExportState, FrameFailure

__all__ = [
    "CapturedFrame", "CaptureStatus",
    "ExportJob",
    "ExportResult", "ExportState", "FrameFailure",
]
