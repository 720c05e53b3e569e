from vidshot.application.export_controller import ExportController
from vidshot.application.snapshot_service import SnapshotService

__all__ = [
    "ExportController",
    "SnapshotService",
]
