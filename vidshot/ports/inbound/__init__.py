from vidshot.ports.inbound.export_frames_use_case import ExportFramesUseCase
from vidshot.ports.inbound.take_snapshot_use_case import TakeSnapshotUseCase

__all__ = [
    "ExportFramesUseCase",
    "TakeSnapshotUseCase",
]
