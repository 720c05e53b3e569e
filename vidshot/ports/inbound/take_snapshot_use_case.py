"""Inbound port for grabbing a single frame."""
from __future__ import annotations
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class TakeSnapshotUseCase(Protocol):
    def take(self, video_path: str, timestamp_ms: int, export_dir: str, project_name: str) -> Path: ...
