"""Shared test fixtures for all tests."""
from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np
import pytest

from tests.fakes import FakeVideoSource
from vidshot.adapters.outbound.media.opencv_frame_writer import OpenCVFrameWriter
from vidshot.core.entities.captured_frame import CapturedFrame
from vidshot.core.entities.export_job import ExportJob
from vidshot.core.value_objects.sampling import SamplingMode, SamplingParams


# ── Collaborator fixtures ──────────────────────────────────────────────────

@pytest.fixture
def fake_source() -> FakeVideoSource:
    return FakeVideoSource()


@pytest.fixture
def frame_writer() -> OpenCVFrameWriter:
    return OpenCVFrameWriter(config={"output": {"image_format": "png"}})


# ── Job fixtures ───────────────────────────────────────────────────────────

@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    return tmp_path / "exports"


@pytest.fixture
def interval_job(export_dir: Path) -> ExportJob:
    return ExportJob(
        video_path="/videos/input.mp4",
        export_dir=str(export_dir),
        project_name="demo",
        mode=SamplingMode.EQUAL_INTERVAL,
        params=SamplingParams(interval_ms=3000),
    )


@pytest.fixture
def sample_frame() -> CapturedFrame:
    pixels = np.zeros((16, 24, 3), dtype=np.uint8)
    pixels[:, :, 2] = 200
    return CapturedFrame(sequence_index=3, timestamp_ms=4500, pixels=pixels)


# ── Real media fixtures ────────────────────────────────────────────────────

@pytest.fixture
def sample_video(tmp_path: Path) -> Path:
    """A 3 second, 10 fps MJPG clip (30 frames of 64x48)."""
    path = tmp_path / "clip.avi"
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), 10.0, (64, 48))
    assert writer.isOpened()
    for i in range(30):
        frame = np.full((48, 64, 3), (i * 8) % 255, dtype=np.uint8)
        writer.write(frame)
    writer.release()
    return path
