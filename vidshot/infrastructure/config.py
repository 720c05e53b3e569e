"""
vidshot configuration using Pydantic Settings.
Defaults mirror the export settings dialog; environment variables override them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

from vidshot.core.entities.export_job import ExportJob
from vidshot.core.value_objects.sampling import SamplingMode, SamplingParams

# Load .env before any BaseSettings subclass reads env vars
load_dotenv()

DEFAULT_EXPORT_PATH = str(Path.home() / "Pictures" / "Screenshots")
DEFAULT_SETTINGS_FILE = str(Path.home() / ".config" / "vidshot" / "settings.yaml")


class ExportSettings(BaseSettings):
    export_path: str = DEFAULT_EXPORT_PATH
    mode: SamplingMode = SamplingMode.EQUAL_INTERVAL
    interval_ms: int = 1000
    random_count: int = 10
    orthogonal_count: int = 10
    seek_timeout_seconds: float = 5.0
    min_spacing_ms: int = 1
    seed: Optional[int] = None

    model_config = {"env_prefix": "VIDSHOT_EXPORT_"}

    def build_job(
        self,
        video_path: str,
        project_name: str,
        duration_ms: Optional[int] = None,
    ) -> ExportJob:
        """Create an :class:`ExportJob` for *video_path* from these settings."""
        return ExportJob(
            video_path=str(video_path),
            export_dir=self.export_path,
            project_name=project_name,
            mode=self.mode,
            params=SamplingParams(
                interval_ms=self.interval_ms,
                random_count=self.random_count,
                orthogonal_count=self.orthogonal_count,
            ),
            duration_ms=duration_ms,
            seed=self.seed,
            seek_timeout_seconds=self.seek_timeout_seconds,
            min_spacing_ms=self.min_spacing_ms,
        )


class OutputSettings(BaseSettings):
    image_format: Literal["jpg", "png", "webp", "bmp"] = "jpg"
    jpeg_quality: int = Field(default=95, ge=1, le=100)
    png_compression: int = Field(default=3, ge=0, le=9)
    webp_quality: int = Field(default=90, ge=1, le=100)

    model_config = {"env_prefix": "VIDSHOT_OUTPUT_"}


class LoggingSettings(BaseSettings):
    level: str = "INFO"

    model_config = {"env_prefix": "VIDSHOT_LOG_"}


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    settings_file: str = DEFAULT_SETTINGS_FILE

    export: ExportSettings = Field(default_factory=ExportSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {
        "env_prefix": "VIDSHOT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def to_adapter_config(self) -> dict:
        """Plain-dict view consumed by the media adapters."""
        return {
            "output": {
                "image_format": self.output.image_format,
                "jpeg_quality": self.output.jpeg_quality,
                "png_compression": self.output.png_compression,
                "webp_quality": self.output.webp_quality,
            },
        }


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
