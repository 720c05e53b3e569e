"""YAML-backed persistence for the user's export defaults."""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from vidshot.core.exceptions import InvalidConfigError
from vidshot.infrastructure.config import (
    DEFAULT_SETTINGS_FILE,
    ExportSettings,
    OutputSettings,
    Settings,
)

logger = logging.getLogger(__name__)

_PERSISTED_SECTIONS = ("export", "output")


class SettingsStore:
    """Loads and saves the ``export`` and ``output`` sections of :class:`Settings`.

    Values found in the file take precedence over environment variables;
    anything missing falls back to the environment and then to the defaults.
    """

    def __init__(self, path: Optional[str | Path] = None) -> None:
        self._path = Path(path or DEFAULT_SETTINGS_FILE).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Settings:
        if not self._path.exists():
            logger.debug("No settings file at %s, using defaults", self._path)
            return Settings(settings_file=str(self._path))

        try:
            data = yaml.safe_load(self._path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise InvalidConfigError(f"Malformed settings file {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise InvalidConfigError(f"Settings file {self._path} must contain a mapping")

        try:
            settings = Settings(
                settings_file=str(self._path),
                export=ExportSettings(**(data.get("export") or {})),
                output=OutputSettings(**(data.get("output") or {})),
            )
        except ValidationError as exc:
            raise InvalidConfigError(f"Invalid settings in {self._path}: {exc}") from exc
        logger.info("Loaded settings from %s", self._path)
        return settings

    def save(self, settings: Settings) -> Path:
        data = {
            section: getattr(settings, section).model_dump(mode="json")
            for section in _PERSISTED_SECTIONS
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_name = str(self._path.with_name(f".{self._path.name}.{uuid.uuid4().hex[:8]}.part"))
        fd = os.open(tmp_name, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                yaml.safe_dump(data, fh, sort_keys=False, allow_unicode=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.info("Saved settings to %s", self._path)
        return self._path
