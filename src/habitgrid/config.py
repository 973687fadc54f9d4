"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

COLOR_MODES = ("auto", "always", "never")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "habits"
    DATA_FILENAME = ".habits_tracker.json"
    LOG_DIRNAME = ".habits_tracker_logs"
    LOG_FILENAME = "habits.log"

    def __init__(self, data_file: str | Path | None = None) -> None:
        self.DATA_FILE = self._resolve_data_file(data_file)
        self.LOG_DIR = self._resolve_log_dir()
        self.DEV_MODE = _env_bool("HABITS_DEV_MODE", default=False)
        self.FILE_LOGGING = _env_bool("HABITS_FILE_LOGGING", default=True)
        self.COLOR_MODE = self._resolve_color_mode()

    def _resolve_data_file(self, override: str | Path | None) -> Path:
        """Return the JSON document path, preferring an explicit override."""

        raw = override or os.getenv("HABITS_DATA_FILE")
        if raw:
            return Path(raw).expanduser()
        return Path.home() / self.DATA_FILENAME

    def _resolve_log_dir(self) -> Path:
        raw = os.getenv("HABITS_LOG_DIR")
        if raw:
            return Path(raw).expanduser()
        return Path.home() / self.LOG_DIRNAME

    def _resolve_color_mode(self) -> str:
        mode = os.getenv("HABITS_COLOR", "auto").strip().lower()
        if mode not in COLOR_MODES:
            raise ValueError(
                f"HABITS_COLOR must be one of {', '.join(COLOR_MODES)} (got {mode!r})."
            )
        return mode


class DevConfig(BaseConfig):
    """Development configuration with verbose console logging."""

    def __init__(self, data_file: str | Path | None = None) -> None:
        super().__init__(data_file)
        self.DEV_MODE = True
