# src/taskdeck/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

- One Settings object for the whole app.
- Malformed values fall back to defaults instead of failing at import time.
- Components receive settings by injection; get_settings() is for entrypoints.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKDECK"

DEFAULT_API_BASE_URL = "http://localhost:4125/api/tasks"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Backend ----
    api_base_url: str
    http_timeout_seconds: float  # 0 disables the timeout

    # ---- Reminders ----
    reminders_enabled: bool
    reminder_interval_seconds: float
    reminder_dedupe: bool

    # ---- Console ----
    console_enabled: bool

    # ---- Local paths ----
    data_dir: Path
    export_path: Path

    @staticmethod
    def from_env(*, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv(override=False)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskdeck"))

        return Settings(
            app_name=_env(_k("APP_NAME"), "taskdeck"),
            log_level=_env(_k("LOG_LEVEL"), "WARNING").upper(),
            api_base_url=_env(_k("API_BASE_URL"), DEFAULT_API_BASE_URL).strip() or DEFAULT_API_BASE_URL,
            http_timeout_seconds=max(0.0, _env_float(_k("HTTP_TIMEOUT_SECONDS"), 30.0)),
            reminders_enabled=_env_bool(_k("REMINDERS_ENABLED"), True),
            reminder_interval_seconds=max(1.0, _env_float(_k("REMINDER_INTERVAL_SECONDS"), 60.0)),
            reminder_dedupe=_env_bool(_k("REMINDER_DEDUPE"), False),
            console_enabled=_env_bool(_k("CONSOLE_ENABLED"), True),
            data_dir=data_dir,
            export_path=_env_path(_k("EXPORT_PATH"), Path("tasks-export.json")),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
