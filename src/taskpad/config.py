# src/taskpad/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

One Settings object for the whole app, built once at import time.
Nothing here is required: every value has a local default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKPAD"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
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

    # ---- Presentation ----
    locale: str
    due_soon_days: int
    picker_years_ahead: int

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Tasks").strip() or "Tasks"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        locale = _env(_k("LOCALE"), "en").strip().lower() or "en"
        due_soon_days = max(0, _env_int(_k("DUE_SOON_DAYS"), 7))
        picker_years_ahead = max(1, _env_int(_k("PICKER_YEARS_AHEAD"), 5))

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskpad"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks_database.db")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            locale=locale,
            due_soon_days=due_soon_days,
            picker_years_ahead=picker_years_ahead,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
