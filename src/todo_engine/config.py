# src/todo_engine/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time: every value has a default.
- Visibility thresholds live here so the view rules and the tests agree.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


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

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    todos_path: Path
    log_dir: Path

    # ---- Date context ----
    default_timezone: str
    default_project: str

    # ---- Visibility thresholds (seconds) ----
    complete_hide_after_seconds: int
    future_hide_after_seconds: int
    stale_hide_after_seconds: int
    future_dim_after_seconds: int
    old_after_seconds: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _first_env(_k("APP_NAME"), default="todo") or "todo"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo"))
        todos_path = _env_path(_k("TODOS_PATH"), data_dir / "todos")
        log_dir = _env_path(_k("LOG_DIR"), data_dir / "logs")

        # Accept plain TZ as a fallback, the way most hosts expose it.
        default_timezone = (_first_env(_k("TIMEZONE"), "TZ", default="UTC") or "UTC").strip()
        default_project = (_env(_k("DEFAULT_PROJECT"), "main") or "main").strip()

        complete_hide_after_seconds = _env_int(_k("COMPLETE_HIDE_AFTER_SECONDS"), 5 * 60)
        future_hide_after_seconds = _env_int(_k("FUTURE_HIDE_AFTER_SECONDS"), 12 * 3600)
        stale_hide_after_seconds = _env_int(_k("STALE_HIDE_AFTER_SECONDS"), 14 * 24 * 3600)
        future_dim_after_seconds = _env_int(_k("FUTURE_DIM_AFTER_SECONDS"), 4 * 3600)
        old_after_seconds = _env_int(_k("OLD_AFTER_SECONDS"), 7 * 24 * 3600)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            todos_path=todos_path,
            log_dir=log_dir,
            default_timezone=default_timezone,
            default_project=default_project,
            complete_hide_after_seconds=complete_hide_after_seconds,
            future_hide_after_seconds=future_hide_after_seconds,
            stale_hide_after_seconds=stale_hide_after_seconds,
            future_dim_after_seconds=future_dim_after_seconds,
            old_after_seconds=old_after_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
