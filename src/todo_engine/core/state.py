# src/todo_engine/core/state.py

"""
Application state and composition root.

- loads settings once,
- ensures local (gitignored) directories exist,
- wires the concrete record store into AppState.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import get_settings
from ..records.record_store import RecordStore
from ..records.visibility import VisibilityThresholds

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    settings: object
    record_store: RecordStore
    visibility: VisibilityThresholds


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.todos_path.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """Wire AppState from settings (get_settings() when None)."""
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    state = AppState(
        settings=settings,
        record_store=RecordStore(settings.todos_path),
        visibility=VisibilityThresholds.from_settings(settings),
    )
    logger.info("State ready todos_path=%s", settings.todos_path)
    return state
