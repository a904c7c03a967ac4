# tests/conftest.py

from __future__ import annotations

import datetime as dt
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_engine.core.state import AppState, create_initial_state
from todo_engine.records.record_dates import DateSpec
from todo_engine.records.record_models import StoreKey

from .fakes import FakeRecordRepo


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        todos_path=tmp_path / "todos",
        log_dir=tmp_path / "logs",
        default_timezone="UTC",
        default_project="main",
        complete_hide_after_seconds=300,
        future_hide_after_seconds=12 * 3600,
        stale_hide_after_seconds=14 * 24 * 3600,
        future_dim_after_seconds=4 * 3600,
        old_after_seconds=7 * 24 * 3600,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired with the real file store under tmp_path.

    NOTE: the store's atomic write and NotFound behaviour is part of what we test.
    """
    return create_initial_state(settings=settings)


@pytest.fixture()
def repo() -> FakeRecordRepo:
    return FakeRecordRepo()


@pytest.fixture()
def key() -> StoreKey:
    return StoreKey(username="alice", year=2025, project="main")


@pytest.fixture()
def now() -> DateSpec:
    return DateSpec(dt.date(2025, 11, 3), dt.time(9, 0, 0))
