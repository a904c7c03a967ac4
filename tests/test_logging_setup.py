# tests/test_logging_setup.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from todo_engine.logging_setup import _ConsoleNoiseFilter, level_from_name, setup_logging


@pytest.fixture()
def restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_setup_logging_writes_log_file(tmp_path: Path, restore_root_logging: None) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs")

    logging.getLogger("todo_engine.records.record_api").debug("debug line for the file")
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / "todo.log"
    assert "debug line for the file" in log_file.read_text("utf-8")


def test_console_filter() -> None:
    f = _ConsoleNoiseFilter()

    assert f.filter(_record("todo_engine.records.reconciler", logging.DEBUG)) is True
    assert f.filter(_record("todo_engine.records.record_parser", logging.DEBUG)) is False
    assert f.filter(_record("todo_engine.records.record_parser", logging.WARNING)) is True
    assert f.filter(_record("py.warnings", logging.WARNING)) is False
    assert f.filter(_record("urllib3", logging.INFO)) is False
    assert f.filter(_record("urllib3", logging.ERROR)) is True


def test_setup_logging_from_settings(settings, restore_root_logging: None) -> None:
    settings.log_level = "warning"

    log_file = setup_logging(settings=settings)

    console = logging.getLogger().handlers[0]
    assert log_file == settings.log_dir / "todo.log"
    assert console.level == logging.WARNING


def test_level_from_name() -> None:
    assert level_from_name("debug") == logging.DEBUG
    assert level_from_name("30") == logging.WARNING
    assert level_from_name("chatty") == logging.INFO
    assert level_from_name(None, logging.ERROR) == logging.ERROR
