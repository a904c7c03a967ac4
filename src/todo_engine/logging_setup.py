# src/todo_engine/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "todo.log"

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Console gets the engine's own logs; everything else only at ERROR.
    The parser's per-line DEBUG notes (skipped lines, bad dates) stay in the file.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith("todo_engine."):
            if name == "todo_engine.records.record_parser":
                return record.levelno >= logging.INFO
            return True

        # py.warnings and third-party loggers
        return record.levelno >= logging.ERROR


def level_from_name(name: str | None, default: int = logging.INFO) -> int:
    """'debug' / 'INFO' / '20' -> logging level; unknown names give default."""
    if not name:
        return default
    name = name.strip()
    if name.isdigit():
        return int(name)
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def setup_logging(
    *,
    log_dir: str | Path | None = None,
    settings=None,
    console_level: int | None = None,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Root logger with a filtered stderr handler and a full log file.

    log_dir and the console level default to settings.log_dir / settings.log_level
    when settings is given. Call once at startup. Returns the log file path.
    """
    if log_dir is None:
        log_dir = settings.log_dir if settings is not None else ".local/todo/logs"
    if console_level is None:
        console_level = level_from_name(getattr(settings, "log_level", None))

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    to_file = logging.FileHandler(str(log_file), encoding="utf-8")
    to_file.setLevel(file_level)
    to_file.setFormatter(fmt)
    root.addHandler(to_file)

    logging.captureWarnings(True)
    logging.getLogger(__name__).debug("Logging to %s (console level %s)", log_file, console_level)
    return log_file
