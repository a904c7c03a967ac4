# src/todo_engine/records/record_store.py

from __future__ import annotations

import contextlib
import logging
import os
import re
import tempfile
import threading
from collections.abc import Iterator
from pathlib import Path

from .record_models import StoreKey

logger = logging.getLogger(__name__)

_PROJECT_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9_-]")


class RecordSetNotFoundError(FileNotFoundError):
    """The todo file for a key does not exist (callers may offer to create it)."""

    def __init__(self, key: StoreKey, path: Path) -> None:
        super().__init__(f"Todo file not found: {path}")
        self.key = key
        self.path = path


def sanitize_project_name(project: str) -> str:
    """Only [A-Za-z0-9_-] survive; anything else becomes '_'. Empty -> 'default'."""
    sanitized = _PROJECT_UNSAFE_RE.sub("_", project or "").strip("_")
    return sanitized or "default"


def _check_username(username: str) -> str:
    name = (username or "").strip()
    if not name or name.strip(".") == "" or "/" in name or "\\" in name or "\x00" in name:
        raise ValueError(f"invalid username: {username!r}")
    return name


class RecordStore:
    """
    Markdown todo files on disk: <root>/<username>/<year>/<project>.md

    Writes are whole-file and atomic (temp file + os.replace), so a failed write
    leaves the previous content intact.

    Thread-safety:
    - lock(key) hands out one lock per key; record_api holds it from read to write
      so concurrent writers to the same file take turns instead of clobbering
      each other. Different keys do not block each other.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)
        self._locks: dict[Path, threading.Lock] = {}
        self._locks_guard = threading.Lock()
        logger.info("RecordStore ready root=%s", self._root)

    @property
    def root(self) -> Path:
        return self._root

    # ---- paths ----

    def year_dir(self, username: str, year: int) -> Path:
        return self._root / _check_username(username) / f"{int(year):04d}"

    def path_for(self, key: StoreKey) -> Path:
        return self.year_dir(key.username, key.year) / f"{sanitize_project_name(key.project)}.md"

    # ---- locking ----

    @contextlib.contextmanager
    def lock(self, key: StoreKey) -> Iterator[None]:
        path = self.path_for(key)
        with self._locks_guard:
            lk = self._locks.get(path)
            if lk is None:
                lk = threading.Lock()
                self._locks[path] = lk
        with lk:
            yield

    # ---- read / write ----

    def exists(self, key: StoreKey) -> bool:
        return self.path_for(key).is_file()

    def read_text(self, key: StoreKey) -> str:
        path = self.path_for(key)
        try:
            return path.read_text("utf-8")
        except FileNotFoundError as e:
            raise RecordSetNotFoundError(key, path) from e

    def write_text(self, key: StoreKey, text: str) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}.", suffix=".tmp", dir=path.parent)
        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except BaseException:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise
        logger.debug("Wrote %s (%d bytes)", path, len(text.encode("utf-8")))

    def create_empty(self, key: StoreKey) -> bool:
        """Create an empty todo file. Returns False if it already exists."""
        if self.exists(key):
            return False
        self.write_text(key, "")
        logger.info("Created empty todo file %s", self.path_for(key))
        return True

    def list_projects(self, username: str, year: int) -> list[str]:
        year_dir = self.year_dir(username, year)
        if not year_dir.is_dir():
            return []
        return sorted(p.stem for p in year_dir.glob("*.md") if p.is_file())
