# src/todo_engine/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the record operations.

record_api depends on this Protocol instead of the concrete file store, so tests
can swap in an in-memory repo and another backend only has to honour the same
contract: whole-file reads and writes, NotFound on missing keys, one writer per key.
"""

from contextlib import AbstractContextManager
from typing import Protocol

from ..records.record_models import StoreKey


class RecordRepo(Protocol):
    def lock(self, key: StoreKey) -> AbstractContextManager[None]: ...

    def exists(self, key: StoreKey) -> bool: ...

    # Raises RecordSetNotFoundError (a FileNotFoundError) when the key has no file.
    def read_text(self, key: StoreKey) -> str: ...

    def write_text(self, key: StoreKey, text: str) -> None: ...

    def create_empty(self, key: StoreKey) -> bool: ...

    def list_projects(self, username: str, year: int) -> list[str]: ...
