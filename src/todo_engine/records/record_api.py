# src/todo_engine/records/record_api.py

"""
Record operations: the write paths the web layer calls.

Every write follows the same shape under the per-key lock:
    read file -> parse -> change in memory -> sort -> serialize -> atomic write
so one call turns one snapshot into its successor.
"""

from __future__ import annotations

import datetime as dt
import logging
import re
from collections.abc import Sequence

from dateutil import tz

from ..core.ports import RecordRepo
from .reconciler import ReconcileResult, reconcile_detailed
from .record_dates import DateSpec
from .record_models import (
    LINK_RE,
    NEW_RECORD_KEY,
    Link,
    MatchKey,
    ProposedEdit,
    StoreKey,
    TodoRecord,
    clean_description,
)
from .record_parser import parse
from .record_serializer import serialize
from .record_sorter import sort_records
from .record_store import RecordSetNotFoundError, sanitize_project_name

logger = logging.getLogger(__name__)

_LEADING_DATE_RE = re.compile(
    r"^((?:\d{2}:\d{2}:\d{2}\s+)?\d{2}-[a-z]{3}-\d{4})\s+(.+)$",
    re.IGNORECASE,
)


def now_in_timezone(tz_name: str | None) -> DateSpec:
    """Current wall-clock time in the client's timezone (unknown names fall back to UTC)."""
    zone = tz.gettz(tz_name) if tz_name else None
    if zone is None:
        if tz_name:
            logger.warning("Unknown timezone %r; using UTC", tz_name)
        zone = tz.UTC
    return DateSpec.from_datetime(dt.datetime.now(zone))


def _read_or_empty(repo: RecordRepo, key: StoreKey) -> list[TodoRecord]:
    try:
        return parse(repo.read_text(key))
    except RecordSetNotFoundError:
        logger.info("No todo file for %s yet; starting from an empty set", key)
        return []


def _write(repo: RecordRepo, key: StoreKey, records: Sequence[TodoRecord], now: DateSpec) -> None:
    repo.write_text(key, serialize(records, today=now.date))


def load_records(repo: RecordRepo, key: StoreKey) -> list[TodoRecord]:
    """Parse the stored set. Raises RecordSetNotFoundError if the file is missing."""
    return parse(repo.read_text(key))


def save_edits(
    repo: RecordRepo,
    key: StoreKey,
    edits: Sequence[ProposedEdit],
    now: DateSpec,
) -> ReconcileResult:
    with repo.lock(key):
        current = _read_or_empty(repo, key)
        result = reconcile_detailed(current, edits, now)
        _write(repo, key, result.records, now)

    logger.info(
        "Saved %s: %d records (edits=%d completed=%d added=%d recurring=%d reordered=%s)",
        key,
        len(result.records),
        len(edits),
        result.completed,
        result.added,
        result.recurring_added,
        result.reordered,
    )
    return result


def build_new_record(text: str, now: DateSpec) -> TodoRecord:
    """
    Turn free text from the "add" box into a record.

    A leading "DD-mon-YYYY" (optionally with a time) sets the create date;
    otherwise the record is created now.
    """
    text = (text or "").strip()
    if not text:
        raise ValueError("todo text is required")

    # Link text must not be mistaken for a leading date.
    masked = LINK_RE.sub(lambda m: "\x00" * len(m.group(0)), text)
    create_date: DateSpec | None = None
    description = text
    m = _LEADING_DATE_RE.match(masked)
    if m:
        create_date = DateSpec.parse(m.group(1))
        if create_date is not None:
            description = text[m.start(2):]
    description = clean_description(description)

    return ProposedEdit(
        match_key=NEW_RECORD_KEY,
        description=description,
        create_date=create_date or now,
        is_complete=False,
        link=Link.find(description),
    ).to_record()


def add_todo(repo: RecordRepo, key: StoreKey, text: str, now: DateSpec) -> TodoRecord:
    """Append one new record; it goes through the reconciler as an unmatched edit."""
    record = build_new_record(text, now)

    with repo.lock(key):
        current = _read_or_empty(repo, key)
        edit = ProposedEdit.from_record(record, match_key=NEW_RECORD_KEY)
        result = reconcile_detailed(current, [edit], now)
        _write(repo, key, result.records, now)

    logger.info("Added todo to %s: %r", key, record.description)
    return record


def _remove_by_key(records: list[TodoRecord], match_key: MatchKey) -> TodoRecord | None:
    # Same binding rule as the reconciler: the last record with the key wins.
    for pos in range(len(records) - 1, -1, -1):
        if records[pos].match_key == tuple(match_key):
            return records.pop(pos)
    return None


def delete_todo(repo: RecordRepo, key: StoreKey, match_key: MatchKey, now: DateSpec) -> bool:
    with repo.lock(key):
        records = load_records(repo, key)
        removed = _remove_by_key(records, match_key)
        if removed is None:
            logger.info("Delete on %s: no record matches %r", key, match_key)
            return False
        _write(repo, key, sort_records(records), now)

    logger.info("Deleted todo from %s: %r", key, removed.description)
    return True


def _lock_order(key: StoreKey) -> tuple[str, int, str]:
    return (key.username, int(key.year), sanitize_project_name(key.project))


def move_todo(
    repo: RecordRepo,
    key: StoreKey,
    match_key: MatchKey,
    target_project: str,
    now: DateSpec,
) -> bool:
    """
    Move one record into another project of the same user and year (drag onto a
    linked item). The target file is created if missing.
    """
    target = key.sibling(target_project)
    if sanitize_project_name(target.project) == sanitize_project_name(key.project):
        return False

    # Order by the file each lock guards, so two opposite moves take them the same way round.
    first, second = sorted((key, target), key=_lock_order)
    with repo.lock(first), repo.lock(second):
        source_records = load_records(repo, key)
        moved = _remove_by_key(source_records, match_key)
        if moved is None:
            logger.info("Move on %s: no record matches %r", key, match_key)
            return False

        target_records = _read_or_empty(repo, target)
        target_records.append(moved.with_origin(-1))

        _write(repo, target, sort_records(target_records), now)
        _write(repo, key, sort_records(source_records), now)

    logger.info("Moved todo %r from %s to %s", moved.description, key, target)
    return True


def create_project(repo: RecordRepo, key: StoreKey) -> bool:
    with repo.lock(key):
        return repo.create_empty(key)


def list_projects(repo: RecordRepo, username: str, year: int) -> list[str]:
    return repo.list_projects(username, year)
