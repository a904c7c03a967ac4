# src/todo_engine/records/reconciler.py

"""
Merge a client's edited view of a record set back into the authoritative set.

The client may have seen only part of the file (records filtered out of its view
are "hidden"), may have reordered what it saw, and may have edited the very
fields that identify a record. Identity is the (create_date, description) pair
the client loaded each record with (ProposedEdit.match_key).

Steps:
1. index authoritative records by match key (last one wins on collisions)
2. index proposed edits by their carried match key
3. if the client reordered the shared records, emit them in proposed order and
   append hidden records in file order; otherwise walk the file in order and
   edit in place, so hidden records never move
4. append the next occurrence of every record that just became complete and
   has a recurrence rule
5. append edits that match nothing (new records), in proposed order
6. drop bookkeeping and apply the canonical sort

Pure: inputs are never mutated, output is a new list.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .record_dates import DateSpec
from .record_models import MatchKey, ProposedEdit, TodoRecord, clean_description
from .record_sorter import sort_records
from .recurrence import next_record

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReconcileResult:
    records: list[TodoRecord]
    reordered: bool = False
    completed: int = 0
    reopened: int = 0
    added: int = 0
    recurring_added: int = 0
    hidden: int = 0


def apply_edit(current: TodoRecord | None, edit: ProposedEdit, now: DateSpec) -> TodoRecord:
    """
    Apply the edit's field values on top of current (None for a new record).

    Completion stamping:
    - incomplete -> complete with no client date: complete_date = now
    - still complete with no client date: keep the stored date
    - complete -> incomplete: complete_date cleared
    """
    was_complete = current.is_complete if current is not None else False

    complete_date = edit.complete_date
    if edit.is_complete:
        if complete_date is None:
            complete_date = current.complete_date if (current is not None and was_complete) else now
    else:
        complete_date = None

    return TodoRecord(
        is_complete=edit.is_complete,
        create_date=edit.create_date,
        description=clean_description(edit.description),
        complete_date=complete_date,
        link=edit.resolved_link,
        recurring=edit.recurring,
        origin_index=current.origin_index if current is not None else -1,
    )


def _index_authoritative(records: Sequence[TodoRecord]) -> dict[MatchKey, int]:
    lookup: dict[MatchKey, int] = {}
    for pos, record in enumerate(records):
        key = record.match_key
        if key in lookup:
            logger.warning(
                "Duplicate match key %r at positions %d and %d; edits bind to the later one",
                key,
                lookup[key],
                pos,
            )
        lookup[key] = pos
    return lookup


def _index_proposed(edits: Sequence[ProposedEdit]) -> dict[MatchKey, ProposedEdit]:
    lookup: dict[MatchKey, ProposedEdit] = {}
    for edit in edits:
        lookup[edit.match_key] = edit
    return lookup


def _shared_keys_in_proposed_order(
    edits: Sequence[ProposedEdit], auth_lookup: dict[MatchKey, int]
) -> list[MatchKey]:
    seen: set[MatchKey] = set()
    shared: list[MatchKey] = []
    for edit in edits:
        key = edit.match_key
        if key in auth_lookup and key not in seen:
            seen.add(key)
            shared.append(key)
    return shared


def reconcile_detailed(
    authoritative: Sequence[TodoRecord],
    proposed: Sequence[ProposedEdit],
    now: DateSpec,
) -> ReconcileResult:
    auth_lookup = _index_authoritative(authoritative)
    edit_lookup = _index_proposed(proposed)

    shared = _shared_keys_in_proposed_order(proposed, auth_lookup)
    reordered = shared != sorted(shared, key=lambda k: auth_lookup[k])

    result = ReconcileResult(records=[], reordered=reordered)
    just_completed: list[tuple[TodoRecord, DateSpec | None]] = []

    def _merge(pos: int, key: MatchKey) -> TodoRecord:
        current = authoritative[pos]
        merged = apply_edit(current, edit_lookup[key], now)
        if merged.is_complete and not current.is_complete:
            result.completed += 1
            just_completed.append((merged, current.create_date))
        elif current.is_complete and not merged.is_complete:
            result.reopened += 1
        return merged

    working: list[TodoRecord] = []
    bound = {auth_lookup[k] for k in shared}

    if reordered:
        for key in shared:
            working.append(_merge(auth_lookup[key], key))
        for pos, record in enumerate(authoritative):
            if pos not in bound:
                working.append(record)
                result.hidden += 1
    else:
        for pos, record in enumerate(authoritative):
            if pos in bound:
                working.append(_merge(pos, record.match_key))
            else:
                working.append(record)
                result.hidden += 1

    for record, original_create in just_completed:
        successor = next_record(record, record.complete_date or now, original_create)
        if successor is not None:
            working.append(successor)
            result.recurring_added += 1

    for edit in proposed:
        if edit.match_key not in auth_lookup:
            working.append(apply_edit(None, edit, now))
            result.added += 1

    result.records = sort_records(r.with_origin(-1) for r in working)

    logger.debug(
        "Reconciled %d records (reordered=%s completed=%d reopened=%d added=%d recurring=%d hidden=%d)",
        len(result.records),
        result.reordered,
        result.completed,
        result.reopened,
        result.added,
        result.recurring_added,
        result.hidden,
    )
    return result


def reconcile(
    authoritative: Sequence[TodoRecord],
    proposed: Sequence[ProposedEdit],
    now: DateSpec,
) -> list[TodoRecord]:
    return reconcile_detailed(authoritative, proposed, now).records
