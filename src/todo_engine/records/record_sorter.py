# src/todo_engine/records/record_sorter.py

"""
Canonical order, applied after every mutation:

1. unfinished linked items, by link text (case-insensitive)
2. finished items, by completion time
3. unfinished plain items, by creation time
4. anything else, as-is

Missing or unparsable dates sort first within their group. Sorting is stable,
so ties keep their relative order and sorting twice changes nothing.
"""

from __future__ import annotations

from collections.abc import Iterable

from .record_dates import sort_timestamp
from .record_models import TodoRecord


def sort_records(records: Iterable[TodoRecord]) -> list[TodoRecord]:
    linked: list[TodoRecord] = []
    finished: list[TodoRecord] = []
    plain: list[TodoRecord] = []
    other: list[TodoRecord] = []

    for record in records:
        if not record.is_complete and record.has_link:
            linked.append(record)
        elif record.is_complete:
            finished.append(record)
        elif not record.is_complete and not record.has_link:
            plain.append(record)
        else:
            other.append(record)

    linked.sort(key=lambda r: r.link.text.casefold() if r.link else "")
    finished.sort(key=lambda r: sort_timestamp(r.complete_date))
    plain.sort(key=lambda r: sort_timestamp(r.create_date))

    return linked + finished + plain + other
