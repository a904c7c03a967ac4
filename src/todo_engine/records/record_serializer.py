# src/todo_engine/records/record_serializer.py

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Iterable

from .record_dates import DateSpec
from .record_models import TodoRecord, clean_description

# A description ending like this would glue onto a following date-only token
# and re-parse as one timed date.
_TRAILING_TIME_RE = re.compile(r"(?:^|\s)\d{2}:\d{2}:\d{2}$")


def _description_with_link(record: TodoRecord) -> str:
    description = clean_description(record.description)
    if record.link is None or record.link.markup in description:
        return description
    return f"{record.link.markup} {description}".strip()


def serialize_record(record: TodoRecord, *, today: dt.date | None = None) -> str:
    """
    One line: checkbox, create date, description, and the completion date for
    finished records. A missing create date becomes today (date only, i.e. midday).

    When the description ends in a bare HH:MM:SS the completion date goes right
    after the create date instead; the parser takes the second date wherever it is.
    """
    create_date = record.create_date or DateSpec(date=today or dt.date.today())
    parts = ["- [x]" if record.is_complete else "- [ ]", create_date.text]

    description = _description_with_link(record)
    complete_text = ""
    if record.is_complete and record.complete_date is not None:
        complete_text = record.complete_date.text

    if complete_text and _TRAILING_TIME_RE.search(description):
        parts.append(complete_text)
        complete_text = ""

    if description:
        parts.append(description)
    if complete_text:
        parts.append(complete_text)

    return " ".join(parts)


def serialize(records: Iterable[TodoRecord], *, today: dt.date | None = None) -> str:
    lines = [serialize_record(r, today=today) for r in records]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
