# src/todo_engine/records/record_parser.py

"""
Todo line parser.

Line format:
    - [ ] DD-mon-YYYY description
    - [x] HH:MM:SS DD-mon-YYYY description HH:MM:SS DD-mon-YYYY
    - [ ] DD-mon-YYYY [[Linked project]] notes #w:mon:fri

Anything that is not a checkbox line is skipped. A malformed field degrades to
None; the parser never raises for line content.
"""

from __future__ import annotations

import logging
import re

from .record_dates import DATE_TOKEN_RE, DateSpec
from .record_models import LINK_RE, Link, RecurrenceRule, TodoRecord

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"^-\s*\[([ x])\]\s*(.+)$")

# Stands in for [[...]] spans while dates are scanned, so link text is never read as a date.
_PLACEHOLDER = "\x00LINK{}\x00"
_PLACEHOLDER_RE = re.compile(r"\x00LINK(\d+)\x00")
_SPACES_RE = re.compile(r"[ \t]+")


def parse(text: str) -> list[TodoRecord]:
    """Parse a whole file; origin_index is the position among parsed records."""
    records: list[TodoRecord] = []
    skipped = 0
    for line in text.splitlines():
        record = parse_line(line)
        if record is None:
            if line.strip():
                skipped += 1
            continue
        records.append(record.with_origin(len(records)))
    if skipped:
        logger.debug("Parsed %d records, skipped %d non-record lines", len(records), skipped)
    return records


def parse_line(line: str) -> TodoRecord | None:
    m = _LINE_RE.match(line.strip())
    if not m:
        return None

    is_complete = m.group(1) == "x"
    remainder = m.group(2).strip()

    spans: list[str] = []

    def _stash(match: re.Match[str]) -> str:
        spans.append(match.group(0))
        return _PLACEHOLDER.format(len(spans) - 1)

    masked = LINK_RE.sub(_stash, remainder)
    link = Link.find(remainder)

    tokens = DATE_TOKEN_RE.findall(masked)
    create_date = complete_date = None
    if tokens:
        create_date = DateSpec.parse(tokens[0])
        if create_date is None:
            logger.debug("Unparsable create date %r in line %r", tokens[0], line)
        if is_complete and len(tokens) > 1:
            complete_date = DateSpec.parse(tokens[1])
            if complete_date is None:
                logger.debug("Unparsable complete date %r in line %r", tokens[1], line)

    description = DATE_TOKEN_RE.sub(" ", masked)
    description = _PLACEHOLDER_RE.sub(lambda pm: spans[int(pm.group(1))], description)
    description = _SPACES_RE.sub(" ", description).strip()

    return TodoRecord(
        is_complete=is_complete,
        create_date=create_date,
        description=description,
        complete_date=complete_date,
        link=link,
        recurring=RecurrenceRule.from_text(description),
    )


def parse_recurrence(text: str | None) -> RecurrenceRule | None:
    return RecurrenceRule.from_text(text)
