# src/todo_engine/records/record_dates.py

"""
Date text codec for todo lines.

Canonical forms:
- "HH:MM:SS DD-mon-YYYY" (time present)
- "DD-mon-YYYY"          (date only; read as 12:00:00 wherever a timestamp is needed)

Month names are fixed lowercase 3-letter tokens. Parsing is case-insensitive
and never raises: malformed text yields None.
"""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass

MONTHS: tuple[str, ...] = (
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
)

MIDDAY = dt.time(12, 0, 0)

# Token as it appears inside a todo line (used by the parser to find candidates).
DATE_TOKEN_RE = re.compile(r"(?:\d{2}:\d{2}:\d{2}\s+)?\d{2}-[a-z]{3}-\d{4}", re.IGNORECASE)

_DATE_TEXT_RE = re.compile(
    r"^(?:(\d{2}):(\d{2}):(\d{2})\s+)?(\d{2})-([a-z]{3})-(\d{4})$",
    re.IGNORECASE,
)

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.UTC)


@dataclass(frozen=True, slots=True)
class DateSpec:
    """A calendar date with an optional time of day (wall-clock, no timezone)."""

    date: dt.date
    time: dt.time | None = None

    @classmethod
    def parse(cls, text: str | None) -> DateSpec | None:
        if not text:
            return None
        m = _DATE_TEXT_RE.match(text.strip())
        if not m:
            return None
        hh, mi, ss, dd, mon, yyyy = m.groups()
        mon = mon.lower()
        if mon not in MONTHS:
            return None
        try:
            date = dt.date(int(yyyy), MONTHS.index(mon) + 1, int(dd))
            time = dt.time(int(hh), int(mi), int(ss)) if hh is not None else None
        except ValueError:
            return None
        return cls(date=date, time=time)

    @classmethod
    def from_datetime(cls, value: dt.datetime, *, with_time: bool = True) -> DateSpec:
        time = value.time().replace(microsecond=0, tzinfo=None) if with_time else None
        return cls(date=value.date(), time=time)

    @property
    def has_time(self) -> bool:
        return self.time is not None

    @property
    def text(self) -> str:
        day = f"{self.date.day:02d}-{MONTHS[self.date.month - 1]}-{self.date.year:04d}"
        if self.time is None:
            return day
        return f"{self.time.strftime('%H:%M:%S')} {day}"

    def time_or_midday(self) -> dt.time:
        return self.time if self.time is not None else MIDDAY

    def to_datetime(self) -> dt.datetime:
        """Naive datetime; date-only values land on midday."""
        return dt.datetime.combine(self.date, self.time_or_midday())

    def __str__(self) -> str:
        return self.text


def date_text(spec: DateSpec | None) -> str:
    return spec.text if spec is not None else ""


def sort_timestamp(spec: DateSpec | None) -> float:
    """Seconds since the epoch for ordering; a missing date sorts as 0 (earliest)."""
    if spec is None:
        return 0.0
    return (spec.to_datetime().replace(tzinfo=dt.UTC) - _EPOCH).total_seconds()
