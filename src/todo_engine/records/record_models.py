# src/todo_engine/records/record_models.py

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import StrEnum

from .record_dates import DateSpec, date_text

MatchKey = tuple[str, str]
# (create_date text or "", description) as loaded by the client before editing.

NEW_RECORD_KEY: MatchKey = ("new", "")
# The date slot of a real key is "" or canonical date text, so this never matches a stored record.

LINK_RE = re.compile(r"\[\[([^\]]+)\]\]")

WEEKDAY_CODES: tuple[str, ...] = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")

_DAILY_RE = re.compile(r"#d\b")
_WEEKLY_RE = re.compile(r"#w:([a-z]{3}(?::[a-z]{3})*)", re.IGNORECASE)
_MONTHLY_RE = re.compile(r"#m:(\d+(?:,\d+)*)")


class RecurrenceKind(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True, slots=True)
class RecurrenceRule:
    """
    How a task repeats once completed.

    days:
    - DAILY: always empty
    - WEEKLY: weekday numbers, 0=Sunday .. 6=Saturday
    - MONTHLY: day-of-month numbers, 1..31

    Weekly/monthly rules are never empty; constructors reject that.
    """

    kind: RecurrenceKind
    days: tuple[int, ...] = ()

    @classmethod
    def daily(cls) -> RecurrenceRule:
        return cls(RecurrenceKind.DAILY)

    @classmethod
    def weekly(cls, days) -> RecurrenceRule:
        clean = tuple(sorted({int(d) for d in days if 0 <= int(d) <= 6}))
        if not clean:
            raise ValueError("weekly rule needs at least one weekday")
        return cls(RecurrenceKind.WEEKLY, clean)

    @classmethod
    def monthly(cls, days) -> RecurrenceRule:
        clean = tuple(sorted({int(d) for d in days if 1 <= int(d) <= 31}))
        if not clean:
            raise ValueError("monthly rule needs at least one day of month")
        return cls(RecurrenceKind.MONTHLY, clean)

    @classmethod
    def from_text(cls, text: str | None) -> RecurrenceRule | None:
        """
        Find a recurrence marker anywhere in text.

        Precedence: #d, then #w:mon:fri, then #m:1,15. Unknown weekday codes and
        out-of-range month days are dropped; a marker with nothing left is ignored.
        """
        if not text:
            return None

        if _DAILY_RE.search(text):
            return cls.daily()

        m = _WEEKLY_RE.search(text)
        if m:
            codes = [c.lower() for c in m.group(1).split(":")]
            days = [WEEKDAY_CODES.index(c) for c in codes if c in WEEKDAY_CODES]
            if days:
                return cls.weekly(days)

        m = _MONTHLY_RE.search(text)
        if m:
            days = [int(n) for n in m.group(1).split(",") if 1 <= int(n) <= 31]
            if days:
                return cls.monthly(days)

        return None

    @property
    def marker(self) -> str:
        if self.kind == RecurrenceKind.DAILY:
            return "#d"
        if self.kind == RecurrenceKind.WEEKLY:
            return "#w:" + ":".join(WEEKDAY_CODES[d] for d in self.days)
        return "#m:" + ",".join(str(d) for d in self.days)


def clean_description(text: str | None) -> str:
    """One line of text: newlines and runs of whitespace collapse to single spaces."""
    return " ".join((text or "").split())


def link_target_key(text: str) -> str:
    """Link text -> project key: lowercase, spaces to underscores."""
    return text.lower().replace(" ", "_")


@dataclass(frozen=True, slots=True)
class Link:
    text: str
    target_key: str

    @classmethod
    def from_text(cls, text: str) -> Link:
        return cls(text=text, target_key=link_target_key(text))

    @classmethod
    def find(cls, text: str | None) -> Link | None:
        """First [[...]] span in text, if any."""
        if not text:
            return None
        m = LINK_RE.search(text)
        return cls.from_text(m.group(1)) if m else None

    @property
    def markup(self) -> str:
        return f"[[{self.text}]]"


@dataclass(frozen=True, slots=True)
class TodoRecord:
    """
    One task line.

    Notes:
    - description keeps the [[link]] markup and the recurrence marker text in place;
      link and recurring are derived views of it.
    - origin_index is the position in the file at load time. It is bookkeeping only:
      not persisted, not part of equality.
    """

    is_complete: bool
    create_date: DateSpec | None
    description: str
    complete_date: DateSpec | None = None
    link: Link | None = None
    recurring: RecurrenceRule | None = None
    origin_index: int = field(default=-1, compare=False, repr=False)

    @property
    def match_key(self) -> MatchKey:
        return (date_text(self.create_date), self.description)

    @property
    def has_link(self) -> bool:
        return self.link is not None

    def with_origin(self, origin_index: int) -> TodoRecord:
        return replace(self, origin_index=origin_index)


@dataclass(frozen=True, slots=True)
class ProposedEdit:
    """
    A client's view of one record after editing.

    match_key carries the (create_date, description) pair the client loaded the record
    with, so identity survives edits to those very fields. An edit whose key matches
    nothing on disk is a new record.
    """

    match_key: MatchKey
    description: str
    create_date: DateSpec | None
    is_complete: bool
    complete_date: DateSpec | None = None
    link: Link | None = None
    recurring_marker_text: str | None = None

    @classmethod
    def from_record(cls, record: TodoRecord, **changes) -> ProposedEdit:
        """Edit that reproduces record as loaded; keyword changes override fields."""
        edit = cls(
            match_key=record.match_key,
            description=record.description,
            create_date=record.create_date,
            is_complete=record.is_complete,
            complete_date=record.complete_date,
            link=record.link,
            recurring_marker_text=record.recurring.marker if record.recurring else None,
        )
        return replace(edit, **changes) if changes else edit

    @property
    def recurring(self) -> RecurrenceRule | None:
        if self.recurring_marker_text:
            rule = RecurrenceRule.from_text(self.recurring_marker_text)
            if rule is not None:
                return rule
        return RecurrenceRule.from_text(self.description)

    @property
    def resolved_link(self) -> Link | None:
        return self.link if self.link is not None else Link.find(clean_description(self.description))

    def to_record(self) -> TodoRecord:
        return TodoRecord(
            is_complete=self.is_complete,
            create_date=self.create_date,
            description=clean_description(self.description),
            complete_date=self.complete_date if self.is_complete else None,
            link=self.resolved_link,
            recurring=self.recurring,
        )


@dataclass(frozen=True, slots=True)
class StoreKey:
    """Identifies one record set: a user's project file for a given year."""

    username: str
    year: int
    project: str

    def sibling(self, project: str) -> StoreKey:
        return StoreKey(self.username, self.year, project)

    def __str__(self) -> str:
        return f"{self.username}/{self.year}/{self.project}"
