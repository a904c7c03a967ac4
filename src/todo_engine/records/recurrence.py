# src/todo_engine/records/recurrence.py

"""
Recurrence calculator.

The date always advances from the completion date; the time of day is carried
over from the original create date (or midday when it had none).

- #d            -> completion day + 1
- #w:mon:fri    -> first listed weekday within the next 7 days
- #m:1,11,21    -> next listed day later this month, else the first listed day of
                   next month, clamped to that month's length
"""

from __future__ import annotations

import calendar
import datetime as dt

from dateutil.relativedelta import relativedelta

from .record_dates import MIDDAY, DateSpec
from .record_models import RecurrenceKind, RecurrenceRule, TodoRecord


def _days_in_month(day: dt.date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def _weekday_sun0(day: dt.date) -> int:
    # date.weekday() is Monday=0; markers use Sunday=0.
    return (day.weekday() + 1) % 7


def _next_daily(completed: dt.date) -> dt.date:
    return completed + dt.timedelta(days=1)


def _next_weekly(completed: dt.date, days: tuple[int, ...]) -> dt.date:
    for offset in range(1, 8):
        candidate = completed + dt.timedelta(days=offset)
        if _weekday_sun0(candidate) in days:
            return candidate
    return completed + dt.timedelta(days=7)


def _next_monthly(completed: dt.date, days: tuple[int, ...]) -> dt.date:
    if not days:
        raise ValueError("monthly rule without days")

    ordered = sorted(days)
    last_day = _days_in_month(completed)
    for day in ordered:
        if completed.day < day <= last_day:
            return completed.replace(day=day)

    first_of_next = completed.replace(day=1) + relativedelta(months=1)
    return first_of_next.replace(day=min(ordered[0], _days_in_month(first_of_next)))


def next_occurrence(
    rule: RecurrenceRule,
    completed_at: DateSpec,
    original_create: DateSpec | None,
) -> DateSpec:
    """Date of the next occurrence for a task completed at completed_at."""
    time = original_create.time_or_midday() if original_create is not None else MIDDAY

    if rule.kind == RecurrenceKind.DAILY:
        date = _next_daily(completed_at.date)
    elif rule.kind == RecurrenceKind.WEEKLY:
        date = _next_weekly(completed_at.date, rule.days)
    elif rule.kind == RecurrenceKind.MONTHLY:
        date = _next_monthly(completed_at.date, rule.days)
    else:  # pragma: no cover - enum is closed
        raise ValueError(f"unknown recurrence kind: {rule.kind!r}")

    return DateSpec(date=date, time=time)


def next_record(
    record: TodoRecord,
    completed_at: DateSpec,
    original_create: DateSpec | None = None,
) -> TodoRecord | None:
    """
    The fresh, incomplete successor of a just-completed recurring record.

    original_create is the create date as stored before the edit that completed
    the record; the time of day comes from it when given.
    """
    if record.recurring is None:
        return None
    if original_create is None:
        original_create = record.create_date
    return TodoRecord(
        is_complete=False,
        create_date=next_occurrence(record.recurring, completed_at, original_create),
        description=record.description,
        complete_date=None,
        link=record.link,
        recurring=record.recurring,
    )
