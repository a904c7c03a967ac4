# src/todo_engine/records/visibility.py

"""
Which records a client gets to see, and how they are flagged.

Records filtered out here are the "hidden" records the reconciler keeps in
place when the client saves its partial view.

All comparisons use naive wall-clock datetimes in the client's timezone. Only
dates that carry a time of day take part in the time-window rules.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from dataclasses import dataclass

from .record_models import TodoRecord


@dataclass(frozen=True, slots=True)
class VisibilityThresholds:
    complete_hide_after: dt.timedelta = dt.timedelta(minutes=5)
    future_hide_after: dt.timedelta = dt.timedelta(hours=12)
    stale_hide_after: dt.timedelta = dt.timedelta(days=14)
    future_dim_after: dt.timedelta = dt.timedelta(hours=4)
    old_after: dt.timedelta = dt.timedelta(days=7)

    @classmethod
    def from_settings(cls, settings) -> VisibilityThresholds:
        return cls(
            complete_hide_after=dt.timedelta(seconds=int(settings.complete_hide_after_seconds)),
            future_hide_after=dt.timedelta(seconds=int(settings.future_hide_after_seconds)),
            stale_hide_after=dt.timedelta(seconds=int(settings.stale_hide_after_seconds)),
            future_dim_after=dt.timedelta(seconds=int(settings.future_dim_after_seconds)),
            old_after=dt.timedelta(seconds=int(settings.old_after_seconds)),
        )


DEFAULT_THRESHOLDS = VisibilityThresholds()


def is_visible(
    record: TodoRecord, now: dt.datetime, thresholds: VisibilityThresholds = DEFAULT_THRESHOLDS
) -> bool:
    if record.is_complete:
        done = record.complete_date
        if done is not None and done.has_time:
            return now - done.to_datetime() <= thresholds.complete_hide_after
        return True

    created = record.create_date
    if created is None or not created.has_time:
        return True

    until = created.to_datetime() - now
    if until > thresholds.future_hide_after:
        return False
    if until < dt.timedelta(0) and -until > thresholds.stale_hide_after:
        return False
    return True


def visible_records(
    records: Iterable[TodoRecord],
    now: dt.datetime,
    thresholds: VisibilityThresholds = DEFAULT_THRESHOLDS,
) -> list[TodoRecord]:
    return [r for r in records if is_visible(r, now, thresholds)]


def is_future(
    record: TodoRecord, now: dt.datetime, thresholds: VisibilityThresholds = DEFAULT_THRESHOLDS
) -> bool:
    """Unfinished and scheduled far enough ahead to be dimmed."""
    if record.is_complete:
        return False
    created = record.create_date
    if created is None or not created.has_time:
        return False
    return created.to_datetime() - now > thresholds.future_dim_after


def is_old(
    record: TodoRecord, now: dt.datetime, thresholds: VisibilityThresholds = DEFAULT_THRESHOLDS
) -> bool:
    """Started long ago. Linked items never age."""
    if record.has_link:
        return False
    created = record.create_date
    if created is None or not created.has_time:
        return False
    return now - created.to_datetime() > thresholds.old_after
