# tests/test_visibility.py

from __future__ import annotations

import datetime as dt
from types import SimpleNamespace

from todo_engine.records.record_dates import DateSpec
from todo_engine.records.record_models import Link, TodoRecord
from todo_engine.records.visibility import (
    VisibilityThresholds,
    is_future,
    is_old,
    is_visible,
    visible_records,
)

NOW = dt.datetime(2025, 11, 3, 9, 0, 0)


def _open(created: dt.datetime | None, *, timed: bool = True, link: str | None = None) -> TodoRecord:
    return TodoRecord(
        is_complete=False,
        create_date=DateSpec.from_datetime(created, with_time=timed) if created else None,
        description=f"[[{link}]]" if link else "task",
        link=Link.from_text(link) if link else None,
    )


def _done(at: dt.datetime, *, timed: bool = True) -> TodoRecord:
    return TodoRecord(
        is_complete=True,
        create_date=DateSpec(dt.date(2025, 11, 1)),
        description="done",
        complete_date=DateSpec.from_datetime(at, with_time=timed),
    )


def test_finished_items_linger_for_five_minutes() -> None:
    assert is_visible(_done(NOW - dt.timedelta(minutes=4)), NOW) is True
    assert is_visible(_done(NOW - dt.timedelta(minutes=6)), NOW) is False


def test_finished_items_with_date_only_completion_stay_visible() -> None:
    assert is_visible(_done(NOW - dt.timedelta(days=30), timed=False), NOW) is True


def test_far_future_items_are_hidden() -> None:
    assert is_visible(_open(NOW + dt.timedelta(hours=11)), NOW) is True
    assert is_visible(_open(NOW + dt.timedelta(hours=13)), NOW) is False


def test_stale_items_are_hidden() -> None:
    assert is_visible(_open(NOW - dt.timedelta(days=13)), NOW) is True
    assert is_visible(_open(NOW - dt.timedelta(days=15)), NOW) is False


def test_date_only_and_undated_items_are_always_visible() -> None:
    assert is_visible(_open(NOW - dt.timedelta(days=90), timed=False), NOW) is True
    assert is_visible(_open(None), NOW) is True


def test_visible_records_filters_and_keeps_order() -> None:
    keep1 = _open(NOW - dt.timedelta(hours=1))
    drop = _open(NOW + dt.timedelta(days=2))
    keep2 = _done(NOW - dt.timedelta(minutes=1))
    assert visible_records([keep1, drop, keep2], NOW) == [keep1, keep2]


def test_future_flag() -> None:
    assert is_future(_open(NOW + dt.timedelta(hours=5)), NOW) is True
    assert is_future(_open(NOW + dt.timedelta(hours=3)), NOW) is False
    assert is_future(_done(NOW + dt.timedelta(hours=5)), NOW) is False


def test_old_flag_skips_linked_items() -> None:
    week_ago = NOW - dt.timedelta(days=8)
    assert is_old(_open(week_ago), NOW) is True
    assert is_old(_open(week_ago, link="Garden"), NOW) is False
    assert is_old(_open(week_ago, timed=False), NOW) is False


def test_thresholds_from_settings() -> None:
    settings = SimpleNamespace(
        complete_hide_after_seconds=60,
        future_hide_after_seconds=3600,
        stale_hide_after_seconds=86400,
        future_dim_after_seconds=1800,
        old_after_seconds=7200,
    )
    t = VisibilityThresholds.from_settings(settings)

    assert t.complete_hide_after == dt.timedelta(minutes=1)
    assert t.old_after == dt.timedelta(hours=2)
    assert is_visible(_done(NOW - dt.timedelta(minutes=2)), NOW, t) is False
