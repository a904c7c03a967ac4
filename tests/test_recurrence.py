# tests/test_recurrence.py

from __future__ import annotations

import datetime as dt

import pytest

from todo_engine.records.record_dates import DateSpec
from todo_engine.records.record_models import RecurrenceKind, RecurrenceRule, TodoRecord
from todo_engine.records.recurrence import next_occurrence, next_record


def _at(text: str) -> DateSpec:
    spec = DateSpec.parse(text)
    assert spec is not None
    return spec


def test_daily_advances_one_day_and_keeps_create_time() -> None:
    nxt = next_occurrence(
        RecurrenceRule.daily(),
        _at("18:45:00 05-nov-2025"),
        _at("10:00:00 01-nov-2025"),
    )
    assert nxt.text == "10:00:00 06-nov-2025"


def test_weekly_picks_first_listed_weekday_after_completion() -> None:
    # 05-nov-2025 is a Wednesday; next Mon/Fri is Friday the 7th.
    nxt = next_occurrence(RecurrenceRule.weekly([1, 5]), _at("12:00:00 05-nov-2025"), None)
    assert nxt.text == "12:00:00 07-nov-2025"


def test_weekly_same_weekday_moves_a_full_week() -> None:
    # Friday completion with a Friday-only rule never lands on the same day.
    nxt = next_occurrence(RecurrenceRule.weekly([5]), _at("07-nov-2025"), _at("07:30:00 31-oct-2025"))
    assert nxt.text == "07:30:00 14-nov-2025"


def test_weekly_sunday_is_zero() -> None:
    # Saturday 08-nov-2025 -> Sunday 09-nov-2025.
    nxt = next_occurrence(RecurrenceRule.weekly([0]), _at("08-nov-2025"), None)
    assert nxt.date == dt.date(2025, 11, 9)


def test_weekly_without_days_falls_back_to_seven_days() -> None:
    rule = RecurrenceRule(RecurrenceKind.WEEKLY, ())
    nxt = next_occurrence(rule, _at("05-nov-2025"), None)
    assert nxt.date == dt.date(2025, 11, 12)


def test_monthly_later_day_in_same_month() -> None:
    nxt = next_occurrence(RecurrenceRule.monthly([1, 11, 21]), _at("05-nov-2025"), None)
    assert nxt.text == "12:00:00 11-nov-2025"


def test_monthly_rolls_to_first_listed_day_of_next_month() -> None:
    nxt = next_occurrence(RecurrenceRule.monthly([1, 11, 21]), _at("25-nov-2025"), None)
    assert nxt.text == "12:00:00 01-dec-2025"


def test_monthly_skips_days_the_current_month_does_not_have() -> None:
    # April has 30 days, so the 31st is not "later this month".
    nxt = next_occurrence(RecurrenceRule.monthly([31]), _at("15-apr-2025"), None)
    assert nxt.date == dt.date(2025, 5, 31)


def test_monthly_clamps_to_short_month() -> None:
    nxt = next_occurrence(RecurrenceRule.monthly([31]), _at("31-jan-2025"), None)
    assert nxt.date == dt.date(2025, 2, 28)

    leap = next_occurrence(RecurrenceRule.monthly([30]), _at("30-jan-2024"), None)
    assert leap.date == dt.date(2024, 2, 29)


def test_monthly_crosses_year_boundary() -> None:
    nxt = next_occurrence(RecurrenceRule.monthly([1]), _at("20-dec-2025"), None)
    assert nxt.date == dt.date(2026, 1, 1)


def test_monthly_without_days_is_rejected() -> None:
    with pytest.raises(ValueError):
        next_occurrence(RecurrenceRule(RecurrenceKind.MONTHLY, ()), _at("05-nov-2025"), None)


def test_date_only_create_date_yields_midday() -> None:
    nxt = next_occurrence(RecurrenceRule.daily(), _at("09:15:00 05-nov-2025"), _at("01-nov-2025"))
    assert nxt.time == dt.time(12, 0, 0)


def test_rule_constructors_reject_empty_day_lists() -> None:
    with pytest.raises(ValueError):
        RecurrenceRule.weekly([])
    with pytest.raises(ValueError):
        RecurrenceRule.monthly([0, 32])


def test_next_record_is_fresh_incomplete_copy() -> None:
    done = TodoRecord(
        is_complete=True,
        create_date=_at("10:00:00 01-nov-2025"),
        description="Water plants #d",
        complete_date=_at("08:00:00 03-nov-2025"),
        recurring=RecurrenceRule.daily(),
    )

    nxt = next_record(done, done.complete_date)

    assert nxt is not None
    assert nxt.is_complete is False
    assert nxt.complete_date is None
    assert nxt.description == "Water plants #d"
    assert nxt.recurring == RecurrenceRule.daily()
    assert nxt.create_date == _at("10:00:00 04-nov-2025")


def test_next_record_without_rule_is_none() -> None:
    plain = TodoRecord(is_complete=True, create_date=None, description="once")
    assert next_record(plain, _at("03-nov-2025")) is None
