from __future__ import annotations

from datetime import date

from backend.core.periods import (
    days_in_month,
    days_in_year,
    end_of_iso_week,
    first_day_of_month,
    first_day_of_year,
    iter_dates,
    last_day_of_month,
    last_day_of_year,
    month_abbr,
    span_days,
    start_of_iso_week,
    weekday_abbr,
)


def test_days_in_month_handles_leap_february():
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28
    assert days_in_month(2024, 4) == 30
    assert days_in_month(2024, 12) == 31


def test_days_in_year():
    assert days_in_year(2024) == 366
    assert days_in_year(2023) == 365
    assert days_in_year(1900) == 365
    assert days_in_year(2000) == 366


def test_month_and_year_boundaries():
    day = date(2024, 2, 14)
    assert first_day_of_month(day) == date(2024, 2, 1)
    assert last_day_of_month(day) == date(2024, 2, 29)
    assert first_day_of_year(day) == date(2024, 1, 1)
    assert last_day_of_year(day) == date(2024, 12, 31)


def test_iso_week_runs_monday_to_sunday():
    # 2024-03-06 is a Wednesday
    assert start_of_iso_week(date(2024, 3, 6)) == date(2024, 3, 4)
    assert end_of_iso_week(date(2024, 3, 6)) == date(2024, 3, 10)
    assert start_of_iso_week(date(2024, 3, 4)) == date(2024, 3, 4)
    # a Sunday belongs to the week that started the previous Monday
    assert start_of_iso_week(date(2024, 3, 10)) == date(2024, 3, 4)
    # weeks cross year boundaries
    assert start_of_iso_week(date(2025, 1, 1)) == date(2024, 12, 30)


def test_iter_dates_is_inclusive():
    days = list(iter_dates(date(2024, 2, 27), date(2024, 3, 1)))
    assert days == [date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]
    assert list(iter_dates(date(2024, 3, 1), date(2024, 3, 1))) == [date(2024, 3, 1)]
    assert list(iter_dates(date(2024, 3, 2), date(2024, 3, 1))) == []


def test_span_days_counts_both_ends():
    assert span_days(date(2024, 1, 1), date(2024, 1, 1)) == 1
    assert span_days(date(2024, 1, 1), date(2024, 12, 31)) == 366


def test_labels_are_english_abbreviations():
    assert month_abbr(1) == "Jan"
    assert month_abbr(12) == "Dec"
    assert weekday_abbr(date(2024, 3, 4)) == "Mon"
    assert weekday_abbr(date(2024, 3, 10)) == "Sun"
