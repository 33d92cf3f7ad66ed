"""Calendar helpers shared by the planner and the time-series aggregator.

All dates are naive ``datetime.date`` calendar days. Month and weekday names
are fixed English abbreviations so labels do not depend on the process locale.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Iterator

MONTH_ABBRS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
WEEKDAY_ABBRS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def days_in_year(year: int) -> int:
    return 366 if calendar.isleap(year) else 365


def first_day_of_month(day: date) -> date:
    return day.replace(day=1)


def last_day_of_month(day: date) -> date:
    return day.replace(day=days_in_month(day.year, day.month))


def first_day_of_year(day: date) -> date:
    return date(day.year, 1, 1)


def last_day_of_year(day: date) -> date:
    return date(day.year, 12, 31)


def start_of_iso_week(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


def end_of_iso_week(day: date) -> date:
    """Sunday of the ISO week containing ``day``."""
    return start_of_iso_week(day) + timedelta(days=6)


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end inclusive (nothing if end < start)."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def span_days(start: date, end: date) -> int:
    """Inclusive day count of [start, end]."""
    return (end - start).days + 1


def month_abbr(month: int) -> str:
    return MONTH_ABBRS[month - 1]


def weekday_abbr(day: date) -> str:
    return WEEKDAY_ABBRS[day.weekday()]


__all__ = [
    "MONTH_ABBRS",
    "WEEKDAY_ABBRS",
    "days_in_month",
    "days_in_year",
    "first_day_of_month",
    "last_day_of_month",
    "first_day_of_year",
    "last_day_of_year",
    "start_of_iso_week",
    "end_of_iso_week",
    "iter_dates",
    "span_days",
    "month_abbr",
    "weekday_abbr",
]
