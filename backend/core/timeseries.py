"""Adaptive time-series bucketing for revenue charts.

Bucket granularity is chosen from the length of the queried range:

    exact calendar month  -> one bucket      ("Mar")
    1-7 days              -> one per day     ("Mon")
    8-30 days             -> 7-day chunks    ("Week 1")
    31-90 days            -> 7-day chunks    ("Mar 5")
    91-365 days           -> calendar months ("Mar")
    366+ days             -> calendar years  ("2024")

The first four rules lay a fixed grid over the range, so empty days and
weeks still get a (zero) bucket. Month and year buckets are built from the
data instead: zero-revenue dates are dropped and only periods with revenue
appear. Every bucket is clipped to the range so a drill-down re-query on its
start/end dates returns exactly the records it summarizes.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from backend.core import periods
from backend.core.errors import InvalidRangeError
from backend.schemas.timeseries import AggregationOptions, Bucket, DatedAmount

logger = logging.getLogger(__name__)

DAILY_MAX_DAYS = 7
WEEK_NUMBER_MAX_DAYS = 30
WEEK_DATE_MAX_DAYS = 90
MONTHLY_MAX_DAYS = 365
CHUNK_DAYS = 7
# summed day totals within this of zero count as zero (sale and refund that cancel)
ZERO_TOLERANCE = 1e-9


def daily_totals(records: Iterable[DatedAmount], start: date, end: date) -> Dict[date, float]:
    """Sum amounts per date for records inside [start, end]."""
    totals: Dict[date, float] = defaultdict(float)
    for record in records:
        if start <= record.date <= end:
            totals[record.date] += record.amount
    return dict(totals)


def is_whole_month(start: date, end: date) -> bool:
    return start.day == 1 and end == periods.last_day_of_month(start)


def _grid_total(totals: Dict[date, float], start: date, end: date) -> float:
    return sum(totals.get(day, 0.0) for day in periods.iter_dates(start, end))


def _by_day(totals: Dict[date, float], start: date, end: date) -> List[Bucket]:
    return [
        Bucket(
            label=periods.weekday_abbr(day),
            start_date=day,
            end_date=day,
            total=totals.get(day, 0.0),
        )
        for day in periods.iter_dates(start, end)
    ]


def _chunks(start: date, end: date) -> List[Tuple[date, date]]:
    out: List[Tuple[date, date]] = []
    chunk_start = start
    while chunk_start <= end:
        chunk_end = min(chunk_start + timedelta(days=CHUNK_DAYS - 1), end)
        out.append((chunk_start, chunk_end))
        chunk_start = chunk_end + timedelta(days=1)
    return out


def _by_week(totals: Dict[date, float], start: date, end: date, numbered: bool) -> List[Bucket]:
    buckets: List[Bucket] = []
    for index, (chunk_start, chunk_end) in enumerate(_chunks(start, end), start=1):
        if numbered:
            label = f"Week {index}"
        else:
            label = f"{periods.month_abbr(chunk_start.month)} {chunk_start.day}"
        buckets.append(
            Bucket(
                label=label,
                start_date=chunk_start,
                end_date=chunk_end,
                total=_grid_total(totals, chunk_start, chunk_end),
            )
        )
    return buckets


def _nonzero(totals: Dict[date, float]) -> List[Tuple[date, float]]:
    # data-driven path: a date whose records net to zero does not open a bucket
    return sorted(
        (day, amount)
        for day, amount in totals.items()
        if not math.isclose(amount, 0.0, abs_tol=ZERO_TOLERANCE)
    )


def _by_month(
    totals: Dict[date, float],
    start: date,
    end: date,
    options: AggregationOptions,
) -> List[Bucket]:
    months: Dict[Tuple[int, int], float] = defaultdict(float)
    for day, amount in _nonzero(totals):
        months[(day.year, day.month)] += amount

    with_year = options.month_labels_with_year and start.year != end.year

    buckets: List[Bucket] = []
    for (year, month), total in sorted(months.items()):
        first = date(year, month, 1)
        label = periods.month_abbr(month)
        if with_year:
            label = f"{label} {year}"
        buckets.append(
            Bucket(
                label=label,
                start_date=max(first, start),
                end_date=min(periods.last_day_of_month(first), end),
                total=total,
            )
        )
    return buckets


def _by_year(totals: Dict[date, float], start: date, end: date) -> List[Bucket]:
    years: Dict[int, float] = defaultdict(float)
    for day, amount in _nonzero(totals):
        years[day.year] += amount

    return [
        Bucket(
            label=str(year),
            start_date=max(date(year, 1, 1), start),
            end_date=min(date(year, 12, 31), end),
            total=total,
        )
        for year, total in sorted(years.items())
    ]


def granularity_for(start: date, end: date) -> str:
    """Name of the bucketing rule that applies to [start, end]."""
    if is_whole_month(start, end):
        return "month"
    num_days = periods.span_days(start, end)
    if num_days <= DAILY_MAX_DAYS:
        return "day"
    if num_days <= WEEK_NUMBER_MAX_DAYS:
        return "week"
    if num_days <= WEEK_DATE_MAX_DAYS:
        return "week_of"
    if num_days <= MONTHLY_MAX_DAYS:
        return "months"
    return "years"


def aggregate_time_series(
    records: Iterable[DatedAmount],
    range_start: date,
    range_end: date,
    options: Optional[AggregationOptions] = None,
) -> List[Bucket]:
    """Group dated amounts into chronological chart buckets over [range_start, range_end]."""
    if range_end < range_start:
        raise InvalidRangeError(range_start, range_end)

    options = options or AggregationOptions()
    totals = daily_totals(records, range_start, range_end)
    granularity = granularity_for(range_start, range_end)

    if granularity == "month":
        buckets = [
            Bucket(
                label=periods.month_abbr(range_start.month),
                start_date=range_start,
                end_date=range_end,
                total=sum(totals.values()),
            )
        ]
    elif granularity == "day":
        buckets = _by_day(totals, range_start, range_end)
    elif granularity == "week":
        buckets = _by_week(totals, range_start, range_end, numbered=True)
    elif granularity == "week_of":
        buckets = _by_week(totals, range_start, range_end, numbered=False)
    elif granularity == "months":
        buckets = _by_month(totals, range_start, range_end, options)
    else:
        buckets = _by_year(totals, range_start, range_end)

    logger.debug(
        "aggregated %d dated totals into %d %s buckets for %s..%s",
        len(totals),
        len(buckets),
        granularity,
        range_start.isoformat(),
        range_end.isoformat(),
    )
    return buckets


__all__ = [
    "daily_totals",
    "is_whole_month",
    "granularity_for",
    "aggregate_time_series",
]
