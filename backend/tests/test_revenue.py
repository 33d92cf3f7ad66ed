from __future__ import annotations

from datetime import date
from math import isclose

import pytest

from backend.core.errors import InvalidRangeError
from backend.core.revenue import UNSPECIFIED_PRODUCT, contribution_shares, drill_down, summarize_range
from backend.core.timeseries import aggregate_time_series
from backend.schemas.timeseries import DatedAmount


def rec(day: str, amount: float, product=None) -> DatedAmount:
    return DatedAmount(date=date.fromisoformat(day), amount=amount, product=product)


def sample_records() -> list:
    return [
        rec("2024-03-04", 1000, "Coaching"),  # Monday
        rec("2024-03-04", 500, "Workshop"),
        rec("2024-03-06", 1500, "Coaching"),
        rec("2024-03-20", 2000, "Retainer"),
        rec("2024-04-02", 700, "Workshop"),
        rec("2024-11-11", 300),
    ]


def test_summary_breaks_revenue_down_by_product():
    summary = summarize_range(sample_records(), date(2024, 3, 1), date(2024, 3, 31))

    assert isclose(summary.total_revenue, 5000)
    assert summary.total_transactions == 4
    assert isclose(summary.average_deal_size, 1250)
    assert [(p.product, p.revenue, p.count) for p in summary.products] == [
        ("Coaching", 2500.0, 2),
        ("Retainer", 2000.0, 1),
        ("Workshop", 500.0, 1),
    ]


def test_summary_of_empty_range_has_zero_average():
    summary = summarize_range(sample_records(), date(2025, 1, 1), date(2025, 1, 31))

    assert summary.total_transactions == 0
    assert summary.average_deal_size == 0.0
    assert summary.products == []


def test_summary_groups_unlabelled_records():
    summary = summarize_range(sample_records(), date(2024, 11, 1), date(2024, 11, 30))
    assert summary.products[0].product == UNSPECIFIED_PRODUCT


def test_contribution_shares_per_period():
    shares = contribution_shares(sample_records(), "Coaching", date(2024, 3, 4))

    assert shares.day == 66.7  # 1000 of 1500
    assert shares.week == 83.3  # 2500 of 3000
    assert shares.month == 50.0  # 2500 of 5000
    assert shares.year == 41.7  # 2500 of 6000


def test_contribution_shares_are_zero_without_revenue():
    shares = contribution_shares(sample_records(), "Coaching", date(2023, 1, 1))
    assert (shares.day, shares.week, shares.month, shares.year) == (0.0, 0.0, 0.0, 0.0)


def test_drill_down_matches_bucket_totals():
    records = sample_records()
    start, end = date(2024, 3, 1), date(2024, 4, 30)

    for bucket in aggregate_time_series(records, start, end):
        rows = drill_down(records, bucket.start_date, bucket.end_date)
        assert isclose(sum(r.amount for r in rows), bucket.total)
        assert [r.date for r in rows] == sorted((r.date for r in rows), reverse=True)


def test_reversed_ranges_are_rejected():
    with pytest.raises(InvalidRangeError):
        summarize_range([], date(2024, 2, 1), date(2024, 1, 1))
    with pytest.raises(InvalidRangeError):
        drill_down([], date(2024, 2, 1), date(2024, 1, 1))
