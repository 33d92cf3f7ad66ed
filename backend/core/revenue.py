"""Revenue analysis over a date range: product breakdown, contribution and drill-down."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Callable, Dict, Iterable, List

from backend.core import periods
from backend.core.errors import InvalidRangeError
from backend.schemas.revenue import ContributionShares, ProductTotal, RangeSummary
from backend.schemas.timeseries import DatedAmount

UNSPECIFIED_PRODUCT = "Unspecified"


def _in_range(records: Iterable[DatedAmount], start: date, end: date) -> List[DatedAmount]:
    if end < start:
        raise InvalidRangeError(start, end)
    return [record for record in records if start <= record.date <= end]


def summarize_range(records: Iterable[DatedAmount], start: date, end: date) -> RangeSummary:
    """Total, count, average deal size and per-product revenue for [start, end]."""
    selected = _in_range(records, start, end)

    revenue_by_product: Dict[str, float] = defaultdict(float)
    count_by_product: Dict[str, int] = defaultdict(int)
    for record in selected:
        product = record.product or UNSPECIFIED_PRODUCT
        revenue_by_product[product] += record.amount
        count_by_product[product] += 1

    total = sum(record.amount for record in selected)
    products = sorted(
        (
            ProductTotal(product=name, revenue=revenue, count=count_by_product[name])
            for name, revenue in revenue_by_product.items()
        ),
        key=lambda row: (-row.revenue, row.product),
    )

    return RangeSummary(
        total_revenue=total,
        total_transactions=len(selected),
        average_deal_size=total / len(selected) if selected else 0.0,
        products=products,
    )


def _share(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 1)


def contribution_shares(records: Iterable[DatedAmount], product: str, anchor: date) -> ContributionShares:
    """Share of the anchor's day, ISO week, month and year revenue produced by ``product``."""
    windows: Dict[str, Callable[[date], bool]] = {
        "day": lambda day: day == anchor,
        "week": lambda day: periods.start_of_iso_week(anchor) <= day <= periods.end_of_iso_week(anchor),
        "month": lambda day: (day.year, day.month) == (anchor.year, anchor.month),
        "year": lambda day: day.year == anchor.year,
    }
    totals = {name: 0.0 for name in windows}
    product_totals = {name: 0.0 for name in windows}

    for record in records:
        for name, contains in windows.items():
            if contains(record.date):
                totals[name] += record.amount
                if record.product == product:
                    product_totals[name] += record.amount

    return ContributionShares(**{name: _share(product_totals[name], totals[name]) for name in windows})


def drill_down(records: Iterable[DatedAmount], start: date, end: date) -> List[DatedAmount]:
    """Records behind a bucket's inclusive range, newest first."""
    return sorted(_in_range(records, start, end), key=lambda record: record.date, reverse=True)


__all__ = [
    "UNSPECIFIED_PRODUCT",
    "summarize_range",
    "contribution_shares",
    "drill_down",
]
