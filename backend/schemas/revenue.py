"""Data contracts for revenue range analysis."""

from datetime import date
from typing import List

from pydantic import Field

from backend.schemas.base import ContractModel
from backend.schemas.timeseries import DatedAmount


class ProductTotal(ContractModel):
    product: str
    revenue: float
    count: int = Field(..., ge=0)


class RangeSummary(ContractModel):
    """Totals for every record inside a date range."""

    total_revenue: float
    total_transactions: int = Field(..., ge=0)
    average_deal_size: float
    products: List[ProductTotal]


class ContributionShares(ContractModel):
    """Percentage (0-100, 1 decimal) of each period's revenue that one product produced."""

    day: float
    week: float
    month: float
    year: float


class SummaryRequest(ContractModel):
    records: List[DatedAmount] = Field(default_factory=list)
    range_start: date
    range_end: date


class ContributionRequest(ContractModel):
    records: List[DatedAmount] = Field(default_factory=list)
    product: str
    anchor: date
