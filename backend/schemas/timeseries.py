"""Data contracts for revenue time-series bucketing."""

import datetime
from typing import List, Optional

from pydantic import Field, model_validator

from backend.schemas.base import ContractModel


class DatedAmount(ContractModel):
    """One dated revenue record. Several records may share a date."""

    date: datetime.date
    amount: float
    product: Optional[str] = Field(default=None, description="Product label, used by revenue analysis only.")


class Bucket(ContractModel):
    """Aggregated total for an inclusive [start_date, end_date] sub-range."""

    label: str
    start_date: datetime.date
    end_date: datetime.date
    total: float

    @model_validator(mode="after")
    def ensure_ordered(self) -> "Bucket":
        if self.end_date < self.start_date:
            raise ValueError("bucket end_date must not precede start_date")
        return self


class AggregationOptions(ContractModel):
    month_labels_with_year: bool = Field(
        default=False,
        description="Append the year to month labels when the range touches more than one calendar year.",
    )


class SeriesRequest(ContractModel):
    records: List[DatedAmount] = Field(default_factory=list)
    range_start: datetime.date
    range_end: datetime.date
    options: AggregationOptions = Field(default_factory=AggregationOptions)


class SeriesResponse(ContractModel):
    buckets: List[Bucket]
