"""Data contracts for goal-to-activity target calculations."""

from pydantic import Field

from backend.schemas.base import ContractModel


class FunnelInputs(ContractModel):
    """Funnel parameters for one annual revenue goal.

    The schema only enforces types. Domain ranges are checked by
    ``validate_funnel_inputs`` so callers get readable messages instead of
    an exception.
    """

    annual_revenue_goal: float = Field(..., description="Target revenue for the year.")
    average_deal_size: float = Field(..., description="Revenue per won deal.")
    working_days_per_year: int = Field(..., description="Selling days in the year (1-365).")
    sales_cycle_days: int = Field(..., description="Average days from opportunity to close.")
    lead_to_opportunity_rate: float = Field(
        ...,
        description="Percentage of leads that become opportunities, expressed 0-100 (e.g. 25 for 25%).",
    )
    opportunity_to_close_rate: float = Field(
        ...,
        description="Percentage of opportunities that close, expressed 0-100.",
    )
    calls_per_lead: float = Field(..., description="Calls needed to work one lead.")
    emails_per_lead: float = Field(..., description="Emails needed to work one lead.")
    texts_per_lead: float = Field(..., description="Texts needed to work one lead.")


class AnnualTargets(ContractModel):
    deals_needed: int = Field(..., ge=0)
    opportunities_needed: int = Field(..., ge=0)
    leads_needed: int = Field(..., ge=0)
    revenue: float


class PeriodTargets(ContractModel):
    """Monthly or weekly slice of the annual targets."""

    deals: int = Field(..., ge=0)
    opportunities: int = Field(..., ge=0)
    leads: int = Field(..., ge=0)
    revenue: int


class DailyTargets(ContractModel):
    # daily deals stay fractional: they are usually < 1
    deals: float = Field(..., ge=0)
    opportunities: int = Field(..., ge=0)
    leads: int = Field(..., ge=0)
    revenue: int
    calls: int = Field(..., ge=0)
    emails: int = Field(..., ge=0)
    texts: int = Field(..., ge=0)


class PipelineHealth(ContractModel):
    coverage_ratio: float = Field(..., ge=1, description="Multiple of the goal needed as open pipeline.")
    required_pipeline_value: int
    sales_velocity: int = Field(..., description="Expected pipeline revenue per day.")


class CalculatedTargets(ContractModel):
    """Full target hierarchy derived from one set of funnel inputs."""

    annual: AnnualTargets
    monthly: PeriodTargets
    weekly: PeriodTargets
    daily: DailyTargets
    pipeline: PipelineHealth
