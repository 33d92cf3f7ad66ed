"""Goal-to-activity planning: inverse funnel arithmetic.

Works backward from an annual revenue goal:

    deals         = goal / deal size
    opportunities = deals / close rate
    leads         = opportunities / lead-to-opportunity rate

Each period (month, week, working day) is divided directly from the annual
figure so rounding never compounds between periods. Count targets round up;
a rep asked for one extra call is better than one who falls short.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import List, Optional, Tuple

from backend.core.errors import FunnelValidationError, NonFiniteTargetError, NonPositiveDivisorError
from backend.schemas.targets import (
    AnnualTargets,
    CalculatedTargets,
    DailyTargets,
    FunnelInputs,
    PeriodTargets,
    PipelineHealth,
)

MONTHS_PER_YEAR = 12
WEEKS_PER_YEAR = 52

# relative float noise snapped to the integer before ceiling, e.g. 400.00000000000006 -> 400
_CEIL_REL_TOL = 1e-12

# wide enough to quantize any finite double (max ~1.8e308) to cents
_ROUNDING = Context(prec=400, rounding=ROUND_HALF_UP)

_NUMERIC_FIELDS = (
    "annual_revenue_goal",
    "average_deal_size",
    "working_days_per_year",
    "sales_cycle_days",
    "lead_to_opportunity_rate",
    "opportunity_to_close_rate",
    "calls_per_lead",
    "emails_per_lead",
    "texts_per_lead",
)

_DIVISOR_FIELDS = (
    "average_deal_size",
    "working_days_per_year",
    "sales_cycle_days",
    "lead_to_opportunity_rate",
    "opportunity_to_close_rate",
)


def default_funnel_inputs() -> FunnelInputs:
    """Industry-standard starting point for a new rep."""
    return FunnelInputs(
        annual_revenue_goal=500000,
        average_deal_size=5000,
        working_days_per_year=250,  # 5 days x 50 weeks
        sales_cycle_days=30,
        lead_to_opportunity_rate=25,
        opportunity_to_close_rate=25,
        calls_per_lead=3,
        emails_per_lead=5,
        texts_per_lead=2,
    )


def validate_funnel_inputs(inputs: FunnelInputs) -> List[str]:
    """Return human-readable problems with ``inputs``; empty when valid."""
    errors: List[str] = []

    for name in _NUMERIC_FIELDS:
        if not math.isfinite(getattr(inputs, name)):
            errors.append(f"{name.replace('_', ' ').capitalize()} must be a finite number")
    if errors:
        return errors

    if inputs.annual_revenue_goal <= 0:
        errors.append("Annual revenue goal must be more than $0")
    if inputs.average_deal_size <= 0:
        errors.append("Average deal size must be more than $0")
    if not 1 <= inputs.working_days_per_year <= 365:
        errors.append("Working days must be between 1 and 365")
    if inputs.sales_cycle_days < 1:
        errors.append("Sales cycle must be at least 1 day")
    if not 0 < inputs.lead_to_opportunity_rate <= 100:
        errors.append("Lead-to-opportunity rate must be above 0% and at most 100%")
    if not 0 < inputs.opportunity_to_close_rate <= 100:
        errors.append("Close rate must be above 0% and at most 100%")
    if inputs.calls_per_lead < 0:
        errors.append("Calls per lead cannot be negative")
    if inputs.emails_per_lead < 0:
        errors.append("Emails per lead cannot be negative")
    if inputs.texts_per_lead < 0:
        errors.append("Texts per lead cannot be negative")

    if not errors:
        overflowing = _non_finite_target(inputs)
        if overflowing:
            errors.append(f"Goal and funnel inputs are too large to plan: {overflowing.replace('_', ' ')} overflows")

    return errors


def _volumes(inputs: FunnelInputs) -> Tuple[float, float, float]:
    """Unrounded annual deals, opportunities and leads."""
    deals = inputs.annual_revenue_goal / inputs.average_deal_size
    opportunities = deals / (inputs.opportunity_to_close_rate / 100)
    leads = opportunities / (inputs.lead_to_opportunity_rate / 100)
    return deals, opportunities, leads


def _non_finite_target(inputs: FunnelInputs) -> Optional[str]:
    """Name of the first derived quantity that overflows a float, if any."""
    deals, opportunities, leads = _volumes(inputs)
    daily_leads_bound = leads / inputs.working_days_per_year + 1
    derived = (
        ("deals", deals),
        ("opportunities", opportunities),
        ("leads", leads),
        ("daily_calls", daily_leads_bound * inputs.calls_per_lead),
        ("daily_emails", daily_leads_bound * inputs.emails_per_lead),
        ("daily_texts", daily_leads_bound * inputs.texts_per_lead),
        ("required_pipeline_value", inputs.annual_revenue_goal * (100 / inputs.opportunity_to_close_rate)),
        (
            "sales_velocity",
            opportunities * (inputs.opportunity_to_close_rate / 100) * inputs.average_deal_size,
        ),
    )
    for name, value in derived:
        if not math.isfinite(value):
            return name
    return None


def _ceil(value: float) -> int:
    nearest = round(value)
    if math.isclose(value, nearest, rel_tol=_CEIL_REL_TOL):
        return int(nearest)
    return math.ceil(value)


def _round_half_up(value: float, places: int = 0) -> Decimal:
    # the exact binary value is rounded, as JS toFixed/Math.round do: 1.005 -> 1.00
    exponent = Decimal(1).scaleb(-places)
    return Decimal(value).quantize(exponent, context=_ROUNDING)


def _currency(value: float) -> int:
    return int(_round_half_up(value))


def calculate_targets(inputs: FunnelInputs) -> CalculatedTargets:
    """Compute the full target hierarchy for pre-validated ``inputs``.

    Raises NonPositiveDivisorError when a divisor is not positive and
    NonFiniteTargetError when a derived target overflows; run
    ``validate_funnel_inputs`` first (or use ``plan_targets``).
    """
    for name in _DIVISOR_FIELDS:
        value = getattr(inputs, name)
        if not value > 0:
            raise NonPositiveDivisorError(name, value)

    overflowing = _non_finite_target(inputs)
    if overflowing:
        raise NonFiniteTargetError(overflowing)

    goal = inputs.annual_revenue_goal
    opp_to_close = inputs.opportunity_to_close_rate / 100
    deals, opportunities, leads = _volumes(inputs)

    days = inputs.working_days_per_year
    daily_leads = _ceil(leads / days)

    coverage_ratio = 100 / inputs.opportunity_to_close_rate
    sales_velocity = (opportunities * opp_to_close * inputs.average_deal_size) / inputs.sales_cycle_days

    return CalculatedTargets(
        annual=AnnualTargets(
            deals_needed=_ceil(deals),
            opportunities_needed=_ceil(opportunities),
            leads_needed=_ceil(leads),
            revenue=goal,
        ),
        monthly=PeriodTargets(
            deals=_ceil(deals / MONTHS_PER_YEAR),
            opportunities=_ceil(opportunities / MONTHS_PER_YEAR),
            leads=_ceil(leads / MONTHS_PER_YEAR),
            revenue=_currency(goal / MONTHS_PER_YEAR),
        ),
        weekly=PeriodTargets(
            deals=_ceil(deals / WEEKS_PER_YEAR),
            opportunities=_ceil(opportunities / WEEKS_PER_YEAR),
            leads=_ceil(leads / WEEKS_PER_YEAR),
            revenue=_currency(goal / WEEKS_PER_YEAR),
        ),
        daily=DailyTargets(
            deals=float(_round_half_up(deals / days, 2)),
            opportunities=_ceil(opportunities / days),
            leads=daily_leads,
            revenue=_currency(goal / days),
            # activity is planned against the whole leads a rep will actually work
            calls=_ceil(daily_leads * inputs.calls_per_lead),
            emails=_ceil(daily_leads * inputs.emails_per_lead),
            texts=_ceil(daily_leads * inputs.texts_per_lead),
        ),
        pipeline=PipelineHealth(
            coverage_ratio=round(coverage_ratio, 1),
            required_pipeline_value=_currency(goal * coverage_ratio),
            sales_velocity=_currency(sales_velocity),
        ),
    )


def plan_targets(inputs: FunnelInputs) -> CalculatedTargets:
    """Validate then calculate; raises FunnelValidationError on bad input."""
    errors = validate_funnel_inputs(inputs)
    if errors:
        raise FunnelValidationError(errors)
    return calculate_targets(inputs)


__all__ = [
    "MONTHS_PER_YEAR",
    "WEEKS_PER_YEAR",
    "default_funnel_inputs",
    "validate_funnel_inputs",
    "calculate_targets",
    "plan_targets",
]
