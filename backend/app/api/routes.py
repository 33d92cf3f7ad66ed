"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend.core.errors import FunnelValidationError, InvalidRangeError
from backend.core.health import get_health
from backend.core.revenue import contribution_shares, summarize_range
from backend.core.targets import default_funnel_inputs, plan_targets
from backend.core.timeseries import aggregate_time_series
from backend.schemas.revenue import ContributionRequest, SummaryRequest
from backend.schemas.targets import FunnelInputs
from backend.schemas.timeseries import SeriesRequest, SeriesResponse

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(FunnelValidationError)
def _handle_funnel_error(exc: FunnelValidationError):
    logger.warning("rejected funnel inputs: %s", exc)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(InvalidRangeError)
def _handle_range_error(exc: InvalidRangeError):
    return jsonify({"error": [str(exc)]}), HTTPStatus.BAD_REQUEST


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    response = get_health(current_app.config["SERVICE_NAME"])
    return jsonify(response.model_dump(by_alias=True))


@api_bp.get("/targets/defaults")
def target_defaults() -> Any:
    """Starting funnel inputs for the settings form."""
    return jsonify(default_funnel_inputs().model_dump(by_alias=True))


@api_bp.post("/targets")
def targets() -> Any:
    """Turn an annual revenue goal into daily/weekly/monthly activity targets."""
    inputs = FunnelInputs.model_validate(_payload())
    result = plan_targets(inputs)
    logger.info(
        "calculated targets for goal=%s: %d leads/day",
        inputs.annual_revenue_goal,
        result.daily.leads,
    )
    return jsonify(result.model_dump(by_alias=True))


@api_bp.post("/revenue/series")
def revenue_series() -> Any:
    """Bucket revenue records for charting."""
    payload = SeriesRequest.model_validate(_payload())
    buckets = aggregate_time_series(
        payload.records,
        payload.range_start,
        payload.range_end,
        payload.options,
    )
    response = SeriesResponse(buckets=buckets)
    return jsonify(response.model_dump(mode="json", by_alias=True))


@api_bp.post("/revenue/summary")
def revenue_summary() -> Any:
    payload = SummaryRequest.model_validate(_payload())
    summary = summarize_range(payload.records, payload.range_start, payload.range_end)
    return jsonify(summary.model_dump(mode="json", by_alias=True))


@api_bp.post("/revenue/contribution")
def revenue_contribution() -> Any:
    payload = ContributionRequest.model_validate(_payload())
    shares = contribution_shares(payload.records, payload.product, payload.anchor)
    return jsonify(shares.model_dump(by_alias=True))
