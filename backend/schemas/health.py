"""Pydantic schema for the health-check endpoint."""

from backend.schemas.base import ContractModel


class HealthResponse(ContractModel):
    status: str
    service: str
    version: str
