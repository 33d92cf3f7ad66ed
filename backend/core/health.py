"""Health-check payload used by the API."""

from importlib.metadata import PackageNotFoundError, version

from backend.schemas.health import HealthResponse

DISTRIBUTION = "sales-targets-backend"


def service_version() -> str:
    """Installed package version, or "dev" when running from a source checkout."""
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return "dev"


def get_health(service_name: str) -> HealthResponse:
    return HealthResponse(status="ok", service=service_name, version=service_version())
