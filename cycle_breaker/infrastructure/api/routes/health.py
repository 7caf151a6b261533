"""
Health check endpoints.

Provides the liveness probe and the Prometheus metrics endpoint. The service
is stateless, so liveness also implies readiness.
"""

from fastapi import APIRouter, Response, status

from cycle_breaker import __version__
from cycle_breaker.infrastructure.config.settings import get_settings
from cycle_breaker.infrastructure.observability.metrics import get_metrics_content

router = APIRouter()


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Check if the service is alive",
    tags=["Health"],
)
async def liveness() -> dict:
    """
    Liveness probe - check if the process is running.

    This endpoint always returns 200 if the process is alive.
    """
    return {
        "status": "healthy",
        "service": get_settings().observability.service_name,
        "version": __version__,
    }


@router.get(
    "/metrics",
    status_code=status.HTTP_200_OK,
    summary="Prometheus metrics",
    description="Export Prometheus metrics in exposition format",
    tags=["Observability"],
    response_class=Response,
)
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Metrics include:
    - HTTP request counts and durations
    - Analysis runs and durations
    - SCCs found, cycles enumerated, truncated enumerations
    - Break plans emitted by strategy
    """
    metrics_bytes, content_type = get_metrics_content()

    return Response(
        content=metrics_bytes,
        media_type=content_type,
    )
