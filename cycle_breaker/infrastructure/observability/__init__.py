"""Observability infrastructure module.

Provides OpenTelemetry tracing, structured logging, and Prometheus metrics.
"""

from cycle_breaker.infrastructure.observability.logging import (
    configure_logging,
    get_logger,
)
from cycle_breaker.infrastructure.observability.metrics import (
    get_metrics_content,
    record_analysis_response,
    record_analysis_run,
    record_break_plan,
    record_http_request,
)
from cycle_breaker.infrastructure.observability.tracing import (
    instrument_fastapi_app,
    setup_tracing,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Tracing
    "setup_tracing",
    "instrument_fastapi_app",
    # Metrics
    "get_metrics_content",
    "record_http_request",
    "record_analysis_run",
    "record_analysis_response",
    "record_break_plan",
]
