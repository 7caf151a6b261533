"""OpenTelemetry distributed tracing setup.

Configures OpenTelemetry SDK with OTLP exporter for distributed tracing.
Spans are only exported when tracing is enabled in settings; otherwise the
global no-op tracer provider stays in place.
"""

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from cycle_breaker import __version__
from cycle_breaker.infrastructure.config import get_settings
from cycle_breaker.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


def setup_tracing() -> TracerProvider | None:
    """Setup OpenTelemetry tracing with OTLP exporter.

    Configures:
    - TracerProvider with service name and version
    - OTLP exporter for sending traces to collector
    - Trace sampling based on configured sample rate

    Returns:
        TracerProvider instance, or None when tracing is disabled
    """
    settings = get_settings()
    otel_config = settings.observability

    if not otel_config.tracing_enabled:
        logger.debug("OpenTelemetry tracing disabled")
        return None

    resource = Resource.create(
        {
            "service.name": otel_config.service_name,
            "service.version": __version__,
            "deployment.environment": settings.environment,
        }
    )

    sampler = TraceIdRatioBased(otel_config.trace_sample_rate)
    provider = TracerProvider(resource=resource, sampler=sampler)

    otlp_exporter = OTLPSpanExporter(
        endpoint=otel_config.exporter_otlp_endpoint,
        insecure=True,
    )
    provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(provider)
    logger.info(
        "OpenTelemetry tracing configured",
        service_name=otel_config.service_name,
        otlp_endpoint=otel_config.exporter_otlp_endpoint,
        sample_rate=otel_config.trace_sample_rate,
    )
    return provider


def instrument_fastapi_app(app) -> None:
    """Instrument FastAPI application with OpenTelemetry.

    Must be called after FastAPI app is created.

    Args:
        app: FastAPI application instance
    """
    if not get_settings().observability.tracing_enabled:
        return
    FastAPIInstrumentor.instrument_app(app)
    logger.info("FastAPI auto-instrumentation enabled")

