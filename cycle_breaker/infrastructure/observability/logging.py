"""Structured logging configuration with OpenTelemetry integration.

Configures structlog for JSON logging with correlation IDs from trace context.
"""

import logging
import sys
from typing import Any

import structlog
from opentelemetry import trace

from cycle_breaker.infrastructure.config import get_settings


def configure_logging(
    level: str | None = None, json_format: bool | None = None
) -> None:
    """Configure structured logging with structlog.

    Sets up:
    - JSON logging format (when enabled)
    - Correlation IDs from OpenTelemetry trace context
    - Log level from configuration
    - Standard library logging integration

    Args:
        level: Override for the configured log level
        json_format: Override for the configured renderer choice
    """
    otel_config = get_settings().observability
    level = (level or otel_config.log_level).upper()
    if json_format is None:
        json_format = otel_config.log_json_format

    # Configure standard library logging; CLI output goes to stdout, so logs
    # go to stderr
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level, logging.INFO),
    )

    processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_trace_context,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _add_trace_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add OpenTelemetry trace context to log events.

    Adds trace_id and span_id for correlation with distributed traces.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Log event dictionary

    Returns:
        Updated event dictionary with trace context
    """
    span = trace.get_current_span()
    if span:
        span_context = span.get_span_context()
        if span_context.is_valid:
            event_dict["trace_id"] = format(span_context.trace_id, "032x")
            event_dict["span_id"] = format(span_context.span_id, "016x")

    return event_dict


def get_logger(name: str) -> structlog.BoundLogger:
    """Get structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger with bound context

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Cycles enumerated", scc_size=3, cycle_count=2)
    """
    return structlog.get_logger(name)
