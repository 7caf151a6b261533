"""Global error handling middleware.

Converts all exceptions to RFC 7807 Problem Details format for consistent error responses.
Includes correlation IDs for request tracing.
"""

import logging
import uuid

from fastapi import Request, status
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from cycle_breaker.domain.exceptions import (
    DanglingReferenceError,
    DuplicateComponentError,
    DuplicateEdgeError,
    GraphError,
)
from cycle_breaker.infrastructure.api.schemas.error_schema import ProblemDetails

logger = logging.getLogger(__name__)

STATUS_TEXTS = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def status_text(status_code: int) -> str:
    """Get human-readable status text for HTTP status code."""
    return STATUS_TEXTS.get(status_code, "Error")


def graph_error_to_problem(
    exc: GraphError, instance: str, correlation_id: str | None
) -> ProblemDetails:
    """Convert a malformed-graph error to a 400 Problem Details.

    Args:
        exc: GraphError raised by GraphBuilder
        instance: Request path
        correlation_id: Correlation ID for tracing

    Returns:
        ProblemDetails naming the offending edge or component
    """
    if isinstance(exc, DuplicateEdgeError):
        slug, title, field = "duplicate-edge", "Duplicate Edge", "edges"
        value = f"{exc.source_id} -> {exc.target_id} ({exc.injection_kind})"
    elif isinstance(exc, DanglingReferenceError):
        slug, title, field = "dangling-reference", "Dangling Reference", "components"
        value = exc.component_id
    elif isinstance(exc, DuplicateComponentError):
        slug, title, field = "duplicate-component", "Duplicate Component", "components"
        value = exc.component_id
    else:
        slug, title, field, value = "invalid-graph", "Invalid Dependency Graph", None, None

    return ProblemDetails(
        type=f"urn:cycle-breaker:errors:{slug}",
        title=title,
        status=status.HTTP_400_BAD_REQUEST,
        detail=str(exc),
        instance=instance,
        correlation_id=correlation_id,
        field=field,
        value=value,
    )


def problem_response(problem: ProblemDetails) -> JSONResponse:
    """Create JSONResponse from ProblemDetails.

    Args:
        problem: Problem Details object

    Returns:
        JSONResponse with appropriate status code and headers
    """
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(exclude_none=True),
        headers={
            "Content-Type": "application/problem+json",
            "X-Correlation-ID": problem.correlation_id or "",
        },
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware to handle all exceptions and return RFC 7807 Problem Details."""

    async def dispatch(self, request: Request, call_next):
        """Catch all exceptions and convert to Problem Details format.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            Response with Problem Details format on error
        """
        # Generate correlation ID for request tracing
        correlation_id = str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        try:
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            return response

        except Exception as exc:
            logger.error(
                f"Request failed with correlation_id={correlation_id}",
                exc_info=exc,
                extra={
                    "correlation_id": correlation_id,
                    "path": request.url.path,
                    "method": request.method,
                },
            )
            problem = self._exception_to_problem(exc, request, correlation_id)
            return problem_response(problem)

    def _exception_to_problem(
        self, exc: Exception, request: Request, correlation_id: str
    ) -> ProblemDetails:
        """Convert exception to RFC 7807 Problem Details.

        Args:
            exc: Exception that was raised
            request: Request that caused the exception
            correlation_id: Correlation ID for tracing

        Returns:
            ProblemDetails object
        """
        if isinstance(exc, HTTPException):
            return ProblemDetails(
                type="about:blank",
                title=status_text(exc.status_code),
                status=exc.status_code,
                detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
                instance=request.url.path,
                correlation_id=correlation_id,
            )

        if isinstance(exc, GraphError):
            return graph_error_to_problem(exc, request.url.path, correlation_id)

        if isinstance(exc, ValueError):
            return ProblemDetails(
                type="https://httpstatuses.com/400",
                title="Bad Request",
                status=status.HTTP_400_BAD_REQUEST,
                detail=str(exc),
                instance=request.url.path,
                correlation_id=correlation_id,
            )

        # Default to 500 Internal Server Error
        return ProblemDetails(
            type="https://httpstatuses.com/500",
            title="Internal Server Error",
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
            instance=request.url.path,
            correlation_id=correlation_id,
        )
