"""
FastAPI application entry point.

Implements the API layer of the Infrastructure following Clean Architecture.
This module sets up the FastAPI app, registers routes, middleware, and exception handlers.
"""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from cycle_breaker import __version__
from cycle_breaker.domain.exceptions import GraphError
from cycle_breaker.infrastructure.observability import (
    configure_logging,
    instrument_fastapi_app,
    setup_tracing,
)

from .middleware.error_handler import (
    ErrorHandlerMiddleware,
    graph_error_to_problem,
    problem_response,
    status_text,
)
from .middleware.logging_middleware import LoggingMiddleware
from .middleware.metrics_middleware import MetricsMiddleware
from .schemas.error_schema import ProblemDetails


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    The service holds no connections or background tasks, so startup only
    configures logging.
    """
    configure_logging()
    yield


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", None) or str(uuid.uuid4())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="Cycle Breaker API",
        description=(
            "Detects circular dependencies in component dependency graphs and "
            "plans the minimal set of edges to break, with a strategy for each."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Order matters: last added = first executed
    app.add_middleware(ErrorHandlerMiddleware)  # Outermost: catches all errors
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(LoggingMiddleware)

    # Tracing must be wired before the app starts serving
    setup_tracing()
    instrument_fastapi_app(app)

    from .routes import cycles, health

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(cycles.router, prefix="/api/v1/cycles", tags=["Cycle Analysis"])

    # Register exception handlers for proper RFC 7807 format
    @app.exception_handler(GraphError)
    async def graph_error_handler(request: Request, exc: GraphError):
        """Convert malformed-graph errors to RFC 7807 Problem Details."""
        return problem_response(
            graph_error_to_problem(exc, request.url.path, _correlation_id(request))
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Convert HTTPException to RFC 7807 Problem Details."""
        problem = ProblemDetails(
            type="about:blank",
            title=status_text(exc.status_code),
            status=exc.status_code,
            detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
            instance=request.url.path,
            correlation_id=_correlation_id(request),
        )
        return problem_response(problem)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        """Convert Pydantic validation errors to RFC 7807 Problem Details."""
        errors = exc.errors()
        first = errors[0] if errors else {}
        problem = ProblemDetails(
            type="about:blank",
            title="Unprocessable Entity",
            status=422,
            detail=f"Validation failed: {errors}",
            instance=request.url.path,
            correlation_id=_correlation_id(request),
            field=".".join(str(part) for part in first.get("loc", ())) or None,
        )
        return problem_response(problem)

    @app.get("/", status_code=status.HTTP_200_OK)
    async def root():
        """Root endpoint - API information."""
        return {
            "name": "Cycle Breaker API",
            "version": __version__,
            "status": "operational",
            "docs": "/docs",
        }

    return app


# Create app instance
app = create_app()
