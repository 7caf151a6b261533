"""Prometheus metrics instrumentation.

Defines and exports Prometheus metrics for monitoring the application.
Avoids high cardinality by omitting component ids from labels.
"""

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from cycle_breaker.application.dtos.cycle_analysis_dto import CycleAnalysisResponse

# HTTP Request Metrics
http_requests_total = Counter(
    name="cycle_breaker_http_requests_total",
    documentation="Total number of HTTP requests",
    labelnames=["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    name="cycle_breaker_http_request_duration_seconds",
    documentation="HTTP request duration in seconds",
    labelnames=["method", "endpoint", "status_code"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# Analysis Metrics
analysis_runs_total = Counter(
    name="cycle_breaker_analysis_runs_total",
    documentation="Total number of cycle analysis runs",
    labelnames=["status"],  # success, invalid_graph
)

analysis_duration_seconds = Histogram(
    name="cycle_breaker_analysis_duration_seconds",
    documentation="Full pipeline duration in seconds",
    buckets=(
        0.001,  # 1ms
        0.005,  # 5ms
        0.01,  # 10ms
        0.05,  # 50ms
        0.1,  # 100ms
        0.5,  # 500ms
        1.0,  # 1s
        5.0,  # 5s
        30.0,  # 30s
        120.0,  # 2m
    ),
)

strongly_connected_components_total = Counter(
    name="cycle_breaker_strongly_connected_components_total",
    documentation="Total number of non-trivial strongly connected components found",
)

cycles_enumerated_total = Counter(
    name="cycle_breaker_cycles_enumerated_total",
    documentation="Total number of elementary cycles enumerated",
)

cycle_enumerations_truncated_total = Counter(
    name="cycle_breaker_cycle_enumerations_truncated_total",
    documentation="Total number of SCC enumerations stopped by the max_cycles budget",
)

break_plans_total = Counter(
    name="cycle_breaker_break_plans_total",
    documentation="Total number of break plans emitted",
    labelnames=["strategy"],
)


def get_metrics_content() -> tuple[bytes, str]:
    """Generate Prometheus metrics in exposition format.

    Returns:
        Tuple of (metrics_bytes, content_type)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


def record_http_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration: float,
) -> None:
    """Record HTTP request metrics.

    Args:
        method: HTTP method (GET, POST, etc.)
        endpoint: API endpoint path
        status_code: HTTP status code
        duration: Request duration in seconds
    """
    http_requests_total.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code),
    ).inc()

    http_request_duration_seconds.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code),
    ).observe(duration)


def record_analysis_run(
    status: str,
    duration: float,
    scc_count: int = 0,
    cycle_count: int = 0,
    truncated_count: int = 0,
) -> None:
    """Record one pipeline run.

    Args:
        status: Run status (success or invalid_graph)
        duration: Run duration in seconds
        scc_count: Non-trivial SCCs found
        cycle_count: Elementary cycles enumerated
        truncated_count: SCCs whose enumeration hit the budget
    """
    analysis_runs_total.labels(status=status).inc()
    analysis_duration_seconds.observe(duration)
    strongly_connected_components_total.inc(scc_count)
    cycles_enumerated_total.inc(cycle_count)
    cycle_enumerations_truncated_total.inc(truncated_count)


def record_break_plan(strategy: str) -> None:
    """Record an emitted break plan.

    Args:
        strategy: Strategy value (lazy_injection, manual, etc.)
    """
    break_plans_total.labels(strategy=strategy).inc()


def record_analysis_response(
    response: CycleAnalysisResponse, duration: float
) -> None:
    """Record a successful analysis and every plan it emitted.

    Args:
        response: Analysis result returned by the use case
        duration: Run duration in seconds
    """
    record_analysis_run(
        status="success",
        duration=duration,
        scc_count=len(response.sccs),
        cycle_count=len(response.cycles),
        truncated_count=len(response.truncated_sccs),
    )
    for plan in response.plans:
        record_break_plan(plan.strategy)
