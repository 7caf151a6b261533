"""Metrics middleware for recording HTTP request metrics.

Records Prometheus request count and duration, labelled by method, route
template and status code.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from cycle_breaker.infrastructure.observability.metrics import record_http_request

# Label used for paths that match no route, to bound label cardinality
UNMATCHED_ENDPOINT = "unmatched"


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to record HTTP request metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)

        record_http_request(
            method=request.method,
            endpoint=self._endpoint_label(request),
            status_code=response.status_code,
            duration=time.perf_counter() - start_time,
        )
        return response

    def _endpoint_label(self, request: Request) -> str:
        """Route template for the request, e.g. /api/v1/cycles/analyze.

        Arbitrary unmatched paths (scanners, typos) share one label.
        """
        route = request.scope.get("route")
        template = getattr(route, "path", None)
        if not template:
            return UNMATCHED_ENDPOINT
        return route_label(request.scope["path"], template)


def route_label(path: str, template: str) -> str:
    """Full route template for a request path.

    Depending on the FastAPI version, the matched route's template is either
    the full path or relative to the router it was included with. The router
    prefix is recovered from the leading segments of the request path that
    the template does not cover.

    Args:
        path: Request path, e.g. /api/v1/cycles/analyze
        template: Matched route template, e.g. /analyze or /api/v1/cycles/analyze

    Returns:
        Template including every router prefix
    """
    path_segments = path.strip("/").split("/")
    template_segments = template.strip("/").split("/")
    prefix_length = len(path_segments) - len(template_segments)
    if prefix_length <= 0:
        return template
    return "/" + "/".join(path_segments[:prefix_length]) + template
