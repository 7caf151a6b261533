"""Unit tests for the metrics middleware endpoint label."""

import pytest

from cycle_breaker.infrastructure.api.middleware.metrics_middleware import route_label


class TestRouteLabel:
    """Test route_label across router-relative and absolute templates."""

    @pytest.mark.parametrize(
        "path,template",
        [
            ("/api/v1/cycles/analyze", "/analyze"),
            ("/api/v1/cycles/analyze", "/api/v1/cycles/analyze"),
        ],
    )
    def test_includes_router_prefix(self, path, template):
        assert route_label(path, template) == "/api/v1/cycles/analyze"

    def test_health_and_analyze_do_not_collide(self):
        assert route_label("/api/v1/health", "/health") == "/api/v1/health"
        assert route_label("/api/v1/cycles/validate", "/validate") == (
            "/api/v1/cycles/validate"
        )

    def test_path_parameters_keep_template(self):
        assert route_label("/api/v1/cycles/plans/42", "/plans/{plan_id}") == (
            "/api/v1/cycles/plans/{plan_id}"
        )

    def test_root(self):
        assert route_label("/", "/") == "/"
