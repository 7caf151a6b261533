"""E2E tests for the cycle analysis API endpoints."""

import pytest


def component(component_id, extractable=False):
    return {"id": component_id, "has_extractable_surface": extractable}


def edge(source, target, kind="field", mutable=True):
    return {"source": source, "target": target, "injection_kind": kind, "mutable": mutable}


class TestAnalyzeEndpoint:
    """Tests for POST /api/v1/cycles/analyze."""

    @pytest.mark.asyncio
    async def test_two_node_cycle(self, async_client):
        payload = {
            "components": [component("A"), component("B")],
            "edges": [edge("A", "B"), edge("B", "A")],
        }

        response = await async_client.post("/api/v1/cycles/analyze", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["component_count"] == 2
        assert data["edge_count"] == 2
        assert data["sccs"] == [{"member_ids": ["A", "B"], "cycle_count": 1, "truncated": False}]
        assert data["cycles"] == [["A", "B"]]
        assert len(data["plans"]) == 1
        plan = data["plans"][0]
        assert plan["strategy"] == "lazy_injection"
        assert plan["broken_edge"] == {"source": "B", "target": "A", "injection_kind": "field"}
        assert plan["additional_cycles"] == []
        assert "X-Correlation-ID" in response.headers

    @pytest.mark.asyncio
    async def test_accepts_from_to_edge_fields(self, async_client):
        payload = {
            "components": [component("A"), component("B", extractable=True), component("C")],
            "edges": [
                {"from": "A", "to": "B", "injection_kind": "constructor", "mutable": False},
                {"from": "B", "to": "C", "injection_kind": "constructor", "mutable": False},
                {"from": "C", "to": "A", "injection_kind": "constructor", "mutable": False},
            ],
        }

        response = await async_client.post("/api/v1/cycles/analyze", json=payload)

        assert response.status_code == 200
        plan = response.json()["plans"][0]
        assert plan["strategy"] == "interface_extraction"
        assert plan["broken_edge"]["source"] == "A"
        assert plan["broken_edge"]["target"] == "B"

    @pytest.mark.asyncio
    async def test_manual_self_loop(self, async_client):
        payload = {
            "components": [component("A")],
            "edges": [edge("A", "A", kind="constructor", mutable=False)],
        }

        response = await async_client.post("/api/v1/cycles/analyze", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["plans"][0]["strategy"] == "manual"
        assert data["plans"][0]["broken_edge"] is None
        assert data["warnings"]

    @pytest.mark.asyncio
    async def test_forced_strategy_and_budget(self, async_client):
        nodes = ["A", "B", "C"]
        payload = {
            "components": [component(n) for n in nodes],
            "edges": [edge(a, b) for a in nodes for b in nodes if a != b],
            "forced_strategy": "method_extraction",
            "max_cycles": 2,
        }

        response = await async_client.post("/api/v1/cycles/analyze", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["truncated_sccs"] == [nodes]
        assert len(data["cycles"]) == 2
        assert {p["strategy"] for p in data["plans"]} == {"method_extraction"}

    @pytest.mark.asyncio
    async def test_acyclic_graph(self, async_client):
        payload = {
            "components": [component("A"), component("B")],
            "edges": [edge("A", "B")],
        }

        response = await async_client.post("/api/v1/cycles/analyze", json=payload)

        assert response.status_code == 200
        assert response.json()["plans"] == []

    @pytest.mark.asyncio
    async def test_duplicate_edge_returns_problem_details(self, async_client):
        payload = {
            "components": [component("A"), component("B")],
            "edges": [edge("A", "B"), edge("A", "B", mutable=False)],
        }

        response = await async_client.post("/api/v1/cycles/analyze", json=payload)

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("application/problem+json")
        problem = response.json()
        assert problem["title"] == "Duplicate Edge"
        assert problem["value"] == "A -> B (field)"
        assert problem["instance"] == "/api/v1/cycles/analyze"
        assert problem["correlation_id"]

    @pytest.mark.asyncio
    async def test_dangling_reference_returns_400(self, async_client):
        payload = {"components": [component("A")], "edges": [edge("A", "Z")]}

        response = await async_client.post("/api/v1/cycles/analyze", json=payload)

        assert response.status_code == 400
        assert response.json()["title"] == "Dangling Reference"
        assert response.json()["value"] == "Z"

    @pytest.mark.asyncio
    async def test_unknown_strategy_returns_400(self, async_client):
        payload = {
            "components": [component("A"), component("B")],
            "edges": [edge("A", "B"), edge("B", "A")],
            "forced_strategy": "delete_everything",
        }

        response = await async_client.post("/api/v1/cycles/analyze", json=payload)

        assert response.status_code == 400
        assert "Unknown strategy" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_unknown_injection_kind_returns_400(self, async_client):
        payload = {
            "components": [component("A"), component("B")],
            "edges": [edge("A", "B", kind="autowired")],
        }

        response = await async_client.post("/api/v1/cycles/analyze", json=payload)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_schema_violation_returns_422(self, async_client):
        payload = {"components": [component("A")], "edges": [{"source": "A"}]}

        response = await async_client.post("/api/v1/cycles/analyze", json=payload)

        assert response.status_code == 422
        assert response.json()["title"] == "Unprocessable Entity"

    @pytest.mark.asyncio
    async def test_forced_strategy_from_environment(self, async_client, monkeypatch):
        from cycle_breaker.infrastructure.config import reset_settings

        monkeypatch.setenv("ANALYSIS_FORCED_STRATEGY", "manual")
        reset_settings()
        payload = {
            "components": [component("A"), component("B")],
            "edges": [edge("A", "B"), edge("B", "A")],
        }

        response = await async_client.post("/api/v1/cycles/analyze", json=payload)

        assert response.json()["plans"][0]["strategy"] == "manual"


class TestValidateEndpoint:
    """Tests for POST /api/v1/cycles/validate."""

    @pytest.mark.asyncio
    async def test_plans_break_all_cycles(self, async_client):
        payload = {
            "components": [component("A"), component("B"), component("C")],
            "edges": [
                edge("A", "B"),
                edge("B", "A", kind="constructor", mutable=False),
                edge("B", "C", kind="constructor", mutable=False),
                edge("C", "A", kind="constructor", mutable=False),
            ],
        }

        response = await async_client.post("/api/v1/cycles/validate", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["removed_edges"] == [{"source": "A", "target": "B", "injection_kind": "field"}]
        assert data["remaining_sccs"] == []
        assert data["all_automated_cycles_broken"] is True

    @pytest.mark.asyncio
    async def test_parallel_edge_reported_uncovered(self, async_client):
        payload = {
            "components": [component("A"), component("B")],
            "edges": [
                edge("A", "B", kind="field"),
                edge("A", "B", kind="setter"),
                edge("B", "A", kind="constructor", mutable=False),
            ],
        }

        response = await async_client.post("/api/v1/cycles/validate", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["uncovered_sccs"] == [["A", "B"]]
        assert data["all_automated_cycles_broken"] is False

    @pytest.mark.asyncio
    async def test_invalid_graph_returns_400(self, async_client):
        payload = {"components": [component("A"), component("A")], "edges": []}

        response = await async_client.post("/api/v1/cycles/validate", json=payload)

        assert response.status_code == 400
        assert response.json()["title"] == "Duplicate Component"


class TestHealthEndpoints:
    """Tests for health and root endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, async_client):
        response = await async_client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_root(self, async_client):
        response = await async_client.get("/")

        assert response.json()["name"] == "Cycle Breaker API"

    @pytest.mark.asyncio
    async def test_unknown_path_returns_problem_details(self, async_client):
        response = await async_client.get("/api/v1/nope")

        assert response.status_code == 404
        assert response.json()["title"] == "Not Found"
