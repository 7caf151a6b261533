"""Unit tests for AnalyzeCircularDependenciesUseCase."""

import random

import pytest

from cycle_breaker.application.dtos.cycle_analysis_dto import (
    ComponentDTO,
    CycleAnalysisRequest,
    EdgeDTO,
    EdgeRefDTO,
)
from cycle_breaker.application.use_cases.analyze_circular_dependencies import (
    AnalyzeCircularDependenciesUseCase,
    parse_strategy,
)
from cycle_breaker.domain.entities.break_plan import BreakStrategy
from cycle_breaker.domain.exceptions import DanglingReferenceError, DuplicateEdgeError
from cycle_breaker.domain.services.graph_builder import GraphBuilder
from cycle_breaker.domain.services.plan_assembler import PlanAssembler
from cycle_breaker.domain.services.scc_detector import SccDetector


def make_request(edges, extractable=(), **kwargs):
    """Request with a component for every id mentioned by the edges."""
    ids = sorted({e[0] for e in edges} | {e[1] for e in edges})
    return CycleAnalysisRequest(
        components=[
            ComponentDTO(id=i, has_extractable_surface=i in extractable) for i in ids
        ],
        edges=[
            EdgeDTO(source=s, target=t, injection_kind=kind, mutable=mutable)
            for s, t, kind, mutable in edges
        ],
        **kwargs,
    )


def make_use_case(**kwargs):
    return AnalyzeCircularDependenciesUseCase(
        graph_builder=GraphBuilder(),
        detector=SccDetector(),
        assembler=PlanAssembler(),
        **kwargs,
    )


class TestAnalyzeCircularDependenciesUseCase:
    """Test AnalyzeCircularDependenciesUseCase end to end over real services."""

    @pytest.fixture
    def use_case(self):
        return make_use_case()

    @pytest.mark.asyncio
    async def test_empty_graph(self, use_case):
        response = await use_case.execute(CycleAnalysisRequest(components=[], edges=[]))

        assert response.component_count == 0
        assert response.plans == []
        assert not response.has_cycles

    @pytest.mark.asyncio
    async def test_acyclic_graph_has_no_plans(self, use_case):
        request = make_request(
            [("A", "B", "field", True), ("B", "C", "constructor", False)]
        )

        response = await use_case.execute(request)

        assert response.sccs == []
        assert response.plans == []
        assert response.warnings == []

    @pytest.mark.asyncio
    async def test_two_node_field_cycle_breaks_lazily(self, use_case):
        request = make_request([("A", "B", "field", True), ("B", "A", "field", True)])

        response = await use_case.execute(request)

        assert [s.member_ids for s in response.sccs] == [["A", "B"]]
        assert response.cycles == [["A", "B"]]
        assert len(response.plans) == 1
        plan = response.plans[0]
        assert plan.strategy == "lazy_injection"
        assert plan.broken_edge == EdgeRefDTO(source="B", target="A", injection_kind="field")

    @pytest.mark.asyncio
    async def test_immutable_constructor_cycle_extracts_interface(self, use_case):
        request = make_request(
            [
                ("A", "B", "constructor", False),
                ("B", "C", "constructor", False),
                ("C", "A", "constructor", False),
            ],
            extractable={"B"},
        )

        response = await use_case.execute(request)

        assert len(response.plans) == 1
        assert response.plans[0].strategy == "interface_extraction"
        assert response.plans[0].broken_edge == EdgeRefDTO("A", "B", "constructor")

    @pytest.mark.asyncio
    async def test_immutable_self_loop_needs_manual_review(self, use_case):
        request = make_request([("A", "A", "constructor", False)])

        response = await use_case.execute(request)

        assert response.sccs[0].member_ids == ["A"]
        assert response.cycles == [["A"]]
        plan = response.plans[0]
        assert plan.strategy == "manual"
        assert plan.broken_edge is None
        assert any("manual review" in w for w in response.warnings)

    @pytest.mark.asyncio
    async def test_disjoint_cycles_yield_plans_in_canonical_order(self, use_case):
        request = make_request(
            [
                ("D", "C", "field", True),
                ("C", "D", "field", True),
                ("B", "A", "field", True),
                ("A", "B", "field", True),
            ]
        )

        response = await use_case.execute(request)

        assert [s.member_ids for s in response.sccs] == [["A", "B"], ["C", "D"]]
        assert [p.cycle for p in response.plans] == [["A", "B"], ["C", "D"]]

    @pytest.mark.asyncio
    async def test_shared_edge_merged(self, use_case):
        """Test that A → B → A and A → B → C → A are both broken at one edge."""
        request = make_request(
            [
                ("A", "B", "field", True),
                ("B", "A", "constructor", False),
                ("B", "C", "constructor", False),
                ("C", "A", "constructor", False),
            ]
        )

        response = await use_case.execute(request)

        assert len(response.plans) == 1
        assert response.plans[0].broken_edge == EdgeRefDTO("A", "B", "field")
        assert response.plans[0].additional_cycles == [["A", "B", "C"]]

    @pytest.mark.asyncio
    async def test_forced_strategy_from_request(self, use_case):
        request = make_request(
            [("A", "B", "field", True), ("B", "A", "field", True)],
            forced_strategy="method_extraction",
        )

        response = await use_case.execute(request)

        assert response.plans[0].strategy == "method_extraction"
        assert "(forced)" in response.plans[0].rationale

    @pytest.mark.asyncio
    async def test_default_strategy_used_when_request_sets_none(self):
        use_case = make_use_case(default_strategy="manual")
        request = make_request([("A", "B", "field", True), ("B", "A", "field", True)])

        response = await use_case.execute(request)

        assert response.plans[0].strategy == "manual"

    @pytest.mark.asyncio
    async def test_unknown_strategy_rejected(self, use_case):
        request = make_request(
            [("A", "B", "field", True)], forced_strategy="rewrite_everything"
        )

        with pytest.raises(ValueError, match="Unknown strategy"):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_unknown_injection_kind_rejected(self, use_case):
        request = make_request([("A", "B", "autowired", True)])

        with pytest.raises(ValueError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_dangling_reference_raises_graph_error(self, use_case):
        request = CycleAnalysisRequest(
            components=[ComponentDTO(id="A")],
            edges=[EdgeDTO(source="A", target="B", injection_kind="field")],
        )

        with pytest.raises(DanglingReferenceError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_duplicate_edge_raises_graph_error(self, use_case):
        request = make_request([("A", "B", "field", True), ("A", "B", "field", False)])

        with pytest.raises(DuplicateEdgeError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_truncation_reported(self, use_case):
        nodes = ["A", "B", "C", "D"]
        edges = [(a, b, "field", True) for a in nodes for b in nodes if a != b]
        request = make_request(edges, max_cycles=3)

        response = await use_case.execute(request)

        assert response.truncated_sccs == [nodes]
        assert response.sccs[0].truncated
        assert response.sccs[0].cycle_count == 3
        assert len(response.cycles) == 3
        assert any("truncated" in w for w in response.warnings)

    @pytest.mark.asyncio
    async def test_default_max_cycles_applies(self):
        use_case = make_use_case(default_max_cycles=1)
        nodes = ["A", "B", "C"]
        edges = [(a, b, "field", True) for a in nodes for b in nodes if a != b]

        response = await use_case.execute(make_request(edges))

        assert len(response.cycles) == 1
        assert response.truncated_sccs == [nodes]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", range(10))
    async def test_output_independent_of_edge_order(self, use_case, seed):
        rng = random.Random(seed)
        nodes = [f"c{i}" for i in range(7)]
        edges = [
            (a, b, rng.choice(["field", "setter", "constructor"]), rng.random() < 0.3)
            for a in nodes
            for b in nodes
            if rng.random() < 0.3
        ]
        shuffled = list(edges)
        rng.shuffle(shuffled)

        first = await use_case.execute(make_request(edges, extractable={"c2", "c5"}))
        second = await use_case.execute(make_request(shuffled, extractable={"c2", "c5"}))

        assert first == second

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", range(5))
    async def test_parallel_matches_inline(self, seed):
        rng = random.Random(seed)
        groups = [[f"g{g}n{i}" for i in range(4)] for g in range(5)]
        edges = []
        for group in groups:
            for a in group:
                for b in group:
                    if a != b and rng.random() < 0.5:
                        edges.append((a, b, rng.choice(["field", "constructor"]), rng.random() < 0.4))
        request = make_request(edges, extractable={groups[0][1], groups[3][2]})

        parallel = await make_use_case(parallel=True, max_concurrent_sccs=2).execute(request)
        inline = await make_use_case(parallel=False).execute(request)

        assert parallel == inline

    def test_invalid_concurrency_rejected(self):
        with pytest.raises(ValueError, match="max_concurrent_sccs"):
            make_use_case(max_concurrent_sccs=0)


class TestParseStrategy:
    """Test cases for parse_strategy."""

    def test_none_means_automatic(self):
        assert parse_strategy(None) is None

    def test_case_insensitive(self):
        assert parse_strategy("LAZY_INJECTION") is BreakStrategy.LAZY_INJECTION

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="expected one of"):
            parse_strategy("lazy")
