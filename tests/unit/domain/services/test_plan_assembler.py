"""Unit tests for PlanAssembler."""

import pytest

from cycle_breaker.domain.entities.break_plan import BreakStrategy, CandidatePlan
from cycle_breaker.domain.entities.cycle import Cycle
from cycle_breaker.domain.entities.dependency_edge import DependencyEdge, InjectionKind
from cycle_breaker.domain.services.plan_assembler import PlanAssembler


def candidate(cycle, edge=None, strategy=BreakStrategy.LAZY_INJECTION, rationale=None):
    return CandidatePlan(
        cycle=cycle,
        edge=edge,
        strategy=strategy,
        rationale=rationale or f"{strategy.value}: test",
    )


class TestPlanAssembler:
    """Test cases for PlanAssembler merging and ordering."""

    @pytest.fixture
    def assembler(self):
        return PlanAssembler()

    @pytest.fixture
    def shared_edge(self):
        return DependencyEdge("A", "B", InjectionKind.FIELD)

    def test_empty_input(self, assembler):
        assert assembler.assemble([]) == []

    def test_shared_edge_merged_into_one_plan(self, assembler, shared_edge):
        """Test two cycles broken by the same edge yield one plan."""
        first = Cycle.of("A", "B")
        second = Cycle.of("A", "B", "C")

        plans = assembler.assemble(
            [candidate(second, shared_edge), candidate(first, shared_edge)]
        )

        assert len(plans) == 1
        assert plans[0].cycle == first
        assert plans[0].additional_cycles == (second,)
        assert plans[0].rationale.endswith("; also resolves cycle A → B → C → A")

    def test_different_kinds_on_same_hop_not_merged(self, assembler, shared_edge):
        setter_edge = DependencyEdge("A", "B", InjectionKind.SETTER)

        plans = assembler.assemble(
            [
                candidate(Cycle.of("A", "B"), shared_edge),
                candidate(Cycle.of("A", "B", "C"), setter_edge),
            ]
        )

        assert len(plans) == 2

    def test_manual_plans_never_merged(self, assembler):
        plans = assembler.assemble(
            [
                candidate(Cycle.of("B"), strategy=BreakStrategy.MANUAL),
                candidate(Cycle.of("A"), strategy=BreakStrategy.MANUAL),
            ]
        )

        assert [p.cycle for p in plans] == [Cycle.of("A"), Cycle.of("B")]
        assert all(p.additional_cycles == () for p in plans)

    def test_sorted_by_priority_then_cycle(self, assembler):
        plans = assembler.assemble(
            [
                candidate(Cycle.of("A"), strategy=BreakStrategy.MANUAL),
                candidate(
                    Cycle.of("A", "B"),
                    DependencyEdge("A", "B", InjectionKind.CONSTRUCTOR),
                    BreakStrategy.METHOD_EXTRACTION,
                ),
                candidate(
                    Cycle.of("C", "D"),
                    DependencyEdge("D", "C", InjectionKind.FIELD),
                    BreakStrategy.LAZY_INJECTION,
                ),
                candidate(
                    Cycle.of("B", "E"),
                    DependencyEdge("B", "E", InjectionKind.FIELD),
                    BreakStrategy.LAZY_INJECTION,
                ),
            ]
        )

        assert [(p.strategy, p.cycle.component_ids) for p in plans] == [
            (BreakStrategy.LAZY_INJECTION, ("B", "E")),
            (BreakStrategy.LAZY_INJECTION, ("C", "D")),
            (BreakStrategy.METHOD_EXTRACTION, ("A", "B")),
            (BreakStrategy.MANUAL, ("A",)),
        ]

    def test_input_order_does_not_matter(self, assembler, shared_edge):
        candidates = [
            candidate(Cycle.of("A", "B"), shared_edge),
            candidate(Cycle.of("A", "B", "C"), shared_edge),
            candidate(Cycle.of("C", "D"), DependencyEdge("C", "D", InjectionKind.FIELD)),
        ]

        assert assembler.assemble(candidates) == assembler.assemble(candidates[::-1])

    def test_at_most_one_plan_per_edge(self, assembler, shared_edge):
        cycles = [Cycle.of("A", "B"), Cycle.of("A", "B", "C"), Cycle.of("A", "B", "D")]

        plans = assembler.assemble([candidate(c, shared_edge) for c in cycles])

        assert len(plans) == 1
        assert plans[0].cycles == tuple(cycles)
