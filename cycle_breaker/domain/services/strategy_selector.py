"""Strategy selector module.

This module defines the StrategySelector that picks, for one elementary
cycle, the edge to break and the least invasive strategy that can break it.
"""

from collections.abc import Callable

from cycle_breaker.domain.entities.break_plan import BreakStrategy, CandidatePlan
from cycle_breaker.domain.entities.cycle import Cycle
from cycle_breaker.domain.entities.dependency_edge import DependencyEdge, InjectionKind
from cycle_breaker.domain.entities.graph import Graph

# Tie-break preference among edges sharing the same target
INJECTION_PREFERENCE = {
    InjectionKind.FIELD: 0,
    InjectionKind.SETTER: 1,
    InjectionKind.CONSTRUCTOR: 2,
}


def edge_preference_key(edge: DependencyEdge) -> tuple[str, int, str]:
    """Tie-break comparator for equally feasible edges.

    Smallest target id wins; for the same target FIELD beats SETTER beats
    CONSTRUCTOR; the source id settles anything left so the order is total.
    """
    return (edge.target_id, INJECTION_PREFERENCE[edge.injection_kind], edge.source_id)


def _lazy_feasible(edge: DependencyEdge, graph: Graph) -> bool:
    return edge.mutable


def _interface_feasible(edge: DependencyEdge, graph: Graph) -> bool:
    return graph.component(edge.target_id).has_extractable_surface and (
        edge.injection_kind in (InjectionKind.CONSTRUCTOR, InjectionKind.FIELD)
    )


def _method_feasible(edge: DependencyEdge, graph: Graph) -> bool:
    # A mediator needs two distinct components to sit between
    return not edge.is_self_loop


FEASIBILITY: dict[BreakStrategy, Callable[[DependencyEdge, Graph], bool]] = {
    BreakStrategy.LAZY_INJECTION: _lazy_feasible,
    BreakStrategy.INTERFACE_EXTRACTION: _interface_feasible,
    BreakStrategy.METHOD_EXTRACTION: _method_feasible,
}


class StrategySelector:
    """Domain service choosing one (edge, strategy) per cycle.

    Strategies are evaluated in priority order:
    1. LAZY_INJECTION - the edge's binding is mutable and can be deferred
    2. INTERFACE_EXTRACTION - the target exposes an extractable surface and
       the edge is constructor- or field-injected
    3. METHOD_EXTRACTION - fallback: a synthesized mediator component
    The first strategy feasible on any edge of the cycle wins; ties go to
    edge_preference_key. A cycle where nothing is feasible becomes MANUAL.

    Attributes:
        forced_strategy: Operator override. When set, only this strategy's
            feasibility is checked and infeasible cycles fall back to MANUAL.
    """

    def __init__(self, forced_strategy: BreakStrategy | None = None):
        """Initialize the selector.

        Args:
            forced_strategy: Strategy to apply to every cycle, or None for
                automatic priority-based selection
        """
        self.forced_strategy = forced_strategy

    def select(self, cycle: Cycle, graph: Graph) -> CandidatePlan:
        """Select the edge and strategy that break a cycle.

        Args:
            cycle: Canonical elementary cycle
            graph: Graph the cycle was found in

        Returns:
            CandidatePlan with the chosen edge and strategy, or MANUAL
        """
        edges = self._cycle_edges(cycle, graph)

        if self.forced_strategy is BreakStrategy.MANUAL:
            return CandidatePlan(
                cycle=cycle,
                edge=None,
                strategy=BreakStrategy.MANUAL,
                rationale="manual: manual review was requested for every cycle",
            )

        strategies = (
            [self.forced_strategy]
            if self.forced_strategy is not None
            else BreakStrategy.automated()
        )

        for strategy in strategies:
            feasible = [e for e in edges if FEASIBILITY[strategy](e, graph)]
            if feasible:
                chosen = min(feasible, key=edge_preference_key)
                return CandidatePlan(
                    cycle=cycle,
                    edge=chosen,
                    strategy=strategy,
                    rationale=self._rationale(strategy, chosen),
                )

        return CandidatePlan(
            cycle=cycle,
            edge=None,
            strategy=BreakStrategy.MANUAL,
            rationale=self._manual_rationale(cycle),
        )

    def _cycle_edges(self, cycle: Cycle, graph: Graph) -> list[DependencyEdge]:
        """Every physical edge of the cycle in cycle order.

        Consecutive members may be linked by several edges (one per injection
        kind); each is a separate break candidate.
        """
        return [
            edge
            for source_id, target_id in cycle.hops()
            for edge in graph.edges_between(source_id, target_id)
        ]

    def _rationale(self, strategy: BreakStrategy, edge: DependencyEdge) -> str:
        prefix = strategy.value
        if self.forced_strategy is not None:
            prefix = f"{prefix} (forced)"

        if strategy is BreakStrategy.LAZY_INJECTION:
            return (
                f"{prefix}: {edge.injection_kind.value} binding of "
                f"{edge.source_id} -> {edge.target_id} is mutable and can be deferred"
            )
        if strategy is BreakStrategy.INTERFACE_EXTRACTION:
            return (
                f"{prefix}: {edge.target_id} exposes an extractable surface and "
                f"{edge.source_id} -> {edge.target_id} is "
                f"{edge.injection_kind.value}-injected"
            )
        if self.forced_strategy is not None:
            return (
                f"{prefix}: {edge.source_id} and {edge.target_id} can be mediated "
                "by a synthesized component"
            )
        return (
            f"{prefix}: no edge is mutable or targets an extractable surface; "
            f"{edge.source_id} and {edge.target_id} can be mediated by a "
            "synthesized component"
        )

    def _manual_rationale(self, cycle: Cycle) -> str:
        if self.forced_strategy is not None:
            return (
                f"manual: forced strategy {self.forced_strategy.value} is not "
                f"feasible on any edge of {cycle.format()}"
            )
        return (
            f"manual: no automated strategy is feasible for {cycle.format()} "
            "(immutable binding, no extractable surface, no room for a mediator)"
        )
