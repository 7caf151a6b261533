"""Validate break plans use case.

Re-runs SCC detection on the graph with every planned broken edge removed,
to confirm that the automated plans actually eliminate the cycles they claim.
No cycles are enumerated: a surviving SCC is checked only against the cycles
the plan flagged for manual review.
"""

import structlog

from cycle_breaker.application.dtos.cycle_analysis_dto import (
    CycleAnalysisRequest,
    PlanValidationResponse,
)
from cycle_breaker.application.use_cases.analyze_circular_dependencies import (
    AnalyzeCircularDependenciesUseCase,
    edge_to_dto,
)
from cycle_breaker.domain.entities.break_plan import BreakPlan
from cycle_breaker.domain.entities.graph import Graph
from cycle_breaker.domain.services.scc_detector import SccDetector

logger = structlog.get_logger(__name__)


class ValidateBreakPlansUseCase:
    """Use case for checking that a plan list breaks every automatable cycle.

    An SCC that survives edge removal is acceptable only if it still contains
    a cycle the plan flagged for manual review; any other survivor is
    reported as uncovered.
    """

    def __init__(
        self,
        analyze_use_case: AnalyzeCircularDependenciesUseCase,
        detector: SccDetector,
    ):
        """Initialize the use case.

        Args:
            analyze_use_case: Produces the plans being validated
            detector: Tarjan SCC detector used for the re-run
        """
        self.analyze_use_case = analyze_use_case
        self.detector = detector

    async def execute(self, request: CycleAnalysisRequest) -> PlanValidationResponse:
        """Analyze the graph, remove broken edges and re-detect.

        Args:
            request: Graph to analyze and validate

        Returns:
            PlanValidationResponse listing remaining and uncovered SCCs
        """
        analysis = await self.analyze_use_case.analyze(request)
        return self.validate(analysis.graph, analysis.plans)

    def validate(self, graph: Graph, plans: list[BreakPlan]) -> PlanValidationResponse:
        """Validate plans against a graph.

        Args:
            graph: Graph the plans were computed for
            plans: Final plans from PlanAssembler

        Returns:
            PlanValidationResponse
        """
        removed = [plan.broken_edge for plan in plans if plan.broken_edge is not None]
        manual_cycles = {
            cycle
            for plan in plans
            if plan.is_manual
            for cycle in plan.cycles
        }

        pruned = graph.without_edges(removed)
        remaining = self.detector.detect_non_trivial(pruned)

        # A manual cycle survives iff every hop still has an edge; its members
        # then lie in one remaining SCC
        surviving = [
            set(cycle.component_ids)
            for cycle in manual_cycles
            if all(pruned.has_edge(source, target) for source, target in cycle.hops())
        ]
        uncovered = [
            list(scc.member_ids)
            for scc in remaining
            if not any(members <= set(scc.member_ids) for members in surviving)
        ]

        if uncovered:
            logger.warning(
                "Break plans leave cycles unresolved",
                uncovered_sccs=uncovered,
            )
        else:
            logger.info(
                "Break plans validated",
                removed_edges=len(removed),
                remaining_sccs=len(remaining),
            )

        return PlanValidationResponse(
            removed_edges=[edge_to_dto(edge) for edge in removed],
            remaining_sccs=[list(scc.member_ids) for scc in remaining],
            uncovered_sccs=uncovered,
            manual_cycles=[list(cycle.component_ids) for cycle in sorted(manual_cycles)],
        )
