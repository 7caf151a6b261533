"""Analyze circular dependencies use case.

This module implements the full analysis pipeline:
edge list -> Graph -> SCCs (Tarjan) -> cycles per SCC (Johnson) ->
candidate plans -> final ordered break plans.
"""

import asyncio
import time
from dataclasses import dataclass, field

import structlog
from opentelemetry import trace

from cycle_breaker.application.dtos.cycle_analysis_dto import (
    BreakPlanDTO,
    CycleAnalysisRequest,
    CycleAnalysisResponse,
    EdgeRefDTO,
    SccInfo,
)
from cycle_breaker.domain.entities.break_plan import (
    BreakPlan,
    BreakStrategy,
    CandidatePlan,
)
from cycle_breaker.domain.entities.component import Component
from cycle_breaker.domain.entities.cycle import (
    CycleEnumerationResult,
    StronglyConnectedComponent,
)
from cycle_breaker.domain.entities.dependency_edge import DependencyEdge, InjectionKind
from cycle_breaker.domain.entities.graph import Graph
from cycle_breaker.domain.services.cycle_enumerator import CycleEnumerator
from cycle_breaker.domain.services.graph_builder import GraphBuilder
from cycle_breaker.domain.services.plan_assembler import PlanAssembler
from cycle_breaker.domain.services.scc_detector import SccDetector
from cycle_breaker.domain.services.strategy_selector import StrategySelector

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)

# Default limit on SCCs processed concurrently
MAX_CONCURRENT_SCCS = 8


@dataclass
class CycleAnalysis:
    """Domain-level result of one pipeline run.

    Attributes:
        graph: The validated graph
        enumerations: One enumeration result per non-trivial SCC, in SCC order
        plans: Final ordered, deduplicated break plans
        duration_seconds: Wall time of the run
    """

    graph: Graph
    enumerations: list[CycleEnumerationResult] = field(default_factory=list)
    plans: list[BreakPlan] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def sccs(self) -> list[StronglyConnectedComponent]:
        return [result.scc for result in self.enumerations]

    @property
    def truncated(self) -> list[CycleEnumerationResult]:
        return [result for result in self.enumerations if result.truncated]

    @property
    def cycle_count(self) -> int:
        return sum(len(result.cycles) for result in self.enumerations)


def parse_strategy(value: str | None) -> BreakStrategy | None:
    """Convert an external strategy name to a BreakStrategy.

    Raises:
        ValueError: If the name is not a known strategy
    """
    if value is None:
        return None
    try:
        return BreakStrategy(value.lower())
    except ValueError:
        valid = ", ".join(s.value for s in BreakStrategy)
        raise ValueError(f"Unknown strategy '{value}', expected one of: {valid}") from None


def resolve_scc(
    graph: Graph,
    scc: StronglyConnectedComponent,
    enumerator: CycleEnumerator,
    selector: StrategySelector,
) -> tuple[CycleEnumerationResult, list[CandidatePlan]]:
    """Enumerate one SCC's cycles and select a candidate for each.

    Touches no state outside its arguments, so calls for different SCCs can
    run concurrently.
    """
    enumeration = enumerator.enumerate(graph, scc)
    candidates = [selector.select(cycle, graph) for cycle in enumeration.cycles]
    return enumeration, candidates


class AnalyzeCircularDependenciesUseCase:
    """Use case for detecting circular dependencies and planning their removal.

    SCC detection runs once over the whole graph. Each non-trivial SCC is then
    enumerated and resolved as an independent task; the final merge-and-sort
    waits for every task, so the plan order is the same whether or not the
    tasks run in parallel.
    """

    def __init__(
        self,
        graph_builder: GraphBuilder,
        detector: SccDetector,
        assembler: PlanAssembler,
        max_concurrent_sccs: int = MAX_CONCURRENT_SCCS,
        parallel: bool = True,
        default_max_cycles: int | None = None,
        default_strategy: str | None = None,
    ):
        """Initialize the use case.

        Args:
            graph_builder: Builds and validates the graph
            detector: Tarjan SCC detector
            assembler: Merges candidates into final plans
            max_concurrent_sccs: Worker pool size for per-SCC tasks
            parallel: Run per-SCC tasks in worker threads
            default_max_cycles: Budget used when the request sets none
            default_strategy: Forced strategy used when the request sets none
        """
        if max_concurrent_sccs < 1:
            raise ValueError("max_concurrent_sccs must be at least 1")
        self.graph_builder = graph_builder
        self.detector = detector
        self.assembler = assembler
        self.max_concurrent_sccs = max_concurrent_sccs
        self.parallel = parallel
        self.default_max_cycles = default_max_cycles
        self.default_strategy = default_strategy

    async def execute(self, request: CycleAnalysisRequest) -> CycleAnalysisResponse:
        """Execute the analysis and convert the result to DTOs.

        Args:
            request: Graph plus optional strategy override and cycle budget

        Returns:
            CycleAnalysisResponse with SCCs, cycles and ordered plans

        Raises:
            GraphError: If the graph is malformed (duplicate edge, dangling
                reference, duplicate component)
            ValueError: If the strategy or injection kind is unknown
        """
        analysis = await self.analyze(request)
        return self.to_response(analysis)

    async def analyze(self, request: CycleAnalysisRequest) -> CycleAnalysis:
        """Run the pipeline and return domain objects.

        Args:
            request: Graph plus optional strategy override and cycle budget

        Returns:
            CycleAnalysis with the graph, per-SCC enumerations and plans
        """
        start_time = time.perf_counter()
        forced = parse_strategy(request.forced_strategy or self.default_strategy)
        max_cycles = (
            request.max_cycles
            if request.max_cycles is not None
            else self.default_max_cycles
        )

        with tracer.start_as_current_span("cycle_analysis.build_graph"):
            graph = self.graph_builder.build(
                edges=[
                    DependencyEdge(
                        source_id=e.source,
                        target_id=e.target,
                        injection_kind=InjectionKind(e.injection_kind.lower()),
                        mutable=e.mutable,
                    )
                    for e in request.edges
                ],
                components=[
                    Component(
                        id=c.id,
                        kind=c.kind,
                        has_extractable_surface=c.has_extractable_surface,
                    )
                    for c in request.components
                ],
            )

        with tracer.start_as_current_span("cycle_analysis.detect_sccs"):
            sccs = self.detector.detect_non_trivial(graph)

        logger.info(
            "Strongly connected components detected",
            components=len(graph),
            edges=graph.edge_count,
            non_trivial_sccs=len(sccs),
        )

        enumerator = CycleEnumerator(max_cycles=max_cycles)
        selector = StrategySelector(forced_strategy=forced)

        with tracer.start_as_current_span("cycle_analysis.resolve_sccs"):
            results = await self._resolve_all(graph, sccs, enumerator, selector)

        enumerations = [enumeration for enumeration, _ in results]
        candidates = [c for _, scc_candidates in results for c in scc_candidates]

        for enumeration in enumerations:
            if enumeration.truncated:
                logger.warning(
                    "Cycle enumeration truncated",
                    scc=list(enumeration.scc.member_ids),
                    max_cycles=max_cycles,
                    cycles_found=len(enumeration.cycles),
                )

        with tracer.start_as_current_span("cycle_analysis.assemble_plans"):
            plans = self.assembler.assemble(candidates)

        duration = time.perf_counter() - start_time
        logger.info(
            "Cycle analysis complete",
            cycles=len(candidates),
            plans=len(plans),
            manual_plans=sum(1 for p in plans if p.is_manual),
            forced_strategy=forced.value if forced else None,
            duration_ms=round(duration * 1000, 2),
        )

        return CycleAnalysis(
            graph=graph,
            enumerations=enumerations,
            plans=plans,
            duration_seconds=duration,
        )

    async def _resolve_all(
        self,
        graph: Graph,
        sccs: list[StronglyConnectedComponent],
        enumerator: CycleEnumerator,
        selector: StrategySelector,
    ) -> list[tuple[CycleEnumerationResult, list[CandidatePlan]]]:
        """Resolve every SCC, in parallel when enabled.

        Results come back in SCC order regardless of completion order.
        """
        if not self.parallel or len(sccs) <= 1:
            return [resolve_scc(graph, scc, enumerator, selector) for scc in sccs]

        semaphore = asyncio.Semaphore(self.max_concurrent_sccs)

        async def limited_task(scc: StronglyConnectedComponent):
            async with semaphore:
                return await asyncio.to_thread(
                    resolve_scc, graph, scc, enumerator, selector
                )

        return await asyncio.gather(*(limited_task(scc) for scc in sccs))

    def to_response(self, analysis: CycleAnalysis) -> CycleAnalysisResponse:
        """Convert domain results to application DTOs."""
        warnings: list[str] = []
        for enumeration in analysis.truncated:
            warnings.append(
                f"Cycle enumeration truncated for SCC "
                f"{{{', '.join(enumeration.scc.member_ids)}}} after "
                f"{len(enumeration.cycles)} cycles; plans cover only those cycles"
            )
        manual_count = sum(1 for plan in analysis.plans if plan.is_manual)
        if manual_count:
            warnings.append(
                f"{manual_count} cycle(s) have no feasible automated strategy "
                "and need manual review"
            )

        return CycleAnalysisResponse(
            component_count=len(analysis.graph),
            edge_count=analysis.graph.edge_count,
            sccs=[
                SccInfo(
                    member_ids=list(e.scc.member_ids),
                    cycle_count=len(e.cycles),
                    truncated=e.truncated,
                )
                for e in analysis.enumerations
            ],
            cycles=[
                list(cycle.component_ids)
                for e in analysis.enumerations
                for cycle in e.cycles
            ],
            plans=[plan_to_dto(plan) for plan in analysis.plans],
            truncated_sccs=[list(e.scc.member_ids) for e in analysis.truncated],
            warnings=warnings,
        )


def edge_to_dto(edge: DependencyEdge) -> EdgeRefDTO:
    return EdgeRefDTO(
        source=edge.source_id,
        target=edge.target_id,
        injection_kind=edge.injection_kind.value,
    )


def plan_to_dto(plan: BreakPlan) -> BreakPlanDTO:
    return BreakPlanDTO(
        cycle=list(plan.cycle.component_ids),
        broken_edge=edge_to_dto(plan.broken_edge) if plan.broken_edge else None,
        strategy=plan.strategy.value,
        rationale=plan.rationale,
        additional_cycles=[list(c.component_ids) for c in plan.additional_cycles],
    )
