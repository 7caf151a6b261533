"""Cycle analysis DTOs.

This module defines data transfer objects for the analyze and validate
workflows. Uses dataclasses for application layer (not Pydantic - that's for
infrastructure/API).
"""

from dataclasses import dataclass, field


@dataclass
class ComponentDTO:
    """Component as supplied by the source-analysis front end.

    Attributes:
        id: Unique component identifier (e.g., fully qualified class name)
        kind: Opaque tag (class, interface, ...)
        has_extractable_surface: Whether an interface can be extracted from it
    """

    id: str
    kind: str = "class"
    has_extractable_surface: bool = False


@dataclass
class EdgeDTO:
    """Dependency edge as supplied by the front end.

    Attributes:
        source: Id of the dependent component
        target: Id of the dependency
        injection_kind: constructor, field or setter
        mutable: Whether the binding can be changed after construction
    """

    source: str
    target: str
    injection_kind: str
    mutable: bool = True


@dataclass
class CycleAnalysisRequest:
    """Request to analyze a dependency graph.

    Attributes:
        components: All components of the graph
        edges: All dependency edges
        forced_strategy: Apply this strategy to every cycle instead of the
            priority evaluation (None = automatic)
        max_cycles: Per-SCC enumeration budget (None = no limit)
    """

    components: list[ComponentDTO]
    edges: list[EdgeDTO]
    forced_strategy: str | None = None
    max_cycles: int | None = None


@dataclass
class EdgeRefDTO:
    """Reference to a physical edge in a plan."""

    source: str
    target: str
    injection_kind: str


@dataclass
class SccInfo:
    """A non-trivial strongly connected component.

    Attributes:
        member_ids: Component ids in ascending order
        cycle_count: Elementary cycles enumerated in this SCC
        truncated: True if enumeration stopped at the max_cycles budget
    """

    member_ids: list[str]
    cycle_count: int
    truncated: bool = False


@dataclass
class BreakPlanDTO:
    """A break plan handed to the transformation collaborator.

    Attributes:
        cycle: Ordered component ids of the primary cycle
        broken_edge: Edge to break (None for manual)
        strategy: lazy_injection, interface_extraction, method_extraction or manual
        rationale: Human-readable explanation
        additional_cycles: Other cycles resolved by the same broken edge
    """

    cycle: list[str]
    broken_edge: EdgeRefDTO | None
    strategy: str
    rationale: str
    additional_cycles: list[list[str]] = field(default_factory=list)


@dataclass
class CycleAnalysisResponse:
    """Result of the analysis pipeline.

    Attributes:
        component_count: Components in the graph
        edge_count: Edges in the graph
        sccs: Non-trivial SCCs, sorted by minimum component id
        cycles: Every enumerated cycle, in canonical order
        plans: Final ordered, deduplicated plans
        truncated_sccs: Member ids of SCCs whose enumeration hit the budget
        warnings: Warning messages (truncation, manual review needed)
    """

    component_count: int
    edge_count: int
    sccs: list[SccInfo] = field(default_factory=list)
    cycles: list[list[str]] = field(default_factory=list)
    plans: list[BreakPlanDTO] = field(default_factory=list)
    truncated_sccs: list[list[str]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def has_cycles(self) -> bool:
        return bool(self.sccs)


@dataclass
class PlanValidationResponse:
    """Outcome of re-analyzing the graph with every broken edge removed.

    Attributes:
        removed_edges: Edges removed (one per automated plan)
        remaining_sccs: Non-trivial SCCs still present afterwards
        uncovered_sccs: Remaining SCCs that contain no cycle flagged manual;
            these indicate the automated plans failed to break them
        manual_cycles: Cycles left for human review
    """

    removed_edges: list[EdgeRefDTO] = field(default_factory=list)
    remaining_sccs: list[list[str]] = field(default_factory=list)
    uncovered_sccs: list[list[str]] = field(default_factory=list)
    manual_cycles: list[list[str]] = field(default_factory=list)

    @property
    def all_automated_cycles_broken(self) -> bool:
        return not self.uncovered_sccs
