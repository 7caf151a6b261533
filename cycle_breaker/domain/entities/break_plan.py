"""Break plan entities module.

This module defines the decision outputs of the engine:
- BreakStrategy: category of fix chosen to eliminate a cycle
- CandidatePlan: the per-cycle selection made by StrategySelector
- BreakPlan: a final, deduplicated resolution emitted by PlanAssembler
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from cycle_breaker.domain.entities.cycle import Cycle
from cycle_breaker.domain.entities.dependency_edge import DependencyEdge


class BreakStrategy(str, Enum):
    """Break strategies in priority order (least invasive first)."""

    LAZY_INJECTION = "lazy_injection"
    INTERFACE_EXTRACTION = "interface_extraction"
    METHOD_EXTRACTION = "method_extraction"
    MANUAL = "manual"

    @property
    def priority(self) -> int:
        """Lower value = preferred. MANUAL always sorts last."""
        return _STRATEGY_PRIORITY[self]

    @property
    def is_automated(self) -> bool:
        return self is not BreakStrategy.MANUAL

    @classmethod
    def automated(cls) -> list["BreakStrategy"]:
        """Automatable strategies in priority order."""
        return [s for s in cls if s.is_automated]


_STRATEGY_PRIORITY = {
    BreakStrategy.LAZY_INJECTION: 0,
    BreakStrategy.INTERFACE_EXTRACTION: 1,
    BreakStrategy.METHOD_EXTRACTION: 2,
    BreakStrategy.MANUAL: 3,
}


@dataclass(frozen=True)
class CandidatePlan:
    """Strategy selection for a single cycle.

    Domain invariants:
    - MANUAL candidates carry no edge; every other strategy carries one
    - the chosen edge lies on the cycle

    Attributes:
        cycle: The cycle being resolved
        edge: Edge to break, or None for MANUAL
        strategy: Chosen strategy
        rationale: Human-readable explanation naming the satisfied condition
    """

    cycle: Cycle
    edge: DependencyEdge | None
    strategy: BreakStrategy
    rationale: str

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        if self.strategy is BreakStrategy.MANUAL and self.edge is not None:
            raise ValueError("MANUAL candidates cannot name an edge")
        if self.strategy is not BreakStrategy.MANUAL and self.edge is None:
            raise ValueError(f"{self.strategy.value} candidates require an edge")
        if self.edge is not None and (
            (self.edge.source_id, self.edge.target_id) not in self.cycle.hops()
        ):
            raise ValueError(f"Edge {self.edge} does not lie on cycle {self.cycle}")

    @property
    def is_manual(self) -> bool:
        return self.strategy is BreakStrategy.MANUAL


@dataclass(frozen=True)
class BreakPlan:
    """A resolution handed to the code-transformation collaborator.

    Never mutated after creation; merging another cycle into a plan produces
    a new instance.

    Attributes:
        cycle: The first (canonically smallest) cycle this plan resolves
        broken_edge: Edge to break, or None for MANUAL
        strategy: Strategy to apply
        rationale: Human-readable explanation
        additional_cycles: Further cycles resolved by breaking the same edge
    """

    cycle: Cycle
    broken_edge: DependencyEdge | None
    strategy: BreakStrategy
    rationale: str
    additional_cycles: tuple[Cycle, ...] = field(default_factory=tuple)

    @classmethod
    def from_candidate(cls, candidate: CandidatePlan) -> "BreakPlan":
        return cls(
            cycle=candidate.cycle,
            broken_edge=candidate.edge,
            strategy=candidate.strategy,
            rationale=candidate.rationale,
        )

    @property
    def cycles(self) -> tuple[Cycle, ...]:
        """Every cycle resolved by this plan, primary first."""
        return (self.cycle,) + self.additional_cycles

    @property
    def is_manual(self) -> bool:
        return self.strategy is BreakStrategy.MANUAL

    def merged_with(self, cycle: Cycle) -> "BreakPlan":
        """Copy of this plan that also records resolving another cycle."""
        return replace(
            self,
            rationale=f"{self.rationale}; also resolves cycle {cycle.format()}",
            additional_cycles=self.additional_cycles + (cycle,),
        )

    def sort_key(self) -> tuple[int, tuple[str, ...]]:
        """Final ordering: automatable fixes first, then by canonical cycle."""
        return (self.strategy.priority, self.cycle.component_ids)
