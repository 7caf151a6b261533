"""Domain entities - Core business objects."""

from cycle_breaker.domain.entities.break_plan import (
    BreakPlan,
    BreakStrategy,
    CandidatePlan,
)
from cycle_breaker.domain.entities.component import Component
from cycle_breaker.domain.entities.cycle import (
    Cycle,
    CycleEnumerationResult,
    StronglyConnectedComponent,
    canonical_rotation,
)
from cycle_breaker.domain.entities.dependency_edge import (
    DependencyEdge,
    InjectionKind,
)
from cycle_breaker.domain.entities.graph import Graph

__all__ = [
    # Graph model
    "Component",
    "DependencyEdge",
    "InjectionKind",
    "Graph",
    # Analysis results
    "StronglyConnectedComponent",
    "Cycle",
    "CycleEnumerationResult",
    "canonical_rotation",
    # Plans
    "BreakStrategy",
    "CandidatePlan",
    "BreakPlan",
]
