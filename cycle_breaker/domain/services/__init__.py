"""Domain services - Graph algorithms and the break-plan decision procedure."""

from cycle_breaker.domain.services.cycle_enumerator import CycleEnumerator
from cycle_breaker.domain.services.graph_builder import GraphBuilder
from cycle_breaker.domain.services.plan_assembler import PlanAssembler
from cycle_breaker.domain.services.scc_detector import SccDetector
from cycle_breaker.domain.services.strategy_selector import (
    StrategySelector,
    edge_preference_key,
)

__all__ = [
    "GraphBuilder",
    "SccDetector",
    "CycleEnumerator",
    "StrategySelector",
    "edge_preference_key",
    "PlanAssembler",
]
