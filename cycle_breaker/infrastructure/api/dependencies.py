"""
Dependency injection for FastAPI routes.

Provides factory functions for creating use cases with their required dependencies.
Uses FastAPI's Depends() for dependency injection; the CLI calls the same
factories directly.
"""

from fastapi import Depends

from cycle_breaker.application.use_cases.analyze_circular_dependencies import (
    AnalyzeCircularDependenciesUseCase,
)
from cycle_breaker.application.use_cases.apply_break_plans import (
    ApplyBreakPlansUseCase,
)
from cycle_breaker.application.use_cases.validate_break_plans import (
    ValidateBreakPlansUseCase,
)
from cycle_breaker.domain.services.graph_builder import GraphBuilder
from cycle_breaker.domain.services.plan_assembler import PlanAssembler
from cycle_breaker.domain.services.scc_detector import SccDetector
from cycle_breaker.infrastructure.config.settings import get_settings
from cycle_breaker.infrastructure.transformers import default_registry


# Domain service factories


def get_scc_detector() -> SccDetector:
    """Get SccDetector instance."""
    return SccDetector()


# Use case factories


def get_analyze_circular_dependencies_use_case(
    detector: SccDetector = Depends(get_scc_detector),
) -> AnalyzeCircularDependenciesUseCase:
    """Get AnalyzeCircularDependenciesUseCase configured from ANALYSIS_* settings."""
    analysis = get_settings().analysis
    return AnalyzeCircularDependenciesUseCase(
        graph_builder=GraphBuilder(),
        detector=detector,
        assembler=PlanAssembler(),
        max_concurrent_sccs=analysis.max_concurrent_sccs,
        parallel=analysis.parallel,
        default_max_cycles=analysis.max_cycles,
        default_strategy=analysis.forced_strategy,
    )


def get_validate_break_plans_use_case(
    analyze_use_case: AnalyzeCircularDependenciesUseCase = Depends(
        get_analyze_circular_dependencies_use_case
    ),
    detector: SccDetector = Depends(get_scc_detector),
) -> ValidateBreakPlansUseCase:
    """Get ValidateBreakPlansUseCase instance."""
    return ValidateBreakPlansUseCase(
        analyze_use_case=analyze_use_case,
        detector=detector,
    )


def get_apply_break_plans_use_case() -> ApplyBreakPlansUseCase:
    """Get ApplyBreakPlansUseCase with the recommendation transformers."""
    return ApplyBreakPlansUseCase(registry=default_registry())
