"""Application use cases - Orchestration of the domain services."""

from cycle_breaker.application.use_cases.analyze_circular_dependencies import (
    AnalyzeCircularDependenciesUseCase,
    CycleAnalysis,
)
from cycle_breaker.application.use_cases.apply_break_plans import (
    ApplyBreakPlansUseCase,
    TransformerRegistry,
)
from cycle_breaker.application.use_cases.validate_break_plans import (
    ValidateBreakPlansUseCase,
)

__all__ = [
    "AnalyzeCircularDependenciesUseCase",
    "CycleAnalysis",
    "ValidateBreakPlansUseCase",
    "ApplyBreakPlansUseCase",
    "TransformerRegistry",
]
