"""Application DTOs - Data transfer objects for use cases."""

from cycle_breaker.application.dtos.cycle_analysis_dto import (
    BreakPlanDTO,
    ComponentDTO,
    CycleAnalysisRequest,
    CycleAnalysisResponse,
    EdgeDTO,
    EdgeRefDTO,
    PlanValidationResponse,
    SccInfo,
)
from cycle_breaker.application.dtos.plan_application_dto import (
    AppliedFixDTO,
    ApplyPlansResponse,
)

__all__ = [
    # Analysis
    "ComponentDTO",
    "EdgeDTO",
    "CycleAnalysisRequest",
    "CycleAnalysisResponse",
    "SccInfo",
    "BreakPlanDTO",
    "EdgeRefDTO",
    "PlanValidationResponse",
    # Application of plans
    "AppliedFixDTO",
    "ApplyPlansResponse",
]
