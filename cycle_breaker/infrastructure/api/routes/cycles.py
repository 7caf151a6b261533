"""
Cycle analysis API routes.

Implements the REST API for circular dependency analysis and plan validation.
"""

import time
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status

from cycle_breaker.application.dtos.cycle_analysis_dto import (
    ComponentDTO,
    CycleAnalysisRequest,
    EdgeDTO,
)
from cycle_breaker.application.use_cases.analyze_circular_dependencies import (
    AnalyzeCircularDependenciesUseCase,
)
from cycle_breaker.application.use_cases.validate_break_plans import (
    ValidateBreakPlansUseCase,
)
from cycle_breaker.domain.exceptions import GraphError
from cycle_breaker.infrastructure.api.dependencies import (
    get_analyze_circular_dependencies_use_case,
    get_validate_break_plans_use_case,
)
from cycle_breaker.infrastructure.api.schemas.cycle_analysis_schema import (
    CycleAnalysisApiRequest,
    CycleAnalysisApiResponse,
    PlanValidationApiResponse,
)
from cycle_breaker.infrastructure.api.schemas.error_schema import ProblemDetails
from cycle_breaker.infrastructure.observability.metrics import (
    record_analysis_response,
    record_analysis_run,
)

router = APIRouter()

ERROR_RESPONSES = {
    400: {
        "model": ProblemDetails,
        "description": "Malformed graph or unknown strategy / injection kind",
    },
    422: {"model": ProblemDetails, "description": "Request schema validation failed"},
    500: {"model": ProblemDetails, "description": "Internal server error"},
}


def to_analysis_request(request: CycleAnalysisApiRequest) -> CycleAnalysisRequest:
    """Convert the API model to the application request DTO."""
    return CycleAnalysisRequest(
        components=[
            ComponentDTO(
                id=c.id,
                kind=c.kind,
                has_extractable_surface=c.has_extractable_surface,
            )
            for c in request.components
        ],
        edges=[
            EdgeDTO(
                source=e.source,
                target=e.target,
                injection_kind=e.injection_kind,
                mutable=e.mutable,
            )
            for e in request.edges
        ],
        forced_strategy=request.forced_strategy,
        max_cycles=request.max_cycles,
    )


@router.post(
    "/analyze",
    response_model=CycleAnalysisApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Analyze circular dependencies",
    description=(
        "Detect strongly connected components, enumerate their elementary "
        "cycles and return an ordered list of break plans"
    ),
    responses={200: {"description": "Analysis completed"}, **ERROR_RESPONSES},
)
async def analyze_cycles(
    request: CycleAnalysisApiRequest,
    use_case: AnalyzeCircularDependenciesUseCase = Depends(
        get_analyze_circular_dependencies_use_case
    ),
) -> CycleAnalysisApiResponse:
    """
    Analyze a dependency graph and plan how to break its cycles.

    Each plan names one edge to break and a strategy: lazy_injection,
    interface_extraction, method_extraction, or manual when no automated
    strategy is feasible. Plans are ordered by strategy priority, then by
    cycle. An edge shared by several cycles appears in one plan.
    """
    start_time = time.perf_counter()
    try:
        result = await use_case.execute(to_analysis_request(request))
    except GraphError:
        # Rendered by the GraphError exception handler
        record_analysis_run("invalid_graph", time.perf_counter() - start_time)
        raise
    except ValueError as e:
        record_analysis_run("invalid_request", time.perf_counter() - start_time)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    record_analysis_response(result, time.perf_counter() - start_time)
    return CycleAnalysisApiResponse(**asdict(result))


@router.post(
    "/validate",
    response_model=PlanValidationApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Validate break plans",
    description=(
        "Analyze the graph, remove every planned broken edge and report the "
        "strongly connected components that remain"
    ),
    responses={200: {"description": "Validation completed"}, **ERROR_RESPONSES},
)
async def validate_plans(
    request: CycleAnalysisApiRequest,
    use_case: ValidateBreakPlansUseCase = Depends(get_validate_break_plans_use_case),
) -> PlanValidationApiResponse:
    """
    Check that the computed plans break every automatable cycle.

    `uncovered_sccs` lists components still cyclic after the automated plans
    are applied; an empty list means only manual-review cycles remain.
    """
    try:
        result = await use_case.execute(to_analysis_request(request))
    except GraphError:
        raise
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    return PlanValidationApiResponse(
        **asdict(result),
        all_automated_cycles_broken=result.all_automated_cycles_broken,
    )
