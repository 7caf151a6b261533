"""
Pydantic schemas for the cycle analysis API endpoints.

These schemas define the API request/response contracts and provide validation.
They are separate from application layer DTOs (which use dataclasses). The
CLI reads graph files through the same request model.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ============================================================================
# Request Schemas
# ============================================================================


class ComponentApiModel(BaseModel):
    """A component (class, service, module) in the dependency graph."""

    id: str = Field(..., min_length=1, description="Unique component identifier")
    kind: str = Field("class", description="Opaque component tag, passed through")
    has_extractable_surface: bool = Field(
        False,
        description="Whether an interface can be extracted from this component",
    )


class DependencyEdgeApiModel(BaseModel):
    """A dependency edge: `source` holds a reference to `target`."""

    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(
        ...,
        validation_alias=AliasChoices("source", "from"),
        description="Dependent component id",
    )
    target: str = Field(
        ...,
        validation_alias=AliasChoices("target", "to"),
        description="Dependency component id",
    )
    injection_kind: str = Field(
        ..., description="How the reference is bound: constructor, field or setter"
    )
    mutable: bool = Field(
        True, description="Whether the binding can be changed after construction"
    )


class CycleAnalysisApiRequest(BaseModel):
    """Request to analyze a dependency graph for cycles."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "components": [
                    {"id": "app.OrderService", "has_extractable_surface": True},
                    {"id": "app.PaymentService"},
                ],
                "edges": [
                    {
                        "source": "app.OrderService",
                        "target": "app.PaymentService",
                        "injection_kind": "constructor",
                        "mutable": False,
                    },
                    {
                        "source": "app.PaymentService",
                        "target": "app.OrderService",
                        "injection_kind": "field",
                        "mutable": True,
                    },
                ],
            }
        }
    )

    components: list[ComponentApiModel] = Field(
        default_factory=list, description="Graph components"
    )
    edges: list[DependencyEdgeApiModel] = Field(
        default_factory=list, description="Dependency edges"
    )
    forced_strategy: str | None = Field(
        None,
        description=(
            "Apply this strategy to every cycle: lazy_injection, "
            "interface_extraction, method_extraction or manual"
        ),
    )
    max_cycles: int | None = Field(
        None, ge=1, description="Maximum cycles enumerated per SCC"
    )


# ============================================================================
# Response Schemas
# ============================================================================


class EdgeRefApiModel(BaseModel):
    """Physical edge chosen for breaking."""

    source: str
    target: str
    injection_kind: str


class SccApiModel(BaseModel):
    """A non-trivial strongly connected component."""

    member_ids: list[str] = Field(..., description="Component ids in ascending order")
    cycle_count: int = Field(..., ge=0, description="Elementary cycles enumerated")
    truncated: bool = Field(
        False, description="Enumeration stopped at the max_cycles budget"
    )


class BreakPlanApiModel(BaseModel):
    """Plan for breaking one or more cycles at a single edge."""

    cycle: list[str] = Field(..., description="Primary cycle, smallest id first")
    broken_edge: EdgeRefApiModel | None = Field(
        None, description="Edge to break (null for manual)"
    )
    strategy: str
    rationale: str
    additional_cycles: list[list[str]] = Field(
        default_factory=list,
        description="Other cycles resolved by breaking the same edge",
    )


class CycleAnalysisApiResponse(BaseModel):
    """Response from cycle analysis."""

    component_count: int
    edge_count: int
    sccs: list[SccApiModel] = Field(default_factory=list)
    cycles: list[list[str]] = Field(default_factory=list)
    plans: list[BreakPlanApiModel] = Field(default_factory=list)
    truncated_sccs: list[list[str]] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class PlanValidationApiResponse(BaseModel):
    """Response from plan validation."""

    removed_edges: list[EdgeRefApiModel] = Field(default_factory=list)
    remaining_sccs: list[list[str]] = Field(default_factory=list)
    uncovered_sccs: list[list[str]] = Field(
        default_factory=list,
        description="SCCs that survive edge removal without a manual cycle",
    )
    manual_cycles: list[list[str]] = Field(default_factory=list)
    all_automated_cycles_broken: bool
