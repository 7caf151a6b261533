"""
RFC 7807 Problem Details error response schemas.

Implements standard error response format for the API.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """
    RFC 7807 Problem Details for HTTP APIs.

    Malformed graphs (duplicate edges, dangling references, duplicate
    components) are reported as 400 with the offending component or edge in
    `field` / `value`.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "type": "urn:cycle-breaker:errors:duplicate-edge",
                    "title": "Duplicate Edge",
                    "status": 400,
                    "detail": "Duplicate edge app.A -> app.B (field)",
                    "instance": "/api/v1/cycles/analyze",
                    "field": "edges",
                    "value": "app.A -> app.B (field)",
                },
                {
                    "type": "urn:cycle-breaker:errors:dangling-reference",
                    "title": "Dangling Reference",
                    "status": 400,
                    "detail": "Edge app.A -> app.Z references unknown component 'app.Z'",
                    "instance": "/api/v1/cycles/analyze",
                    "field": "components",
                    "value": "app.Z",
                },
            ]
        }
    )

    type: str = Field(
        ...,
        description="URI reference that identifies the problem type",
    )
    title: str = Field(..., description="Short, human-readable summary of the problem")
    status: int = Field(..., description="HTTP status code", ge=100, le=599)
    detail: str = Field(
        ..., description="Human-readable explanation specific to this occurrence"
    )
    instance: str = Field(
        ..., description="URI reference that identifies the specific occurrence"
    )
    correlation_id: str | None = Field(
        None, description="Correlation ID for request tracing"
    )
    field: str | None = Field(
        None, description="Part of the graph that caused the error (edges, components)"
    )
    value: Any | None = Field(
        None, description="Offending edge or component id"
    )
