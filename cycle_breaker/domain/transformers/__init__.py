"""Transformer interfaces - Boundary to the code-rewriting collaborator."""

from cycle_breaker.domain.transformers.plan_transformer import (
    PlanTransformerInterface,
    TransformationOutcome,
)

__all__ = [
    "PlanTransformerInterface",
    "TransformationOutcome",
]
