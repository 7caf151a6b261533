"""Concrete plan transformers."""

from cycle_breaker.infrastructure.transformers.recommendation_transformer import (
    RecommendationTransformer,
    default_registry,
)

__all__ = [
    "RecommendationTransformer",
    "default_registry",
]
