"""Recommendation transformer.

Default PlanTransformerInterface implementation: it does not rewrite source,
it renders the concrete fix a developer (or a language-specific rewriter)
should make for each plan.
"""

from cycle_breaker.application.use_cases.apply_break_plans import TransformerRegistry
from cycle_breaker.domain.entities.break_plan import BreakPlan, BreakStrategy
from cycle_breaker.domain.entities.dependency_edge import InjectionKind
from cycle_breaker.domain.transformers.plan_transformer import (
    PlanTransformerInterface,
    TransformationOutcome,
)

_LAZY_FIXES = {
    InjectionKind.FIELD: "Defer the field binding of {target} in {source} (lazy proxy)",
    InjectionKind.SETTER: "Defer the setter argument {target} in {source} (lazy proxy)",
    InjectionKind.CONSTRUCTOR: (
        "Defer the constructor argument {target} in {source} (lazy proxy), "
        "or convert it to deferred setter injection"
    ),
}


class RecommendationTransformer(PlanTransformerInterface):
    """Describes the rewrite for one strategy without touching source files."""

    def __init__(self, strategy: BreakStrategy):
        if strategy is BreakStrategy.MANUAL:
            raise ValueError("Manual plans have no recommended rewrite")
        self._strategy = strategy

    @property
    def strategy(self) -> BreakStrategy:
        return self._strategy

    def apply(self, plan: BreakPlan, dry_run: bool = False) -> TransformationOutcome:
        if plan.strategy is not self._strategy or plan.broken_edge is None:
            return TransformationOutcome(
                False,
                f"{self._strategy.value} transformer cannot realize a "
                f"{plan.strategy.value} plan",
            )
        return TransformationOutcome(True, self.describe(plan))

    def describe(self, plan: BreakPlan) -> str:
        edge = plan.broken_edge
        source, target = edge.source_id, edge.target_id

        if self._strategy is BreakStrategy.LAZY_INJECTION:
            text = _LAZY_FIXES[edge.injection_kind].format(source=source, target=target)
        elif self._strategy is BreakStrategy.INTERFACE_EXTRACTION:
            text = (
                f"Extract an interface from {target} and make {source} depend "
                f"on the interface instead of {target}"
            )
        else:
            text = (
                f"Move the members of {target} used by {source} into a new "
                f"mediator component that both depend on"
            )

        resolved = len(plan.cycles)
        if resolved > 1:
            text += f" (resolves {resolved} cycles)"
        return text


def default_registry() -> TransformerRegistry:
    """Registry with a RecommendationTransformer for every automatable strategy."""
    return TransformerRegistry(
        [RecommendationTransformer(strategy) for strategy in BreakStrategy.automated()]
    )
