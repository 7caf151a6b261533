"""Apply break plans use case.

Hands each break plan to the transformer registered for its strategy.
Manual plans are surfaced for review unmodified and never transformed.
"""

import structlog

from cycle_breaker.application.dtos.plan_application_dto import (
    AppliedFixDTO,
    ApplyPlansResponse,
)
from cycle_breaker.domain.entities.break_plan import BreakPlan, BreakStrategy
from cycle_breaker.domain.transformers.plan_transformer import (
    PlanTransformerInterface,
    TransformationOutcome,
)

logger = structlog.get_logger(__name__)


class TransformerRegistry:
    """Maps each automatable strategy to the transformer that realizes it."""

    def __init__(self, transformers: list[PlanTransformerInterface] | None = None):
        self._transformers: dict[BreakStrategy, PlanTransformerInterface] = {}
        for transformer in transformers or []:
            self.register(transformer)

    def register(self, transformer: PlanTransformerInterface) -> None:
        """Register a transformer, replacing any previous one for its strategy.

        Raises:
            ValueError: If the transformer claims the MANUAL strategy
        """
        if transformer.strategy is BreakStrategy.MANUAL:
            raise ValueError("Manual plans cannot be transformed automatically")
        self._transformers[transformer.strategy] = transformer

    def get(self, strategy: BreakStrategy) -> PlanTransformerInterface | None:
        return self._transformers.get(strategy)

    def __contains__(self, strategy: object) -> bool:
        return strategy in self._transformers


class ApplyBreakPlansUseCase:
    """Use case for realizing break plans through pluggable transformers.

    A transformer failure (returned or raised) marks only that plan as failed;
    the remaining plans are still applied.
    """

    def __init__(self, registry: TransformerRegistry):
        """Initialize the use case.

        Args:
            registry: Transformers keyed by strategy
        """
        self.registry = registry

    async def execute(
        self, plans: list[BreakPlan], dry_run: bool = False
    ) -> ApplyPlansResponse:
        """Apply every plan in order.

        Args:
            plans: Final plans from the analysis
            dry_run: Ask transformers to describe changes without making them

        Returns:
            ApplyPlansResponse with per-plan outcomes and counts
        """
        response = ApplyPlansResponse(dry_run=dry_run)

        for plan in plans:
            if plan.is_manual:
                response.manual += 1
                response.fixes.append(
                    self._fix(plan, TransformationOutcome(False, plan.rationale))
                )
                continue

            outcome = self._apply_one(plan, dry_run)
            if outcome.success:
                response.applied += 1
            else:
                response.failed += 1
                logger.warning(
                    "Failed to apply break plan",
                    edge=str(plan.broken_edge),
                    strategy=plan.strategy.value,
                    reason=outcome.description,
                )
            response.fixes.append(self._fix(plan, outcome))

        logger.info(
            "Break plans applied",
            applied=response.applied,
            failed=response.failed,
            manual=response.manual,
            dry_run=dry_run,
        )
        return response

    def _apply_one(self, plan: BreakPlan, dry_run: bool) -> TransformationOutcome:
        transformer = self.registry.get(plan.strategy)
        if transformer is None:
            return TransformationOutcome(
                False, f"No transformer registered for {plan.strategy.value}"
            )
        try:
            return transformer.apply(plan, dry_run=dry_run)
        except Exception as e:
            logger.error(
                "Transformer raised",
                strategy=plan.strategy.value,
                edge=str(plan.broken_edge),
                exc_info=True,
            )
            return TransformationOutcome(False, f"Transformer error: {e}")

    @staticmethod
    def _fix(plan: BreakPlan, outcome: TransformationOutcome) -> AppliedFixDTO:
        return AppliedFixDTO(
            cycle=list(plan.cycle.component_ids),
            strategy=plan.strategy.value,
            edge=str(plan.broken_edge) if plan.broken_edge else None,
            success=outcome.success,
            description=outcome.description,
        )
