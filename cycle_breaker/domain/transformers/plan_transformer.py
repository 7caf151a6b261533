"""Plan transformer interface module.

This module defines the abstract boundary to the code-transformation
collaborator. Each automatable BreakStrategy is realized by one transformer;
implementations decide how a rewrite looks for a particular language or
injection framework.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cycle_breaker.domain.entities.break_plan import BreakPlan, BreakStrategy


@dataclass(frozen=True)
class TransformationOutcome:
    """Result of applying one plan.

    Attributes:
        success: True if the transformer realized the plan
        description: What was (or would be) changed
    """

    success: bool
    description: str


class PlanTransformerInterface(ABC):
    """Transformer interface for realizing a BreakPlan.

    Implementations must not mutate the plan and should honor dry_run by
    describing the change without performing it.
    """

    @property
    @abstractmethod
    def strategy(self) -> "BreakStrategy":
        """The strategy this transformer realizes."""
        pass

    @abstractmethod
    def apply(self, plan: "BreakPlan", dry_run: bool = False) -> TransformationOutcome:
        """Realize a plan.

        Args:
            plan: Plan whose strategy matches this transformer
            dry_run: Describe the change without performing it

        Returns:
            TransformationOutcome describing the change
        """
        pass
