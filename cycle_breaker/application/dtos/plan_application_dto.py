"""Plan application DTOs.

This module defines data transfer objects for handing break plans to the
registered transformers.
"""

from dataclasses import dataclass, field


@dataclass
class AppliedFixDTO:
    """Outcome of a single plan.

    Attributes:
        cycle: Primary cycle of the plan
        strategy: Strategy value
        edge: "from -> to (kind)" or None for manual plans
        success: True if the transformer realized the plan
        description: What was (or would be) changed, or why it was skipped
    """

    cycle: list[str]
    strategy: str
    edge: str | None
    success: bool
    description: str


@dataclass
class ApplyPlansResponse:
    """Aggregate outcome of applying a plan list.

    Attributes:
        dry_run: True if transformers only described their changes
        applied: Plans realized successfully
        failed: Plans a transformer could not realize
        manual: Plans surfaced for human review unmodified
        fixes: Per-plan outcomes in plan order
    """

    dry_run: bool
    applied: int = 0
    failed: int = 0
    manual: int = 0
    fixes: list[AppliedFixDTO] = field(default_factory=list)
