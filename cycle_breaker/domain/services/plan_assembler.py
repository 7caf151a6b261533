"""Plan assembler module.

This module defines the PlanAssembler that reduces per-cycle candidates into
the final, deduplicated and ordered list of break plans.
"""

from collections.abc import Iterable

from cycle_breaker.domain.entities.break_plan import BreakPlan, CandidatePlan


class PlanAssembler:
    """Domain service merging candidates that break the same physical edge.

    Breaking one edge can resolve several overlapping cycles at once, so the
    first candidate naming an edge creates the plan and later candidates on
    the same edge are folded into it. MANUAL candidates have no edge and are
    always emitted on their own.
    """

    def assemble(self, candidates: Iterable[CandidatePlan]) -> list[BreakPlan]:
        """Reduce candidates to the final plan list.

        Args:
            candidates: One candidate per cycle, in any order

        Returns:
            Plans sorted by (strategy priority, canonical cycle), with at most
            one plan per physical edge
        """
        # Enumerator order: smallest canonical cycle first
        ordered = sorted(candidates, key=lambda c: c.cycle.component_ids)

        broken: dict[tuple, BreakPlan] = {}
        manual: list[BreakPlan] = []

        for candidate in ordered:
            if candidate.is_manual:
                manual.append(BreakPlan.from_candidate(candidate))
                continue

            key = candidate.edge.key
            if key in broken:
                broken[key] = broken[key].merged_with(candidate.cycle)
            else:
                broken[key] = BreakPlan.from_candidate(candidate)

        plans = list(broken.values()) + manual
        plans.sort(key=BreakPlan.sort_key)
        return plans
