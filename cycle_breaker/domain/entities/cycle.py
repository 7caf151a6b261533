"""Cycle entities module.

This module defines the results of graph analysis:
- StronglyConnectedComponent: a maximal set of mutually reachable components
- Cycle: an elementary cycle in canonical rotation
- CycleEnumerationResult: the cycles of one SCC plus the truncation flag
"""

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class StronglyConnectedComponent:
    """A strongly connected component computed by the SCC detector.

    Domain invariants:
    - member_ids is non-empty, sorted and free of duplicates
    - a singleton is trivial unless its component has a self-edge

    Attributes:
        member_ids: Component ids in ascending order
        has_self_loop: True if a singleton SCC's component depends on itself
    """

    member_ids: tuple[str, ...]
    has_self_loop: bool = False

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        if not self.member_ids:
            raise ValueError("StronglyConnectedComponent cannot be empty")
        if list(self.member_ids) != sorted(set(self.member_ids)):
            raise ValueError(
                f"member_ids must be sorted and unique, got: {self.member_ids}"
            )

    @property
    def is_trivial(self) -> bool:
        """A single component without a self-edge carries no cycle."""
        return len(self.member_ids) == 1 and not self.has_self_loop

    @property
    def min_id(self) -> str:
        return self.member_ids[0]

    def __len__(self) -> int:
        return len(self.member_ids)

    def __contains__(self, component_id: object) -> bool:
        return component_id in self.member_ids

    def __iter__(self) -> Iterator[str]:
        return iter(self.member_ids)


def canonical_rotation(component_ids: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Rotate a cycle so its smallest id comes first."""
    if not component_ids:
        return ()
    start = min(range(len(component_ids)), key=lambda i: component_ids[i])
    return tuple(component_ids[start:]) + tuple(component_ids[:start])


@dataclass(frozen=True, order=True)
class Cycle:
    """An elementary cycle: [c0, c1, ..., ck-1] with an implied edge ck-1 -> c0.

    Cycles are stored in canonical form (rotated so the smallest id is first),
    so two rotations of the same sequence compare and hash equal. Ordering is
    by first component id, then lexicographically by the remaining sequence.

    Attributes:
        component_ids: Canonical sequence of component ids
    """

    component_ids: tuple[str, ...]

    def __post_init__(self):
        """Canonicalize and validate the sequence."""
        if not self.component_ids:
            raise ValueError("Cycle must contain at least one component")
        if len(set(self.component_ids)) != len(self.component_ids):
            raise ValueError(
                f"Elementary cycle cannot repeat components: {self.component_ids}"
            )
        object.__setattr__(
            self, "component_ids", canonical_rotation(self.component_ids)
        )

    @classmethod
    def of(cls, *component_ids: str) -> "Cycle":
        return cls(tuple(component_ids))

    @property
    def is_self_loop(self) -> bool:
        return len(self.component_ids) == 1

    def hops(self) -> list[tuple[str, str]]:
        """Consecutive (from, to) pairs in cycle order, including the closing hop."""
        ids = self.component_ids
        return [(ids[i], ids[(i + 1) % len(ids)]) for i in range(len(ids))]

    def format(self, short_names: bool = False) -> str:
        """Render the cycle as "A → B → A".

        Args:
            short_names: Show only the part of each id after the last dot

        Returns:
            Human-readable cycle path
        """
        names = [
            cid.rsplit(".", 1)[-1] if short_names else cid
            for cid in self.component_ids
        ]
        return " → ".join(names + [names[0]])

    def __len__(self) -> int:
        return len(self.component_ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self.component_ids)

    def __str__(self) -> str:
        return self.format()


@dataclass
class CycleEnumerationResult:
    """Elementary cycles of one SCC.

    Attributes:
        scc: The SCC that was enumerated
        cycles: Cycles found, sorted canonically
        truncated: True if the max_cycles budget stopped enumeration early;
            cycles then holds only what was found before the budget was hit
    """

    scc: StronglyConnectedComponent
    cycles: list[Cycle] = field(default_factory=list)
    truncated: bool = False
