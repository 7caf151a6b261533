"""DependencyEdge entity module.

This module defines the DependencyEdge entity representing a directed
"depends on" relationship between two components.
"""

from dataclasses import dataclass
from enum import Enum


class InjectionKind(str, Enum):
    """Mechanism through which a dependency is injected."""

    CONSTRUCTOR = "constructor"
    FIELD = "field"
    SETTER = "setter"


@dataclass(frozen=True)
class DependencyEdge:
    """Represents a directed edge from a dependent component to its dependency.

    Domain invariants:
    - source_id and target_id must be non-empty
    - an edge is identified by (source_id, target_id, injection_kind); a
      component may depend on another through several mechanisms
    - self-edges (source_id == target_id) are legal

    Attributes:
        source_id: Id of the component that holds the dependency
        target_id: Id of the component being depended upon
        injection_kind: How the dependency is injected
        mutable: True if the binding can be changed after construction
            (False for final/immutable constructor parameters)
    """

    source_id: str
    target_id: str
    injection_kind: InjectionKind
    mutable: bool = True

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        if not self.source_id or not self.target_id:
            raise ValueError(
                "DependencyEdge requires non-empty source_id and target_id, "
                f"got: ({self.source_id!r}, {self.target_id!r})"
            )
        if not isinstance(self.injection_kind, InjectionKind):
            # Accept raw values ("field", "FIELD") from the front end
            object.__setattr__(
                self, "injection_kind", InjectionKind(str(self.injection_kind).lower())
            )

    @property
    def key(self) -> tuple[str, str, InjectionKind]:
        """Physical identity of the edge."""
        return (self.source_id, self.target_id, self.injection_kind)

    @property
    def is_self_loop(self) -> bool:
        """True if the edge starts and ends at the same component."""
        return self.source_id == self.target_id

    def __str__(self) -> str:
        return (
            f"{self.source_id} -> {self.target_id} "
            f"({self.injection_kind.value}{'' if self.mutable else ', immutable'})"
        )
