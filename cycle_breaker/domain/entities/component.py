"""Component entity module.

This module defines the Component entity representing a node in the
dependency graph (a class, interface, or module supplied by the front end).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Component:
    """Represents a dependency-injected component.

    Domain invariants:
    - id must be a non-empty string and is the component's identity
    - components are immutable once built

    Attributes:
        id: Unique identifier (e.g., fully qualified class name)
        kind: Opaque tag passed through unexamined (e.g., "class", "interface")
        has_extractable_surface: True if the component exposes at least one
            member usable as an interface boundary
    """

    id: str
    kind: str = "class"
    has_extractable_surface: bool = False

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        if not self.id or not isinstance(self.id, str):
            raise ValueError(
                f"Component id must be a non-empty string, got: {self.id!r}"
            )
