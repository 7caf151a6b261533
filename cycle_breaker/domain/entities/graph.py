"""Graph entity module.

This module defines the read-only dependency Graph produced by GraphBuilder
and consumed by every downstream analysis step.
"""

from collections.abc import Iterable, Mapping

from cycle_breaker.domain.entities.component import Component
from cycle_breaker.domain.entities.dependency_edge import DependencyEdge, InjectionKind

# Deterministic ordering of injection kinds inside adjacency lists
_KIND_ORDER = {
    InjectionKind.CONSTRUCTOR: 0,
    InjectionKind.FIELD: 1,
    InjectionKind.SETTER: 2,
}


def adjacency_sort_key(edge: DependencyEdge) -> tuple[str, int]:
    """Sort key for outgoing edges: (target id, injection kind)."""
    return (edge.target_id, _KIND_ORDER[edge.injection_kind])


class Graph:
    """Immutable dependency graph.

    Owns the full set of components (by id) and dependency edges, and exposes
    adjacency lookup. Instances are built once by GraphBuilder (which validates
    the input) and never mutated afterwards.

    Attributes:
        components: Map of component id -> Component
        edges: All edges, sorted by (source_id, target_id, injection_kind)
    """

    def __init__(
        self,
        components: Mapping[str, Component],
        adjacency: Mapping[str, list[DependencyEdge]],
    ):
        """Initialize the graph from already-validated parts.

        Args:
            components: Map of component id -> Component
            adjacency: Map of source id -> outgoing edges sorted by
                (target_id, injection_kind)
        """
        self._components: dict[str, Component] = dict(components)
        self._adjacency: dict[str, tuple[DependencyEdge, ...]] = {
            component_id: tuple(adjacency.get(component_id, ()))
            for component_id in self._components
        }
        self._component_ids: tuple[str, ...] = tuple(sorted(self._components))

    @property
    def components(self) -> Mapping[str, Component]:
        return dict(self._components)

    @property
    def component_ids(self) -> tuple[str, ...]:
        """All component ids in ascending order."""
        return self._component_ids

    @property
    def edges(self) -> list[DependencyEdge]:
        return [
            edge
            for component_id in self._component_ids
            for edge in self._adjacency[component_id]
        ]

    @property
    def edge_count(self) -> int:
        return sum(len(out) for out in self._adjacency.values())

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._components

    def component(self, component_id: str) -> Component:
        """Get a component by id.

        Raises:
            KeyError: If the component is not part of the graph
        """
        return self._components[component_id]

    def outgoing(self, component_id: str) -> tuple[DependencyEdge, ...]:
        """Outgoing edges of a component, sorted by (target id, injection kind)."""
        return self._adjacency.get(component_id, ())

    def successors(self, component_id: str) -> list[str]:
        """Distinct successor ids of a component, in ascending order."""
        seen: list[str] = []
        for edge in self.outgoing(component_id):
            if not seen or seen[-1] != edge.target_id:
                seen.append(edge.target_id)
        return seen

    def edges_between(self, source_id: str, target_id: str) -> list[DependencyEdge]:
        """All physical edges from source_id to target_id (one per injection kind)."""
        return [e for e in self.outgoing(source_id) if e.target_id == target_id]

    def has_edge(self, source_id: str, target_id: str) -> bool:
        return any(e.target_id == target_id for e in self.outgoing(source_id))

    def has_self_loop(self, component_id: str) -> bool:
        return self.has_edge(component_id, component_id)

    def without_edges(self, removed: Iterable[DependencyEdge]) -> "Graph":
        """Return a new Graph with the given physical edges removed.

        Components are kept even if they lose all their edges.
        """
        removed_keys = {edge.key for edge in removed}
        adjacency = {
            component_id: [e for e in out if e.key not in removed_keys]
            for component_id, out in self._adjacency.items()
        }
        return Graph(self._components, adjacency)

    def __repr__(self) -> str:
        return f"Graph(components={len(self)}, edges={self.edge_count})"
