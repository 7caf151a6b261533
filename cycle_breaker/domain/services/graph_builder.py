"""Graph builder module.

This module defines the GraphBuilder service that assembles a validated,
read-only Graph from the flat component and edge lists supplied by the
source-analysis front end.
"""

from collections import defaultdict
from collections.abc import Iterable

from cycle_breaker.domain.entities.component import Component
from cycle_breaker.domain.entities.dependency_edge import DependencyEdge
from cycle_breaker.domain.entities.graph import Graph, adjacency_sort_key
from cycle_breaker.domain.exceptions import (
    DanglingReferenceError,
    DuplicateComponentError,
    DuplicateEdgeError,
)


class GraphBuilder:
    """Domain service that validates input and builds a Graph.

    Validation is fail-fast: the first malformed element raises and no graph
    is produced, so no analysis ever runs on partial input.
    """

    def build(
        self,
        edges: Iterable[DependencyEdge],
        components: Iterable[Component],
    ) -> Graph:
        """Build a Graph from edges and components.

        Args:
            edges: Dependency edges in any order
            components: Every component referenced by the edges

        Returns:
            Graph with adjacency lists sorted by (target id, injection kind)

        Raises:
            DuplicateComponentError: If a component id appears twice
            DuplicateEdgeError: If a (from, to, injection_kind) triple repeats
            DanglingReferenceError: If an edge names an unknown component
        """
        by_id: dict[str, Component] = {}
        for component in components:
            if component.id in by_id:
                raise DuplicateComponentError(component.id)
            by_id[component.id] = component

        seen_keys: set[tuple] = set()
        adjacency: dict[str, list[DependencyEdge]] = defaultdict(list)

        for edge in edges:
            for endpoint in (edge.source_id, edge.target_id):
                if endpoint not in by_id:
                    raise DanglingReferenceError(
                        endpoint, edge.source_id, edge.target_id
                    )

            if edge.key in seen_keys:
                raise DuplicateEdgeError(
                    edge.source_id, edge.target_id, edge.injection_kind.value
                )
            seen_keys.add(edge.key)
            adjacency[edge.source_id].append(edge)

        for outgoing in adjacency.values():
            outgoing.sort(key=adjacency_sort_key)

        return Graph(by_id, adjacency)
