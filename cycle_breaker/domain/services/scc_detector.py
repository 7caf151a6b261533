"""Strongly connected component detector module.

This module implements Tarjan's algorithm for finding strongly connected
components, the first step in locating circular dependencies.
"""

from dataclasses import dataclass, field
from typing import Iterator

from cycle_breaker.domain.entities.cycle import StronglyConnectedComponent
from cycle_breaker.domain.entities.graph import Graph


@dataclass
class _TarjanState:
    """Working state of one traversal."""

    index_counter: int = 0
    stack: list[str] = field(default_factory=list)
    lowlinks: dict[str, int] = field(default_factory=dict)
    index: dict[str, int] = field(default_factory=dict)
    on_stack: set[str] = field(default_factory=set)
    sccs: list[list[str]] = field(default_factory=list)

    def visit(self, node: str) -> None:
        # Set the depth index for node to the smallest unused index
        self.index[node] = self.index_counter
        self.lowlinks[node] = self.index_counter
        self.index_counter += 1
        self.stack.append(node)
        self.on_stack.add(node)


class SccDetector:
    """Implements Tarjan's algorithm for finding strongly connected components.

    The depth-first traversal is iterative (an explicit work stack replaces
    recursion) so long dependency chains cannot exhaust the interpreter's
    recursion limit. Roots are visited in ascending id order, which makes the
    result independent of input edge order.

    Time Complexity: O(V + E) where V = components, E = edges
    Space Complexity: O(V)
    """

    def detect(self, graph: Graph) -> list[StronglyConnectedComponent]:
        """Compute every strongly connected component of the graph.

        Args:
            graph: Validated dependency graph

        Returns:
            All SCCs (trivial ones included), sorted by their minimum
            component id, each with members sorted by id
        """
        state = _TarjanState()

        for root in graph.component_ids:
            if root not in state.index:
                self._strongconnect(root, graph, state)

        components = [
            StronglyConnectedComponent(
                member_ids=tuple(sorted(members)),
                has_self_loop=len(members) == 1 and graph.has_self_loop(members[0]),
            )
            for members in state.sccs
        ]
        components.sort(key=lambda scc: scc.min_id)
        return components

    def detect_non_trivial(self, graph: Graph) -> list[StronglyConnectedComponent]:
        """Only the SCCs that contain at least one cycle."""
        return [scc for scc in self.detect(graph) if not scc.is_trivial]

    def _strongconnect(self, root: str, graph: Graph, state: _TarjanState) -> None:
        """Iterative equivalent of Tarjan's recursive strongconnect(root).

        Args:
            root: Unvisited component to start from
            graph: Complete graph
            state: Shared traversal state
        """
        state.visit(root)
        work: list[tuple[str, Iterator[str]]] = [
            (root, iter(graph.successors(root)))
        ]

        while work:
            node, successors = work[-1]
            descended = False

            # Consider successors of node
            for successor in successors:
                if successor not in state.index:
                    # Successor has not yet been visited; descend into it
                    state.visit(successor)
                    work.append((successor, iter(graph.successors(successor))))
                    descended = True
                    break
                if successor in state.on_stack:
                    # Successor is in stack and hence in the current SCC
                    state.lowlinks[node] = min(
                        state.lowlinks[node], state.index[successor]
                    )

            if descended:
                continue

            # All successors done: return to the caller frame
            work.pop()
            if work:
                parent = work[-1][0]
                state.lowlinks[parent] = min(
                    state.lowlinks[parent], state.lowlinks[node]
                )

            # If node is a root node, pop the stack and generate an SCC
            if state.lowlinks[node] == state.index[node]:
                scc = []
                while True:
                    w = state.stack.pop()
                    state.on_stack.remove(w)
                    scc.append(w)
                    if w == node:
                        break
                state.sccs.append(scc)
