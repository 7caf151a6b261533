"""Elementary cycle enumerator module.

This module implements Johnson's algorithm for enumerating every elementary
(simple) cycle inside a strongly connected component.
"""

from collections import defaultdict
from typing import Iterator

from cycle_breaker.domain.entities.cycle import (
    Cycle,
    CycleEnumerationResult,
    StronglyConnectedComponent,
    canonical_rotation,
)
from cycle_breaker.domain.entities.graph import Graph


class CycleEnumerator:
    """Enumerates elementary cycles of one SCC with Johnson's algorithm.

    For each start vertex (ascending id order) a depth-first search runs over
    the SCC's induced subgraph restricted to vertices with id >= start, so each
    cycle is discovered exactly once, from its smallest member. A blocked set
    and per-vertex B-lists prune continuations already shown to be fruitless
    and re-activate them once a cycle through them is found.

    Time Complexity: O((V + E) * (C + 1)) where C = number of cycles
    Space Complexity: O(V + E)

    Attributes:
        max_cycles: Optional budget per SCC. When more cycles exist the result
            is flagged truncated; None means no limit.
    """

    def __init__(self, max_cycles: int | None = None):
        """Initialize the enumerator.

        Args:
            max_cycles: Maximum number of cycles to report per SCC

        Raises:
            ValueError: If max_cycles is not positive
        """
        if max_cycles is not None and max_cycles < 1:
            raise ValueError(f"max_cycles must be at least 1, got: {max_cycles}")
        self.max_cycles = max_cycles

    def enumerate(
        self, graph: Graph, scc: StronglyConnectedComponent
    ) -> CycleEnumerationResult:
        """Enumerate the elementary cycles of an SCC.

        Args:
            graph: Full dependency graph
            scc: Component to enumerate (trivial SCCs yield no cycles)

        Returns:
            CycleEnumerationResult with cycles sorted by canonical first id,
            then lexicographically by the remaining sequence
        """
        if scc.is_trivial:
            return CycleEnumerationResult(scc=scc)

        if len(scc) == 1:
            # Self-loop singleton: the only elementary cycle is [id]
            return CycleEnumerationResult(scc=scc, cycles=[Cycle(scc.member_ids)])

        successors = self._induced_subgraph(graph, scc)
        seen: set[tuple[str, ...]] = set()
        cycles: list[Cycle] = []
        truncated = False

        for start in scc.member_ids:
            for path in self._circuits(start, successors):
                canonical = canonical_rotation(path)
                if canonical in seen:
                    continue
                if self.max_cycles is not None and len(cycles) >= self.max_cycles:
                    truncated = True
                    break
                seen.add(canonical)
                cycles.append(Cycle(canonical))
            if truncated:
                break

        cycles.sort()
        return CycleEnumerationResult(scc=scc, cycles=cycles, truncated=truncated)

    def _induced_subgraph(
        self, graph: Graph, scc: StronglyConnectedComponent
    ) -> dict[str, list[str]]:
        """Successor lists keeping only edges whose both endpoints are in the SCC."""
        members = set(scc.member_ids)
        return {
            node: [s for s in graph.successors(node) if s in members]
            for node in scc.member_ids
        }

    def _circuits(
        self, start: str, successors: dict[str, list[str]]
    ) -> Iterator[tuple[str, ...]]:
        """Yield every elementary cycle through start using only ids >= start.

        Iterative form of Johnson's CIRCUIT procedure. Each stack frame holds a
        vertex, an iterator over its remaining successors, and whether a cycle
        has been closed below it.

        Args:
            start: Start vertex, the smallest id allowed on the path
            successors: Induced subgraph of the SCC

        Yields:
            Cycle paths beginning at start
        """

        def allowed(node: str) -> list[str]:
            return [s for s in successors[node] if s >= start]

        blocked: set[str] = {start}
        b_lists: dict[str, set[str]] = defaultdict(set)
        path: list[str] = [start]
        frames: list[tuple[str, Iterator[str]]] = [(start, iter(allowed(start)))]
        closed: list[bool] = [False]

        while frames:
            node, remaining = frames[-1]
            descended = False

            for successor in remaining:
                if successor == start:
                    yield tuple(path)
                    closed[-1] = True
                elif successor not in blocked:
                    path.append(successor)
                    blocked.add(successor)
                    frames.append((successor, iter(allowed(successor))))
                    closed.append(False)
                    descended = True
                    break

            if descended:
                continue

            # Node exhausted: unblock it if a cycle went through it, otherwise
            # park it on the B-list of each successor until one of them unblocks
            found = closed.pop()
            if found:
                self._unblock(node, blocked, b_lists)
            else:
                for successor in allowed(node):
                    b_lists[successor].add(node)

            frames.pop()
            path.pop()
            if closed:
                closed[-1] = closed[-1] or found

    @staticmethod
    def _unblock(node: str, blocked: set[str], b_lists: dict[str, set[str]]) -> None:
        """Unblock node and, transitively, everything parked on its B-list."""
        pending = {node}
        while pending:
            current = pending.pop()
            if current in blocked:
                blocked.remove(current)
                pending.update(b_lists[current])
                b_lists[current].clear()
