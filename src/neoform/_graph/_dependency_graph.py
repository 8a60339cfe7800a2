"""Generic dependency graph abstraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._algorithms import CycleError, topological_sort

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


@dataclass(frozen=True, slots=True)
class DependencyGraph[T]:
    """A directed graph of "depends on" relationships between nodes.

    The graph is immutable and generic over the node type. Nodes remember
    the order in which they were added; that order breaks ties in
    :meth:`topological_order`.

    The graph represents "depends on" relationships:
    - predecessors[b] = {a} means "b depends on a"
    - successors[a] = {b} means "a is depended on by b"

    Attributes:
        _order: Every node, in insertion order.
        _predecessors: Mapping from node to its direct dependencies.
        _successors: Mapping from node to nodes that depend on it.

    """

    _order: tuple[T, ...] = ()
    _predecessors: dict[T, frozenset[T]] = field(default_factory=dict)
    _successors: dict[T, frozenset[T]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[T, T]], nodes: Iterable[T] = ()) -> DependencyGraph[T]:
        """Build a graph from (source, target) edges.

        An edge (a, b) means "b depends on a" (a -> b in the DAG).

        Args:
            edges: (source, target) tuples.
            nodes: Nodes to include even when they have no edge. They are
                inserted before the edge endpoints.

        Returns:
            A new DependencyGraph instance.

        Example:
            >>> # b depends on a, c depends on b
            >>> graph = DependencyGraph.from_edges([("a", "b"), ("b", "c")])
            >>> graph.predecessors("b")
            frozenset({'a'})

        """
        predecessors: dict[T, set[T]] = {node: set() for node in nodes}
        successors: dict[T, set[T]] = {node: set() for node in predecessors}

        for src, dst in edges:
            for node in (src, dst):
                predecessors.setdefault(node, set())
                successors.setdefault(node, set())
            predecessors[dst].add(src)
            successors[src].add(dst)

        return cls(
            _order=tuple(predecessors),
            _predecessors={k: frozenset(v) for k, v in predecessors.items()},
            _successors={k: frozenset(v) for k, v in successors.items()},
        )

    @property
    def nodes(self) -> tuple[T, ...]:
        """All nodes in insertion order."""
        return self._order

    def edges(self) -> list[tuple[T, T]]:
        """All (dependency, dependent) pairs, grouped by dependent in node order."""
        rank = {node: index for index, node in enumerate(self._order)}
        return [
            (dependency, node)
            for node in self._order
            for dependency in sorted(self._predecessors[node], key=rank.__getitem__)
        ]

    def predecessors(self, node: T) -> frozenset[T]:
        """Direct dependencies of ``node`` (nodes it depends on)."""
        return self._predecessors.get(node, frozenset())

    def successors(self, node: T) -> frozenset[T]:
        """Direct dependents of ``node`` (nodes that depend on it)."""
        return self._successors.get(node, frozenset())

    def roots(self) -> frozenset[T]:
        """Nodes with no dependencies."""
        return frozenset(n for n in self._order if not self._predecessors[n])

    def leaves(self) -> frozenset[T]:
        """Nodes nothing depends on."""
        return frozenset(n for n in self._order if not self._successors[n])

    def ancestors(self, node: T) -> frozenset[T]:
        """All transitive dependencies of ``node``."""
        return self._reachable(node, self.predecessors)

    def descendants(self, node: T) -> frozenset[T]:
        """All transitive dependents of ``node``."""
        return self._reachable(node, self.successors)

    @staticmethod
    def _reachable(node: T, step: Callable[[T], frozenset[T]]) -> frozenset[T]:
        visited: set[T] = set()
        stack = list(step(node))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(step(current))
        return frozenset(visited)

    def topological_order(self) -> list[T]:
        """Return nodes in topological order (dependencies before dependents).

        Nodes that become ready together keep their insertion order.

        Raises:
            CycleError: If the graph contains a cycle.

        """
        rank = {node: index for index, node in enumerate(self._order)}
        successors = {node: self._successors[node] for node in self._order}
        return topological_sort(successors, key=rank.__getitem__)

    def find_cycle(self) -> list[T] | None:
        """Return one cycle (first node repeated at the end), or ``None``."""
        try:
            self.topological_order()
        except CycleError as e:
            return e.cycle
        return None

    def has_cycle(self) -> bool:
        """Check if the graph contains a cycle."""
        return self.find_cycle() is not None

    def subgraph(self, nodes: frozenset[T]) -> DependencyGraph[T]:
        """Create a subgraph containing only the specified nodes.

        Edges are kept only if both endpoints are in the node set.
        """
        return DependencyGraph(
            _order=tuple(n for n in self._order if n in nodes),
            _predecessors={n: self._predecessors[n] & nodes for n in self._order if n in nodes},
            _successors={n: self._successors[n] & nodes for n in self._order if n in nodes},
        )

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._order)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._predecessors
