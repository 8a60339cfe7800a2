"""Graph algorithms for dependency graph operations."""

from __future__ import annotations

import heapq
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Collection, Hashable, Mapping, Sequence


class CycleError(ValueError):
    """Raised by :func:`topological_sort` when the graph is not acyclic.

    Attributes:
        cycle: Nodes on one cycle in dependency order, first node repeated at
            the end (``[a, b, a]`` means a depends on b and b on a).

    """

    def __init__(self, cycle: Sequence[Hashable]) -> None:
        self.cycle = list(cycle)
        super().__init__(f"Cycle detected in graph: {' -> '.join(map(str, self.cycle))}")


def _ranks[T: Hashable](successors: Mapping[T, Collection[T]]) -> dict[T, int]:
    """Number nodes in order of first appearance in ``successors``."""
    ranks: dict[T, int] = {}
    for node, deps in successors.items():
        ranks.setdefault(node, len(ranks))
        for dep in deps:
            ranks.setdefault(dep, len(ranks))
    return ranks


def topological_sort[T: Hashable](
    successors: Mapping[T, Collection[T]],
    *,
    key: Callable[[T], int] | None = None,
) -> list[T]:
    """Sort a graph topologically (dependencies before dependents).

    Given a graph represented as a mapping from nodes to their successors
    (nodes that depend on them), return nodes in an order where each node
    appears before all nodes that depend on it. Among nodes that are ready
    at the same time, the one with the smallest ``key`` comes first, so the
    result is fully determined by the input.

    Args:
        successors: Mapping from node to collection of nodes that depend on it.
            An edge (a -> b) means "b depends on a".
        key: Tie-break rank of a node. Defaults to the order in which nodes
            first appear in ``successors``. Ranks must be distinct.

    Returns:
        List of nodes in topological order.

    Raises:
        CycleError: If the graph contains a cycle.

    Example:
        >>> # a -> b -> c means c depends on b, b depends on a
        >>> topological_sort({"a": ["b"], "b": ["c"], "c": []})
        ['a', 'b', 'c']
        >>> topological_sort({"late": [], "early": []}, key=["early", "late"].index)
        ['early', 'late']

    """
    ranks = _ranks(successors)
    rank = key if key is not None else ranks.__getitem__

    indegree: dict[T, int] = dict.fromkeys(ranks, 0)
    for deps in successors.values():
        for dep in set(deps):
            indegree[dep] += 1

    ready = [(rank(node), node) for node, degree in indegree.items() if degree == 0]
    heapq.heapify(ready)
    order: list[T] = []

    while ready:
        _, node = heapq.heappop(ready)
        order.append(node)
        for successor in set(successors.get(node, ())):
            indegree[successor] -= 1
            if indegree[successor] == 0:
                heapq.heappush(ready, (rank(successor), successor))

    if len(order) != len(indegree):
        remaining = {node for node, degree in indegree.items() if degree > 0}
        raise CycleError(_find_cycle(successors, remaining, rank))

    return order


def _find_cycle[T: Hashable](
    successors: Mapping[T, Collection[T]],
    remaining: set[T],
    rank: Callable[[T], int],
) -> list[T]:
    """Walk dependencies inside ``remaining`` until a node repeats.

    Every node left over by Kahn's algorithm still has an unsorted
    dependency, so the walk can always continue and must close a loop.
    """
    predecessors: dict[T, list[T]] = {node: [] for node in remaining}
    for node, deps in successors.items():
        if node not in remaining:
            continue
        for dep in deps:
            if dep in remaining:
                predecessors[dep].append(node)

    path: list[T] = []
    position: dict[T, int] = {}
    node = min(remaining, key=rank)
    while node not in position:
        position[node] = len(path)
        path.append(node)
        node = min(predecessors[node], key=rank)
    return [*path[position[node] :], node]
