"""Dependency graph over discovered resources."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from neoform._errors import DependencyCycleError

from ._algorithms import CycleError
from ._dependency_graph import DependencyGraph

if TYPE_CHECKING:
    from collections.abc import Iterable

    from neoform._resource import DiscoveredResource, ResourceKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DanglingReference:
    """A dependency naming no discovered resource."""

    resource: DiscoveredResource
    name: str

    def __str__(self) -> str:
        return f"{self.resource.kind} '{self.resource.name}' references unknown '{self.name}'"


@dataclass(frozen=True, slots=True)
class ResourceGraph:
    """Discovered resources together with the graph of their dependencies.

    Nodes are resource keys. Dependencies are names, so a name shared by
    resources of different kinds links to all of them.

    Attributes:
        resources: Resources in discovery order.
        graph: Edge (a, b) means resource b depends on resource a.
        dangling: References to names that were never discovered. They take
            no part in ordering.

    """

    resources: tuple[DiscoveredResource, ...]
    graph: DependencyGraph[ResourceKey]
    dangling: tuple[DanglingReference, ...] = ()

    def resource(self, key: ResourceKey) -> DiscoveredResource:
        """Return the resource with ``key``.

        Raises:
            KeyError: If no resource has this key.

        """
        for resource in self.resources:
            if resource.key == key:
                return resource
        raise KeyError(key)

    def topological_sort(self) -> list[DiscoveredResource]:
        """Order resources so that every dependency precedes its dependents.

        Resources that do not depend on each other keep their discovery order.

        Raises:
            DependencyCycleError: If resources depend on each other in a loop.

        """
        try:
            order = self.graph.topological_order()
        except CycleError as e:
            raise DependencyCycleError([key.name for key in e.cycle]) from e
        by_key = {resource.key: resource for resource in self.resources}
        return [by_key[key] for key in order]

    def edges(self) -> list[tuple[DiscoveredResource, DiscoveredResource]]:
        """All (dependent, dependency) pairs, grouped by dependent in discovery order."""
        by_key = {resource.key: resource for resource in self.resources}
        return [(by_key[dependent], by_key[dependency]) for dependency, dependent in self.graph.edges()]

    def dependencies_of(self, resource: DiscoveredResource, *, transitive: bool = False) -> list[DiscoveredResource]:
        """Resources ``resource`` depends on, in discovery order."""
        keys = self.graph.ancestors(resource.key) if transitive else self.graph.predecessors(resource.key)
        return [r for r in self.resources if r.key in keys]

    def dependents_of(self, resource: DiscoveredResource, *, transitive: bool = False) -> list[DiscoveredResource]:
        """Resources that depend on ``resource``, in discovery order."""
        keys = self.graph.descendants(resource.key) if transitive else self.graph.successors(resource.key)
        return [r for r in self.resources if r.key in keys]

    def __len__(self) -> int:
        return len(self.resources)


def new_dependency_graph(resources: Iterable[DiscoveredResource]) -> ResourceGraph:
    """Build the dependency graph of ``resources``.

    Args:
        resources: Discovered resources in discovery order. That order breaks
            ties when sorting.

    Returns:
        The resource graph. Dependencies on names that match no resource are
        listed in ``dangling`` and otherwise ignored.

    Example:
        >>> graph = new_dependency_graph(scan_dir("examples").resources)
        >>> order = [r.name for r in graph.topological_sort()]
        >>> order.index("Person") < order.index("WORKS_FOR") < order.index("network")
        True

    """
    resources = tuple(resources)
    keys_by_name: dict[str, list[ResourceKey]] = {}
    for resource in resources:
        keys_by_name.setdefault(resource.name, []).append(resource.key)

    edges: list[tuple[ResourceKey, ResourceKey]] = []
    dangling: list[DanglingReference] = []
    for resource in resources:
        for name in resource.dependencies:
            targets = [key for key in keys_by_name.get(name, ()) if key != resource.key]
            if not targets:
                logger.debug("Ignoring dangling reference %s -> %s", resource.key, name)
                dangling.append(DanglingReference(resource, name))
            edges.extend((target, resource.key) for target in targets)

    graph = DependencyGraph.from_edges(edges, nodes=[resource.key for resource in resources])
    return ResourceGraph(resources=resources, graph=graph, dangling=tuple(dangling))
