"""Dependency graph abstractions.

This module contains:
- DependencyGraph[T]: A generic, immutable directed graph
- topological_sort: Kahn's algorithm with deterministic tie-breaking
- ResourceGraph: The graph over discovered resources used by build, lint and diff
"""

from ._algorithms import CycleError, topological_sort
from ._dependency_graph import DependencyGraph
from ._resource_graph import DanglingReference, ResourceGraph, new_dependency_graph

__all__ = [
    "CycleError",
    "DanglingReference",
    "DependencyGraph",
    "ResourceGraph",
    "new_dependency_graph",
    "topological_sort",
]
