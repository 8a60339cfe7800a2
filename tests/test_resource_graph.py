"""Tests for the dependency graph over discovered resources."""

from pathlib import Path

import pytest

from neoform._enums import ResourceKind
from neoform._errors import DependencyCycleError
from neoform._graph import new_dependency_graph
from neoform._resource import DiscoveredResource, ResourceKey


def _resource(name: str, kind: ResourceKind = ResourceKind.NODE_TYPE, *dependencies: str) -> DiscoveredResource:
    return DiscoveredResource(
        name=name,
        kind=kind,
        file=Path("decl.py"),
        line=1,
        variable=name.lower(),
        type_name=str(kind),
        dependencies=dependencies,
    )


class TestNewDependencyGraph:
    def test_edges_follow_dependencies(self) -> None:
        person = _resource("Person")
        company = _resource("Company")
        works_for = _resource("WORKS_FOR", ResourceKind.RELATIONSHIP_TYPE, "Person", "Company")

        graph = new_dependency_graph([works_for, person, company])

        assert graph.graph.predecessors(works_for.key) == frozenset({person.key, company.key})
        assert [r.name for r in graph.dependencies_of(works_for)] == ["Person", "Company"]
        assert [r.name for r in graph.dependents_of(person)] == ["WORKS_FOR"]

    def test_unknown_names_are_dangling(self) -> None:
        algorithm = _resource("influence", ResourceKind.ALGORITHM, "missing_graph")

        graph = new_dependency_graph([algorithm])

        assert len(graph.dangling) == 1
        assert graph.dangling[0].name == "missing_graph"
        assert str(graph.dangling[0]) == "Algorithm 'influence' references unknown 'missing_graph'"
        assert graph.topological_sort() == [algorithm]

    def test_shared_name_links_every_kind(self) -> None:
        node = _resource("Person")
        schema = _resource("Person", ResourceKind.SCHEMA)
        retriever = _resource("search", ResourceKind.RETRIEVER, "Person")

        graph = new_dependency_graph([node, schema, retriever])

        assert graph.graph.predecessors(retriever.key) == frozenset({node.key, schema.key})

    def test_own_name_in_another_kind_is_a_dependency(self) -> None:
        node = _resource("Person")
        schema = _resource("Person", ResourceKind.SCHEMA, "Person")

        graph = new_dependency_graph([schema, node])

        assert graph.graph.predecessors(schema.key) == frozenset({node.key})
        assert graph.dangling == ()

    def test_transitive_dependencies(self) -> None:
        person = _resource("Person")
        projection = _resource("social", ResourceKind.PROJECTION, "Person")
        algorithm = _resource("influence", ResourceKind.ALGORITHM, "social")

        graph = new_dependency_graph([person, projection, algorithm])

        assert graph.dependencies_of(algorithm, transitive=True) == [person, projection]
        assert graph.dependents_of(person, transitive=True) == [projection, algorithm]


class TestResourceGraphOrdering:
    def test_dependencies_precede_dependents(self) -> None:
        works_for = _resource("WORKS_FOR", ResourceKind.RELATIONSHIP_TYPE, "Person", "Company")
        person = _resource("Person")
        company = _resource("Company")

        order = [r.name for r in new_dependency_graph([works_for, person, company]).topological_sort()]

        assert order == ["Person", "Company", "WORKS_FOR"]

    def test_independent_resources_keep_discovery_order(self) -> None:
        resources = [_resource(name) for name in ("Zebra", "Apple", "Mango")]

        order = [r.name for r in new_dependency_graph(resources).topological_sort()]

        assert order == ["Zebra", "Apple", "Mango"]

    def test_cycle_raises_with_names(self) -> None:
        a = _resource("a", ResourceKind.ALGORITHM, "b")
        b = _resource("b", ResourceKind.ALGORITHM, "a")

        with pytest.raises(DependencyCycleError) as excinfo:
            new_dependency_graph([a, b]).topological_sort()

        assert excinfo.value.cycle == ("a", "b", "a")
        assert "a -> b -> a" in str(excinfo.value)

    def test_resource_lookup(self) -> None:
        person = _resource("Person")
        graph = new_dependency_graph([person])

        assert graph.resource(ResourceKey(ResourceKind.NODE_TYPE, "Person")) is person
        with pytest.raises(KeyError):
            graph.resource(ResourceKey(ResourceKind.SCHEMA, "Person"))
        assert len(graph) == 1

    def test_edges_are_dependent_dependency_pairs(self) -> None:
        person = _resource("Person")
        projection = _resource("social", ResourceKind.PROJECTION, "Person")

        edges = new_dependency_graph([person, projection]).edges()

        assert edges == [(projection, person)]
