"""Tests for combined script and document output."""

import pytest

import neoform as nf
from neoform._errors import UnknownResourceError


class TestToScriptBatch:
    def test_headers_and_blocks(self) -> None:
        resources = [
            nf.NodeType(label="Person", properties=[nf.Property(name="id", type=nf.PropertyType.STRING, unique=True)]),
            nf.NativeProjection(name="social", node_labels=["Person"]),
            nf.PageRank(name="influence", graph_name="social"),
        ]

        script = nf.to_script_batch(resources)

        assert script.startswith(
            "// NodeType: Person\n"
            "CREATE CONSTRAINT person_id_unique IF NOT EXISTS FOR (n:Person) REQUIRE n.id IS UNIQUE;\n\n"
            "// Projection: social\n"
            "CALL gds.graph.project(\n"
        )
        assert "\n\n// Algorithm: influence (PageRank, Centrality)\nCALL gds.pageRank.stream(\n" in script
        assert script.endswith("YIELD nodeId, score;\n")

    def test_empty_encoding_keeps_header(self) -> None:
        assert nf.to_script_batch([nf.NodeType(label="Tag")]) == "// NodeType: Tag\n"

    def test_multiline_name_stays_commented(self) -> None:
        script = nf.to_script_batch([nf.Schema(name="notes\nv2")])

        assert script == "// Schema: notes\n// v2\n// Schema: notes\n// v2\n"

    def test_no_resources(self) -> None:
        assert nf.to_script_batch([]) == ""

    def test_drop_existing_graphs(self) -> None:
        projection = nf.NativeProjection(name="social", graph_name="social_graph", node_labels=["Person"])

        lines = nf.to_script_batch([projection], drop_existing_graphs=True).splitlines()

        assert lines[:3] == [
            "// Projection: social",
            "CALL gds.graph.drop('social_graph', false) YIELD graphName;",
            "CALL gds.graph.project(",
        ]

    def test_failure_returns_nothing(self) -> None:
        with pytest.raises(nf.SerializationError):
            nf.to_script_batch([nf.NodeType(label="Person"), nf.PageRank(name="orphan")])

    def test_rejects_non_resources(self) -> None:
        with pytest.raises(UnknownResourceError, match="Property"):
            nf.to_script_batch([nf.Property(name="id", type=nf.PropertyType.STRING)])


class TestToDocumentBatch:
    def test_kinds_in_registry_order(self) -> None:
        resources = [
            nf.Schema(name="network"),
            nf.PageRank(name="influence", graph_name="social"),
            nf.NodeType(label="Person"),
            nf.NodeType(label="Company"),
        ]

        document = nf.to_document_batch(resources)

        assert list(document) == ["nodeTypes", "algorithms", "schemas"]
        assert [entry["label"] for entry in document["nodeTypes"]] == ["Person", "Company"]

    def test_empty(self) -> None:
        assert nf.to_document_batch([]) == {}

    def test_single_resource(self) -> None:
        assert nf.to_document(nf.NodeType(label="Person")) == {"label": "Person"}
        assert nf.to_script(nf.Schema(name="network")) == "// Schema: network"
