"""Tests for DOT, Mermaid, Rich and JSON rendering."""

import json
import textwrap
from pathlib import Path

import pytest
from rich.console import Console

import neoform as nf
from neoform._cli.graph_render import (
    diff_to_json,
    render_diff,
    render_findings,
    render_resource_table,
    render_tree,
    to_dot,
    to_mermaid,
)


@pytest.fixture
def snapshot(tmp_path: Path) -> nf.Snapshot:
    (tmp_path / "decl.py").write_text(
        textwrap.dedent(
            """
            import neoform as nf
            person = nf.NodeType(label="Person")
            knows = nf.RelationshipType(label="KNOWS", source=person, target=person)
            social = nf.NativeProjection(name="social graph", relationship_types=[knows])
            """,
        ),
    )
    return nf.take_snapshot(tmp_path)


def _console() -> Console:
    return Console(record=True, width=120, color_system=None)


class TestToDot:
    def test_nodes_and_edges(self, snapshot: nf.Snapshot) -> None:
        dot = to_dot(snapshot.graph)

        assert dot.startswith("digraph dependencies {\n  rankdir=TB;\n  node [shape=box];\n")
        assert '  "NodeType:Person" [label="Person\\n[NodeType]", style=filled, fillcolor=lightblue];' in dot
        assert '  "RelationshipType:KNOWS" -> "NodeType:Person";' in dot
        assert '  "Projection:social graph" -> "RelationshipType:KNOWS";' in dot
        assert dot.endswith("}\n")


class TestToMermaid:
    def test_ids_are_sanitized(self, snapshot: nf.Snapshot) -> None:
        assert to_mermaid(snapshot.graph).splitlines() == [
            "graph TD",
            '  NodeType_Person["Person [NodeType]"]',
            '  RelationshipType_KNOWS["KNOWS [RelationshipType]"]',
            '  Projection_social_graph["social graph [Projection]"]',
            "",
            "  RelationshipType_KNOWS --> NodeType_Person",
            "  Projection_social_graph --> RelationshipType_KNOWS",
        ]


class TestRichRendering:
    def test_tree_nests_dependencies(self, snapshot: nf.Snapshot) -> None:
        console = _console()

        render_tree(snapshot.graph, console)

        text = console.export_text()
        assert text.startswith("Dependencies\n")
        assert text.count("Person") == 3

    def test_resource_table(self, snapshot: nf.Snapshot) -> None:
        console = _console()

        render_resource_table(snapshot.resources, console)

        text = console.export_text()
        assert "social graph" in text
        assert "Total: 3 resources" in text
        assert "Projection (1): In-memory graph projection" in text

    def test_no_findings(self) -> None:
        console = _console()

        render_findings([], console)

        assert "No issues found" in console.export_text()

    def test_findings_table(self) -> None:
        console = _console()
        finding = nf.LintFinding("NF003", nf.Severity.WARNING, "node label 'tag' should be PascalCase", "tag", "x:1")

        render_findings([finding], console)

        text = console.export_text()
        assert "NF003" in text
        assert "warning" in text


class TestDiffRendering:
    def test_diff_output(self, snapshot: nf.Snapshot, tmp_path: Path) -> None:
        other = tmp_path / "v2"
        other.mkdir()
        (other / "decl.py").write_text("import neoform as nf\nperson = nf.NodeType(label='Person')\n")
        result = nf.diff_snapshots(snapshot.resources, nf.scan_dir(other).resources)
        console = _console()

        render_diff(result, console)

        text = console.export_text()
        assert "- RelationshipType KNOWS" in text
        assert "- Projection social graph" in text
        assert "0 added, 0 modified, 2 removed" in text

    def test_diff_to_json(self) -> None:
        data = json.loads(diff_to_json(nf.DiffResult()))

        assert data == {
            "added": [],
            "removed": [],
            "modified": [],
            "summary": {"added": 0, "removed": 0, "modified": 0, "total": 0},
        }
