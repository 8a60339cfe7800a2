"""Tests for the neoform command line interface."""

import json
import textwrap
import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from neoform._cli.main import app

runner = CliRunner()

SCHEMA = """
    import neoform as nf

    person = nf.NodeType(
        label="Person",
        properties=[nf.Property(name="id", type=nf.PropertyType.STRING, unique=True)],
    )
    company = nf.NodeType(label="Company")
    works_for = nf.RelationshipType(label="WORKS_FOR", source=person, target=company)
"""


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A working directory with one declaration module under graph/."""
    monkeypatch.chdir(tmp_path)
    source = tmp_path / "graph"
    source.mkdir()
    (source / "schema.py").write_text(textwrap.dedent(SCHEMA))
    return tmp_path


class TestBuildCommand:
    def test_script_to_stdout(self, project: Path) -> None:
        result = runner.invoke(app, ["build", "graph"])

        assert result.exit_code == 0, result.output
        assert "// NodeType: Person\nCREATE CONSTRAINT person_id_unique" in result.output
        assert "// RelationshipType: WORKS_FOR" in result.output

    def test_format_from_output_extension(self, project: Path) -> None:
        result = runner.invoke(app, ["build", "graph", "-o", "out/resources.json"])

        assert result.exit_code == 0, result.output
        document = json.loads((project / "out" / "resources.json").read_text())
        assert [entry["label"] for entry in document["nodeTypes"]] == ["Person", "Company"]

    def test_explicit_format_wins(self, project: Path) -> None:
        result = runner.invoke(app, ["build", "graph", "-o", "resources.txt", "--format", "toml"])

        assert result.exit_code == 0, result.output
        document = tomllib.loads((project / "resources.txt").read_text())
        assert document["relationshipTypes"][0]["source"] == "Person"

    def test_uses_config(self, project: Path) -> None:
        (project / "pyproject.toml").write_text('[tool.neoform]\nsource = "graph"\noutput = "build/graph.toml"\n')

        result = runner.invoke(app, ["build"])

        assert result.exit_code == 0, result.output
        assert tomllib.loads((project / "build" / "graph.toml").read_text())["nodeTypes"][1] == {"label": "Company"}

    def test_invalid_config(self, project: Path) -> None:
        (project / "pyproject.toml").write_text('[tool.neoform]\nformat = "yaml"\n')

        result = runner.invoke(app, ["build", "graph"])

        assert result.exit_code == 1
        assert "Invalid [tool.neoform].format" in result.output

    def test_cycle_fails(self, project: Path) -> None:
        (project / "graph" / "loop.py").write_text(
            "import neoform as nf\na = nf.Schema(name='a', node_types=[b])\nb = nf.Schema(name='b', node_types=[a])\n",
        )

        result = runner.invoke(app, ["build", "graph"])

        assert result.exit_code == 1
        assert "Dependency cycle detected" in result.output

    def test_nothing_to_build(self, project: Path) -> None:
        (project / "empty").mkdir()

        result = runner.invoke(app, ["build", "empty"])

        assert result.exit_code == 0
        assert "No resources found" in result.output

    def test_missing_directory(self, project: Path) -> None:
        result = runner.invoke(app, ["build", "missing"])

        assert result.exit_code == 1
        assert "Cannot scan" in result.output


class TestListCommand:
    def test_lists_resources(self, project: Path) -> None:
        result = runner.invoke(app, ["list", "graph"])

        assert result.exit_code == 0, result.output
        assert "WORKS_FOR" in result.output
        assert "Total: 3 resources" in result.output


class TestLintCommand:
    def test_clean(self, project: Path) -> None:
        result = runner.invoke(app, ["lint", "graph"])

        assert result.exit_code == 0, result.output
        assert "No issues found" in result.output

    def test_errors_fail(self, project: Path) -> None:
        (project / "graph" / "analytics.py").write_text("import neoform as nf\nrank = nf.PageRank(name='rank')\n")

        result = runner.invoke(app, ["lint", "graph"])

        assert result.exit_code == 1
        assert "NF015" in result.output

    def test_warnings_pass(self, project: Path) -> None:
        (project / "graph" / "tags.py").write_text("import neoform as nf\ntag = nf.NodeType(label='tag')\n")

        result = runner.invoke(app, ["lint", "graph", "--errors-only"])

        assert result.exit_code == 0, result.output
        assert "NF003" not in result.output


class TestGraphCommand:
    def test_dot(self, project: Path) -> None:
        result = runner.invoke(app, ["graph", "graph"])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("digraph dependencies {\n")
        assert '"RelationshipType:WORKS_FOR" -> "NodeType:Person";' in result.output

    def test_mermaid(self, project: Path) -> None:
        result = runner.invoke(app, ["graph", "graph", "--format", "mermaid"])

        assert result.exit_code == 0, result.output
        assert "  RelationshipType_WORKS_FOR --> NodeType_Company" in result.output

    def test_tree(self, project: Path) -> None:
        result = runner.invoke(app, ["graph", "graph", "--format", "tree"])

        assert result.exit_code == 0, result.output
        assert "Dependencies" in result.output


class TestDiffCommand:
    def test_json(self, project: Path) -> None:
        new = project / "graph_v2"
        new.mkdir()
        (new / "schema.py").write_text(
            "import neoform as nf\nperson = nf.NodeType(label='Person')\nteam = nf.NodeType(label='Team')\n",
        )

        result = runner.invoke(app, ["diff", "graph", "graph_v2", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [entry["name"] for entry in data["added"]] == ["Team"]
        assert [entry["name"] for entry in data["removed"]] == ["Company", "WORKS_FOR"]
        assert data["modified"][0]["changes"] == [{"field": "properties", "old": "1", "new": "0"}]
        assert data["summary"] == {"added": 1, "removed": 2, "modified": 1, "total": 4}

    def test_no_differences(self, project: Path) -> None:
        result = runner.invoke(app, ["diff", "graph", "graph"])

        assert result.exit_code == 0, result.output
        assert "No differences" in result.output
