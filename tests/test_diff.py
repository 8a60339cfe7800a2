"""Tests for comparing two snapshots."""

import textwrap
from pathlib import Path

import neoform as nf
from neoform import FieldChange, ResourceKind


def _snapshot(root: Path, source: str) -> tuple[nf.DiscoveredResource, ...]:
    root.mkdir()
    (root / "decl.py").write_text("import neoform as nf\n" + textwrap.dedent(source))
    return nf.scan_dir(root).resources


class TestDiffSnapshots:
    def test_added_and_removed(self, tmp_path: Path) -> None:
        old = _snapshot(tmp_path / "v1", "a = nf.NodeType(label='A')\nb = nf.NodeType(label='B')\n")
        new = _snapshot(tmp_path / "v2", "a = nf.NodeType(label='A')\nc = nf.NodeType(label='C')\n")

        result = nf.diff_snapshots(old, new)

        assert [r.name for r in result.added] == ["C"]
        assert [r.name for r in result.removed] == ["B"]
        assert result.modified == ()
        assert result.summary() == {"added": 1, "removed": 1, "modified": 0, "total": 2}

    def test_identical_snapshots(self, tmp_path: Path) -> None:
        source = "a = nf.NodeType(label='A', properties=[nf.Property(name='id', type=nf.PropertyType.STRING)])\n"

        result = nf.diff_snapshots(_snapshot(tmp_path / "v1", source), _snapshot(tmp_path / "v2", source))

        assert result.is_empty
        assert result.summary()["total"] == 0

    def test_field_changes(self, tmp_path: Path) -> None:
        old = _snapshot(
            tmp_path / "v1",
            """
            person = nf.NodeType(label="Person")
            company = nf.NodeType(label="Company")
            knows = nf.RelationshipType(label="KNOWS", source=person, target=person)
            """,
        )
        new = _snapshot(
            tmp_path / "v2",
            """
            person = nf.NodeType(
                label="Person",
                properties=[nf.Property(name="id", type=nf.PropertyType.STRING, unique=True)],
            )
            company = nf.NodeType(label="Company")
            knows = nf.RelationshipType(label="KNOWS", source=person, target=company)
            """,
        )

        result = nf.diff_snapshots(old, new)

        assert [change.name for change in result.modified] == ["KNOWS", "Person"]
        knows, person = result.modified
        assert knows.changes == (FieldChange("target", "Person", "Company"),)
        assert knows.added_dependencies == ("Company",)
        assert knows.removed_dependencies == ()
        assert person.changes == (FieldChange("properties", 0, 1),)
        assert str(person.changes[0]) == "properties: 0 -> 1"

    def test_type_change(self, tmp_path: Path) -> None:
        old = _snapshot(tmp_path / "v1", "rank = nf.PageRank(name='rank', graph_name='g')\n")
        new = _snapshot(tmp_path / "v2", "rank = nf.ArticleRank(name='rank', graph_name='g')\n")

        (change,) = nf.diff_snapshots(old, new).modified

        assert change.kind == ResourceKind.ALGORITHM
        assert change.changes == (FieldChange("type", "PageRank", "ArticleRank"),)

    def test_dependency_changes(self, tmp_path: Path) -> None:
        old = _snapshot(
            tmp_path / "v1",
            """
            social = nf.NativeProjection(name="social")
            rank = nf.PageRank(name="rank", graph_name=social)
            """,
        )
        new = _snapshot(
            tmp_path / "v2",
            """
            social = nf.NativeProjection(name="social")
            everyone = nf.NativeProjection(name="everyone")
            rank = nf.PageRank(name="rank", graph_name=everyone)
            """,
        )

        result = nf.diff_snapshots(old, new)

        assert [r.name for r in result.added] == ["everyone"]
        (change,) = result.modified
        assert change.changes == ()
        assert change.added_dependencies == ("everyone",)
        assert change.removed_dependencies == ("social",)

    def test_shared_name_is_compared_per_kind(self, tmp_path: Path) -> None:
        old = _snapshot(
            tmp_path / "v1",
            """
            person = nf.NodeType(label="Person")
            person_graph = nf.NativeProjection(name="Person")
            """,
        )
        new = _snapshot(tmp_path / "v2", "person = nf.NodeType(label='Person')\n")

        result = nf.diff_snapshots(old, new)

        assert [(r.name, r.kind) for r in result.removed] == [("Person", ResourceKind.PROJECTION)]
        assert result.added == ()
        assert result.modified == ()
