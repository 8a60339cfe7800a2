"""Tests for static discovery of resource declarations."""

import textwrap
from pathlib import Path

import pytest

from neoform._discover import (
    ModelLiteral,
    Opaque,
    Reference,
    VariableIndex,
    collect_source_files,
    module_matches,
    parse_declarations,
    scan_dir,
)
from neoform._enums import ResourceKind
from neoform._errors import DiscoveryError
from neoform._resource import PropertyInfo


def _write(root: Path, relative: str, source: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(source))
    return path


SCHEMA = """
import neoform as nf

person = nf.NodeType(
    label="Person",
    properties=[
        nf.Property(name="id", type=nf.PropertyType.STRING, required=True, unique=True),
        nf.Property(name="name", type=nf.PropertyType.STRING),
    ],
    indexes=[nf.Index(properties=["name"])],
)


class Company(nf.NodeType):
    label: str = "Company"
    constraints: list[nf.Constraint] = [nf.Constraint(type=nf.ConstraintType.NODE_KEY, properties=["name"])]


works_for = nf.RelationshipType(label="WORKS_FOR", source=person, target=Company)
"""


class TestDeclarationShapes:
    def test_direct_call(self) -> None:
        [declaration] = parse_declarations("import neoform as nf\nx = nf.NodeType(label='X')\n", Path("a.py"))

        assert declaration.variable == "x"
        assert declaration.type_name == "NodeType"
        assert declaration.spec.kind == ResourceKind.NODE_TYPE
        assert declaration.fields == {"label": "X"}
        assert declaration.line == 2

    def test_from_import_with_alias(self) -> None:
        source = "from neoform import PageRank as PR\nrank = PR(name='rank', graph_name='g')\n"

        [declaration] = parse_declarations(source, Path("a.py"))

        assert declaration.type_name == "PageRank"
        assert declaration.spec.kind == ResourceKind.ALGORITHM

    def test_star_import(self) -> None:
        source = "from neoform import *\nrank = Louvain(name='communities', graph_name='g')\n"

        [declaration] = parse_declarations(source, Path("a.py"))

        assert declaration.type_name == "Louvain"

    def test_annotated_assignment(self) -> None:
        source = "import neoform as nf\nperson: nf.NodeType = nf.NodeType(label='Person')\n"

        [declaration] = parse_declarations(source, Path("a.py"))

        assert declaration.variable == "person"

    def test_class_body(self) -> None:
        declarations = parse_declarations(textwrap.dedent(SCHEMA), Path("schema.py"))

        company = declarations[1]
        assert company.variable == "Company"
        assert company.fields["label"] == "Company"
        [constraint] = company.fields["constraints"]
        assert isinstance(constraint, ModelLiteral)
        assert constraint.type_name == "Constraint"

    def test_local_subclass_call(self) -> None:
        source = """
        import neoform as nf

        class Centrality(nf.PageRank):
            pass

        rank = Centrality(name="rank", graph_name="g")
        """

        [declaration] = parse_declarations(textwrap.dedent(source), Path("a.py"))

        assert declaration.variable == "rank"
        assert declaration.type_name == "PageRank"
        assert declaration.fields == {"name": "rank", "graph_name": "g"}

    def test_class_body_fields_apply_to_calls(self) -> None:
        source = """
        import neoform as nf

        social = nf.NativeProjection(name="social")

        class Tuned(nf.PageRank):
            graph_name = social.name
            damping_factor = 0.9

        rank = Tuned(name="rank")
        fast = Tuned(name="fast", damping_factor=0.5)
        """

        _, rank, fast = parse_declarations(textwrap.dedent(source), Path("a.py"))

        assert rank.fields == {"name": "rank", "graph_name": Reference("social", "name"), "damping_factor": 0.9}
        assert rank.references == (Reference("social", "name"),)
        assert fast.fields["damping_factor"] == 0.5

    def test_subclass_without_identity_is_not_declared(self) -> None:
        source = "import neoform as nf\n\nclass Base(nf.NodeType):\n    description: str = 'shared'\n"

        assert parse_declarations(source, Path("a.py")) == []

    def test_subclass_of_local_class_inherits_fields(self) -> None:
        source = """
        import neoform as nf

        class Base(nf.NodeType):
            label = "Base"
            description = "shared"

        class Person(Base):
            label = "Person"
        """

        [declaration] = parse_declarations(textwrap.dedent(source), Path("a.py"))

        assert declaration.variable == "Person"
        assert declaration.type_name == "NodeType"
        assert declaration.fields == {"label": "Person", "description": "shared"}

    def test_nested_models_are_not_resources(self) -> None:
        source = "import neoform as nf\nprop = nf.Property(name='id', type=nf.PropertyType.STRING)\n"

        assert parse_declarations(source, Path("a.py")) == []

    def test_unrelated_classes_are_ignored(self) -> None:
        source = "from pydantic import BaseModel\n\nclass Person(BaseModel):\n    label: str = 'Person'\n"

        assert parse_declarations(source, Path("a.py")) == []

    def test_function_bodies_are_not_scanned(self) -> None:
        source = "import neoform as nf\n\ndef make():\n    return nf.NodeType(label='Hidden')\n"

        assert parse_declarations(source, Path("a.py")) == []


class TestFieldEvaluation:
    def test_enum_members_and_literals(self) -> None:
        source = """
        import neoform as nf
        rank = nf.PageRank(name="rank", graph_name="g", mode=nf.Mode.WRITE, damping_factor=0.85, tolerance=-1e-7)
        """

        [declaration] = parse_declarations(textwrap.dedent(source), Path("a.py"))

        assert declaration.fields["mode"] == "write"
        assert declaration.fields["damping_factor"] == 0.85
        assert declaration.fields["tolerance"] == -1e-7

    def test_module_constants_are_resolved(self) -> None:
        source = """
        import neoform as nf
        LABEL = "Person"
        person = nf.NodeType(label=LABEL)
        """

        [declaration] = parse_declarations(textwrap.dedent(source), Path("a.py"))

        assert declaration.fields["label"] == "Person"

    def test_dynamic_values_are_opaque(self) -> None:
        source = """
        import os
        import neoform as nf
        search = nf.VectorRetriever(name="search", index_name="idx", neo4j_password=os.environ["PW"])
        """

        [declaration] = parse_declarations(textwrap.dedent(source), Path("a.py"))

        assert declaration.fields["neo4j_password"] == Opaque("os.environ['PW']")

    def test_references_are_recorded(self) -> None:
        declarations = parse_declarations(textwrap.dedent(SCHEMA), Path("schema.py"))

        works_for = declarations[2]
        assert works_for.fields["source"] == Reference("person")
        assert works_for.references == (Reference("person"), Reference("Company"))

    def test_attribute_reference(self) -> None:
        source = """
        import neoform as nf
        social = nf.NativeProjection(name="social")
        rank = nf.PageRank(name="rank", graph_name=social.name)
        """

        rank = parse_declarations(textwrap.dedent(source), Path("a.py"))[1]

        assert rank.fields["graph_name"] == Reference("social", "name")


class TestScanDir:
    def test_discovers_schema(self, tmp_path: Path) -> None:
        _write(tmp_path, "schema.py", SCHEMA)

        result = scan_dir(tmp_path)

        assert [r.name for r in result.resources] == ["Person", "Company", "WORKS_FOR"]
        person, company, works_for = result.resources
        assert person.properties[0] == PropertyInfo(name="id", type="STRING", required=True, unique=True)
        assert person.indexes[0].type == "BTREE"
        assert company.constraints[0].type == "NODE_KEY"
        assert works_for.kind == ResourceKind.RELATIONSHIP_TYPE
        assert (works_for.source, works_for.target) == ("Person", "Company")
        assert works_for.dependencies == ("Person", "Company")
        assert person.location == f"{tmp_path / 'schema.py'}:4"

    def test_name_falls_back_to_variable(self, tmp_path: Path) -> None:
        _write(tmp_path, "a.py", "import neoform as nf\nmy_graph = nf.NativeProjection(name=make_name())\n")

        [resource] = scan_dir(tmp_path).resources

        assert resource.name == "my_graph"

    def test_references_across_files(self, tmp_path: Path) -> None:
        _write(tmp_path, "pkg/__init__.py", "")
        _write(tmp_path, "pkg/schema.py", SCHEMA)
        _write(
            tmp_path,
            "pkg/analytics.py",
            """
            import neoform as nf
            from pkg.schema import person

            social = nf.NativeProjection(name="social", node_labels=[person.label])
            """,
        )
        _write(
            tmp_path,
            "pkg/ml.py",
            """
            import neoform as nf
            from pkg import analytics

            rank = nf.PageRank(name="rank", graph_name=analytics.social.name)
            score = nf.Degree(name="degree", graph_name=analytics.social)
            """,
        )

        resources = {r.name: r for r in scan_dir(tmp_path).resources}

        assert resources["social"].dependencies == ("Person",)
        assert resources["rank"].dependencies == ("social",)
        assert resources["degree"].dependencies == ("social",)

    def test_module_import(self, tmp_path: Path) -> None:
        _write(tmp_path, "schema.py", SCHEMA)
        _write(
            tmp_path,
            "search.py",
            """
            import neoform as nf
            import schema

            kg = nf.SimpleKGPipeline(name="kg", entity_types=[nf.EntityType(name=schema.person.label)])
            """,
        )

        resources = {r.name: r for r in scan_dir(tmp_path).resources}

        assert resources["kg"].dependencies == ("Person",)

    def test_self_reference_is_not_a_dependency(self, tmp_path: Path) -> None:
        _write(
            tmp_path,
            "a.py",
            """
            import neoform as nf
            person = nf.NodeType(label="Person")
            knows = nf.RelationshipType(label="KNOWS", source=person, target=person)
            """,
        )

        knows = scan_dir(tmp_path).resources[1]

        assert knows.dependencies == ("Person",)

    def test_same_variable_in_two_files(self, tmp_path: Path) -> None:
        _write(tmp_path, "a.py", "import neoform as nf\nperson = nf.NodeType(label='Person')\n")
        _write(
            tmp_path,
            "b.py",
            """
            import neoform as nf
            person = nf.NodeType(label="Human")
            r = nf.RelationshipType(label="R", source=person, target=person)
            """,
        )

        r = {resource.name: resource for resource in scan_dir(tmp_path).resources}["R"]

        assert (r.source, r.target) == ("Human", "Human")
        assert r.dependencies == ("Human",)

    def test_imported_variable_resolves_to_its_module(self, tmp_path: Path) -> None:
        _write(tmp_path, "a_people.py", "import neoform as nf\nperson = nf.NodeType(label='Human')\n")
        _write(tmp_path, "b_people.py", "import neoform as nf\nperson = nf.NodeType(label='Person')\n")
        _write(
            tmp_path,
            "c_links.py",
            """
            import neoform as nf
            import b_people
            from b_people import person

            knows = nf.RelationshipType(label="KNOWS", source=person, target=b_people.person)
            """,
        )

        knows = scan_dir(tmp_path).resources[-1]

        assert (knows.source, knows.target) == ("Person", "Person")
        assert knows.dependencies == ("Person",)

    def test_relative_import(self, tmp_path: Path) -> None:
        _write(tmp_path, "pkg/__init__.py", "")
        _write(tmp_path, "pkg/a_people.py", "import neoform as nf\nperson = nf.NodeType(label='Human')\n")
        _write(tmp_path, "pkg/b_people.py", "import neoform as nf\nperson = nf.NodeType(label='Person')\n")
        _write(
            tmp_path,
            "pkg/c_links.py",
            """
            import neoform as nf
            from .b_people import person

            knows = nf.RelationshipType(label="KNOWS", source=person, target=person)
            """,
        )

        knows = scan_dir(tmp_path).resources[-1]

        assert knows.dependencies == ("Person",)

    def test_syntax_error_is_reported_and_skipped(self, tmp_path: Path) -> None:
        _write(tmp_path, "a_broken.py", "import neoform as nf\nx = (\n")
        _write(tmp_path, "b.py", "import neoform as nf\nx = nf.NodeType(label='X')\n")

        result = scan_dir(tmp_path)

        assert [r.name for r in result.resources] == ["X"]
        [error] = result.errors
        assert error.file == tmp_path / "a_broken.py"
        assert "syntax error" in str(error)

    def test_duplicate_name_within_kind_is_rejected(self, tmp_path: Path) -> None:
        _write(tmp_path, "a.py", "import neoform as nf\nfirst = nf.NodeType(label='X')\n")
        _write(tmp_path, "b.py", "import neoform as nf\nsecond = nf.NodeType(label='X')\n")

        result = scan_dir(tmp_path)

        assert [r.variable for r in result.resources] == ["first"]
        [error] = result.errors
        assert "duplicate NodeType 'X'" in error.message
        assert error.line == 2

    def test_same_name_in_different_kinds_is_allowed(self, tmp_path: Path) -> None:
        _write(
            tmp_path,
            "a.py",
            "import neoform as nf\nnode = nf.NodeType(label='social')\ngraph = nf.NativeProjection(name='social')\n",
        )

        result = scan_dir(tmp_path)

        assert [r.kind for r in result.resources] == [ResourceKind.NODE_TYPE, ResourceKind.PROJECTION]
        assert result.errors == ()

    def test_parallel_scan_matches_serial(self, tmp_path: Path) -> None:
        for index in range(12):
            _write(tmp_path, f"mod_{index:02}.py", f"import neoform as nf\nn{index} = nf.NodeType(label='N{index}')\n")

        assert scan_dir(tmp_path, max_workers=4) == scan_dir(tmp_path)

    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(DiscoveryError, match="path does not exist"):
            scan_dir(tmp_path / "missing")

    def test_empty_tree(self, tmp_path: Path) -> None:
        result = scan_dir(tmp_path)

        assert result.is_empty
        assert result.errors == ()

    def test_of_kind(self, tmp_path: Path) -> None:
        _write(tmp_path, "schema.py", SCHEMA)

        result = scan_dir(tmp_path)

        assert [r.name for r in result.of_kind(ResourceKind.NODE_TYPE)] == ["Person", "Company"]


class TestCollectSourceFiles:
    def test_skips_tests_hidden_and_excluded_directories(self, tmp_path: Path) -> None:
        for relative in (
            "keep.py",
            "pkg/keep.py",
            "test_skip.py",
            "skip_test.py",
            "conftest.py",
            ".venv/skip.py",
            "__pycache__/skip.py",
            "vendor/skip.py",
            "generated/skip.py",
            "notes.txt",
        ):
            _write(tmp_path, relative, "")

        files, errors = collect_source_files(tmp_path, exclude=["generated"])

        assert files == [tmp_path / "keep.py", tmp_path / "pkg" / "keep.py"]
        assert errors == []

    def test_single_file_root(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "schema.py", SCHEMA)

        files, _ = collect_source_files(path)

        assert files == [path]


class TestVariableIndex:
    def test_same_file_first(self) -> None:
        index = VariableIndex[str]()
        index.add(Path("graph/a.py"), "person", "Person")
        index.add(Path("graph/b.py"), "person", "Human")

        assert index.resolve("person", file=Path("graph/b.py")) == "Human"
        assert index.resolve("person", file=Path("graph/c.py")) == "Person"

    def test_import_module_before_other_files(self) -> None:
        index = VariableIndex[str]()
        index.add(Path("graph/a.py"), "person", "Person")
        index.add(Path("graph/b.py"), "person", "Human")

        assert index.resolve("person", file=Path("graph/c.py"), module="graph.b") == "Human"
        assert index.resolve("person", file=Path("graph/c.py"), module="elsewhere") == "Person"
        assert index.resolve("company", file=Path("graph/c.py")) is None

    @pytest.mark.parametrize(
        ("path", "module", "expected"),
        [
            ("graph/schema.py", "schema", True),
            ("graph/schema.py", "graph.schema", True),
            ("graph/__init__.py", "graph", True),
            ("graph/schema.py", "other.schema", False),
            ("graph/myschema.py", "schema", False),
        ],
    )
    def test_module_matches(self, path: str, module: str, expected: bool) -> None:  # noqa: FBT001
        assert module_matches(Path(path), module) is expected
