"""Recover resource declarations from a tree of Python files without importing them."""

from __future__ import annotations

import ast
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from neoform._errors import DiscoveryError
from neoform._registry import MODEL_TYPES, classify
from neoform._resource import ConstraintInfo, DiscoveredResource, IndexInfo, PropertyInfo

from ._imports import ImportTable
from ._literals import LiteralEvaluator, ModelLiteral, Opaque, Reference, references_in
from ._names import VariableIndex

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from neoform._enums import ResourceKind
    from neoform._registry import KindSpec

logger = logging.getLogger(__name__)

# Hidden directories (".git", ".venv", ...) are always skipped as well.
DEFAULT_EXCLUDE_DIRS = frozenset({"__pycache__", "node_modules", "site-packages", "testdata", "vendor"})


@dataclass(frozen=True, slots=True)
class ScanError:
    """A file that could not be scanned, or a declaration that was rejected."""

    file: Path
    message: str
    line: int | None = None

    def __str__(self) -> str:
        location = f"{self.file}:{self.line}" if self.line is not None else str(self.file)
        return f"{location}: {self.message}"


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of one discovery pass.

    Attributes:
        resources: Discovered resources ordered by file path, then by
            position in the file.
        errors: Non-fatal per-file and per-declaration problems.

    """

    resources: tuple[DiscoveredResource, ...] = ()
    errors: tuple[ScanError, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Whether no resources were found."""
        return not self.resources

    def of_kind(self, kind: ResourceKind) -> list[DiscoveredResource]:
        """Resources of one kind, in discovery order."""
        return [resource for resource in self.resources if resource.kind == kind]


@dataclass(frozen=True, slots=True)
class Declaration:
    """A recognised declaration of one file, before names are resolved across files."""

    variable: str
    type_name: str
    spec: KindSpec
    file: Path
    line: int
    fields: Mapping[str, Any] = field(default_factory=dict, hash=False)
    references: tuple[Reference, ...] = ()


def is_test_file(path: Path) -> bool:
    """Whether ``path`` follows pytest's test-module naming."""
    name = path.name
    return name.startswith("test_") or name.endswith("_test.py") or name == "conftest.py"


def collect_source_files(root: Path, exclude: Iterable[str] = ()) -> tuple[list[Path], list[ScanError]]:
    """List the Python files under ``root`` in path order.

    Args:
        root: Directory to walk, or a single ``.py`` file.
        exclude: Extra directory names to skip.

    Returns:
        The files to scan and errors for unreadable subdirectories.

    Raises:
        DiscoveryError: If ``root`` does not exist or cannot be listed.

    """
    if not root.exists():
        raise DiscoveryError(root, "path does not exist")
    if root.is_file():
        return ([root] if root.suffix == ".py" else []), []

    excluded = DEFAULT_EXCLUDE_DIRS | set(exclude)
    files: list[Path] = []
    errors: list[ScanError] = []

    def _walk(current: Path) -> None:
        try:
            entries = sorted(current.iterdir())
        except OSError as e:
            if current == root:
                raise DiscoveryError(root, str(e)) from e
            errors.append(ScanError(current, f"cannot list directory: {e}"))
            return
        for entry in entries:
            if entry.is_dir():
                if entry.name.startswith(".") or entry.name in excluded:
                    continue
                _walk(entry)
            elif entry.is_file() and entry.suffix == ".py" and not is_test_file(entry):
                files.append(entry)

    _walk(root)
    return files, errors


def _is_plain_literal(value: Any) -> bool:
    match value:
        case Reference() | ModelLiteral() | Opaque():
            return False
        case list():
            return all(_is_plain_literal(item) for item in value)
        case dict():
            return all(_is_plain_literal(item) for item in value.values())
        case _:
            return True


def _declaration_from_call(
    variable: str,
    call: ast.Call,
    evaluator: LiteralEvaluator,
    path: Path,
    line: int,
) -> Declaration | None:
    type_name = evaluator.model_class_name(call.func)
    if type_name is None:
        return None
    spec = classify(MODEL_TYPES[type_name])
    if spec is None:
        return None
    fields = evaluator.evaluate_call_fields(call)
    return Declaration(variable, type_name, spec, path, line, fields, tuple(evaluator.references))


def _subclass_fields(statement: ast.ClassDef, evaluator: LiteralEvaluator) -> tuple[str, dict[str, Any]] | None:
    """Handle ``class Person(nf.NodeType): label = "Person"``.

    Returns the neoform class the class extends and the fields its body sets
    on top of those of a local base class, or ``None`` for unrelated classes.
    """
    for base in statement.bases:
        type_name = evaluator.model_class_name(base)
        if type_name is not None:
            break
    else:
        return None

    fields: dict[str, Any] = dict(evaluator.class_fields.get(base.id, {})) if isinstance(base, ast.Name) else {}
    for item in statement.body:
        match item:
            case ast.Assign(targets=[ast.Name(id=name)], value=value) | ast.AnnAssign(
                target=ast.Name(id=name),
                value=ast.expr() as value,
            ):
                if not name.startswith("_") and name != "model_config":
                    fields[name] = evaluator.evaluate(value)
    return type_name, fields


def _declaration_from_class(
    statement: ast.ClassDef,
    type_name: str,
    fields: dict[str, Any],
    path: Path,
) -> Declaration | None:
    """A local subclass declares a resource when its body sets the identity field."""
    spec = classify(MODEL_TYPES[type_name])
    if spec is None or spec.identity_field not in fields:
        return None
    references = tuple(reference for value in fields.values() for reference in references_in(value))
    return Declaration(statement.name, type_name, spec, path, statement.lineno, fields, references)


def _template_names(tree: ast.Module) -> set[str]:
    """Names the module calls or subclasses; such local classes are templates, not declarations."""
    names: set[str] = set()
    for node in ast.walk(tree):
        match node:
            case ast.Call(func=ast.Name(id=name)):
                names.add(name)
            case ast.ClassDef(bases=bases):
                names.update(base.id for base in bases if isinstance(base, ast.Name))
    return names


def parse_declarations(source: str, path: Path) -> list[Declaration]:
    """Find the top-level resource declarations of one module.

    Args:
        source: Module source text.
        path: File the source came from, for provenance.

    Returns:
        Declarations in source order.

    Raises:
        SyntaxError: If the source does not parse.

    """
    tree = ast.parse(source, filename=str(path))
    imports = ImportTable.from_module(tree)
    templates = _template_names(tree)
    local_classes: dict[str, str] = {}
    class_fields: dict[str, dict[str, Any]] = {}
    constants: dict[str, Any] = {}
    declarations: list[Declaration] = []

    for statement in tree.body:
        evaluator = LiteralEvaluator(imports, local_classes, constants, class_fields)
        declaration: Declaration | None = None
        match statement:
            case ast.ClassDef(name=name):
                subclass = _subclass_fields(statement, evaluator)
                if subclass is not None:
                    type_name, fields = subclass
                    local_classes[name] = type_name
                    class_fields[name] = fields
                    if name not in templates:
                        declaration = _declaration_from_class(statement, type_name, fields, path)
            case ast.Assign(targets=[ast.Name(id=variable), *_], value=ast.Call() as call) | ast.AnnAssign(
                target=ast.Name(id=variable),
                value=ast.Call() as call,
            ):
                declaration = _declaration_from_call(variable, call, evaluator, path, statement.lineno)
            case ast.Assign(targets=[ast.Name(id=variable)], value=value) | ast.AnnAssign(
                target=ast.Name(id=variable),
                value=ast.expr() as value,
            ):
                constant = evaluator.evaluate(value)
                if _is_plain_literal(constant):
                    constants[variable] = constant
        if declaration is not None:
            logger.debug("Found %s %s at %s:%d", declaration.type_name, declaration.variable, path, declaration.line)
            declarations.append(declaration)

    return declarations


def scan_file(path: Path) -> tuple[list[Declaration], ScanError | None]:
    """Scan one file; failures are returned, never raised."""
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return [], ScanError(path, f"cannot read file: {e}")
    try:
        return parse_declarations(source, path), None
    except SyntaxError as e:
        return [], ScanError(path, f"syntax error: {e.msg}", e.lineno)
    except ValueError as e:
        return [], ScanError(path, f"cannot parse file: {e}")


def _declared_name(declaration: Declaration) -> str:
    value = declaration.fields.get(declaration.spec.identity_field)
    if isinstance(value, str) and value:
        return value
    return declaration.variable


def _endpoint(value: Any, names: VariableIndex[str], file: Path) -> str | None:
    match value:
        case str() if value:
            return value
        case Reference(name=name, attribute=None | "label" | "name", module=module):
            resolved = names.resolve(name, file=file, module=module)
            return resolved if resolved is not None else name
        case _:
            return None


def _text(value: Any) -> str:
    if isinstance(value, StrEnum):
        return value.value
    return value if isinstance(value, str) else ""


def _items(value: Any) -> list[Mapping[str, Any]]:
    """Field mappings of a literal list of models or dicts."""
    if not isinstance(value, list):
        return []
    items: list[Mapping[str, Any]] = []
    for item in value:
        if isinstance(item, ModelLiteral):
            items.append(item.fields)
        elif isinstance(item, dict):
            items.append(item)
    return items


def _strings(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def _schema_fields(
    fields: Mapping[str, Any],
) -> tuple[tuple[PropertyInfo, ...], tuple[ConstraintInfo, ...], tuple[IndexInfo, ...]]:
    properties = tuple(
        PropertyInfo(
            name=_text(item.get("name")),
            type=_text(item.get("type")),
            required=item.get("required") is True,
            unique=item.get("unique") is True,
            description=item.get("description") if isinstance(item.get("description"), str) else None,
        )
        for item in _items(fields.get("properties"))
    )
    constraints = tuple(
        ConstraintInfo(
            type=_text(item.get("type")),
            properties=_strings(item.get("properties")),
            name=_text(item.get("name")) or None,
        )
        for item in _items(fields.get("constraints"))
    )
    indexes = tuple(
        IndexInfo(
            type=_text(item.get("type")) or "BTREE",
            properties=_strings(item.get("properties")),
            name=_text(item.get("name")) or None,
            options=MappingProxyType(dict(item["options"])) if isinstance(item.get("options"), dict) else {},
        )
        for item in _items(fields.get("indexes"))
    )
    return properties, constraints, indexes


def _dependency(reference: Reference, names: VariableIndex[str], file: Path) -> str:
    """Resource name a reference made in ``file`` points at.

    ``analytics.social`` after ``from examples.social import analytics`` reads
    like a field access but names the declaration ``social`` of a module.
    """
    resolved = names.resolve(reference.name, file=file, module=reference.module)
    if resolved is None and reference.attribute is not None:
        resolved = names.resolve(reference.attribute, file=file, module=reference.attribute_module)
    return resolved if resolved is not None else reference.name


def _add_dependency(dependencies: list[str], dependency: str | None, own_name: str) -> None:
    if dependency and dependency != own_name and dependency not in dependencies:
        dependencies.append(dependency)


def link_declarations(declarations: Iterable[Declaration]) -> tuple[list[DiscoveredResource], list[ScanError]]:
    """Resolve names across files and build the resource envelopes.

    References are resolved from variable names to resource names, looking
    in the referencing file first, then in the module a name was imported
    from, then in every file. A reference to an unknown identifier is kept as
    that identifier. A second declaration with an already used name within
    the same kind is rejected.
    """
    declarations = list(declarations)
    names = VariableIndex[str]()
    for declaration in declarations:
        names.add(declaration.file, declaration.variable, _declared_name(declaration))

    resources: list[DiscoveredResource] = []
    errors: list[ScanError] = []
    seen: dict[tuple[ResourceKind, str], DiscoveredResource] = {}

    for declaration in declarations:
        spec = declaration.spec
        name = _declared_name(declaration)
        first = seen.get((spec.kind, name))
        if first is not None:
            message = f"duplicate {spec.kind} '{name}', first declared at {first.location}"
            errors.append(ScanError(declaration.file, message, declaration.line))
            continue

        dependencies: list[str] = []
        for reference in declaration.references:
            _add_dependency(dependencies, _dependency(reference, names, declaration.file), name)

        source = target = None
        if spec.endpoints:
            source = _endpoint(declaration.fields.get("source"), names, declaration.file)
            target = _endpoint(declaration.fields.get("target"), names, declaration.file)
            _add_dependency(dependencies, source, name)
            _add_dependency(dependencies, target, name)

        properties, constraints, indexes = _schema_fields(declaration.fields) if spec.schema_fields else ((), (), ())
        agent_context = declaration.fields.get("agent_context") if spec.agent_context else None

        resource = DiscoveredResource(
            name=name,
            kind=spec.kind,
            file=declaration.file,
            line=declaration.line,
            variable=declaration.variable,
            type_name=declaration.type_name,
            properties=properties,
            constraints=constraints,
            indexes=indexes,
            source=source,
            target=target,
            dependencies=tuple(dependencies),
            agent_context=agent_context if isinstance(agent_context, str) else None,
            fields=MappingProxyType(dict(declaration.fields)),
        )
        seen[(spec.kind, name)] = resource
        resources.append(resource)

    return resources, errors


def scan_dir(
    root: Path | str,
    *,
    exclude: Iterable[str] = (),
    max_workers: int | None = None,
) -> ScanResult:
    """Discover every resource declared under ``root``.

    Files are parsed, never imported, so discovery works even when a module
    would fail at runtime. Unparseable files are reported in
    ``ScanResult.errors`` and skipped.

    Args:
        root: Directory (or single file) to scan.
        exclude: Extra directory names to skip.
        max_workers: Parse files on a thread pool of this size. Results are
            merged in path order, so the outcome is identical to a serial scan.

    Returns:
        Resources in file-path then declaration order, plus non-fatal errors.

    Raises:
        DiscoveryError: If ``root`` is missing or cannot be listed.

    Example:
        >>> result = scan_dir("examples")
        >>> [r.name for r in result.of_kind(ResourceKind.NODE_TYPE)]
        ['Person', 'Company']

    """
    root = Path(root)
    files, errors = collect_source_files(root, exclude)

    if max_workers is not None and max_workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(scan_file, files))
    else:
        results = [scan_file(path) for path in files]

    declarations: list[Declaration] = []
    for found, error in results:
        if error is not None:
            errors.append(error)
            continue
        declarations.extend(found)

    resources, link_errors = link_declarations(declarations)
    errors.extend(link_errors)
    for error in errors:
        logger.warning("Skipped %s", error)
    logger.debug("Discovered %d resources in %d files under %s", len(resources), len(files), root)
    return ScanResult(resources=tuple(resources), errors=tuple(errors))
