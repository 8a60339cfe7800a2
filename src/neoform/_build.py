"""Build orchestration: scan, order, load and serialize a source tree."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, assert_never

import tomli_w

from ._discover import ScanResult, scan_dir
from ._graph import ResourceGraph, new_dependency_graph
from ._load import ResourceLoader
from ._serialize._batch import to_document_batch, to_script_batch

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._base import DeclarationModel
    from ._discover import ScanError
    from ._resource import DiscoveredResource

logger = logging.getLogger(__name__)


class OutputFormat(StrEnum):
    """Artifact formats produced by ``neoform build``."""

    CYPHER = "cypher"
    JSON = "json"
    TOML = "toml"

    @classmethod
    def from_path(cls, path: Path) -> OutputFormat | None:
        """Guess the format from a file extension, ``None`` if unknown."""
        return _SUFFIX_FORMATS.get(path.suffix.lower())


_SUFFIX_FORMATS = {
    ".cypher": OutputFormat.CYPHER,
    ".cql": OutputFormat.CYPHER,
    ".json": OutputFormat.JSON,
    ".toml": OutputFormat.TOML,
}


@dataclass(frozen=True, slots=True)
class Snapshot:
    """One discovery pass over a source tree and its dependency graph."""

    root: Path
    scan: ScanResult
    graph: ResourceGraph

    @property
    def resources(self) -> tuple[DiscoveredResource, ...]:
        """Resources in discovery order."""
        return self.scan.resources

    @property
    def errors(self) -> tuple[ScanError, ...]:
        """Non-fatal scan errors."""
        return self.scan.errors

    @property
    def is_empty(self) -> bool:
        """Whether no resources were found."""
        return self.scan.is_empty


def take_snapshot(
    root: Path | str,
    *,
    exclude: Iterable[str] = (),
    max_workers: int | None = None,
) -> Snapshot:
    """Scan ``root`` and build the dependency graph of what was found.

    Raises:
        DiscoveryError: If ``root`` cannot be traversed.

    """
    root = Path(root)
    scan = scan_dir(root, exclude=exclude, max_workers=max_workers)
    graph = new_dependency_graph(scan.resources)
    for reference in graph.dangling:
        logger.debug("Dangling reference: %s", reference)
    return Snapshot(root=root, scan=scan, graph=graph)


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Resources of a snapshot in build order, loaded as typed models.

    Attributes:
        resources: Discovered resources in dependency order.
        models: Typed models, parallel to ``resources``.
        errors: Non-fatal scan errors carried over from discovery.

    """

    resources: tuple[DiscoveredResource, ...] = ()
    models: tuple[DeclarationModel, ...] = ()
    errors: tuple[ScanError, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Whether there is nothing to build. This is a success, not an error."""
        return not self.models

    def script(self, *, drop_existing_graphs: bool = False) -> str:
        """The combined Cypher script."""
        return to_script_batch(self.models, drop_existing_graphs=drop_existing_graphs)

    def document(self) -> dict[str, list[dict[str, Any]]]:
        """The combined document keyed by plural kind name."""
        return to_document_batch(self.models)

    def render(self, output_format: OutputFormat, *, drop_existing_graphs: bool = False) -> str:
        """Render the artifact in ``output_format``."""
        match output_format:
            case OutputFormat.CYPHER:
                return self.script(drop_existing_graphs=drop_existing_graphs)
            case OutputFormat.JSON | OutputFormat.TOML:
                return render_document(self.document(), output_format)
            case _:
                assert_never(output_format)


def render_document(document: dict[str, Any], output_format: OutputFormat) -> str:
    """Encode a combined document as JSON or TOML text.

    TOML has no null, so ``None`` values are left out of the TOML form.

    Raises:
        ValueError: If ``output_format`` is not a document format.

    """
    match output_format:
        case OutputFormat.JSON:
            return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
        case OutputFormat.TOML:
            return tomli_w.dumps(_without_none(document))
        case OutputFormat.CYPHER:
            msg = "Cypher is a script format, not a document format"
            raise ValueError(msg)
        case _:
            assert_never(output_format)


def _without_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _without_none(item) for key, item in value.items() if item is not None}
    if isinstance(value, list):
        return [_without_none(item) for item in value if item is not None]
    return value


def build_snapshot(snapshot: Snapshot) -> BuildResult:
    """Order and load the resources of ``snapshot``.

    Raises:
        DependencyCycleError: If the resources depend on each other in a loop.
        ResourceLoadError: If a declaration does not validate.

    """
    if snapshot.is_empty:
        logger.info("No resources found under %s", snapshot.root)
        return BuildResult(errors=snapshot.errors)

    ordered = snapshot.graph.topological_sort()
    loader = ResourceLoader(snapshot.resources)
    models = [loader.load(resource) for resource in ordered]
    logger.debug("Build order: %s", ", ".join(str(resource.key) for resource in ordered))
    return BuildResult(resources=tuple(ordered), models=tuple(models), errors=snapshot.errors)


def build(
    root: Path | str,
    *,
    exclude: Iterable[str] = (),
    max_workers: int | None = None,
) -> BuildResult:
    """Scan ``root`` and return its resources ready for serialization.

    Either the whole tree builds or an exception is raised; a partial
    result is never returned.

    Args:
        root: Directory (or single file) holding the declarations.
        exclude: Extra directory names to skip while scanning.
        max_workers: Parse files on a thread pool of this size.

    Returns:
        The build result. It is empty, not an error, when nothing is declared.

    Raises:
        DiscoveryError: If ``root`` cannot be traversed.
        DependencyCycleError: If the resources depend on each other in a loop.
        ResourceLoadError: If a declaration does not validate.

    Example:
        >>> result = build("examples")
        >>> print(result.script())  # doctest: +SKIP

    """
    return build_snapshot(take_snapshot(root, exclude=exclude, max_workers=max_workers))
