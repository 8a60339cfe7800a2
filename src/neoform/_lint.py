"""Lint rules over a discovered snapshot.

Rules never modify their input. Cross-resource rules work on the
discovered records and the dependency graph; value rules work on the typed
models. A declaration that cannot be loaded is itself reported (NF040) and
skipped by the value rules.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from ._algorithms import KNN, Algorithm, ArticleRank, NodeSimilarity, PageRank
from ._enums import ResourceKind
from ._errors import ResourceLoadError
from ._graph import new_dependency_graph
from ._kg import FuzzyMatchResolver, SemanticMatchResolver, SimpleKGPipeline
from ._load import ResourceLoader
from ._pipelines import Pipeline
from ._schema import NodeType, RelationshipType

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence

    from ._base import DeclarationModel
    from ._graph import ResourceGraph
    from ._resource import DiscoveredResource, ResourceKey

_PASCAL_CASE = re.compile(r"^[A-Z][a-zA-Z0-9]*[a-z][a-zA-Z0-9]*$")
_SCREAMING_SNAKE_CASE = re.compile(r"^[A-Z][A-Z0-9]*(_[A-Z0-9]+)*$")

MAX_TOLERANCE = 1e-5
MAX_NEIGHBOURS = 1000
MIN_RESOLVER_THRESHOLD = 0.8


class Severity(StrEnum):
    """How serious a finding is. Only errors fail ``neoform lint``."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class LintFinding:
    """One problem found by a lint rule.

    Attributes:
        rule: Rule identifier, e.g. ``"NF010"``.
        severity: Severity of the finding.
        message: Human readable description.
        resource: Name of the offending resource.
        location: ``file:line`` of its declaration.

    """

    rule: str
    severity: Severity
    message: str
    resource: str
    location: str

    def __str__(self) -> str:
        return f"[{self.rule}] {self.severity}: {self.message} ({self.location})"


def _finding(rule: str, severity: Severity, message: str, resource: DiscoveredResource) -> LintFinding:
    return LintFinding(rule, severity, message, resource.name, resource.location)


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


# Cross-resource rules


def _check_references(resources: Sequence[DiscoveredResource], graph: ResourceGraph) -> Iterator[LintFinding]:
    for reference in graph.dangling:
        yield _finding("NF001", Severity.WARNING, f"references unknown resource '{reference.name}'", reference.resource)

    node_types = {r.name for r in resources if r.kind == ResourceKind.NODE_TYPE}
    for resource in resources:
        if resource.kind != ResourceKind.RELATIONSHIP_TYPE:
            continue
        for end, label in (("source", resource.source), ("target", resource.target)):
            if label is not None and label not in node_types:
                message = f"{end} '{label}' of relationship '{resource.name}' is not a declared node type"
                yield _finding("NF002", Severity.ERROR, message, resource)


# Value rules


def _check_schema(model: DeclarationModel, resource: DiscoveredResource) -> Iterator[LintFinding]:
    match model:
        case NodeType(label=label) if not _PASCAL_CASE.match(label):
            yield _finding("NF003", Severity.WARNING, f"node label '{label}' should be PascalCase", resource)
        case RelationshipType(label=label) if not _SCREAMING_SNAKE_CASE.match(label):
            message = f"relationship type '{label}' should be SCREAMING_SNAKE_CASE"
            yield _finding("NF004", Severity.WARNING, message, resource)
        case _:
            pass


def _check_algorithm(model: Algorithm, resource: DiscoveredResource) -> Iterator[LintFinding]:
    if not model.graph_name:
        yield _finding("NF015", Severity.ERROR, f"{model.algorithm_type} needs a graph_name to run on", resource)

    if isinstance(model, PageRank | ArticleRank) and model.damping_factor is not None:
        if not 0 <= model.damping_factor < 1:
            message = f"damping_factor must be in [0, 1), got {model.damping_factor}"
            yield _finding("NF010", Severity.ERROR, message, resource)

    max_iterations = getattr(model, "max_iterations", None)
    if max_iterations is not None and max_iterations < 0:
        message = f"max_iterations must not be negative, got {max_iterations}"
        yield _finding("NF011", Severity.ERROR, message, resource)

    tolerance = getattr(model, "tolerance", None)
    if tolerance is not None and tolerance > MAX_TOLERANCE:
        message = f"tolerance {tolerance} may be too loose for convergence"
        yield _finding("NF012", Severity.WARNING, message, resource)

    dimension = getattr(model, "embedding_dimension", None)
    if dimension is not None and not _is_power_of_two(dimension):
        message = f"embedding_dimension {dimension} is not a power of 2"
        yield _finding("NF013", Severity.WARNING, message, resource)

    if isinstance(model, KNN | NodeSimilarity) and model.top_k is not None and model.top_k > MAX_NEIGHBOURS:
        message = f"top_k {model.top_k} may cause performance issues"
        yield _finding("NF014", Severity.WARNING, message, resource)


def _check_pipeline(model: Pipeline, resource: DiscoveredResource) -> Iterator[LintFinding]:
    if not model.models:
        yield _finding("NF020", Severity.ERROR, "pipeline must have at least one model candidate", resource)

    split = model.split_config
    if split is not None and split.test_fraction is not None and not 0 < split.test_fraction < 1:
        message = f"test_fraction must be in (0, 1), got {split.test_fraction}"
        yield _finding("NF021", Severity.ERROR, message, resource)

    for candidate in model.models:
        if model.pipeline_type not in candidate.supported_pipelines:
            message = f"{candidate.model_type} cannot be trained in a {model.pipeline_type} pipeline"
            yield _finding("NF022", Severity.ERROR, message, resource)


def _check_kg_pipeline(model: SimpleKGPipeline, resource: DiscoveredResource) -> Iterator[LintFinding]:
    if not model.entity_types:
        yield _finding("NF030", Severity.ERROR, "pipeline must have at least one entity type", resource)

    match model.entity_resolver:
        case FuzzyMatchResolver(threshold=float() as threshold) | SemanticMatchResolver(
            threshold=float() as threshold,
        ) if 0 < threshold < MIN_RESOLVER_THRESHOLD:
            message = f"entity resolver threshold {threshold} may merge unrelated entities"
            yield _finding("NF031", Severity.WARNING, message, resource)
        case _:
            pass


def lint_model(model: DeclarationModel, resource: DiscoveredResource) -> list[LintFinding]:
    """Run the value rules on one typed resource."""
    match model:
        case Algorithm():
            return list(_check_algorithm(model, resource))
        case Pipeline():
            return list(_check_pipeline(model, resource))
        case SimpleKGPipeline():
            return list(_check_kg_pipeline(model, resource))
        case _:
            return list(_check_schema(model, resource))


def lint(
    resources: Iterable[DiscoveredResource],
    graph: ResourceGraph | None = None,
    models: Mapping[ResourceKey, DeclarationModel] | None = None,
) -> list[LintFinding]:
    """Check a snapshot and return findings ordered by resource.

    Args:
        resources: Discovered resources in discovery order.
        graph: Their dependency graph. Built when not given.
        models: Already loaded typed models by resource key. Resources
            missing from the mapping are loaded here.

    Returns:
        Findings for every resource in discovery order. Findings about
        references come first.

    """
    resources = tuple(resources)
    if graph is None:
        graph = new_dependency_graph(resources)
    findings = list(_check_references(resources, graph))

    loader = ResourceLoader(resources)
    for resource in resources:
        model = models.get(resource.key) if models is not None else None
        if model is None:
            try:
                model = loader.load(resource)
            except ResourceLoadError as e:
                findings.append(_finding("NF040", Severity.ERROR, e.reason, resource))
                continue
        findings.extend(lint_model(model, resource))
    return findings


def has_errors(findings: Iterable[LintFinding]) -> bool:
    """Whether any finding has error severity."""
    return any(finding.severity == Severity.ERROR for finding in findings)


def filter_by_severity(findings: Iterable[LintFinding], severity: Severity) -> list[LintFinding]:
    """Findings of one severity, order kept."""
    return [finding for finding in findings if finding.severity == severity]
