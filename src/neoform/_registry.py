"""Closed registry of resource kinds.

Each :class:`ResourceKind` has exactly one :class:`KindSpec` that ties the
base model class (used to recognise declarations by type identity), the
identity field, the field-extraction rule and both serializers together.
The module refuses to import if a kind is missing or registered twice.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from . import _algorithms, _enums, _kg, _pipelines, _projections, _retrievers, _schema
from ._base import DeclarationModel
from ._enums import ResourceKind, StrEnumWithDoc
from ._errors import UnknownResourceError
from ._serialize._algorithms import algorithm_document, algorithm_to_cypher
from ._serialize._kg import kg_pipeline_document, kg_pipeline_to_cypher
from ._serialize._pipelines import pipeline_document, pipeline_to_cypher
from ._serialize._projections import projection_document, projection_to_cypher
from ._serialize._retrievers import retriever_document, retriever_to_cypher
from ._serialize._schema import (
    node_type_document,
    node_type_to_cypher,
    relationship_type_document,
    relationship_type_to_cypher,
    schema_document,
    schema_to_cypher,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import ModuleType

PACKAGE = "neoform"


@dataclass(frozen=True, slots=True)
class KindSpec:
    """Everything neoform needs to know about one resource kind.

    Attributes:
        kind: The resource kind.
        base: Model class whose subclasses declare this kind.
        identity_field: Field holding the resource name.
        plural: Key of the kind in the combined document.
        to_script: Cypher encoding of a typed resource.
        to_document: Document encoding of a typed resource.
        schema_fields: Whether properties, constraints and indexes are
            extracted during discovery.
        endpoints: Whether ``source``/``target`` are extracted during discovery.
        agent_context: Whether ``agent_context`` is extracted during discovery.

    """

    kind: ResourceKind
    base: type[DeclarationModel]
    identity_field: str
    plural: str
    to_script: Callable[[Any], str]
    to_document: Callable[[Any], dict[str, Any]]
    schema_fields: bool = False
    endpoints: bool = False
    agent_context: bool = False


KIND_SPECS: tuple[KindSpec, ...] = (
    KindSpec(
        kind=ResourceKind.NODE_TYPE,
        base=_schema.NodeType,
        identity_field="label",
        plural="nodeTypes",
        to_script=node_type_to_cypher,
        to_document=node_type_document,
        schema_fields=True,
    ),
    KindSpec(
        kind=ResourceKind.RELATIONSHIP_TYPE,
        base=_schema.RelationshipType,
        identity_field="label",
        plural="relationshipTypes",
        to_script=relationship_type_to_cypher,
        to_document=relationship_type_document,
        schema_fields=True,
        endpoints=True,
    ),
    KindSpec(
        kind=ResourceKind.PROJECTION,
        base=_projections.Projection,
        identity_field="name",
        plural="projections",
        to_script=projection_to_cypher,
        to_document=projection_document,
    ),
    KindSpec(
        kind=ResourceKind.ALGORITHM,
        base=_algorithms.Algorithm,
        identity_field="name",
        plural="algorithms",
        to_script=algorithm_to_cypher,
        to_document=algorithm_document,
    ),
    KindSpec(
        kind=ResourceKind.PIPELINE,
        base=_pipelines.Pipeline,
        identity_field="name",
        plural="pipelines",
        to_script=pipeline_to_cypher,
        to_document=pipeline_document,
    ),
    KindSpec(
        kind=ResourceKind.RETRIEVER,
        base=_retrievers.Retriever,
        identity_field="name",
        plural="retrievers",
        to_script=retriever_to_cypher,
        to_document=retriever_document,
    ),
    KindSpec(
        kind=ResourceKind.KG_PIPELINE,
        base=_kg.KGPipeline,
        identity_field="name",
        plural="kgPipelines",
        to_script=kg_pipeline_to_cypher,
        to_document=kg_pipeline_document,
    ),
    KindSpec(
        kind=ResourceKind.SCHEMA,
        base=_schema.Schema,
        identity_field="name",
        plural="schemas",
        to_script=schema_to_cypher,
        to_document=schema_document,
        agent_context=True,
    ),
)

_SPECS_BY_KIND = {spec.kind: spec for spec in KIND_SPECS}


def _check_exhaustive() -> None:
    missing = sorted(set(ResourceKind) - set(_SPECS_BY_KIND))
    if missing or len(_SPECS_BY_KIND) != len(KIND_SPECS):
        msg = f"Kind registry is inconsistent: missing={missing}, specs={len(KIND_SPECS)}"
        raise RuntimeError(msg)


_check_exhaustive()


def _public_classes[T](modules: tuple[ModuleType, ...], base: type[T]) -> dict[str, type[T]]:
    classes: dict[str, type[T]] = {}
    for module in modules:
        for name, obj in vars(module).items():
            if isinstance(obj, type) and issubclass(obj, base) and not name.startswith("_"):
                classes.setdefault(name, obj)
    return classes


_MODEL_MODULES = (_schema, _projections, _algorithms, _pipelines, _retrievers, _kg)

MODEL_TYPES: dict[str, type[DeclarationModel]] = _public_classes(_MODEL_MODULES, DeclarationModel)
ENUM_TYPES: dict[str, type[StrEnum]] = {
    name: cls
    for name, cls in _public_classes((*_MODEL_MODULES, _enums), StrEnum).items()
    if cls is not StrEnumWithDoc
}


def kind_spec(kind: ResourceKind) -> KindSpec:
    """Return the registration of ``kind``."""
    return _SPECS_BY_KIND[kind]


def classify(cls: type) -> KindSpec | None:
    """Return the kind declared by model class ``cls``, or ``None``.

    Nested helper models such as ``Property`` or ``FastRPStep`` are not
    resources and classify as ``None``.
    """
    for spec in KIND_SPECS:
        if issubclass(cls, spec.base):
            return spec
    return None


def spec_for(resource: object) -> KindSpec:
    """Return the registration for a typed resource instance.

    Raises:
        UnknownResourceError: If ``resource`` is not a registered resource model.

    """
    spec = classify(type(resource)) if isinstance(resource, BaseModel) else None
    if spec is None:
        raise UnknownResourceError(resource)
    return spec


def resource_name(resource: object) -> str:
    """Name of a typed resource, read from its identity field."""
    return getattr(resource, spec_for(resource).identity_field)


def lookup_model(qualified_name: str) -> type[DeclarationModel] | None:
    """Resolve ``neoform.X`` or ``neoform._module.X`` to a model class."""
    parts = qualified_name.split(".")
    if parts[0] != PACKAGE or len(parts) < 2:  # noqa: PLR2004
        return None
    return MODEL_TYPES.get(parts[-1])


def lookup_enum(qualified_name: str) -> type[StrEnum] | None:
    """Resolve ``neoform.X`` or ``neoform._module.X`` to an enum class."""
    parts = qualified_name.split(".")
    if parts[0] != PACKAGE or len(parts) < 2:  # noqa: PLR2004
        return None
    return ENUM_TYPES.get(parts[-1])
