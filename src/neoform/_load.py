"""Turn discovered declarations into typed resource models.

Field values recovered by the scanner are plain literals plus three marker
types. Nested :class:`ModelLiteral` values are instantiated as their neoform
model, :class:`Reference` values are replaced by the referenced resource's
name (or by one of its fields for ``other.field``), and :class:`Opaque`
expressions are dropped with a warning so pydantic defaults apply.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ._discover import ModelLiteral, Opaque, Reference, VariableIndex
from ._errors import ResourceLoadError
from ._registry import MODEL_TYPES, kind_spec
from ._resource import DiscoveredResource

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from ._base import DeclarationModel
    from ._resource import ResourceKey

logger = logging.getLogger(__name__)


class _NotStatic(Exception):  # noqa: N818
    """An opaque expression inside a container, where it cannot be dropped."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(source)


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


class ResourceLoader:
    """Materialize discovered resources of one snapshot.

    References are looked up among ``resources`` by variable name first,
    scoped like discovery scopes them (same file, importing module, any
    file), and by resource name second. Loaded models are cached per resource.

    Args:
        resources: Every resource of the snapshot, in discovery order.

    """

    def __init__(self, resources: Iterable[DiscoveredResource]) -> None:
        self.resources = tuple(resources)
        self._variables = VariableIndex[DiscoveredResource]()
        self._by_name: dict[str, DiscoveredResource] = {}
        for resource in self.resources:
            self._variables.add(resource.file, resource.variable, resource)
            self._by_name.setdefault(resource.name, resource)
        self._cache: dict[ResourceKey, DeclarationModel] = {}
        self._loading: set[ResourceKey] = set()

    def load(self, resource: DiscoveredResource) -> DeclarationModel:
        """Return the typed model declared by ``resource``.

        Raises:
            ResourceLoadError: If the fields do not validate against the
                declared model, or a field reads a resource that is itself
                being loaded.

        """
        key = resource.key
        if key in self._cache:
            return self._cache[key]
        if key in self._loading:
            msg = "field references form a loop"
            raise ResourceLoadError(resource.name, msg)

        self._loading.add(key)
        try:
            model = self._validate(resource)
        finally:
            self._loading.discard(key)
        self._cache[key] = model
        return model

    def load_all(self) -> list[DeclarationModel]:
        """Load every resource, in the order they were given."""
        return [self.load(resource) for resource in self.resources]

    def _validate(self, resource: DiscoveredResource) -> DeclarationModel:
        model_type = MODEL_TYPES[resource.type_name]
        try:
            fields = self._fields(resource.fields, resource)
        except _NotStatic as e:
            msg = f"cannot evaluate '{e.source}' without running the module"
            raise ResourceLoadError(resource.name, msg) from None

        identity = kind_spec(resource.kind).identity_field
        fields.setdefault(identity, resource.name)
        try:
            return model_type.model_validate(fields)
        except ValidationError as e:
            raise ResourceLoadError(resource.name, _describe(e)) from e

    def _fields(self, raw: Mapping[str, Any], owner: DiscoveredResource) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        for name, value in raw.items():
            if isinstance(value, Opaque):
                logger.warning(
                    "%s: ignoring %s=%s of '%s', it has no static value",
                    owner.location,
                    name,
                    value.source,
                    owner.name,
                )
                continue
            fields[name] = self._value(value, owner)
        return fields

    def _value(self, value: Any, owner: DiscoveredResource) -> Any:
        match value:
            case Opaque(source=source):
                raise _NotStatic(source)
            case Reference(name=name, attribute=None, module=module):
                target = self._lookup(name, owner, module)
                return target.name if target is not None else name
            case Reference(attribute=str(attribute)):
                return self._read_attribute(value, attribute, owner)
            case ModelLiteral(type_name=type_name, fields=fields):
                return MODEL_TYPES[type_name].model_validate(self._fields(fields, owner))
            case list():
                return [self._value(item, owner) for item in value]
            case dict():
                return {key: self._value(item, owner) for key, item in value.items()}
            case _:
                return value

    def _lookup(
        self,
        identifier: str,
        owner: DiscoveredResource,
        module: str | None = None,
    ) -> DiscoveredResource | None:
        return self._variables.resolve(identifier, file=owner.file, module=module) or self._by_name.get(identifier)

    def _read_attribute(self, reference: Reference, attribute: str, owner: DiscoveredResource) -> Any:
        target = self._lookup(reference.name, owner, reference.module)
        if target is None and (declaration := self._lookup(attribute, owner, reference.attribute_module)) is not None:
            # module.declaration
            return declaration.name
        if target is None:
            msg = f"'{reference.name}.{attribute}' refers to an unknown declaration"
            raise ResourceLoadError(owner.name, msg)
        model = self.load(target)
        try:
            return getattr(model, attribute)
        except AttributeError:
            msg = f"{type(model).__name__} '{target.name}' has no field '{attribute}'"
            raise ResourceLoadError(owner.name, msg) from None


def load_resource(resource: DiscoveredResource, resources: Iterable[DiscoveredResource] = ()) -> DeclarationModel:
    """Load one resource, resolving references against ``resources``.

    Raises:
        ResourceLoadError: If the declaration does not validate.

    """
    return ResourceLoader((resource, *resources)).load(resource)


def load_resources(resources: Iterable[DiscoveredResource]) -> list[DeclarationModel]:
    """Load every resource of a snapshot, keeping the given order.

    Raises:
        ResourceLoadError: At the first declaration that does not validate.

    """
    return ResourceLoader(resources).load_all()
