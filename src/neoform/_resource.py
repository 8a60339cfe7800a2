"""Normalized envelope for declarations recovered from source files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from ._enums import ResourceKind


@dataclass(frozen=True, slots=True, order=True)
class ResourceKey:
    """Identity of a resource: names are unique within a kind."""

    kind: ResourceKind
    name: str

    def __str__(self) -> str:
        return f"{self.kind}:{self.name}"


@dataclass(frozen=True, slots=True)
class PropertyInfo:
    """A property as written in the declaration."""

    name: str
    type: str
    required: bool = False
    unique: bool = False
    description: str | None = None


@dataclass(frozen=True, slots=True)
class ConstraintInfo:
    """An explicit constraint as written in the declaration."""

    type: str
    properties: tuple[str, ...]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class IndexInfo:
    """An index as written in the declaration."""

    type: str
    properties: tuple[str, ...]
    name: str | None = None
    options: Mapping[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True, slots=True)
class DiscoveredResource:
    """A resource declaration recovered without executing its module.

    Instances are created once by the scanner and never modified afterwards.

    Attributes:
        name: Resource name, unique within ``kind``. Taken from the identity
            field (``label`` or ``name``) and falling back to the variable name.
        kind: The resource kind.
        file: Source file of the declaration.
        line: 1-based line of the declaration.
        variable: Identifier the declaration is bound to.
        type_name: Class name of the declared model, e.g. ``"PageRank"``.
        properties: Property declarations in source order.
        constraints: Constraint declarations in source order.
        indexes: Index declarations in source order.
        source: Source label of a relationship type.
        target: Target label of a relationship type.
        dependencies: Names of other resources this one refers to, in order of
            first reference. Never contains ``name``.
        agent_context: Free-text context of a schema declaration.
        fields: Raw field values recovered from the declaration. Values are
            plain literals, ``Reference``, ``ModelLiteral`` or ``Opaque``.

    """

    name: str
    kind: ResourceKind
    file: Path
    line: int
    variable: str
    type_name: str
    properties: tuple[PropertyInfo, ...] = ()
    constraints: tuple[ConstraintInfo, ...] = ()
    indexes: tuple[IndexInfo, ...] = ()
    source: str | None = None
    target: str | None = None
    dependencies: tuple[str, ...] = ()
    agent_context: str | None = None
    fields: Mapping[str, Any] = field(default_factory=dict, hash=False, repr=False)

    @property
    def key(self) -> ResourceKey:
        """The (kind, name) identity of this resource."""
        return ResourceKey(self.kind, self.name)

    @property
    def location(self) -> str:
        """``file:line`` for messages."""
        return f"{self.file}:{self.line}"
