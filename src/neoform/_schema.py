"""Graph schema resources: node types, relationship types and schema groupings."""

from enum import StrEnum
from typing import Any

from pydantic import Field

from ._base import DeclarationModel


class PropertyType(StrEnum):
    """Neo4j property value types."""

    STRING = "STRING"
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    BOOLEAN = "BOOLEAN"
    DATE = "DATE"
    DATETIME = "DATETIME"
    POINT = "POINT"
    LIST_STRING = "LIST_STRING"
    LIST_INTEGER = "LIST_INTEGER"
    LIST_FLOAT = "LIST_FLOAT"


class Cardinality(StrEnum):
    """Expected multiplicity of a relationship."""

    ONE_TO_ONE = "ONE_TO_ONE"
    ONE_TO_MANY = "ONE_TO_MANY"
    MANY_TO_ONE = "MANY_TO_ONE"
    MANY_TO_MANY = "MANY_TO_MANY"


class ConstraintType(StrEnum):
    """Neo4j constraint kinds."""

    UNIQUE = "UNIQUE"
    EXISTS = "EXISTS"
    NODE_KEY = "NODE_KEY"
    REL_KEY = "REL_KEY"


class IndexType(StrEnum):
    """Neo4j index kinds."""

    BTREE = "BTREE"
    TEXT = "TEXT"
    FULLTEXT = "FULLTEXT"
    POINT = "POINT"
    VECTOR = "VECTOR"


class Property(DeclarationModel):
    """A property on a node or relationship type."""

    name: str
    type: PropertyType
    required: bool = False
    unique: bool = False
    description: str | None = None
    default_value: Any = None


class Constraint(DeclarationModel):
    """An explicit constraint over one or more properties.

    When ``name`` is omitted the generated constraint is named after the
    label, the properties and the constraint type.
    """

    type: ConstraintType
    properties: list[str] = Field(min_length=1)
    name: str | None = None


class Index(DeclarationModel):
    """An index over one or more properties.

    ``options`` is only used by vector indexes (``dimensions`` and
    ``similarity_function``).
    """

    properties: list[str] = Field(min_length=1)
    type: IndexType = IndexType.BTREE
    name: str | None = None
    options: dict[str, Any] = Field(default_factory=dict)


class NodeType(DeclarationModel):
    """A node label.

    Example:
        >>> person = NodeType(
        ...     label="Person",
        ...     properties=[Property(name="id", type=PropertyType.STRING, unique=True)],
        ... )

    """

    label: str
    description: str | None = None
    properties: list[Property] = Field(default_factory=list)
    constraints: list[Constraint] = Field(default_factory=list)
    indexes: list[Index] = Field(default_factory=list)


class RelationshipType(DeclarationModel):
    """A relationship type connecting a source label to a target label.

    ``source`` and ``target`` accept either a label string or, in a
    declaration file, a reference to the node type variable itself.
    """

    label: str
    source: str
    target: str
    cardinality: Cardinality | None = None
    description: str | None = None
    properties: list[Property] = Field(default_factory=list)
    constraints: list[Constraint] = Field(default_factory=list)
    indexes: list[Index] = Field(default_factory=list)


class Schema(DeclarationModel):
    """A named group of node and relationship types.

    ``agent_context`` is free text describing the domain for tools that
    generate queries against the schema.
    """

    name: str
    description: str | None = None
    agent_context: str | None = None
    node_types: list[str] = Field(default_factory=list)
    relationship_types: list[str] = Field(default_factory=list)
