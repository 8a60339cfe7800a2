"""Cypher and document encodings for node types, relationship types and schemas."""

from typing import Any

from neoform._errors import SerializationError
from neoform._schema import Constraint, ConstraintType, Index, IndexType, NodeType, Property, RelationshipType, Schema

from ._cypher import comment_block, dump_fields, format_map, join_statements, quote_identifier

DEFAULT_VECTOR_DIMENSIONS = 384
DEFAULT_SIMILARITY_FUNCTION = "cosine"

_CONSTRAINT_SUFFIXES = {
    ConstraintType.UNIQUE: "unique",
    ConstraintType.EXISTS: "not_null",
    ConstraintType.NODE_KEY: "node_key",
    ConstraintType.REL_KEY: "rel_key",
}

_INDEX_KEYWORDS = {
    IndexType.BTREE: "INDEX",
    IndexType.TEXT: "TEXT INDEX",
    IndexType.FULLTEXT: "FULLTEXT INDEX",
    IndexType.POINT: "POINT INDEX",
    IndexType.VECTOR: "VECTOR INDEX",
}


class _Target:
    """Pattern and variable for statements on a node label or relationship type."""

    def __init__(self, label: str, *, relationship: bool) -> None:
        self.label = label
        self.relationship = relationship
        self.variable = "r" if relationship else "n"
        quoted = quote_identifier(label)
        self.pattern = f"()-[r:{quoted}]-()" if relationship else f"(n:{quoted})"

    def prop(self, name: str) -> str:
        return f"{self.variable}.{quote_identifier(name)}"

    def default_name(self, properties: list[str], suffix: str) -> str:
        return "_".join([self.label.lower(), *properties, suffix])


def node_type_to_cypher(node: NodeType) -> str:
    """Render constraint and index statements for a node label.

    Required and unique properties produce implicit NOT NULL and UNIQUE
    constraints ahead of the explicit ones. Returns an empty string when the
    node type declares nothing to create.

    Raises:
        SerializationError: If a constraint or index cannot apply to nodes.

    """
    target = _Target(node.label, relationship=False)
    return join_statements(_statements(target, node.properties, node.constraints, node.indexes))


def relationship_type_to_cypher(relationship: RelationshipType) -> str:
    """Render constraint and index statements for a relationship type.

    Raises:
        SerializationError: If a constraint or index cannot apply to relationships.

    """
    target = _Target(relationship.label, relationship=True)
    return join_statements(
        _statements(target, relationship.properties, relationship.constraints, relationship.indexes),
    )


def _statements(
    target: _Target,
    properties: list[Property],
    constraints: list[Constraint],
    indexes: list[Index],
) -> list[str]:
    statements: list[str] = []
    for prop in properties:
        if prop.required:
            statements.append(_constraint(target, ConstraintType.EXISTS, [prop.name], None))
        if prop.unique:
            statements.append(_constraint(target, ConstraintType.UNIQUE, [prop.name], None))
    statements.extend(_constraint(target, c.type, c.properties, c.name) for c in constraints)
    statements.extend(_index(target, index) for index in indexes)
    return statements


def _constraint(target: _Target, kind: ConstraintType, properties: list[str], name: str | None) -> str:
    name = name or target.default_name(properties, _CONSTRAINT_SUFFIXES[kind])
    subject = target.prop(properties[0]) if len(properties) == 1 else f"({', '.join(map(target.prop, properties))})"

    match kind:
        case ConstraintType.UNIQUE:
            requirement = "IS UNIQUE"
        case ConstraintType.EXISTS:
            if len(properties) != 1:
                msg = f"NOT NULL constraint '{name}' on {target.label} must name exactly one property"
                raise SerializationError(msg)
            requirement = "IS NOT NULL"
        case ConstraintType.NODE_KEY:
            if target.relationship:
                msg = f"NODE_KEY constraint '{name}' cannot apply to relationship type {target.label}"
                raise SerializationError(msg)
            requirement = "IS NODE KEY"
        case ConstraintType.REL_KEY:
            if not target.relationship:
                msg = f"REL_KEY constraint '{name}' cannot apply to node label {target.label}"
                raise SerializationError(msg)
            requirement = "IS RELATIONSHIP KEY"

    return (
        f"CREATE CONSTRAINT {quote_identifier(name)} IF NOT EXISTS "
        f"FOR {target.pattern} REQUIRE {subject} {requirement}"
    )


def _index(target: _Target, index: Index) -> str:
    name = index.name or target.default_name(index.properties, index.type.lower())
    head = f"CREATE {_INDEX_KEYWORDS[index.type]} {quote_identifier(name)} IF NOT EXISTS FOR {target.pattern}"
    props = [target.prop(p) for p in index.properties]

    match index.type:
        case IndexType.BTREE:
            return f"{head} ON ({', '.join(props)})"
        case IndexType.FULLTEXT:
            return f"{head} ON EACH [{', '.join(props)}]"
        case IndexType.TEXT | IndexType.POINT:
            _require_single(index, name, target)
            return f"{head} ON ({props[0]})"
        case IndexType.VECTOR:
            _require_single(index, name, target)
            config = {
                "vector.dimensions": index.options.get("dimensions", DEFAULT_VECTOR_DIMENSIONS),
                "vector.similarity_function": index.options.get("similarity_function", DEFAULT_SIMILARITY_FUNCTION),
            }
            return f"{head} ON ({props[0]}) OPTIONS {format_map({'indexConfig': config})}"


def _require_single(index: Index, name: str, target: _Target) -> None:
    if len(index.properties) != 1:
        msg = f"{index.type} index '{name}' on {target.label} must name exactly one property"
        raise SerializationError(msg)


def schema_to_cypher(schema: Schema) -> str:
    """Render a schema grouping as a comment block; it creates nothing."""
    lines = [f"Schema: {schema.name}"]
    if schema.description:
        lines.append(schema.description)
    if schema.node_types:
        lines.append(f"Node types: {', '.join(schema.node_types)}")
    if schema.relationship_types:
        lines.append(f"Relationship types: {', '.join(schema.relationship_types)}")
    if schema.agent_context:
        lines.append("Agent context:")
        lines.extend(f"  {line}" for line in schema.agent_context.strip().splitlines())
    return comment_block(lines)


def node_type_document(node: NodeType) -> dict[str, Any]:
    """Document entry for a node type."""
    return dump_fields(node)


def relationship_type_document(relationship: RelationshipType) -> dict[str, Any]:
    """Document entry for a relationship type; ``source`` and ``target`` are labels."""
    return dump_fields(relationship)


def schema_document(schema: Schema) -> dict[str, Any]:
    """Document entry for a schema grouping."""
    return dump_fields(schema)
