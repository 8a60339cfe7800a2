"""Cypher and document encodings for graph projections."""

from typing import Any, assert_never

from neoform._errors import UnknownResourceError
from neoform._projections import (
    CypherProjection,
    DataFrameProjection,
    NativeProjection,
    Projection,
    ProjectionVariant,
)

from ._cypher import comment_block, dump_fields, format_call, format_map, format_value, quote_identifier, quote_string

PROJECT_YIELD = "YIELD graphName, nodeCount, relationshipCount"


def projection_to_cypher(projection: Projection) -> str:
    """Render the statement that creates the in-memory graph.

    Data-frame projections are built client-side, so they render as a comment
    block describing the frames.

    Raises:
        UnknownResourceError: If ``projection`` is not a concrete projection variant.

    """
    if not isinstance(projection, ProjectionVariant):
        raise UnknownResourceError(projection)

    graph = f"  {quote_string(projection.target_graph)}"
    match projection:
        case NativeProjection():
            arguments = [graph, f"  {_node_argument(projection)}", f"  {_relationship_argument(projection)}"]
            config = _read_config(projection)
            if config:
                arguments.append(f"  {format_map(config)}")
            return f"{format_call('gds.graph.project', arguments)}\n{PROJECT_YIELD};"
        case CypherProjection():
            arguments = [
                graph,
                f"  {quote_string(projection.node_query)}",
                f"  {quote_string(projection.relationship_query)}",
            ]
            config = _read_config(projection)
            if projection.parameters:
                config["parameters"] = projection.parameters
            if projection.validate_relationships:
                config["validateRelationships"] = True
            if config:
                arguments.append(f"  {format_map(config)}")
            return f"{format_call('gds.graph.project.cypher', arguments)}\n{PROJECT_YIELD};"
        case DataFrameProjection():
            return _data_frame_comment(projection)
        case _:
            assert_never(projection)


def _read_config(projection: Projection) -> dict[str, Any]:
    if projection.read_concurrency is None:
        return {}
    return {"readConcurrency": projection.read_concurrency}


def _label_argument(labels: list[str]) -> str:
    """``'*'`` for all, a single quoted name, or a list of names."""
    if not labels:
        return quote_string("*")
    if len(labels) == 1:
        return quote_string(labels[0])
    return format_value(labels)


def _node_argument(projection: NativeProjection) -> str:
    if not projection.node_projections:
        return _label_argument(projection.node_labels)
    entries: dict[str, Any] = {}
    for node in projection.node_projections:
        spec: dict[str, Any] = {"label": node.label}
        if node.properties:
            spec["properties"] = _properties(node.properties, node.default_value)
        entries[node.label] = spec
    return format_map(entries)


def _relationship_argument(projection: NativeProjection) -> str:
    if not projection.relationship_projections:
        return _label_argument(projection.relationship_types)
    entries: dict[str, Any] = {}
    for rel in projection.relationship_projections:
        spec: dict[str, Any] = {"type": rel.type}
        if rel.orientation is not None:
            spec["orientation"] = str(rel.orientation)
        if rel.aggregation is not None:
            spec["aggregation"] = str(rel.aggregation)
        if rel.properties:
            spec["properties"] = _properties(rel.properties, rel.default_value)
        entries[rel.type] = spec
    return format_map(entries)


def _properties(names: list[str], default_value: Any) -> Any:
    if default_value is None:
        return names
    return {name: {"defaultValue": default_value} for name in names}


def _data_frame_comment(projection: DataFrameProjection) -> str:
    lines = [f"Graph {quote_string(projection.target_graph)} is constructed client-side with gds.graph.construct"]
    for frame in projection.node_data_frames:
        line = f"Node frame {quote_identifier(frame.label)}: id column {frame.id_column}"
        if frame.properties:
            line += f", properties {', '.join(frame.properties)}"
        lines.append(line)
    for frame in projection.relationship_data_frames:
        line = f"Relationship frame {quote_identifier(frame.type)}: {frame.source_column} -> {frame.target_column}"
        if frame.properties:
            line += f", properties {', '.join(frame.properties)}"
        lines.append(line)
    return comment_block(lines)


def drop_graph(graph_name: str, *, fail_if_missing: bool = True) -> str:
    """Statement dropping an in-memory graph."""
    if fail_if_missing:
        return f"CALL gds.graph.drop({quote_string(graph_name)}) YIELD graphName;"
    return f"CALL gds.graph.drop({quote_string(graph_name)}, false) YIELD graphName;"


def graph_exists(graph_name: str) -> str:
    """Statement checking whether an in-memory graph exists."""
    return f"CALL gds.graph.exists({quote_string(graph_name)}) YIELD exists;"


def list_graphs() -> str:
    """Statement listing all in-memory graphs."""
    return "CALL gds.graph.list() YIELD graphName, nodeCount, relationshipCount;"


def projection_document(projection: Projection) -> dict[str, Any]:
    """Document entry for a projection, tagged with its projection type."""
    if not isinstance(projection, ProjectionVariant):
        raise UnknownResourceError(projection)
    data = dump_fields(projection)
    return {"name": data.pop("name"), "projectionType": str(projection.projection_type), **data}
