"""In-memory graph projections for the Graph Data Science library."""

from enum import StrEnum
from typing import Any, ClassVar

from pydantic import Field

from ._base import DeclarationModel


class ProjectionType(StrEnum):
    """How a projection reads the database."""

    NATIVE = "Native"
    CYPHER = "Cypher"
    DATA_FRAME = "DataFrame"


class Orientation(StrEnum):
    """Direction in which relationships are loaded."""

    NATURAL = "NATURAL"
    REVERSE = "REVERSE"
    UNDIRECTED = "UNDIRECTED"


class Aggregation(StrEnum):
    """How parallel relationships are merged."""

    NONE = "NONE"
    SUM = "SUM"
    MIN = "MIN"
    MAX = "MAX"
    SINGLE = "SINGLE"
    COUNT = "COUNT"


class NodeProjection(DeclarationModel):
    """Per-label configuration for a native projection."""

    label: str
    properties: list[str] = Field(default_factory=list)
    default_value: Any = None


class RelationshipProjection(DeclarationModel):
    """Per-type configuration for a native projection."""

    type: str
    orientation: Orientation | None = None
    aggregation: Aggregation | None = None
    properties: list[str] = Field(default_factory=list)
    default_value: Any = None


class NodeDataFrame(DeclarationModel):
    """Node table for a data-frame projection."""

    label: str
    id_column: str = "nodeId"
    properties: list[str] = Field(default_factory=list)


class RelationshipDataFrame(DeclarationModel):
    """Relationship table for a data-frame projection."""

    type: str
    source_column: str = "sourceNodeId"
    target_column: str = "targetNodeId"
    properties: list[str] = Field(default_factory=list)


class Projection(DeclarationModel):
    """Shared payload of every projection variant.

    ``graph_name`` is the name of the in-memory graph; it defaults to the
    resource name.
    """

    projection_type: ClassVar[ProjectionType]

    name: str
    graph_name: str = ""
    read_concurrency: int | None = None

    @property
    def target_graph(self) -> str:
        """Name of the projected in-memory graph."""
        return self.graph_name or self.name


class NativeProjection(Projection):
    """Projection of stored labels and relationship types.

    Either list ``node_labels``/``relationship_types`` for the short form or
    give ``node_projections``/``relationship_projections`` for per-label
    properties and orientation.
    """

    projection_type: ClassVar[ProjectionType] = ProjectionType.NATIVE

    node_labels: list[str] = Field(default_factory=list)
    relationship_types: list[str] = Field(default_factory=list)
    node_projections: list[NodeProjection] = Field(default_factory=list)
    relationship_projections: list[RelationshipProjection] = Field(default_factory=list)

    @property
    def is_extended(self) -> bool:
        """Whether the projection needs the map form of ``gds.graph.project``."""
        return bool(self.node_projections or self.relationship_projections)


class CypherProjection(Projection):
    """Projection defined by a node query and a relationship query."""

    projection_type: ClassVar[ProjectionType] = ProjectionType.CYPHER

    node_query: str
    relationship_query: str
    parameters: dict[str, Any] = Field(default_factory=dict)
    validate_relationships: bool = False


class DataFrameProjection(Projection):
    """Projection built client-side from data frames with ``gds.graph.construct``."""

    projection_type: ClassVar[ProjectionType] = ProjectionType.DATA_FRAME

    node_data_frames: list[NodeDataFrame] = Field(default_factory=list)
    relationship_data_frames: list[RelationshipDataFrame] = Field(default_factory=list)


ProjectionVariant = NativeProjection | CypherProjection | DataFrameProjection
