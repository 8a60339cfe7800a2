"""String enums used across the resource model."""

from enum import StrEnum
from typing import Self


class StrEnumWithDoc(StrEnum):
    """String enum whose members carry their own docstring.

    Members are declared as ``NAME = "value", "doc"``; the docstring shows up
    in ``neoform list`` legends and in generated reference docs.
    """

    def __new__(cls, value: str, doc: str = "") -> Self:
        """Create a member with an attached docstring."""
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.__doc__ = doc
        return obj


class ResourceKind(StrEnumWithDoc):
    """Closed set of declarable resource kinds."""

    NODE_TYPE = "NodeType", "Node label with properties, constraints and indexes"
    RELATIONSHIP_TYPE = "RelationshipType", "Relationship type between two node labels"
    ALGORITHM = "Algorithm", "Graph Data Science algorithm configuration"
    PIPELINE = "Pipeline", "Graph Data Science ML pipeline"
    RETRIEVER = "Retriever", "GraphRAG retriever configuration"
    PROJECTION = "Projection", "In-memory graph projection"
    KG_PIPELINE = "KGPipeline", "Knowledge-graph construction pipeline"
    SCHEMA = "Schema", "Schema-level grouping with agent context"
