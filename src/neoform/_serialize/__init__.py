"""Per-category Cypher and document encoders.

Batch serialization over mixed resources lives in ``_batch`` and dispatches
through the kind registry.
"""

from ._algorithms import algorithm_config, algorithm_document, algorithm_to_cypher, yield_fields
from ._cypher import format_value, quote_identifier, quote_string
from ._kg import generate_schema, kg_pipeline_document, kg_pipeline_to_cypher
from ._pipelines import pipeline_document, pipeline_statements, pipeline_to_cypher
from ._projections import drop_graph, graph_exists, list_graphs, projection_document, projection_to_cypher
from ._retrievers import retriever_document, retriever_to_cypher
from ._schema import (
    node_type_document,
    node_type_to_cypher,
    relationship_type_document,
    relationship_type_to_cypher,
    schema_document,
    schema_to_cypher,
)

__all__ = [
    "algorithm_config",
    "algorithm_document",
    "algorithm_to_cypher",
    "drop_graph",
    "format_value",
    "generate_schema",
    "graph_exists",
    "kg_pipeline_document",
    "kg_pipeline_to_cypher",
    "list_graphs",
    "node_type_document",
    "node_type_to_cypher",
    "pipeline_document",
    "pipeline_statements",
    "pipeline_to_cypher",
    "projection_document",
    "projection_to_cypher",
    "quote_identifier",
    "quote_string",
    "relationship_type_document",
    "relationship_type_to_cypher",
    "retriever_document",
    "retriever_to_cypher",
    "schema_document",
    "schema_to_cypher",
    "yield_fields",
]
