"""Cypher and document encodings for GraphRAG retrievers.

Vector and hybrid retrievers render the index query they run, with the
query embedding and text passed as ``$queryVector`` and ``$queryText``
parameters. Retrievers whose query is produced elsewhere (Text2Cypher and
external vector stores) render as comment blocks.
"""

from typing import Any, assert_never

from neoform._errors import UnknownResourceError
from neoform._retrievers import (
    HybridCypherRetriever,
    HybridRetriever,
    PineconeRetriever,
    QdrantRetriever,
    Retriever,
    RetrieverVariant,
    Text2CypherRetriever,
    VectorCypherRetriever,
    VectorRetriever,
    WeaviateRetriever,
)

from ._cypher import comment_block, dump_fields, quote_identifier, quote_string

DEFAULT_TOP_K = 5


def retriever_to_cypher(retriever: Retriever) -> str:
    """Render the query a retriever runs against Neo4j.

    Raises:
        UnknownResourceError: If ``retriever`` is not a concrete retriever variant.

    """
    if not isinstance(retriever, RetrieverVariant):
        raise UnknownResourceError(retriever)

    match retriever:
        case VectorRetriever():
            lines = _vector_search(retriever.index_name, retriever.top_k, retriever.score_threshold)
            lines.append(_return_clause(retriever.return_properties))
            return "\n".join(lines) + ";"
        case VectorCypherRetriever():
            lines = _vector_search(retriever.index_name, retriever.top_k, retriever.score_threshold)
            lines += ["WITH node, score", _retrieval_query(retriever.retrieval_query)]
            return "\n".join(lines) + ";"
        case HybridRetriever():
            lines = _hybrid_search(retriever)
            lines.append(_return_clause(retriever.return_properties))
            return "\n".join(lines) + ";"
        case HybridCypherRetriever():
            lines = _hybrid_search(retriever)
            lines += ["WITH node, score", _retrieval_query(retriever.retrieval_query)]
            return "\n".join(lines) + ";"
        case Text2CypherRetriever():
            return _text2cypher_comment(retriever)
        case WeaviateRetriever() | PineconeRetriever() | QdrantRetriever():
            return _external_comment(retriever)
        case _:
            assert_never(retriever)


def _vector_search(index_name: str, top_k: int | None, score_threshold: float | None) -> list[str]:
    lines = [
        f"CALL db.index.vector.queryNodes({quote_string(index_name)}, {top_k or DEFAULT_TOP_K}, $queryVector)",
        "YIELD node, score",
    ]
    if score_threshold is not None:
        lines.append(f"WHERE score >= {score_threshold!r}")
    return lines


def _weighted(weight: float | None) -> str:
    return "score" if weight is None else f"score * {weight!r}"


def _hybrid_search(retriever: HybridRetriever | HybridCypherRetriever) -> list[str]:
    top_k = retriever.top_k or DEFAULT_TOP_K
    return [
        "CALL {",
        f"  CALL db.index.vector.queryNodes({quote_string(retriever.vector_index_name)}, {top_k}, $queryVector)",
        "  YIELD node, score",
        f"  RETURN node, {_weighted(retriever.vector_weight)} AS score",
        "  UNION",
        f"  CALL db.index.fulltext.queryNodes("
        f"{quote_string(retriever.fulltext_index_name)}, $queryText, {{limit: {top_k}}})",
        "  YIELD node, score",
        f"  RETURN node, {_weighted(retriever.fulltext_weight)} AS score",
        "}",
        "WITH node, max(score) AS score",
        "ORDER BY score DESC",
        f"LIMIT {top_k}",
    ]


def _return_clause(properties: list[str]) -> str:
    if not properties:
        return "RETURN node, score"
    columns = ", ".join(f"node.{quote_identifier(p)} AS {quote_identifier(p)}" for p in properties)
    return f"RETURN {columns}, score"


def _retrieval_query(query: str) -> str:
    return query.strip().rstrip(";")


def _text2cypher_comment(retriever: Text2CypherRetriever) -> str:
    llm = f"{retriever.llm_provider}/{retriever.llm_model}" if retriever.llm_provider else retriever.llm_model
    lines = [f"Text2Cypher retriever {quote_string(retriever.name)} generates Cypher at query time with {llm}"]
    if retriever.schema_description:
        lines += ["Schema:", *(f"  {line}" for line in retriever.schema_description.strip().splitlines())]
    for example in retriever.examples:
        lines += [f"Example: {example.question}", *(f"  {line}" for line in example.cypher.strip().splitlines())]
    return comment_block(lines)


def _external_comment(retriever: WeaviateRetriever | PineconeRetriever | QdrantRetriever) -> str:
    match retriever:
        case WeaviateRetriever():
            store = f"Weaviate collection {quote_string(retriever.collection)} at {retriever.weaviate_url}"
        case PineconeRetriever():
            store = f"Pinecone index {quote_string(retriever.index_name)}"
        case QdrantRetriever():
            store = f"Qdrant collection {quote_string(retriever.collection_name)} at {retriever.qdrant_url}"
    lines = [f"{retriever.retriever_type} retriever {quote_string(retriever.name)} searches {store}"]
    if retriever.id_property:
        lines.append(f"Matches Neo4j nodes on property {retriever.id_property}")
    if retriever.retrieval_query:
        lines += ["Retrieval query:", *(f"  {line}" for line in retriever.retrieval_query.strip().splitlines())]
    return comment_block(lines)


def retriever_document(retriever: Retriever) -> dict[str, Any]:
    """Document entry for a retriever, tagged with its retriever type."""
    if not isinstance(retriever, RetrieverVariant):
        raise UnknownResourceError(retriever)
    data = dump_fields(retriever)
    return {"name": data.pop("name"), "retrieverType": str(retriever.retriever_type), **data}
