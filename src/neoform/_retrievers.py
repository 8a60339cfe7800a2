"""GraphRAG retriever configurations."""

from enum import StrEnum
from typing import ClassVar

from pydantic import Field

from ._base import DeclarationModel


class RetrieverType(StrEnum):
    """Retriever implementations understood by neo4j-graphrag."""

    VECTOR = "Vector"
    VECTOR_CYPHER = "VectorCypher"
    HYBRID = "Hybrid"
    HYBRID_CYPHER = "HybridCypher"
    TEXT2CYPHER = "Text2Cypher"
    WEAVIATE = "Weaviate"
    PINECONE = "Pinecone"
    QDRANT = "Qdrant"


class EmbedderConfig(DeclarationModel):
    """Embedding model used to vectorise the query text."""

    provider: str
    model: str | None = None
    api_key: str | None = None
    dimensions: int | None = None


class CypherExample(DeclarationModel):
    """Few-shot question/query pair for Text2Cypher."""

    question: str
    cypher: str


class Retriever(DeclarationModel):
    """Shared payload of every retriever variant."""

    retriever_type: ClassVar[RetrieverType]

    name: str
    neo4j_uri: str | None = None
    neo4j_user: str | None = None
    neo4j_password: str | None = None
    neo4j_database: str | None = None


class VectorRetriever(Retriever):
    """Similarity search against a vector index."""

    retriever_type: ClassVar[RetrieverType] = RetrieverType.VECTOR

    index_name: str
    embedder_model: str | None = None
    embedder_config: EmbedderConfig | None = None
    top_k: int | None = None
    return_properties: list[str] = Field(default_factory=list)
    score_threshold: float | None = None


class VectorCypherRetriever(Retriever):
    """Vector search followed by a graph traversal query.

    ``retrieval_query`` sees ``node`` and ``score`` from the vector search.
    """

    retriever_type: ClassVar[RetrieverType] = RetrieverType.VECTOR_CYPHER

    index_name: str
    retrieval_query: str
    embedder_model: str | None = None
    embedder_config: EmbedderConfig | None = None
    top_k: int | None = None
    score_threshold: float | None = None


class HybridRetriever(Retriever):
    """Combined vector and full-text search."""

    retriever_type: ClassVar[RetrieverType] = RetrieverType.HYBRID

    vector_index_name: str
    fulltext_index_name: str
    embedder_model: str | None = None
    embedder_config: EmbedderConfig | None = None
    top_k: int | None = None
    return_properties: list[str] = Field(default_factory=list)
    vector_weight: float | None = None
    fulltext_weight: float | None = None


class HybridCypherRetriever(Retriever):
    """Hybrid search followed by a graph traversal query."""

    retriever_type: ClassVar[RetrieverType] = RetrieverType.HYBRID_CYPHER

    vector_index_name: str
    fulltext_index_name: str
    retrieval_query: str
    embedder_model: str | None = None
    embedder_config: EmbedderConfig | None = None
    top_k: int | None = None
    vector_weight: float | None = None
    fulltext_weight: float | None = None


class Text2CypherRetriever(Retriever):
    """LLM-generated Cypher from a natural-language question."""

    retriever_type: ClassVar[RetrieverType] = RetrieverType.TEXT2CYPHER

    llm_model: str
    llm_provider: str | None = None
    llm_api_key: str | None = None
    schema_description: str | None = None
    examples: list[CypherExample] = Field(default_factory=list)
    max_retries: int | None = None


class _ExternalRetriever(Retriever):
    top_k: int | None = None
    retrieval_query: str | None = None
    id_property: str | None = None


class WeaviateRetriever(_ExternalRetriever):
    """Vectors stored in Weaviate, graph context from Neo4j."""

    retriever_type: ClassVar[RetrieverType] = RetrieverType.WEAVIATE

    weaviate_url: str
    collection: str
    weaviate_api_key: str | None = None


class PineconeRetriever(_ExternalRetriever):
    """Vectors stored in Pinecone, graph context from Neo4j."""

    retriever_type: ClassVar[RetrieverType] = RetrieverType.PINECONE

    index_name: str
    pinecone_api_key: str | None = None
    pinecone_host: str | None = None
    namespace: str | None = None


class QdrantRetriever(_ExternalRetriever):
    """Vectors stored in Qdrant, graph context from Neo4j."""

    retriever_type: ClassVar[RetrieverType] = RetrieverType.QDRANT

    qdrant_url: str
    collection_name: str
    qdrant_api_key: str | None = None


RetrieverVariant = (
    VectorRetriever
    | VectorCypherRetriever
    | HybridRetriever
    | HybridCypherRetriever
    | Text2CypherRetriever
    | WeaviateRetriever
    | PineconeRetriever
    | QdrantRetriever
)
