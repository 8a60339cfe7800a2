"""Knowledge-graph construction pipelines (neo4j-graphrag ``SimpleKGPipeline``)."""

from enum import StrEnum
from typing import ClassVar

from pydantic import Field

from ._base import DeclarationModel
from ._retrievers import EmbedderConfig


class KGPipelineType(StrEnum):
    """Knowledge-graph pipeline flavours."""

    SIMPLE = "SimpleKG"
    CUSTOM = "CustomKG"


class LLMConfig(DeclarationModel):
    """Language model used for entity and relation extraction."""

    provider: str
    model: str
    api_key: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None


class EntityProperty(DeclarationModel):
    """Property extracted for an entity or relation."""

    name: str
    type: str = "STRING"
    description: str | None = None
    required: bool = False


class EntityType(DeclarationModel):
    """Entity the LLM is asked to extract."""

    name: str
    description: str | None = None
    properties: list[EntityProperty] = Field(default_factory=list)


class RelationType(DeclarationModel):
    """Relation the LLM is asked to extract."""

    name: str
    description: str | None = None
    source_types: list[str] = Field(default_factory=list)
    target_types: list[str] = Field(default_factory=list)
    properties: list[EntityProperty] = Field(default_factory=list)


class TextSplitter(DeclarationModel):
    """Splits input documents into chunks before extraction."""

    splitter_type: ClassVar[str]


class FixedSizeSplitter(TextSplitter):
    """Fixed-size character chunks."""

    splitter_type: ClassVar[str] = "fixed_size"

    chunk_size: int | None = None
    chunk_overlap: int | None = None


class LangChainSplitter(TextSplitter):
    """Delegate to a LangChain text splitter class."""

    splitter_type: ClassVar[str] = "langchain"

    splitter_class: str
    chunk_size: int | None = None
    chunk_overlap: int | None = None
    separators: list[str] = Field(default_factory=list)


class EntityResolver(DeclarationModel):
    """Merges duplicate entities after extraction."""

    resolver_type: ClassVar[str]

    resolve_property: str = "name"


class ExactMatchResolver(EntityResolver):
    """Merge entities whose resolve property is identical."""

    resolver_type: ClassVar[str] = "exact_match"


class FuzzyMatchResolver(EntityResolver):
    """Merge entities by string similarity."""

    resolver_type: ClassVar[str] = "fuzzy_match"

    threshold: float | None = None


class SemanticMatchResolver(EntityResolver):
    """Merge entities by embedding similarity."""

    resolver_type: ClassVar[str] = "semantic_match"

    threshold: float | None = None
    model: str | None = None


TextSplitterVariant = FixedSizeSplitter | LangChainSplitter
EntityResolverVariant = ExactMatchResolver | FuzzyMatchResolver | SemanticMatchResolver


class KGPipeline(DeclarationModel):
    """Shared payload of every knowledge-graph pipeline."""

    kg_pipeline_type: ClassVar[KGPipelineType]

    name: str
    neo4j_uri: str | None = None
    neo4j_user: str | None = None
    neo4j_password: str | None = None
    neo4j_database: str | None = None
    llm_config: LLMConfig | None = None
    embedder_config: EmbedderConfig | None = None
    text_splitter: TextSplitterVariant | None = None
    entity_resolver: EntityResolverVariant | None = None
    on_error: str | None = None


class SimpleKGPipeline(KGPipeline):
    """Schema-guided extraction with ``neo4j_graphrag``'s SimpleKGPipeline."""

    kg_pipeline_type: ClassVar[KGPipelineType] = KGPipelineType.SIMPLE

    entity_types: list[EntityType] = Field(default_factory=list)
    relation_types: list[RelationType] = Field(default_factory=list)
    perform_entity_resolution: bool | None = None
    from_pdf: bool = False


class CustomKGPipeline(KGPipeline):
    """Prompt-driven extraction with user supplied prompts."""

    kg_pipeline_type: ClassVar[KGPipelineType] = KGPipelineType.CUSTOM

    extraction_prompt: str | None = None
    schema_prompt: str | None = None


KGPipelineVariant = SimpleKGPipeline | CustomKGPipeline
