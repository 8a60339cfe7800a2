"""Encodings for knowledge-graph construction pipelines.

These pipelines run in neo4j-graphrag rather than in the database, so the
script encoding is a comment block carrying the extraction schema.
"""

from typing import Any, assert_never

from neoform._errors import UnknownResourceError
from neoform._kg import CustomKGPipeline, KGPipeline, KGPipelineVariant, SimpleKGPipeline

from ._cypher import comment_block, dump_fields, quote_string


def generate_schema(pipeline: SimpleKGPipeline) -> str:
    """Describe the entity and relation types as text for extraction prompts.

    Example:
        >>> print(generate_schema(SimpleKGPipeline(name="kg", entity_types=[EntityType(name="Person")])))
        Graph Schema:
        <BLANKLINE>
        Entity Types:
        - Person

    """
    lines = ["Graph Schema:", ""]
    if pipeline.entity_types:
        lines.append("Entity Types:")
        for entity in pipeline.entity_types:
            lines.append(f"- {entity.name}: {entity.description}" if entity.description else f"- {entity.name}")
            lines.extend(f"  - {prop.name} ({prop.type})" for prop in entity.properties)
    if pipeline.relation_types:
        if pipeline.entity_types:
            lines.append("")
        lines.append("Relation Types:")
        for relation in pipeline.relation_types:
            lines.append(f"- {relation.name}: {relation.description}" if relation.description else f"- {relation.name}")
            if relation.source_types or relation.target_types:
                sources = ", ".join(relation.source_types) or "*"
                targets = ", ".join(relation.target_types) or "*"
                lines.append(f"  ({sources}) -> ({targets})")
            lines.extend(f"  - {prop.name} ({prop.type})" for prop in relation.properties)
    return "\n".join(lines)


def kg_pipeline_to_cypher(pipeline: KGPipeline) -> str:
    """Render a knowledge-graph pipeline as an inert comment block."""
    if not isinstance(pipeline, KGPipelineVariant):
        raise UnknownResourceError(pipeline)

    header = f"{pipeline.kg_pipeline_type} pipeline {quote_string(pipeline.name)}"
    if pipeline.llm_config is not None:
        header += f" using {pipeline.llm_config.provider}/{pipeline.llm_config.model}"

    match pipeline:
        case SimpleKGPipeline():
            lines = [header, *generate_schema(pipeline).splitlines()]
        case CustomKGPipeline():
            lines = [header]
            if pipeline.schema_prompt:
                lines += ["Schema prompt:", *(f"  {line}" for line in pipeline.schema_prompt.strip().splitlines())]
            if pipeline.extraction_prompt:
                lines += [
                    "Extraction prompt:",
                    *(f"  {line}" for line in pipeline.extraction_prompt.strip().splitlines()),
                ]
        case _:
            assert_never(pipeline)
    return comment_block(lines)


def kg_pipeline_document(pipeline: KGPipeline) -> dict[str, Any]:
    """Document entry for a knowledge-graph pipeline with tagged splitter and resolver."""
    if not isinstance(pipeline, KGPipelineVariant):
        raise UnknownResourceError(pipeline)
    data = dump_fields(pipeline, exclude={"text_splitter", "entity_resolver"})
    document: dict[str, Any] = {"name": data.pop("name"), "kgPipelineType": str(pipeline.kg_pipeline_type), **data}
    if pipeline.text_splitter is not None:
        document["textSplitter"] = {"type": pipeline.text_splitter.splitter_type, **dump_fields(pipeline.text_splitter)}
    if pipeline.entity_resolver is not None:
        document["entityResolver"] = {
            "type": pipeline.entity_resolver.resolver_type,
            **dump_fields(pipeline.entity_resolver),
        }
    return document
