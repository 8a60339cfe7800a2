"""Tests for the encodings of retrievers and knowledge-graph pipelines."""

import neoform as nf
from neoform._serialize import (
    generate_schema,
    kg_pipeline_document,
    kg_pipeline_to_cypher,
    retriever_document,
    retriever_to_cypher,
)


class TestRetrieverToCypher:
    def test_vector_retriever(self) -> None:
        retriever = nf.VectorRetriever(name="v", index_name="person_embedding", top_k=3, return_properties=["name"])

        assert retriever_to_cypher(retriever) == (
            "CALL db.index.vector.queryNodes('person_embedding', 3, $queryVector)\n"
            "YIELD node, score\n"
            "RETURN node.name AS name, score;"
        )

    def test_score_threshold_and_default_top_k(self) -> None:
        retriever = nf.VectorRetriever(name="v", index_name="idx", score_threshold=0.5)

        assert retriever_to_cypher(retriever).splitlines() == [
            "CALL db.index.vector.queryNodes('idx', 5, $queryVector)",
            "YIELD node, score",
            "WHERE score >= 0.5",
            "RETURN node, score;",
        ]

    def test_vector_cypher_retriever_appends_query(self) -> None:
        retriever = nf.VectorCypherRetriever(
            name="vc",
            index_name="idx",
            retrieval_query="\n    MATCH (node)-[:KNOWS]->(friend)\n    RETURN friend.name AS name, score;\n",
        )

        assert retriever_to_cypher(retriever).splitlines()[2:] == [
            "WITH node, score",
            "MATCH (node)-[:KNOWS]->(friend)",
            "    RETURN friend.name AS name, score;",
        ]

    def test_hybrid_retriever(self) -> None:
        retriever = nf.HybridRetriever(
            name="h",
            vector_index_name="vec",
            fulltext_index_name="text",
            top_k=4,
            vector_weight=0.7,
        )

        assert retriever_to_cypher(retriever).splitlines() == [
            "CALL {",
            "  CALL db.index.vector.queryNodes('vec', 4, $queryVector)",
            "  YIELD node, score",
            "  RETURN node, score * 0.7 AS score",
            "  UNION",
            "  CALL db.index.fulltext.queryNodes('text', $queryText, {limit: 4})",
            "  YIELD node, score",
            "  RETURN node, score AS score",
            "}",
            "WITH node, max(score) AS score",
            "ORDER BY score DESC",
            "LIMIT 4",
            "RETURN node, score;",
        ]

    def test_text2cypher_is_a_comment(self) -> None:
        retriever = nf.Text2CypherRetriever(
            name="ask",
            llm_model="gpt-4o",
            llm_provider="openai",
            examples=[nf.CypherExample(question="Who?", cypher="MATCH (p:Person) RETURN p")],
        )

        assert retriever_to_cypher(retriever).splitlines() == [
            "// Text2Cypher retriever 'ask' generates Cypher at query time with openai/gpt-4o",
            "// Example: Who?",
            "//   MATCH (p:Person) RETURN p",
        ]

    def test_multiline_example_question(self) -> None:
        retriever = nf.Text2CypherRetriever(
            name="ask",
            llm_model="gpt-4o",
            examples=[nf.CypherExample(question="Who works where?\nList both.", cypher="MATCH (p)-->(c) RETURN p, c")],
        )

        assert retriever_to_cypher(retriever).splitlines() == [
            "// Text2Cypher retriever 'ask' generates Cypher at query time with gpt-4o",
            "// Example: Who works where?",
            "// List both.",
            "//   MATCH (p)-->(c) RETURN p, c",
        ]

    def test_external_store_is_a_comment(self) -> None:
        retriever = nf.QdrantRetriever(
            name="q",
            qdrant_url="http://localhost:6333",
            collection_name="people",
            id_property="id",
        )

        assert retriever_to_cypher(retriever).splitlines() == [
            "// Qdrant retriever 'q' searches Qdrant collection 'people' at http://localhost:6333",
            "// Matches Neo4j nodes on property id",
        ]

    def test_document(self) -> None:
        retriever = nf.VectorRetriever(
            name="v",
            index_name="idx",
            embedder_config=nf.EmbedderConfig(provider="openai", dimensions=256),
        )

        assert retriever_document(retriever) == {
            "name": "v",
            "retrieverType": "Vector",
            "indexName": "idx",
            "embedderConfig": {"provider": "openai", "dimensions": 256},
        }


def _kg_pipeline() -> nf.SimpleKGPipeline:
    return nf.SimpleKGPipeline(
        name="resumes",
        llm_config=nf.LLMConfig(provider="openai", model="gpt-4o"),
        entity_types=[
            nf.EntityType(name="Person", properties=[nf.EntityProperty(name="name")]),
            nf.EntityType(name="Company", description="An employer"),
        ],
        relation_types=[nf.RelationType(name="WORKS_FOR", source_types=["Person"], target_types=["Company"])],
        text_splitter=nf.FixedSizeSplitter(chunk_size=500),
        entity_resolver=nf.FuzzyMatchResolver(threshold=0.9),
    )


class TestKGPipeline:
    def test_generate_schema(self) -> None:
        assert generate_schema(_kg_pipeline()).splitlines() == [
            "Graph Schema:",
            "",
            "Entity Types:",
            "- Person",
            "  - name (STRING)",
            "- Company: An employer",
            "",
            "Relation Types:",
            "- WORKS_FOR",
            "  (Person) -> (Company)",
        ]

    def test_script_is_a_comment_block(self) -> None:
        lines = kg_pipeline_to_cypher(_kg_pipeline()).splitlines()

        assert lines[0] == "// SimpleKG pipeline 'resumes' using openai/gpt-4o"
        assert lines[1:4] == ["// Graph Schema:", "//", "// Entity Types:"]
        assert all(line.startswith("//") for line in lines)

    def test_custom_pipeline_prompts(self) -> None:
        pipeline = nf.CustomKGPipeline(name="custom", extraction_prompt="Extract people.")

        assert kg_pipeline_to_cypher(pipeline).splitlines() == [
            "// CustomKG pipeline 'custom'",
            "// Extraction prompt:",
            "//   Extract people.",
        ]

    def test_document_tags_splitter_and_resolver(self) -> None:
        document = kg_pipeline_document(_kg_pipeline())

        assert document["kgPipelineType"] == "SimpleKG"
        assert document["textSplitter"] == {"type": "fixed_size", "chunkSize": 500}
        assert document["entityResolver"] == {"type": "fuzzy_match", "threshold": 0.9}
        assert document["entityTypes"][1] == {"name": "Company", "description": "An employer"}
