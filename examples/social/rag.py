"""Retrieval over the network for question answering."""

import neoform as nf
from examples.social.schema import person

profile_search = nf.VectorCypherRetriever(
    name="profile_search",
    index_name="person_embedding",
    retrieval_query="""
        MATCH (node)-[:WORKS_FOR]->(c:Company)
        RETURN node.name AS name, c.name AS company, score
    """,
    embedder_config=nf.EmbedderConfig(provider="openai", model="text-embedding-3-small", dimensions=256),
    top_k=5,
)

people_hybrid = nf.HybridRetriever(
    name="people_hybrid",
    vector_index_name="person_embedding",
    fulltext_index_name="person_bio",
    return_properties=["name", "email"],
)

ask_the_graph = nf.Text2CypherRetriever(
    name="ask_the_graph",
    llm_model="gpt-4o",
    examples=[
        nf.CypherExample(
            question="Who works for Acme?",
            cypher="MATCH (p:Person)-[:WORKS_FOR]->(:Company {name: 'Acme'}) RETURN p.name",
        ),
    ],
)

resumes = nf.SimpleKGPipeline(
    name="resumes",
    llm_config=nf.LLMConfig(provider="openai", model="gpt-4o", temperature=0.0),
    entity_types=[
        nf.EntityType(name=person.label, properties=[nf.EntityProperty(name="name")]),
        nf.EntityType(name="Company"),
        nf.EntityType(name="Skill"),
    ],
    relation_types=[
        nf.RelationType(name="WORKS_FOR", source_types=["Person"], target_types=["Company"]),
        nf.RelationType(name="HAS_SKILL", source_types=["Person"], target_types=["Skill"]),
    ],
    text_splitter=nf.FixedSizeSplitter(chunk_size=500, chunk_overlap=50),
    entity_resolver=nf.FuzzyMatchResolver(threshold=0.9),
    from_pdf=True,
)
