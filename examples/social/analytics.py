"""In-memory graphs and the algorithms that run on them."""

import neoform as nf
from examples.social.schema import knows, person

social = nf.NativeProjection(
    name="social",
    node_labels=[person.label],
    relationship_projections=[
        nf.RelationshipProjection(
            type=knows.label,
            orientation=nf.Orientation.UNDIRECTED,
            properties=["weight"],
        ),
    ],
)

influence = nf.PageRank(
    name="influence",
    graph_name=social.name,
    damping_factor=0.85,
    max_iterations=20,
)

communities = nf.Louvain(
    name="communities",
    graph_name=social.name,
    mode=nf.Mode.WRITE,
    write_property="community",
    relationship_weight_property="weight",
)

person_embeddings = nf.FastRP(
    name="person_embeddings",
    graph_name=social.name,
    mode=nf.Mode.MUTATE,
    embedding_dimension=256,
    mutate_property="embedding",
)

similar_people = nf.KNN(
    name="similar_people",
    graph_name=social.name,
    node_properties=["embedding"],
    top_k=10,
)
