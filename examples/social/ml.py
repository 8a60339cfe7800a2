"""Link prediction for suggesting new connections."""

import neoform as nf
from examples.social import analytics

suggest_connections = nf.LinkPredictionPipeline(
    name="suggest_connections",
    graph_name=analytics.social.name,
    target_relationship_type="KNOWS",
    source_node_label="Person",
    target_node_label="Person",
    feature_steps=[
        nf.FastRPStep(mutate_property="embedding", embedding_dimension=128),
        nf.DegreeStep(mutate_property="degree"),
    ],
    feature_properties=["embedding", "degree"],
    models=[
        nf.LogisticRegression(penalty=0.001),
        nf.RandomForest(number_of_decision_trees=50),
    ],
    split_config=nf.SplitConfig(test_fraction=0.25, random_seed=42),
)
