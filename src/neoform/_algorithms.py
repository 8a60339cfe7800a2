"""Graph Data Science algorithm configurations.

Every algorithm is a concrete subclass of :class:`Algorithm`. The subclass
declares the GDS procedure it calls, its category and its type tag as class
variables, so serializers and lint rules never have to inspect field
layouts to find out what they are dealing with.
"""

from enum import StrEnum
from typing import ClassVar

from pydantic import Field

from ._base import DeclarationModel
from ._projections import Orientation


class AlgorithmCategory(StrEnum):
    """Family an algorithm belongs to; selects the streamed result columns."""

    CENTRALITY = "Centrality"
    COMMUNITY = "Community"
    SIMILARITY = "Similarity"
    PATH_FINDING = "PathFinding"
    EMBEDDINGS = "Embeddings"
    LINK_PREDICTION = "LinkPrediction"


class Mode(StrEnum):
    """How the algorithm result is returned or persisted."""

    STREAM = "stream"
    STATS = "stats"
    MUTATE = "mutate"
    WRITE = "write"


class Algorithm(DeclarationModel):
    """Shared payload of every algorithm variant."""

    procedure: ClassVar[str]
    category: ClassVar[AlgorithmCategory]
    algorithm_type: ClassVar[str]

    name: str
    graph_name: str = ""
    mode: Mode = Mode.STREAM
    concurrency: int | None = None
    node_labels: list[str] = Field(default_factory=list)
    relationship_types: list[str] = Field(default_factory=list)


class _NodePropertyOutput(Algorithm):
    """Algorithms that write or mutate a node property."""

    write_property: str | None = None
    mutate_property: str | None = None


# Centrality


class _RankAlgorithm(_NodePropertyOutput):
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.CENTRALITY

    damping_factor: float | None = None
    max_iterations: int | None = None
    tolerance: float | None = None
    relationship_weight_property: str | None = None


class PageRank(_RankAlgorithm):
    """PageRank centrality."""

    procedure: ClassVar[str] = "gds.pageRank"
    algorithm_type: ClassVar[str] = "PageRank"


class ArticleRank(_RankAlgorithm):
    """ArticleRank, a PageRank variant that discounts high-degree neighbours."""

    procedure: ClassVar[str] = "gds.articleRank"
    algorithm_type: ClassVar[str] = "ArticleRank"


class Betweenness(_NodePropertyOutput):
    """Betweenness centrality, optionally sampled."""

    procedure: ClassVar[str] = "gds.betweenness"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.CENTRALITY
    algorithm_type: ClassVar[str] = "Betweenness"

    sampling_size: int | None = None
    sampling_seed: int | None = None


class Degree(_NodePropertyOutput):
    """Degree centrality."""

    procedure: ClassVar[str] = "gds.degree"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.CENTRALITY
    algorithm_type: ClassVar[str] = "Degree"

    orientation: Orientation | None = None
    relationship_weight_property: str | None = None


class Closeness(_NodePropertyOutput):
    """Closeness centrality."""

    procedure: ClassVar[str] = "gds.closeness"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.CENTRALITY
    algorithm_type: ClassVar[str] = "Closeness"

    use_wasserman_faust: bool = False


# Community detection


class Louvain(_NodePropertyOutput):
    """Louvain modularity optimisation."""

    procedure: ClassVar[str] = "gds.louvain"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.COMMUNITY
    algorithm_type: ClassVar[str] = "Louvain"

    max_levels: int | None = None
    max_iterations: int | None = None
    tolerance: float | None = None
    include_intermediate_communities: bool = False
    seed_property: str | None = None
    relationship_weight_property: str | None = None


class Leiden(_NodePropertyOutput):
    """Leiden community detection."""

    procedure: ClassVar[str] = "gds.leiden"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.COMMUNITY
    algorithm_type: ClassVar[str] = "Leiden"

    max_levels: int | None = None
    gamma: float | None = None
    theta: float | None = None
    tolerance: float | None = None
    include_intermediate_communities: bool = False
    random_seed: int | None = None
    relationship_weight_property: str | None = None


class LabelPropagation(_NodePropertyOutput):
    """Label propagation."""

    procedure: ClassVar[str] = "gds.labelPropagation"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.COMMUNITY
    algorithm_type: ClassVar[str] = "LabelPropagation"

    max_iterations: int | None = None
    seed_property: str | None = None
    relationship_weight_property: str | None = None


class WCC(_NodePropertyOutput):
    """Weakly connected components."""

    procedure: ClassVar[str] = "gds.wcc"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.COMMUNITY
    algorithm_type: ClassVar[str] = "WCC"

    seed_property: str | None = None
    relationship_weight_property: str | None = None
    threshold: float | None = None


class TriangleCount(_NodePropertyOutput):
    """Triangle count per node."""

    procedure: ClassVar[str] = "gds.triangleCount"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.COMMUNITY
    algorithm_type: ClassVar[str] = "TriangleCount"

    max_degree: int | None = None


class KCore(_NodePropertyOutput):
    """K-core decomposition."""

    procedure: ClassVar[str] = "gds.kcore"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.COMMUNITY
    algorithm_type: ClassVar[str] = "KCore"

    k: int | None = None


# Similarity


class NodeSimilarity(Algorithm):
    """Jaccard/overlap similarity between nodes sharing neighbours."""

    procedure: ClassVar[str] = "gds.nodeSimilarity"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.SIMILARITY
    algorithm_type: ClassVar[str] = "NodeSimilarity"

    similarity_cutoff: float | None = None
    degree_cutoff: int | None = None
    top_k: int | None = None
    top_n: int | None = None
    similarity_metric: str | None = None
    write_relationship_type: str | None = None
    write_property: str | None = None


class KNN(Algorithm):
    """K-nearest-neighbours over node properties."""

    procedure: ClassVar[str] = "gds.knn"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.SIMILARITY
    algorithm_type: ClassVar[str] = "KNN"

    node_properties: list[str] = Field(default_factory=list)
    top_k: int | None = None
    similarity_cutoff: float | None = None
    sample_rate: float | None = None
    delta_threshold: float | None = None
    max_iterations: int | None = None
    random_joins: int | None = None
    write_relationship_type: str | None = None
    write_property: str | None = None


# Node embeddings


class FastRP(_NodePropertyOutput):
    """Fast random projection embeddings."""

    procedure: ClassVar[str] = "gds.fastRP"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.EMBEDDINGS
    algorithm_type: ClassVar[str] = "FastRP"

    embedding_dimension: int
    iteration_weights: list[float] = Field(default_factory=list)
    normalization_strength: float | None = None
    property_ratio: float | None = None
    node_self_influence: float | None = None
    feature_properties: list[str] = Field(default_factory=list)
    relationship_weight_property: str | None = None


class Node2Vec(_NodePropertyOutput):
    """Random-walk based Node2Vec embeddings."""

    procedure: ClassVar[str] = "gds.node2vec"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.EMBEDDINGS
    algorithm_type: ClassVar[str] = "Node2Vec"

    embedding_dimension: int | None = None
    walk_length: int | None = None
    walks_per_node: int | None = None
    in_out_factor: float | None = None
    return_factor: float | None = None
    window_size: int | None = None
    negative_sampling_rate: int | None = None
    positive_sampling_factor: float | None = None
    iterations: int | None = None
    relationship_weight_property: str | None = None


class GraphSAGE(_NodePropertyOutput):
    """Inductive GraphSAGE embeddings backed by a trained model."""

    procedure: ClassVar[str] = "gds.beta.graphSage"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.EMBEDDINGS
    algorithm_type: ClassVar[str] = "GraphSAGE"

    model_name: str | None = None
    embedding_dimension: int | None = None
    aggregator: str | None = None
    activation_function: str | None = None
    sample_sizes: list[int] = Field(default_factory=list)
    feature_properties: list[str] = Field(default_factory=list)
    epochs: int | None = None
    learning_rate: float | None = None
    batch_size: int | None = None
    tolerance: float | None = None
    relationship_weight_property: str | None = None


class HashGNN(_NodePropertyOutput):
    """HashGNN embeddings."""

    procedure: ClassVar[str] = "gds.hashgnn"
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.EMBEDDINGS
    algorithm_type: ClassVar[str] = "HashGNN"

    embedding_density: int | None = None
    iterations: int | None = None
    neighbor_influence: float | None = None
    output_dimension: int | None = None
    feature_properties: list[str] = Field(default_factory=list)


# Path finding


class _ShortestPath(Algorithm):
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.PATH_FINDING

    source_node: int | str | None = None
    target_node: int | str | None = None
    relationship_weight_property: str | None = None
    write_relationship_type: str | None = None


class Dijkstra(_ShortestPath):
    """Dijkstra source-target shortest path."""

    procedure: ClassVar[str] = "gds.shortestPath.dijkstra"
    algorithm_type: ClassVar[str] = "Dijkstra"


class AStar(_ShortestPath):
    """A* shortest path guided by geographic coordinates."""

    procedure: ClassVar[str] = "gds.shortestPath.astar"
    algorithm_type: ClassVar[str] = "AStar"

    latitude_property: str | None = None
    longitude_property: str | None = None


class _Traversal(Algorithm):
    category: ClassVar[AlgorithmCategory] = AlgorithmCategory.PATH_FINDING

    source_node: int | str | None = None
    target_nodes: list[int | str] = Field(default_factory=list)
    max_depth: int | None = None


class BFS(_Traversal):
    """Breadth-first traversal."""

    procedure: ClassVar[str] = "gds.bfs"
    algorithm_type: ClassVar[str] = "BFS"


class DFS(_Traversal):
    """Depth-first traversal."""

    procedure: ClassVar[str] = "gds.dfs"
    algorithm_type: ClassVar[str] = "DFS"


AlgorithmVariant = (
    PageRank
    | ArticleRank
    | Betweenness
    | Degree
    | Closeness
    | Louvain
    | Leiden
    | LabelPropagation
    | WCC
    | TriangleCount
    | KCore
    | NodeSimilarity
    | KNN
    | FastRP
    | Node2Vec
    | GraphSAGE
    | HashGNN
    | Dijkstra
    | AStar
    | BFS
    | DFS
)
