"""Declarative Neo4j schema, Graph Data Science and GraphRAG resources compiled to Cypher and JSON."""

__all__ = [
    "AStar",
    "Aggregation",
    "Algorithm",
    "AlgorithmCategory",
    "AlgorithmVariant",
    "ArticleRank",
    "AutoTuningConfig",
    "BFS",
    "Betweenness",
    "BuildResult",
    "Cardinality",
    "Closeness",
    "Constraint",
    "ConstraintInfo",
    "ConstraintType",
    "CustomKGPipeline",
    "CycleError",
    "CypherExample",
    "CypherProjection",
    "DFS",
    "DanglingReference",
    "DataFrameProjection",
    "DeclarationModel",
    "Degree",
    "DegreeStep",
    "DependencyCycleError",
    "DependencyGraph",
    "DiffResult",
    "Dijkstra",
    "DiscoveredResource",
    "DiscoveryError",
    "EmbedderConfig",
    "EntityProperty",
    "EntityResolver",
    "EntityResolverVariant",
    "EntityType",
    "ExactMatchResolver",
    "FastRP",
    "FastRPStep",
    "FeatureStep",
    "FeatureStepVariant",
    "FieldChange",
    "FixedSizeSplitter",
    "FuzzyMatchResolver",
    "GraphSAGE",
    "HashGNN",
    "HybridCypherRetriever",
    "HybridRetriever",
    "Index",
    "IndexInfo",
    "IndexType",
    "KCore",
    "KGPipeline",
    "KGPipelineType",
    "KGPipelineVariant",
    "KIND_SPECS",
    "KNN",
    "KindSpec",
    "LLMConfig",
    "LabelPropagation",
    "LangChainSplitter",
    "Leiden",
    "LinearRegression",
    "LinkPredictionPipeline",
    "LintFinding",
    "LogisticRegression",
    "Louvain",
    "MLP",
    "Mode",
    "Model",
    "ModelVariant",
    "NativeProjection",
    "NeoformError",
    "Node2Vec",
    "Node2VecStep",
    "NodeClassificationPipeline",
    "NodeDataFrame",
    "NodeProjection",
    "NodeRegressionPipeline",
    "NodeSimilarity",
    "NodeType",
    "Orientation",
    "OutputFormat",
    "PageRank",
    "PageRankStep",
    "PineconeRetriever",
    "Pipeline",
    "PipelineType",
    "PipelineVariant",
    "Projection",
    "ProjectionType",
    "ProjectionVariant",
    "Property",
    "PropertyInfo",
    "PropertyType",
    "QdrantRetriever",
    "RandomForest",
    "RelationType",
    "RelationshipDataFrame",
    "RelationshipProjection",
    "RelationshipType",
    "ResourceChange",
    "ResourceGraph",
    "ResourceKey",
    "ResourceKind",
    "ResourceLoadError",
    "ResourceLoader",
    "Retriever",
    "RetrieverType",
    "RetrieverVariant",
    "ScalerStep",
    "ScanError",
    "ScanResult",
    "Schema",
    "SemanticMatchResolver",
    "SerializationError",
    "Severity",
    "SimpleKGPipeline",
    "Snapshot",
    "SplitConfig",
    "Text2CypherRetriever",
    "TextSplitter",
    "TextSplitterVariant",
    "TriangleCount",
    "UnknownResourceError",
    "VectorCypherRetriever",
    "VectorRetriever",
    "WCC",
    "WeaviateRetriever",
    "build",
    "build_snapshot",
    "diff_snapshots",
    "filter_by_severity",
    "has_errors",
    "lint",
    "load_resource",
    "load_resources",
    "new_dependency_graph",
    "render_document",
    "scan_dir",
    "take_snapshot",
    "to_document",
    "to_document_batch",
    "to_script",
    "to_script_batch",
    "topological_sort",
]

from ._algorithms import (
    AStar,
    Algorithm,
    AlgorithmCategory,
    AlgorithmVariant,
    ArticleRank,
    BFS,
    Betweenness,
    Closeness,
    DFS,
    Degree,
    Dijkstra,
    FastRP,
    GraphSAGE,
    HashGNN,
    KCore,
    KNN,
    LabelPropagation,
    Leiden,
    Louvain,
    Mode,
    Node2Vec,
    NodeSimilarity,
    PageRank,
    TriangleCount,
    WCC,
)
from ._base import DeclarationModel
from ._build import (
    BuildResult,
    OutputFormat,
    Snapshot,
    build,
    build_snapshot,
    render_document,
    take_snapshot,
)
from ._diff import DiffResult, FieldChange, ResourceChange, diff_snapshots
from ._discover import ScanError, ScanResult, scan_dir
from ._enums import ResourceKind
from ._errors import (
    DependencyCycleError,
    DiscoveryError,
    NeoformError,
    ResourceLoadError,
    SerializationError,
    UnknownResourceError,
)
from ._graph import (
    CycleError,
    DanglingReference,
    DependencyGraph,
    ResourceGraph,
    new_dependency_graph,
    topological_sort,
)
from ._kg import (
    CustomKGPipeline,
    EntityProperty,
    EntityResolver,
    EntityResolverVariant,
    EntityType,
    ExactMatchResolver,
    FixedSizeSplitter,
    FuzzyMatchResolver,
    KGPipeline,
    KGPipelineType,
    KGPipelineVariant,
    LLMConfig,
    LangChainSplitter,
    RelationType,
    SemanticMatchResolver,
    SimpleKGPipeline,
    TextSplitter,
    TextSplitterVariant,
)
from ._lint import LintFinding, Severity, filter_by_severity, has_errors, lint
from ._load import ResourceLoader, load_resource, load_resources
from ._pipelines import (
    AutoTuningConfig,
    DegreeStep,
    FastRPStep,
    FeatureStep,
    FeatureStepVariant,
    LinearRegression,
    LinkPredictionPipeline,
    LogisticRegression,
    MLP,
    Model,
    ModelVariant,
    Node2VecStep,
    NodeClassificationPipeline,
    NodeRegressionPipeline,
    PageRankStep,
    Pipeline,
    PipelineType,
    PipelineVariant,
    RandomForest,
    ScalerStep,
    SplitConfig,
)
from ._projections import (
    Aggregation,
    CypherProjection,
    DataFrameProjection,
    NativeProjection,
    NodeDataFrame,
    NodeProjection,
    Orientation,
    Projection,
    ProjectionType,
    ProjectionVariant,
    RelationshipDataFrame,
    RelationshipProjection,
)
from ._registry import KIND_SPECS, KindSpec
from ._resource import ConstraintInfo, DiscoveredResource, IndexInfo, PropertyInfo, ResourceKey
from ._retrievers import (
    CypherExample,
    EmbedderConfig,
    HybridCypherRetriever,
    HybridRetriever,
    PineconeRetriever,
    QdrantRetriever,
    Retriever,
    RetrieverType,
    RetrieverVariant,
    Text2CypherRetriever,
    VectorCypherRetriever,
    VectorRetriever,
    WeaviateRetriever,
)
from ._schema import (
    Cardinality,
    Constraint,
    ConstraintType,
    Index,
    IndexType,
    NodeType,
    Property,
    PropertyType,
    RelationshipType,
    Schema,
)
from ._serialize._batch import to_document, to_document_batch, to_script, to_script_batch
