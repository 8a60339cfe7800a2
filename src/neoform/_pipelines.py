"""Graph Data Science machine-learning pipelines."""

from enum import StrEnum
from typing import ClassVar

from pydantic import Field

from ._base import DeclarationModel
from ._projections import Orientation


class PipelineType(StrEnum):
    """Pipeline families."""

    NODE_CLASSIFICATION = "NodeClassification"
    LINK_PREDICTION = "LinkPrediction"
    NODE_REGRESSION = "NodeRegression"

    @property
    def procedure_prefix(self) -> str:
        """GDS procedure namespace, e.g. ``gds.beta.pipeline.nodeClassification``."""
        return _PROCEDURE_PREFIXES[self]


_PROCEDURE_PREFIXES = {
    PipelineType.NODE_CLASSIFICATION: "gds.beta.pipeline.nodeClassification",
    PipelineType.LINK_PREDICTION: "gds.beta.pipeline.linkPrediction",
    PipelineType.NODE_REGRESSION: "gds.alpha.pipeline.nodeRegression",
}


# Feature steps


class FeatureStep(DeclarationModel):
    """A node property step producing a feature for the pipeline."""

    step_type: ClassVar[str]

    mutate_property: str


class FastRPStep(FeatureStep):
    """FastRP embedding as a feature."""

    step_type: ClassVar[str] = "fastRP"

    embedding_dimension: int
    iteration_weights: list[float] = Field(default_factory=list)
    normalization_strength: float | None = None
    relationship_weight_property: str | None = None


class PageRankStep(FeatureStep):
    """PageRank score as a feature."""

    step_type: ClassVar[str] = "pageRank"

    damping_factor: float | None = None
    max_iterations: int | None = None
    tolerance: float | None = None


class DegreeStep(FeatureStep):
    """Degree centrality as a feature."""

    step_type: ClassVar[str] = "degree"

    orientation: Orientation | None = None


class Node2VecStep(FeatureStep):
    """Node2Vec embedding as a feature."""

    step_type: ClassVar[str] = "node2Vec"

    embedding_dimension: int | None = None
    walk_length: int | None = None
    walks_per_node: int | None = None
    in_out_factor: float | None = None
    return_factor: float | None = None


class ScalerStep(FeatureStep):
    """Scale existing node properties (e.g. ``MinMax``, ``StdScore``)."""

    step_type: ClassVar[str] = "scaleProperties"

    node_properties: list[str] = Field(default_factory=list)
    scaler: str = "MinMax"


FeatureStepVariant = FastRPStep | PageRankStep | DegreeStep | Node2VecStep | ScalerStep


# Models


class Model(DeclarationModel):
    """A model candidate trained by the pipeline."""

    model_type: ClassVar[str]
    supported_pipelines: ClassVar[frozenset[PipelineType]]


class LogisticRegression(Model):
    """Logistic regression classifier."""

    model_type: ClassVar[str] = "LogisticRegression"
    supported_pipelines: ClassVar[frozenset[PipelineType]] = frozenset(
        {PipelineType.NODE_CLASSIFICATION, PipelineType.LINK_PREDICTION},
    )

    penalty: float | None = None
    max_epochs: int | None = None
    min_epochs: int | None = None
    patience: int | None = None
    tolerance: float | None = None
    learning_rate: float | None = None
    batch_size: int | None = None


class RandomForest(Model):
    """Random forest classifier or regressor."""

    model_type: ClassVar[str] = "RandomForest"
    supported_pipelines: ClassVar[frozenset[PipelineType]] = frozenset(PipelineType)

    number_of_decision_trees: int | None = None
    max_depth: int | None = None
    min_split_size: int | None = None
    min_leaf_size: int | None = None
    max_features_ratio: float | None = None
    number_of_samples_ratio: float | None = None


class MLP(Model):
    """Multilayer perceptron classifier."""

    model_type: ClassVar[str] = "MLP"
    supported_pipelines: ClassVar[frozenset[PipelineType]] = frozenset(
        {PipelineType.NODE_CLASSIFICATION, PipelineType.LINK_PREDICTION},
    )

    hidden_layer_sizes: list[int] = Field(default_factory=list)
    penalty: float | None = None
    max_epochs: int | None = None
    min_epochs: int | None = None
    patience: int | None = None
    tolerance: float | None = None
    learning_rate: float | None = None
    batch_size: int | None = None


class LinearRegression(Model):
    """Linear regression for node regression pipelines."""

    model_type: ClassVar[str] = "LinearRegression"
    supported_pipelines: ClassVar[frozenset[PipelineType]] = frozenset({PipelineType.NODE_REGRESSION})

    penalty: float | None = None
    max_epochs: int | None = None
    tolerance: float | None = None
    learning_rate: float | None = None
    batch_size: int | None = None


ModelVariant = LogisticRegression | RandomForest | MLP | LinearRegression


class SplitConfig(DeclarationModel):
    """Train/test split. Unset values fall back to the GDS defaults."""

    test_fraction: float | None = None
    validation_folds: int | None = None
    random_seed: int | None = None


class AutoTuningConfig(DeclarationModel):
    """Hyper-parameter search settings."""

    max_trials: int | None = None
    metric: str | None = None


class Pipeline(DeclarationModel):
    """Shared payload of every pipeline variant.

    ``graph_name`` names the projected graph used for training; when empty the
    generated train call takes it from the ``$graphName`` query parameter.
    ``model_name`` defaults to ``<name>_model``.
    """

    pipeline_type: ClassVar[PipelineType]

    name: str
    graph_name: str = ""
    model_name: str = ""
    node_labels: list[str] = Field(default_factory=list)
    relationship_types: list[str] = Field(default_factory=list)
    feature_steps: list[FeatureStepVariant] = Field(default_factory=list)
    models: list[ModelVariant] = Field(default_factory=list)
    split_config: SplitConfig | None = None
    auto_tuning: AutoTuningConfig | None = None

    @property
    def trained_model_name(self) -> str:
        """Name under which the trained model is stored in the catalog."""
        return self.model_name or f"{self.name}_model"


class NodeClassificationPipeline(Pipeline):
    """Predict a categorical node property."""

    pipeline_type: ClassVar[PipelineType] = PipelineType.NODE_CLASSIFICATION

    target_property: str
    target_node_labels: list[str] = Field(default_factory=list)
    feature_properties: list[str] = Field(default_factory=list)


class LinkPredictionPipeline(Pipeline):
    """Predict missing relationships of one type."""

    pipeline_type: ClassVar[PipelineType] = PipelineType.LINK_PREDICTION

    target_relationship_type: str
    source_node_label: str | None = None
    target_node_label: str | None = None
    feature_properties: list[str] = Field(default_factory=list)
    negative_sampling_ratio: float | None = None


class NodeRegressionPipeline(Pipeline):
    """Predict a numeric node property."""

    pipeline_type: ClassVar[PipelineType] = PipelineType.NODE_REGRESSION

    target_property: str
    target_node_labels: list[str] = Field(default_factory=list)
    feature_properties: list[str] = Field(default_factory=list)


PipelineVariant = NodeClassificationPipeline | LinkPredictionPipeline | NodeRegressionPipeline
