"""Cypher and document encodings for GDS machine-learning pipelines."""

from typing import Any, assert_never

from neoform._errors import UnknownResourceError
from neoform._pipelines import (
    LinkPredictionPipeline,
    NodeClassificationPipeline,
    NodeRegressionPipeline,
    Pipeline,
    PipelineVariant,
    SplitConfig,
)

from ._cypher import dump_fields, format_call, format_map, format_map_block, format_value, join_statements, quote_string

DEFAULT_TEST_FRACTION = 0.2
DEFAULT_VALIDATION_FOLDS = 5

# Raw Cypher parameter used when the pipeline does not name its training graph.
GRAPH_NAME_PARAMETER = "$graphName"


def pipeline_statements(pipeline: Pipeline) -> list[str]:
    """Return the ordered statements that build and train a pipeline.

    The order is create, feature steps (with feature selection), models,
    split and auto-tuning configuration, then training.

    Raises:
        UnknownResourceError: If ``pipeline`` is not a concrete pipeline variant.

    """
    if not isinstance(pipeline, PipelineVariant):
        raise UnknownResourceError(pipeline)

    prefix = pipeline.pipeline_type.procedure_prefix
    name = quote_string(pipeline.name)
    statements = [f"CALL {prefix}.create({name})"]

    for step in pipeline.feature_steps:
        config = format_map(dump_fields(step))
        statements.append(f"CALL {prefix}.addNodeProperty({name}, {quote_string(step.step_type)}, {config})")
    statements.extend(_feature_selection(pipeline, prefix))

    for model in pipeline.models:
        config = dump_fields(model)
        arguments = f"{name}, {format_map(config)}" if config else name
        statements.append(f"CALL {prefix}.add{model.model_type}({arguments})")

    split = _split_config(pipeline)
    if split is not None:
        statements.append(f"CALL {prefix}.configureSplit({name}, {format_map(split)})")
    if pipeline.auto_tuning is not None and (tuning := dump_fields(pipeline.auto_tuning)):
        statements.append(f"CALL {prefix}.configureAutoTuning({name}, {format_map(tuning)})")

    statements.append(_train(pipeline, prefix))
    return statements


def pipeline_to_cypher(pipeline: Pipeline) -> str:
    """Render a pipeline as a script, statements separated by blank lines."""
    return join_statements(pipeline_statements(pipeline), separator="\n\n")


def _feature_selection(pipeline: PipelineVariant, prefix: str) -> list[str]:
    if not pipeline.feature_properties:
        return []
    name = quote_string(pipeline.name)
    match pipeline:
        case NodeClassificationPipeline() | NodeRegressionPipeline():
            return [f"CALL {prefix}.selectFeatures({name}, {format_value(pipeline.feature_properties)})"]
        case LinkPredictionPipeline():
            config = format_map({"nodeProperties": pipeline.feature_properties})
            return [f"CALL {prefix}.addFeature({name}, 'hadamard', {config})"]
        case _:
            assert_never(pipeline)


def _split_config(pipeline: PipelineVariant) -> dict[str, Any] | None:
    """Split configuration, or ``None`` when every value is left at its default."""
    split = pipeline.split_config or SplitConfig()
    negative_ratio = pipeline.negative_sampling_ratio if isinstance(pipeline, LinkPredictionPipeline) else None
    if split == SplitConfig() and negative_ratio is None:
        return None

    config: dict[str, Any] = {
        "testFraction": split.test_fraction if split.test_fraction is not None else DEFAULT_TEST_FRACTION,
        "validationFolds": split.validation_folds if split.validation_folds is not None else DEFAULT_VALIDATION_FOLDS,
    }
    if split.random_seed is not None:
        config["randomSeed"] = split.random_seed
    if negative_ratio is not None:
        config["negativeSamplingRatio"] = negative_ratio
    return config


def _train(pipeline: PipelineVariant, prefix: str) -> str:
    config: dict[str, Any] = {"pipeline": pipeline.name, "modelName": pipeline.trained_model_name}

    match pipeline:
        case NodeClassificationPipeline() | NodeRegressionPipeline():
            config["targetProperty"] = pipeline.target_property
            if pipeline.target_node_labels:
                config["targetNodeLabels"] = pipeline.target_node_labels
        case LinkPredictionPipeline():
            config["targetRelationshipType"] = pipeline.target_relationship_type
            if pipeline.source_node_label:
                config["sourceNodeLabel"] = pipeline.source_node_label
            if pipeline.target_node_label:
                config["targetNodeLabel"] = pipeline.target_node_label
        case _:
            assert_never(pipeline)

    if pipeline.node_labels:
        config["nodeLabels"] = pipeline.node_labels
    if pipeline.relationship_types:
        config["relationshipTypes"] = pipeline.relationship_types

    graph = quote_string(pipeline.graph_name) if pipeline.graph_name else GRAPH_NAME_PARAMETER
    call = format_call(f"{prefix}.train", [f"  {graph}", format_map_block(config)])
    return f"{call}\nYIELD modelInfo\nRETURN modelInfo"


def pipeline_document(pipeline: Pipeline) -> dict[str, Any]:
    """Document entry for a pipeline with type-tagged feature steps and models."""
    if not isinstance(pipeline, PipelineVariant):
        raise UnknownResourceError(pipeline)
    data = dump_fields(pipeline, exclude={"feature_steps", "models"})
    document: dict[str, Any] = {"name": data.pop("name"), "pipelineType": str(pipeline.pipeline_type)}
    if pipeline.feature_steps:
        document["featureSteps"] = [{"type": step.step_type, **dump_fields(step)} for step in pipeline.feature_steps]
    if pipeline.models:
        document["models"] = [{"type": model.model_type, **dump_fields(model)} for model in pipeline.models]
    document.update(data)
    return document
