"""Cypher and document encodings for GDS algorithm configurations."""

from typing import Any

from neoform._algorithms import Algorithm, AlgorithmCategory, AlgorithmVariant, Mode
from neoform._errors import SerializationError, UnknownResourceError

from ._cypher import dump_fields, format_call, format_map_block, quote_string

_STREAM_YIELDS = {
    AlgorithmCategory.CENTRALITY: "nodeId, score",
    AlgorithmCategory.COMMUNITY: "nodeId, communityId",
    AlgorithmCategory.SIMILARITY: "node1, node2, similarity",
    AlgorithmCategory.EMBEDDINGS: "nodeId, embedding",
    AlgorithmCategory.PATH_FINDING: "sourceNode, targetNode, path, totalCost",
}

_STATS_YIELD = "nodeCount, relationshipCount, computeMillis"
_WRITE_YIELD = "nodePropertiesWritten, computeMillis"

# Carried by the procedure name and first argument, not the config map.
_CALL_FIELDS = {"name", "graph_name", "mode"}


def yield_fields(mode: Mode, category: AlgorithmCategory) -> str:
    """Return the ``YIELD`` column list for an execution mode and category.

    Example:
        >>> yield_fields(Mode.STREAM, AlgorithmCategory.CENTRALITY)
        'nodeId, score'

    """
    match mode:
        case Mode.STREAM:
            return _STREAM_YIELDS.get(category, "*")
        case Mode.STATS:
            return _STATS_YIELD
        case Mode.MUTATE | Mode.WRITE:
            return _WRITE_YIELD


def algorithm_config(algorithm: Algorithm) -> dict[str, Any]:
    """Configuration map passed as the second procedure argument."""
    return dump_fields(algorithm, exclude=_CALL_FIELDS)


def algorithm_to_cypher(algorithm: Algorithm) -> str:
    """Render the procedure call for an algorithm.

    Example:
        >>> print(algorithm_to_cypher(PageRank(name="influence", graph_name="g")))
        CALL gds.pageRank.stream(
          'g'
        )
        YIELD nodeId, score;

    Raises:
        UnknownResourceError: If ``algorithm`` is not a concrete algorithm variant.
        SerializationError: If the algorithm names no graph.

    """
    if not isinstance(algorithm, AlgorithmVariant):
        raise UnknownResourceError(algorithm)
    if not algorithm.graph_name:
        msg = f"Algorithm '{algorithm.name}' has no graph_name"
        raise SerializationError(msg)

    arguments = [f"  {quote_string(algorithm.graph_name)}"]
    config = algorithm_config(algorithm)
    if config:
        arguments.append(format_map_block(config))
    call = format_call(f"{algorithm.procedure}.{algorithm.mode}", arguments)
    return f"{call}\nYIELD {yield_fields(algorithm.mode, algorithm.category)};"


def algorithm_document(algorithm: Algorithm) -> dict[str, Any]:
    """Document entry for an algorithm, tagged with its type and category."""
    if not isinstance(algorithm, AlgorithmVariant):
        raise UnknownResourceError(algorithm)
    data = dump_fields(algorithm)
    return {
        "name": data.pop("name"),
        "algorithmType": algorithm.algorithm_type,
        "category": str(algorithm.category),
        **data,
    }
