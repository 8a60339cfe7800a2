"""Combined script and document output over an ordered list of resources."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from neoform._algorithms import Algorithm
from neoform._errors import SerializationError
from neoform._projections import Projection
from neoform._registry import KIND_SPECS, resource_name, spec_for

from ._cypher import comment_block
from ._projections import drop_graph

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pydantic import BaseModel

logger = logging.getLogger(__name__)


def to_script(resource: BaseModel) -> str:
    """Cypher encoding of a single typed resource.

    Raises:
        UnknownResourceError: If ``resource`` is not a registered resource model.
        SerializationError: If the resource cannot be encoded.

    """
    return spec_for(resource).to_script(resource)


def to_document(resource: BaseModel) -> dict[str, Any]:
    """Document encoding of a single typed resource.

    Raises:
        UnknownResourceError: If ``resource`` is not a registered resource model.

    """
    return spec_for(resource).to_document(resource)


def _header(resource: BaseModel) -> str:
    spec = spec_for(resource)
    name = resource_name(resource)
    if isinstance(resource, Algorithm):
        return comment_block([f"{spec.kind}: {name} ({resource.algorithm_type}, {resource.category})"])
    return comment_block([f"{spec.kind}: {name}"])


def to_script_batch(resources: Sequence[BaseModel], *, drop_existing_graphs: bool = False) -> str:
    """Concatenate the Cypher of every resource in the given order.

    Each block is preceded by a comment naming the resource kind and name. A
    resource with an empty encoding contributes only its comment.

    Args:
        resources: Typed resources, normally in dependency order.
        drop_existing_graphs: Emit ``gds.graph.drop(name, false)`` before
            every projection so the script can be re-run.

    Returns:
        The combined script, or an empty string for no resources.

    Raises:
        SerializationError: If any resource fails; nothing is returned.

    """
    blocks: list[str] = []
    for resource in resources:
        try:
            body = to_script(resource)
        except SerializationError:
            logger.debug("Serialization failed at %s", type(resource).__name__)
            raise
        if drop_existing_graphs and isinstance(resource, Projection):
            body = f"{drop_graph(resource.target_graph, fail_if_missing=False)}\n{body}"
        header = _header(resource)
        blocks.append(f"{header}\n{body}" if body else header)
    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"


def to_document_batch(resources: Sequence[BaseModel]) -> dict[str, list[dict[str, Any]]]:
    """Build the combined document keyed by plural kind name.

    Entries keep the given order within each kind; kinds appear in registry
    order and only when they have entries.

    Raises:
        SerializationError: If any resource fails; nothing is returned.

    """
    grouped: dict[str, list[dict[str, Any]]] = {}
    for resource in resources:
        spec = spec_for(resource)
        grouped.setdefault(spec.plural, []).append(spec.to_document(resource))
    return {spec.plural: grouped[spec.plural] for spec in KIND_SPECS if spec.plural in grouped}
