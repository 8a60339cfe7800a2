"""Base pydantic model shared by all declarable resources."""

from pydantic import BaseModel, ConfigDict


def to_lower_camel(name: str) -> str:
    """Convert a snake_case field name to lowerCamelCase.

    Unlike ``pydantic.alias_generators.to_camel`` this never upper-cases a
    letter that follows a digit, so ``neo4j_uri`` becomes ``neo4jUri``.

    Example:
        >>> to_lower_camel("relationship_weight_property")
        'relationshipWeightProperty'

    """
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class DeclarationModel(BaseModel):
    """Frozen model with lower-camel-case aliases for document output."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_lower_camel,
        validate_by_name=True,
        validate_by_alias=True,
    )
