"""Cypher literal formatting and document helpers shared by all serializers."""

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from neoform._errors import SerializationError

_PLAIN_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def quote_string(value: str) -> str:
    """Quote a string as a single-quoted Cypher literal.

    Backslashes and single quotes inside the value are backslash-escaped.
    """
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def quote_identifier(name: str) -> str:
    """Backquote a label, property or map key unless it is a plain identifier."""
    if _PLAIN_IDENTIFIER.match(name):
        return name
    return "`" + name.replace("`", "``") + "`"


def format_value(value: Any) -> str:  # noqa: PLR0911
    """Format a Python value as a Cypher literal.

    Raises:
        SerializationError: If the value has no Cypher literal form.

    """
    match value:
        case None:
            return "null"
        case bool():
            return "true" if value else "false"
        case int():
            return str(value)
        case float():
            return repr(value)
        case str():
            return quote_string(value)
        case list() | tuple():
            return "[" + ", ".join(format_value(item) for item in value) + "]"
        case Mapping():
            return format_map(value)
        case _:
            msg = f"Cannot format {type(value).__name__} value {value!r} as Cypher"
            raise SerializationError(msg)


def format_map(mapping: Mapping[str, Any]) -> str:
    """Format a mapping as an inline Cypher map ``{key: value, ...}``."""
    entries = ", ".join(f"{quote_identifier(str(key))}: {format_value(value)}" for key, value in mapping.items())
    return "{" + entries + "}"


def format_map_block(mapping: Mapping[str, Any], indent: str = "  ") -> str:
    """Format a mapping as a multi-line Cypher map, one entry per line."""
    inner = indent + "  "
    entries = ",\n".join(
        f"{inner}{quote_identifier(str(key))}: {format_value(value)}" for key, value in mapping.items()
    )
    return f"{indent}{{\n{entries}\n{indent}}}"


def format_call(procedure: str, arguments: list[str]) -> str:
    """Format ``CALL procedure(...)`` with one argument per line."""
    if not arguments:
        return f"CALL {procedure}()"
    body = ",\n".join(arguments)
    return f"CALL {procedure}(\n{body}\n)"


def comment_block(lines: list[str]) -> str:
    """Prefix every line with ``//`` so the block is inert in a script.

    Entries spanning several lines are split so each of their lines is
    commented too.
    """
    return "\n".join(f"// {line}".rstrip() for entry in lines for line in (entry.splitlines() or [""]))


def join_statements(statements: list[str], separator: str = "\n") -> str:
    """Terminate and join statements; an empty list yields an empty script."""
    if not statements:
        return ""
    return f";{separator}".join(statements) + ";"


def strip_empty(value: Any) -> Any:
    """Recursively drop ``None``, empty strings, empty lists and empty maps."""
    if isinstance(value, Mapping):
        cleaned = {key: strip_empty(item) for key, item in value.items()}
        return {key: item for key, item in cleaned.items() if not _is_empty(item)}
    if isinstance(value, list):
        return [strip_empty(item) for item in value]
    return value


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, (str, list, dict)) and not value)


def dump_fields(model: BaseModel, *, exclude: set[str] | None = None) -> dict[str, Any]:
    """Return the populated fields of ``model`` keyed by their lower-camel alias.

    Fields equal to their default, empty strings and empty collections are
    left out. Nested models are dumped the same way.
    """
    data = model.model_dump(mode="json", by_alias=True, exclude_defaults=True, exclude=exclude)
    return strip_empty(data)
