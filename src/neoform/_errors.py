"""Exception hierarchy shared by discovery, ordering and code generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class NeoformError(Exception):
    """Base class for every error raised by neoform."""


class DiscoveryError(NeoformError):
    """The source tree itself could not be traversed."""

    def __init__(self, root: Path, reason: str) -> None:
        self.root = root
        self.reason = reason
        super().__init__(f"Cannot scan {root}: {reason}")


class DependencyCycleError(NeoformError, ValueError):
    """The dependency graph contains a cycle.

    Attributes:
        cycle: Names of the resources on the cycle, in edge order. The first
            name is repeated at the end so the path reads as a loop.

    """

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = tuple(cycle)
        super().__init__(f"Dependency cycle detected: {' -> '.join(self.cycle)}")


class ResourceLoadError(NeoformError):
    """A discovered declaration could not be turned into a typed resource."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid resource '{name}': {reason}")


class SerializationError(NeoformError):
    """A typed resource cannot be encoded in the requested format."""


class UnknownResourceError(SerializationError):
    """The object handed to a serializer is not a registered resource variant."""

    def __init__(self, obj: object) -> None:
        self.obj = obj
        super().__init__(f"Unknown resource type: {type(obj).__qualname__}")
