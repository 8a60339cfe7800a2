"""Compare two discovered snapshots resource by resource."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._enums import ResourceKind
    from ._resource import DiscoveredResource


@dataclass(frozen=True, slots=True)
class FieldChange:
    """One field whose value differs between the snapshots."""

    field: str
    old: Any
    new: Any

    def __str__(self) -> str:
        return f"{self.field}: {self.old} -> {self.new}"


@dataclass(frozen=True, slots=True)
class ResourceChange:
    """A resource present in both snapshots whose declaration changed.

    Attributes:
        name: Resource name, with the kind appended in parentheses when the
            name is shared by resources of different kinds.
        kind: Kind in the new snapshot.
        changes: Field-level changes in a fixed field order.
        added_dependencies: Dependencies only the new declaration has, sorted.
        removed_dependencies: Dependencies only the old declaration had, sorted.

    """

    name: str
    kind: ResourceKind
    changes: tuple[FieldChange, ...] = ()
    added_dependencies: tuple[str, ...] = ()
    removed_dependencies: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Differences between an old and a new snapshot, each list sorted by name."""

    added: tuple[DiscoveredResource, ...] = ()
    removed: tuple[DiscoveredResource, ...] = ()
    modified: tuple[ResourceChange, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Whether the snapshots declare the same resources."""
        return not (self.added or self.removed or self.modified)

    def summary(self) -> dict[str, int]:
        """Counts per change type plus the total."""
        counts = {"added": len(self.added), "removed": len(self.removed), "modified": len(self.modified)}
        return {**counts, "total": sum(counts.values())}


type _Key = tuple[str, ResourceKind | None]


def _keyed(resources: Iterable[DiscoveredResource], shared: set[str]) -> dict[_Key, DiscoveredResource]:
    keyed: dict[_Key, DiscoveredResource] = {}
    for resource in resources:
        key = (resource.name, resource.kind if resource.name in shared else None)
        keyed.setdefault(key, resource)
    return keyed


def _shared_names(*snapshots: tuple[DiscoveredResource, ...]) -> set[str]:
    """Names used by more than one kind within a snapshot."""
    shared: set[str] = set()
    for resources in snapshots:
        kinds: dict[str, set[ResourceKind]] = {}
        for resource in resources:
            kinds.setdefault(resource.name, set()).add(resource.kind)
        shared.update(name for name, found in kinds.items() if len(found) > 1)
    return shared


def _display_name(key: _Key) -> str:
    name, kind = key
    return name if kind is None else f"{name} ({kind})"


def compare_resources(old: DiscoveredResource, new: DiscoveredResource) -> list[FieldChange]:
    """Field-level changes between two declarations of the same resource."""
    pairs: list[tuple[str, Any, Any]] = [
        ("kind", old.kind, new.kind),
        ("type", old.type_name, new.type_name),
        ("source", old.source, new.source),
        ("target", old.target, new.target),
        ("properties", len(old.properties), len(new.properties)),
        ("constraints", len(old.constraints), len(new.constraints)),
        ("indexes", len(old.indexes), len(new.indexes)),
    ]
    return [FieldChange(name, before, after) for name, before, after in pairs if before != after]


def diff_snapshots(old: Iterable[DiscoveredResource], new: Iterable[DiscoveredResource]) -> DiffResult:
    """Compare two independent snapshots by resource name.

    A name shared by several kinds within one snapshot is compared per kind
    instead, so such resources never shadow each other.

    Example:
        >>> result = diff_snapshots(scan_dir("v1").resources, scan_dir("v2").resources)  # doctest: +SKIP
        >>> result.summary()  # doctest: +SKIP
        {'added': 1, 'removed': 1, 'modified': 0, 'total': 2}

    """
    old, new = tuple(old), tuple(new)
    shared = _shared_names(old, new)
    old_keyed = _keyed(old, shared)
    new_keyed = _keyed(new, shared)

    added = [new_keyed[key] for key in sorted(new_keyed.keys() - old_keyed.keys(), key=_display_name)]
    removed = [old_keyed[key] for key in sorted(old_keyed.keys() - new_keyed.keys(), key=_display_name)]

    modified: list[ResourceChange] = []
    for key in sorted(old_keyed.keys() & new_keyed.keys(), key=_display_name):
        before, after = old_keyed[key], new_keyed[key]
        changes = compare_resources(before, after)
        gained = tuple(sorted(set(after.dependencies) - set(before.dependencies)))
        lost = tuple(sorted(set(before.dependencies) - set(after.dependencies)))
        if changes or gained or lost:
            modified.append(ResourceChange(_display_name(key), after.kind, tuple(changes), gained, lost))

    return DiffResult(added=tuple(added), removed=tuple(removed), modified=tuple(modified))
