"""Text and Rich rendering of snapshots, dependency graphs, findings and diffs."""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from neoform._enums import ResourceKind
from neoform._lint import Severity

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from neoform._diff import DiffResult
    from neoform._discover import ScanError
    from neoform._graph import ResourceGraph
    from neoform._lint import LintFinding
    from neoform._resource import DiscoveredResource, ResourceKey

_MERMAID_UNSAFE = re.compile(r"[^A-Za-z0-9_]")


def _fill_color(kind: ResourceKind) -> str:
    """Graphviz fill colour of a resource kind."""
    match kind:
        case ResourceKind.NODE_TYPE:
            return "lightblue"
        case ResourceKind.RELATIONSHIP_TYPE:
            return "lightgreen"
        case ResourceKind.ALGORITHM:
            return "lightyellow"
        case ResourceKind.PIPELINE:
            return "lightpink"
        case ResourceKind.RETRIEVER:
            return "lavender"
        case ResourceKind.PROJECTION:
            return "lightcyan"
        case ResourceKind.KG_PIPELINE:
            return "wheat"
        case ResourceKind.SCHEMA:
            return "lightgray"


def _get_kind_style(kind: ResourceKind) -> str:
    """Rich style of a resource kind."""
    match kind:
        case ResourceKind.NODE_TYPE:
            return "blue"
        case ResourceKind.RELATIONSHIP_TYPE:
            return "green"
        case ResourceKind.ALGORITHM:
            return "yellow"
        case ResourceKind.PIPELINE:
            return "magenta"
        case ResourceKind.RETRIEVER:
            return "cyan"
        case ResourceKind.PROJECTION:
            return "bright_blue"
        case ResourceKind.KG_PIPELINE:
            return "bright_magenta"
        case ResourceKind.SCHEMA:
            return "white"


def _dot_id(resource: DiscoveredResource) -> str:
    return json.dumps(str(resource.key))


def to_dot(graph: ResourceGraph) -> str:
    """Render the dependency graph in Graphviz DOT format.

    An edge ``a -> b`` means resource a depends on resource b.
    """
    lines = ["digraph dependencies {", "  rankdir=TB;", "  node [shape=box];", ""]
    for resource in graph.resources:
        label = json.dumps(f"{resource.name}\n[{resource.kind}]")
        lines.append(f"  {_dot_id(resource)} [label={label}, style=filled, fillcolor={_fill_color(resource.kind)}];")
    lines.append("")
    lines.extend(f"  {_dot_id(dependent)} -> {_dot_id(dependency)};" for dependent, dependency in graph.edges())
    lines.append("}")
    return "\n".join(lines) + "\n"


def _mermaid_id(resource: DiscoveredResource) -> str:
    return _MERMAID_UNSAFE.sub("_", f"{resource.kind}_{resource.name}")


def to_mermaid(graph: ResourceGraph) -> str:
    """Render the dependency graph as a Mermaid flowchart."""
    lines = ["graph TD"]
    for resource in graph.resources:
        label = f"{resource.name} [{resource.kind}]".replace('"', "#quot;")
        lines.append(f'  {_mermaid_id(resource)}["{label}"]')
    lines.append("")
    lines.extend(
        f"  {_mermaid_id(dependent)} --> {_mermaid_id(dependency)}" for dependent, dependency in graph.edges()
    )
    return "\n".join(lines) + "\n"


def _resource_label(resource: DiscoveredResource) -> str:
    style = _get_kind_style(resource.kind)
    return f"[{style}]{resource.kind}[/{style}] [bold]{escape(resource.name)}[/bold]"


def render_tree(graph: ResourceGraph, console: Console) -> None:
    """Render every resource with its transitive dependencies as a Rich tree.

    Args:
        graph: Resource graph to render.
        console: Rich Console to output to.

    """
    rich_tree = Tree("[bold]Dependencies[/bold]")
    for resource in graph.resources:
        branch = rich_tree.add(_resource_label(resource))
        _add_tree_children(branch, resource, graph, {resource.key})
    console.print(rich_tree)


def _add_tree_children(
    parent: Tree,
    resource: DiscoveredResource,
    graph: ResourceGraph,
    path: set[ResourceKey],
) -> None:
    for dependency in graph.dependencies_of(resource):
        if dependency.key in path:
            parent.add(f"{_resource_label(dependency)} [red](cycle)[/red]")
            continue
        child = parent.add(_resource_label(dependency))
        _add_tree_children(child, dependency, graph, path | {dependency.key})


def render_resource_table(resources: Sequence[DiscoveredResource], console: Console) -> None:
    """Render discovered resources as a Rich table followed by a kind legend.

    Args:
        resources: Resources to list.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Kind")
    table.add_column("Name", style="bold")
    table.add_column("Location", style="dim")
    table.add_column("Dependencies")

    for resource in resources:
        style = _get_kind_style(resource.kind)
        table.add_row(
            f"[{style}]{resource.kind}[/{style}]",
            escape(resource.name),
            escape(resource.location),
            escape(", ".join(resource.dependencies)) or "[dim]-[/dim]",
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(resources)} resources[/dim]")

    kinds = [kind for kind in ResourceKind if any(resource.kind == kind for resource in resources)]
    for kind in kinds:
        style = _get_kind_style(kind)
        count = sum(resource.kind == kind for resource in resources)
        console.print(f"  [{style}]{kind}[/{style}] ({count}): [dim]{kind.__doc__}[/dim]")


def render_scan_errors(errors: Sequence[ScanError], console: Console) -> None:
    """Render non-fatal scan errors, if any."""
    if not errors:
        return
    console.print(f"[yellow]{len(errors)} file(s) or declaration(s) skipped:[/yellow]")
    for error in errors:
        console.print(f"  [yellow]•[/yellow] {escape(str(error))}")


def _severity_style(severity: Severity) -> str:
    match severity:
        case Severity.ERROR:
            return "red"
        case Severity.WARNING:
            return "yellow"
        case Severity.INFO:
            return "blue"


def render_findings(findings: Sequence[LintFinding], console: Console) -> None:
    """Render lint findings as a Rich table.

    Args:
        findings: Findings to render.
        console: Rich Console to output to.

    """
    if not findings:
        console.print("[green]✓ No issues found[/green]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Rule")
    table.add_column("Severity")
    table.add_column("Resource", style="bold")
    table.add_column("Message")
    table.add_column("Location", style="dim")

    for finding in findings:
        style = _severity_style(finding.severity)
        table.add_row(
            finding.rule,
            f"[{style}]{finding.severity}[/{style}]",
            escape(finding.resource),
            escape(finding.message),
            escape(finding.location),
        )
    console.print(table)


def render_diff(result: DiffResult, console: Console) -> None:
    """Render a snapshot diff as a list of added, modified and removed resources."""
    if result.is_empty:
        console.print("[green]No differences[/green]")
        return

    for resource in result.added:
        console.print(f"[green]+ {resource.kind} {escape(resource.name)}[/green]")
    for change in result.modified:
        console.print(f"[yellow]~ {change.kind} {escape(change.name)}[/yellow]")
        for field_change in change.changes:
            console.print(f"    {escape(str(field_change))}")
        if change.added_dependencies:
            console.print(f"    dependencies added: {escape(', '.join(change.added_dependencies))}")
        if change.removed_dependencies:
            console.print(f"    dependencies removed: {escape(', '.join(change.removed_dependencies))}")
    for resource in result.removed:
        console.print(f"[red]- {resource.kind} {escape(resource.name)}[/red]")

    summary = result.summary()
    console.print(
        f"\n[dim]{summary['added']} added, {summary['modified']} modified, "
        f"{summary['removed']} removed[/dim]",
    )


def diff_to_json(result: DiffResult) -> str:
    """Machine readable form of a snapshot diff."""
    data = {
        "added": [{"name": r.name, "kind": r.kind.value} for r in result.added],
        "removed": [{"name": r.name, "kind": r.kind.value} for r in result.removed],
        "modified": [
            {
                "name": change.name,
                "kind": change.kind.value,
                "changes": [{"field": c.field, "old": str(c.old), "new": str(c.new)} for c in change.changes],
                "addedDependencies": list(change.added_dependencies),
                "removedDependencies": list(change.removed_dependencies),
            }
            for change in result.modified
        ],
        "summary": result.summary(),
    }
    return json.dumps(data, indent=2) + "\n"
