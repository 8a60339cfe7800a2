import logging
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from neoform._build import OutputFormat, Snapshot, build_snapshot, take_snapshot
from neoform._diff import diff_snapshots
from neoform._errors import DependencyCycleError, NeoformError
from neoform._lint import Severity, filter_by_severity, has_errors, lint

from .config import ConfigError, NeoformConfig, get_config
from .graph_render import (
    diff_to_json,
    render_diff,
    render_findings,
    render_resource_table,
    render_scan_errors,
    render_tree,
    to_dot,
    to_mermaid,
)

app = typer.Typer(no_args_is_help=True)

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


class GraphFormat(StrEnum):
    DOT = "dot"
    MERMAID = "mermaid"
    TREE = "tree"


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Neoform CLI: compile declarative graph resources to Cypher and JSON."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> NeoformConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _snapshot(path: Path | None, config: NeoformConfig, jobs: int | None = None) -> Snapshot:
    root = path if path is not None else (config.source or Path())
    try:
        return take_snapshot(root, exclude=config.exclude, max_workers=jobs)
    except NeoformError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _fail(error: NeoformError) -> typer.Exit:
    err_console.print(f"[red]✗ {escape(str(error))}[/red]")
    if isinstance(error, DependencyCycleError):
        err_console.print("[dim]Break the loop by removing one of the references.[/dim]")
    return typer.Exit(code=1)


@app.command()
def build(
    path: Annotated[
        Path | None,
        typer.Argument(help="Directory or file holding the declarations (default: configured source, else .)"),
    ] = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Write the artifact to this file instead of stdout"),
    ] = None,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option("-f", "--format", help="Artifact format (default: from the output extension, else cypher)"),
    ] = None,
    drop_existing_graphs: Annotated[
        bool,
        typer.Option("--drop-existing-graphs", help="Drop projected graphs before re-projecting them"),
    ] = False,
    jobs: Annotated[
        int | None,
        typer.Option("-j", "--jobs", help="Parse files on this many threads"),
    ] = None,
) -> None:
    """Build a Cypher script or a JSON/TOML document from the declarations."""
    config = _load_config()
    target = output if output is not None else config.output
    chosen_format = (
        output_format
        or (OutputFormat.from_path(target) if target is not None else None)
        or config.format
        or OutputFormat.CYPHER
    )

    snapshot = _snapshot(path, config, jobs)
    render_scan_errors(snapshot.errors, err_console)
    try:
        result = build_snapshot(snapshot)
        text = result.render(chosen_format, drop_existing_graphs=drop_existing_graphs)
    except NeoformError as e:
        raise _fail(e) from e

    if result.is_empty:
        err_console.print(f"[yellow]No resources found in {snapshot.root}[/yellow]")
        raise typer.Exit(code=0)

    if target is None:
        typer.echo(text, nl=False)
    else:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        err_console.print(f"[cyan]Wrote {chosen_format} to:[/cyan] {target}")
    err_console.print(f"[green]✓ Built {len(result.models)} resources[/green]")


@app.command(name="list")
def list_resources(
    path: Annotated[
        Path | None,
        typer.Argument(help="Directory or file holding the declarations"),
    ] = None,
) -> None:
    """List the discovered resources and their dependencies."""
    config = _load_config()
    snapshot = _snapshot(path, config)
    render_scan_errors(snapshot.errors, err_console)
    if snapshot.is_empty:
        err_console.print(f"[yellow]No resources found in {snapshot.root}[/yellow]")
        return
    render_resource_table(snapshot.resources, out_console)


@app.command(name="lint")
def lint_command(
    path: Annotated[
        Path | None,
        typer.Argument(help="Directory or file holding the declarations"),
    ] = None,
    *,
    errors_only: Annotated[
        bool,
        typer.Option("--errors-only", help="Only show error findings"),
    ] = False,
) -> None:
    """Check the declarations and exit with 1 when there are errors."""
    config = _load_config()
    snapshot = _snapshot(path, config)
    render_scan_errors(snapshot.errors, err_console)
    if snapshot.is_empty:
        err_console.print(f"[yellow]No resources found in {snapshot.root}[/yellow]")
        return

    findings = lint(snapshot.resources, snapshot.graph)
    shown = filter_by_severity(findings, Severity.ERROR) if errors_only else findings
    render_findings(shown, out_console)
    if has_errors(findings):
        raise typer.Exit(code=1)


@app.command()
def graph(
    path: Annotated[
        Path | None,
        typer.Argument(help="Directory or file holding the declarations"),
    ] = None,
    *,
    graph_format: Annotated[
        GraphFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = GraphFormat.DOT,
) -> None:
    """Print the dependency graph as DOT, Mermaid or a tree."""
    config = _load_config()
    snapshot = _snapshot(path, config)
    render_scan_errors(snapshot.errors, err_console)
    if snapshot.is_empty:
        err_console.print(f"[yellow]No resources found in {snapshot.root}[/yellow]")
        return

    match graph_format:
        case GraphFormat.DOT:
            typer.echo(to_dot(snapshot.graph), nl=False)
        case GraphFormat.MERMAID:
            typer.echo(to_mermaid(snapshot.graph), nl=False)
        case GraphFormat.TREE:
            render_tree(snapshot.graph, out_console)


@app.command()
def diff(
    old: Annotated[Path, typer.Argument(help="Old declarations (directory or file)")],
    new: Annotated[Path, typer.Argument(help="New declarations (directory or file)")],
    *,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the differences as JSON"),
    ] = False,
) -> None:
    """Compare the resources declared in two trees."""
    config = _load_config()
    old_snapshot = _snapshot(old, config)
    new_snapshot = _snapshot(new, config)
    result = diff_snapshots(old_snapshot.resources, new_snapshot.resources)

    if as_json:
        typer.echo(diff_to_json(result), nl=False)
    else:
        render_diff(result, out_console)


def main() -> None:
    app()
