import logging
from dataclasses import replace
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from wdigraph._graph import CycleError, DiGraph

from .graph_query import (
    build_shortest_path_report,
    get_shortest_path_tree,
    get_summary,
    get_topological_order,
    list_nodes,
)
from .graph_render import (
    render_node_table,
    render_shortest_paths,
    render_summary,
    render_topological_order,
    render_tree,
)
from .loader import ConfigError, WdigraphConfig, config_from_directory, load_graph, parse_target

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

PathArgument = Annotated[
    str | None,
    typer.Argument(help="Path to Python script or module path (e.g., examples.roads:graph)"),
]
GraphOption = Annotated[
    str | None,
    typer.Option("--graph", help="Name of the graph variable (needed when the module defines several graphs)"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Wdigraph CLI."""
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


def _get_config() -> WdigraphConfig:
    try:
        return config_from_directory()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load_graph(path: str | None, config: WdigraphConfig, graph_var: str | None) -> DiGraph:
    """Load a graph from the CLI path or, failing that, from config."""
    try:
        if path is not None:
            target = parse_target(path, graph_var)
        elif config.graph is not None:
            target = replace(config.graph, name=graph_var or config.graph.name)
        else:
            err_console.print(
                "[red]Error: No graph specified. Provide a path argument "
                "or configure \\[tool.wdigraph].graph in pyproject.toml.[/red]",
            )
            raise typer.Exit(code=1)

        err_console.print(f"[cyan]Loading graph from:[/cyan] {escape(str(target))}")
        return load_graph(target)
    except (ValueError, TypeError) as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def show(
    path: PathArgument = None,
    *,
    graph_var: GraphOption = None,
) -> None:
    """Show node and edge counts, a node table and the graph dump."""
    err_console.print()
    graph = _load_graph(path, _get_config(), graph_var)
    err_console.print()

    render_summary(get_summary(graph), err_console)
    err_console.print()
    render_node_table(list_nodes(graph), err_console)
    err_console.print()

    graph.print()


@app.command()
def topo(
    path: PathArgument = None,
    *,
    graph_var: GraphOption = None,
) -> None:
    """Print the nodes in topological order (exit non-zero if the graph has a cycle)."""
    err_console.print()
    graph = _load_graph(path, _get_config(), graph_var)
    err_console.print()

    try:
        order = get_topological_order(graph)
    except CycleError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    render_topological_order(order, out_console)
    err_console.print()
    err_console.print(f"[green]✓ {len(order)} nodes ordered[/green]")


@app.command(name="path")
def path_command(  # noqa: PLR0913
    path: PathArgument = None,
    *,
    source: Annotated[
        str | None,
        typer.Option("-s", "--source", help="Label of the source node (defaults to the configured source)"),
    ] = None,
    target: Annotated[
        str | None,
        typer.Option("-t", "--target", help="Label of a node whose path from the source should be shown"),
    ] = None,
    graph_var: GraphOption = None,
    tree: Annotated[
        bool,
        typer.Option("--tree", help="Show the shortest-path tree instead of a table"),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON"),
    ] = False,
    plain: Annotated[
        bool,
        typer.Option("--plain", help="Print one 'label: distance' line per node"),
    ] = False,
) -> None:
    """Compute shortest distances from a source node."""
    config = _get_config()
    effective_source = source if source is not None else config.source
    if effective_source is None:
        err_console.print("[red]Error: Source node required. Use -s/--source or configure \\[tool.wdigraph].source[/red]")
        raise typer.Exit(code=1)
    if target is not None and (tree or plain):
        err_console.print("[red]Error: --target cannot be combined with --tree or --plain[/red]")
        raise typer.Exit(code=1)

    err_console.print()
    graph = _load_graph(path, config, graph_var)
    err_console.print()

    if plain:
        lines = graph.shortest_path(effective_source)
        if lines is None:
            err_console.print(f"[red]Error: Node not found: {escape(effective_source)}[/red]")
            raise typer.Exit(code=1)
        for line in lines:
            typer.echo(line)
        return

    try:
        if tree:
            render_tree(get_shortest_path_tree(graph, effective_source), out_console)
            return
        report = build_shortest_path_report(graph, effective_source, target)
    except KeyError as e:
        err_console.print(f"[red]Error: {escape(e.args[0])}[/red]")
        raise typer.Exit(code=1) from e

    if json_output:
        typer.echo(report.model_dump_json(indent=2))
    else:
        render_shortest_paths(report, out_console)


def main() -> None:
    app()
