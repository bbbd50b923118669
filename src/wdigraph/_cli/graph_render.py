"""Rich rendering utilities for graph query commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

if TYPE_CHECKING:
    from rich.console import Console

    from .graph_query import GraphSummary, NodeInfo, ShortestPathReport, TreeNode


def render_summary(summary: GraphSummary, console: Console) -> None:
    """Render node and edge counts.

    Args:
        summary: GraphSummary to render.
        console: Rich Console to output to.

    """
    console.print(f"[cyan]Nodes:[/cyan] {summary.node_count}")
    console.print(f"[cyan]Edges:[/cyan] {summary.edge_count}")
    if summary.has_cycle:
        console.print("[cyan]Acyclic:[/cyan] [yellow]no[/yellow]")
    else:
        console.print("[cyan]Acyclic:[/cyan] [green]yes[/green]")


def render_node_table(nodes: list[NodeInfo], console: Console) -> None:
    """Render node list as a Rich table.

    Args:
        nodes: List of NodeInfo to render.
        console: Rich Console to output to.

    """
    if not nodes:
        console.print("[dim]Graph has no nodes[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Id", justify="right", style="dim")
    table.add_column("Label", style="bold")
    table.add_column("Out", justify="right")
    table.add_column("In", justify="right")

    for node in nodes:
        table.add_row(str(node.id), escape(node.label), str(node.out_degree), str(node.in_degree))

    console.print(table)
    console.print(f"\n[dim]Total: {len(nodes)} nodes[/dim]")


def render_topological_order(order: list[str], console: Console) -> None:
    """Render a topological order as a numbered list."""
    for position, label in enumerate(order, start=1):
        console.print(f"[dim]{position:>3}[/dim]  {escape(label)}")


def render_shortest_paths(report: ShortestPathReport, console: Console) -> None:
    """Render a shortest-path report as a Rich table.

    Args:
        report: ShortestPathReport to render.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan", title=f"From {escape(report.source)}")
    table.add_column("Node", style="bold")
    table.add_column("Distance", justify="right")
    table.add_column("Via", style="dim")

    for entry in report.entries:
        if entry.reachable:
            distance = f"{entry.distance:g}"
        else:
            distance = "[dim]unreachable[/dim]"
        table.add_row(escape(entry.label), distance, escape(entry.parent or "-"))

    console.print(table)

    if report.target is not None:
        if report.target_path is None:
            console.print(f"[yellow]{escape(report.target)} is not reachable from {escape(report.source)}[/yellow]")
        else:
            console.print(f"[cyan]Path:[/cyan] {escape(' -> '.join(report.target_path))}")


def render_tree(tree_node: TreeNode, console: Console) -> None:
    """Render a shortest-path tree using Rich Tree.

    Args:
        tree_node: TreeNode root to render.
        console: Rich Console to output to.

    """
    rich_tree = Tree(f"[bold]{escape(tree_node.label)}[/bold] [dim]({tree_node.distance:g})[/dim]")
    _add_tree_children(rich_tree, tree_node.children)
    console.print(rich_tree)


def _add_tree_children(parent: Tree, children: list[TreeNode]) -> None:
    """Recursively add children to a Rich Tree.

    Args:
        parent: Parent Tree node to add children to.
        children: List of TreeNode children.

    """
    for child in children:
        child_tree = parent.add(f"{escape(child.label)} [dim]({child.distance:g})[/dim]")
        _add_tree_children(child_tree, child.children)
