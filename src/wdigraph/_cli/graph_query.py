"""Graph query functions for CLI commands.

This module provides pure functions for querying a DiGraph.
These are the functional core - no I/O, no Rich rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel

from wdigraph._graph import topological_sort

if TYPE_CHECKING:
    from wdigraph._graph import DiGraph, ShortestPathTree


@dataclass(frozen=True, slots=True)
class GraphSummary:
    """Node and edge counts of a graph."""

    node_count: int
    edge_count: int
    has_cycle: bool


@dataclass(frozen=True, slots=True)
class NodeInfo:
    """Basic information about a node for listing."""

    label: str
    id: int
    out_degree: int
    in_degree: int


@dataclass(slots=True)
class TreeNode:
    """A node in a shortest-path tree for rendering."""

    label: str
    distance: float
    children: list[TreeNode]


class DistanceEntry(BaseModel):
    """Distance of one node from the source of a shortest-path run."""

    label: str
    reachable: bool
    distance: float | None
    parent: str | None


class ShortestPathReport(BaseModel):
    """Serializable result of a shortest-path query.

    ``entries`` follow the order in which nodes were settled. Unreachable
    nodes have ``reachable=False`` and no distance.
    """

    source: str
    entries: list[DistanceEntry]
    target: str | None = None
    target_path: list[str] | None = None


def get_summary(graph: DiGraph) -> GraphSummary:
    """Count nodes and edges and check for cycles."""
    return GraphSummary(
        node_count=graph.num_nodes(),
        edge_count=graph.num_edges(),
        has_cycle=graph.has_cycle(),
    )


def list_nodes(graph: DiGraph) -> list[NodeInfo]:
    """List every node of the graph in insertion order.

    Args:
        graph: The DiGraph to analyze.

    Returns:
        List of NodeInfo, one per node.

    """
    infos: list[NodeInfo] = []
    for label in graph.nodes:
        node = graph.get_node(label)
        if node is None:
            continue
        infos.append(
            NodeInfo(
                label=label,
                id=node.id,
                out_degree=len(node.out_edges),
                in_degree=len(node.in_edges),
            ),
        )
    return infos


def get_topological_order(graph: DiGraph) -> list[str]:
    """Get the topological order of the graph.

    Raises:
        CycleError: If the graph contains a cycle, carrying one such cycle.

    """
    return topological_sort({label: graph.successors(label) for label in graph.nodes})


def _run_shortest_paths(graph: DiGraph, source: str) -> ShortestPathTree:
    tree = graph.shortest_paths(source)
    if tree is None:
        msg = f"Node not found: {source}"
        raise KeyError(msg)
    return tree


def build_shortest_path_report(graph: DiGraph, source: str, target: str | None = None) -> ShortestPathReport:
    """Run a shortest-path query and collect the result into a report.

    Args:
        graph: The DiGraph to query.
        source: Label of the source node.
        target: Optional label whose full path should be reconstructed.

    Returns:
        ShortestPathReport with one entry per node in settle order.

    Raises:
        KeyError: If the source or target node is not found.

    """
    tree = _run_shortest_paths(graph, source)

    if target is not None and target not in graph:
        msg = f"Node not found: {target}"
        raise KeyError(msg)

    entries = [
        DistanceEntry(
            label=label,
            reachable=tree.is_reachable(label),
            distance=tree.distances[label] if tree.is_reachable(label) else None,
            parent=tree.parents[label],
        )
        for label in tree.order
    ]
    return ShortestPathReport(
        source=source,
        entries=entries,
        target=target,
        target_path=tree.path_to(target) if target is not None else None,
    )


def get_shortest_path_tree(graph: DiGraph, source: str) -> TreeNode:
    """Build the shortest-path tree rooted at ``source`` for visualization.

    Only nodes reachable from the source appear in the tree. Children are
    sorted by label for consistent output.

    Raises:
        KeyError: If the source node is not found.

    """
    tree = _run_shortest_paths(graph, source)

    children_of: dict[str, list[str]] = {}
    for label, parent in tree.parents.items():
        if parent is not None:
            children_of.setdefault(parent, []).append(label)

    def build_tree(label: str) -> TreeNode:
        children = [build_tree(child) for child in sorted(children_of.get(label, []))]
        return TreeNode(label=label, distance=tree.distances[label], children=children)

    return build_tree(source)
