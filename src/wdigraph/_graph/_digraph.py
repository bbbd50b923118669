"""Mutable directed, edge-weighted graph keyed by node label."""

import logging
import sys
from collections.abc import Iterator
from typing import TextIO

from ._algorithms import CycleError, ShortestPathTree, dijkstra, topological_sort
from ._records import Edge, Node

logger = logging.getLogger(__name__)


class DiGraph:
    """A directed graph of uniquely labeled nodes and weighted edges.

    Nodes are looked up by label. Node ids and edge ids are caller-chosen,
    non-negative and tracked in two separate sets; an id becomes free again
    when its node or edge is deleted but is never reassigned automatically.
    At most one edge may exist per ordered (source, dest) pair.

    Mutations report failure through their boolean result instead of raising.
    Algorithm runs keep their bookkeeping in per-run structures and never
    modify the graph, so they can be repeated freely.

    Example:
        >>> graph = DiGraph()
        >>> graph.add_node(0, "a") and graph.add_node(1, "b")
        True
        >>> graph.add_edge(0, "a", "b", 3)
        True
        >>> graph.topo_sort()
        ['a', 'b']

    """

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}
        self._node_ids: set[int] = set()
        self._edge_ids: set[int] = set()

    # -----------------
    # MUTATION
    # -----------------

    def add_node(self, node_id: int, label: str) -> bool:
        """Register a node.

        Args:
            node_id: Non-negative id, unique among nodes.
            label: Label, unique among nodes.

        Returns:
            True if the node was added, False if the id is negative or in use,
            or the label is missing or in use.

        """
        if node_id < 0 or label is None:
            logger.debug(f"Rejected node {label!r}: invalid id {node_id} or label")
            return False
        if node_id in self._node_ids:
            logger.debug(f"Rejected node {label!r}: id {node_id} already in use")
            return False
        if label in self._nodes:
            logger.debug(f"Rejected node {label!r}: label already in use")
            return False

        self._nodes[label] = Node(id=node_id, label=label)
        self._node_ids.add(node_id)
        logger.debug(f"Added node ({node_id}){label}")
        return True

    def add_edge(
        self,
        edge_id: int,
        source: str,
        dest: str,
        weight: int,
        label: str | None = None,
    ) -> bool:
        """Register an edge from ``source`` to ``dest``.

        Args:
            edge_id: Non-negative id, unique among edges.
            source: Label of an existing node.
            dest: Label of an existing node.
            weight: Edge weight.
            label: Optional edge label.

        Returns:
            True if the edge was added. False if the id is negative or in use,
            either endpoint is unknown, or an edge from ``source`` to ``dest``
            already exists. Nothing is modified on failure.

        """
        if edge_id < 0 or edge_id in self._edge_ids:
            logger.debug(f"Rejected edge {source!r}->{dest!r}: id {edge_id} is negative or in use")
            return False

        source_node = self._nodes.get(source)
        dest_node = self._nodes.get(dest)
        if source_node is None or dest_node is None:
            logger.debug(f"Rejected edge {source!r}->{dest!r}: unknown endpoint")
            return False
        if dest in source_node.out_edges:
            logger.debug(f"Rejected edge {source!r}->{dest!r}: edge already exists")
            return False

        edge = Edge(id=edge_id, source=source, dest=dest, weight=weight, label=label)
        source_node.out_edges[dest] = edge
        dest_node.in_edges[source] = edge
        self._edge_ids.add(edge_id)
        logger.debug(f"Added edge {edge.render()} from {source}")
        return True

    def del_node(self, label: str) -> bool:
        """Remove a node together with every edge entering or leaving it.

        Returns:
            False if no node has ``label``, True otherwise.

        """
        node = self._nodes.pop(label, None)
        if node is None:
            return False
        self._node_ids.discard(node.id)
        n_out, n_in = len(node.out_edges), len(node.in_edges)

        # Self-loops resolve to the already popped node
        for edge in list(node.out_edges.values()):
            self._edge_ids.discard(edge.id)
            self._nodes.get(edge.dest, node).in_edges.pop(label, None)
        for edge in list(node.in_edges.values()):
            self._edge_ids.discard(edge.id)
            self._nodes.get(edge.source, node).out_edges.pop(label, None)

        logger.debug(f"Deleted node ({node.id}){label} with {n_out} outgoing and {n_in} incoming edges")
        return True

    def del_edge(self, source: str, dest: str) -> bool:
        """Remove the edge from ``source`` to ``dest``.

        Returns:
            False if ``source`` is unknown or has no edge to ``dest``.

        """
        source_node = self._nodes.get(source)
        if source_node is None:
            return False
        edge = source_node.out_edges.pop(dest, None)
        if edge is None:
            return False

        self._nodes[dest].in_edges.pop(source, None)
        self._edge_ids.discard(edge.id)
        logger.debug(f"Deleted edge {source}->{dest} (id {edge.id})")
        return True

    def clear(self) -> None:
        """Remove every node and edge."""
        self._nodes.clear()
        self._node_ids.clear()
        self._edge_ids.clear()

    # -----------------
    # QUERIES
    # -----------------

    def num_nodes(self) -> int:
        """Return the number of nodes currently in the graph."""
        return len(self._nodes)

    def num_edges(self) -> int:
        """Return the number of edges currently in the graph."""
        return len(self._edge_ids)

    @property
    def nodes(self) -> tuple[str, ...]:
        """Node labels in insertion order."""
        return tuple(self._nodes)

    def edges(self) -> Iterator[Edge]:
        """Iterate over every edge, grouped by source node."""
        for node in self._nodes.values():
            yield from node.out_edges.values()

    def get_node(self, label: str) -> Node | None:
        return self._nodes.get(label)

    def get_edge(self, source: str, dest: str) -> Edge | None:
        node = self._nodes.get(source)
        if node is None:
            return None
        return node.out_edges.get(dest)

    def successors(self, label: str) -> tuple[str, ...]:
        """Labels this node has an edge to (empty for unknown labels)."""
        node = self._nodes.get(label)
        return tuple(node.out_edges) if node is not None else ()

    def predecessors(self, label: str) -> tuple[str, ...]:
        """Labels that have an edge to this node (empty for unknown labels)."""
        node = self._nodes.get(label)
        return tuple(node.in_edges) if node is not None else ()

    # -----------------
    # DIAGNOSTICS
    # -----------------

    def dump(self) -> str:
        """Render every node followed by its outgoing edges, one per line."""
        lines: list[str] = []
        for node in self._nodes.values():
            lines.append(node.render())
            lines.extend(f"  {edge.render()}" for edge in node.out_edges.values())
        return "\n".join(lines)

    def print(self, file: TextIO | None = None) -> None:
        """Write :meth:`dump` to ``file`` (standard output by default)."""
        out = file if file is not None else sys.stdout
        for line in self.dump().splitlines():
            out.write(line + "\n")

    # -----------------
    # ALGORITHMS
    # -----------------

    def _successor_map(self) -> dict[str, dict[str, int]]:
        return {
            label: {dest: edge.weight for dest, edge in node.out_edges.items()}
            for label, node in self._nodes.items()
        }

    def find_cycle(self) -> list[str] | None:
        """Return one directed cycle as a list of labels, or None if acyclic.

        The first and last labels of the returned list are the same node.
        """
        try:
            topological_sort(self._successor_map())
        except CycleError as e:
            return [str(label) for label in e.cycle]
        return None

    def has_cycle(self) -> bool:
        """Check if the graph contains a directed cycle."""
        return self.find_cycle() is not None

    def topo_sort(self) -> list[str] | None:
        """Return every label in topological order.

        Returns:
            Labels ordered so that the source of each edge precedes its
            destination, or None if the graph contains a cycle.

        """
        try:
            return topological_sort(self._successor_map())
        except CycleError as e:
            logger.debug(str(e))
            return None

    def shortest_paths(self, source: str) -> ShortestPathTree | None:
        """Run single-source shortest paths from ``source``.

        Edge weights are expected to be non-negative. Negative weights are
        the caller's responsibility and may produce wrong distances.

        Returns:
            The ShortestPathTree of the run, or None if ``source`` is unknown.

        """
        if source not in self._nodes:
            logger.debug(f"Unknown shortest-path source {source!r}")
            return None
        return dijkstra(self._successor_map(), source)

    def shortest_path(self, source: str) -> list[str] | None:
        """Return ``label: distance`` for every node in the order it was settled.

        Unreachable nodes are reported at distance ``inf``.

        Returns:
            Rendered distance lines, or None if ``source`` is unknown.

        """
        tree = self.shortest_paths(source)
        if tree is None:
            return None
        return tree.lines()

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __contains__(self, label: object) -> bool:
        """Check if a node with this label is in the graph."""
        return label in self._nodes

    def __repr__(self) -> str:
        return f"DiGraph(nodes={self.num_nodes()}, edges={self.num_edges()})"
