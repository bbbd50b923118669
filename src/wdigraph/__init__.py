"""Directed, edge-weighted graph container with topological sort and shortest paths."""

__all__ = [
    "CycleError",
    "DiGraph",
    "DistanceQueue",
    "Edge",
    "Node",
    "ShortestPathTree",
    "dijkstra",
    "topological_sort",
]

from ._graph import (
    CycleError,
    DiGraph,
    DistanceQueue,
    Edge,
    Node,
    ShortestPathTree,
    dijkstra,
    topological_sort,
)
