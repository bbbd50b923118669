"""Graph module providing the directed graph container and its algorithms.

This module contains:
- DiGraph: A mutable, label-keyed, edge-weighted directed graph
- topological_sort: Depth-first ordering with cycle detection
- dijkstra: Lazy-deletion single-source shortest paths
"""

from ._algorithms import CycleError, DistanceQueue, ShortestPathTree, dijkstra, topological_sort
from ._digraph import DiGraph
from ._records import Edge, Node

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
