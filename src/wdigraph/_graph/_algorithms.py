"""Graph algorithms for topological ordering and shortest paths."""

import heapq
import logging
import math
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class CycleError(ValueError):
    """Raised when a topological order is requested for a cyclic graph."""

    def __init__(self, cycle: list[Hashable]) -> None:
        self.cycle = cycle
        super().__init__(f"Cycle detected in graph: {' -> '.join(map(str, cycle))}")


class _VisitState(Enum):
    IN_PROGRESS = "in_progress"
    FINALIZED = "finalized"


def topological_sort(successors: Mapping[T, Iterable[T]]) -> list[T]:
    """Sort a graph topologically (sources before the nodes they point to).

    Runs a depth-first search from every node that is not finished yet,
    collects nodes in post-order and reverses that list at the end. Roots are
    taken in mapping order and neighbours in iteration order, so the result
    is deterministic for a given mapping.

    Args:
        successors: Mapping from node to the nodes it has an edge to.
            Nodes that only appear as successors are included in the result.

    Returns:
        List of nodes where, for every edge (a -> b), a appears before b.

    Raises:
        CycleError: If the graph contains a cycle (self-loops included).

    Example:
        >>> topological_sort({"a": ["b"], "b": ["c"], "c": []})
        ['a', 'b', 'c']

    """
    state: dict[T, _VisitState] = {}
    postorder: list[T] = []

    for root in successors:
        if root in state:
            continue

        state[root] = _VisitState.IN_PROGRESS
        path: list[T] = [root]
        stack = [iter(successors.get(root, ()))]

        while stack:
            for child in stack[-1]:
                child_state = state.get(child)
                if child_state is _VisitState.FINALIZED:
                    continue
                if child_state is _VisitState.IN_PROGRESS:
                    raise CycleError([*path[path.index(child) :], child])
                state[child] = _VisitState.IN_PROGRESS
                path.append(child)
                stack.append(iter(successors.get(child, ())))
                break
            else:
                # All neighbours explored
                stack.pop()
                done = path.pop()
                state[done] = _VisitState.FINALIZED
                postorder.append(done)

    postorder.reverse()
    return postorder


class DistanceQueue:
    """Min-priority queue of node labels with lazy deletion.

    Entries are ordered by (distance, label). A label may be pushed several
    times as its tentative distance improves; the queue keeps the settled
    set and silently drops entries for labels that are already settled.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[float, str]] = []
        self._settled: set[str] = set()

    def push(self, label: str, distance: float) -> None:
        """Add an entry for ``label`` at ``distance``. Older entries stay queued."""
        heapq.heappush(self._heap, (distance, label))

    def pop(self) -> tuple[str, float] | None:
        """Settle and return the closest unsettled label.

        Returns:
            ``(label, distance)`` for the next label to settle, or None once
            only stale entries (or nothing) remain.

        """
        while self._heap:
            distance, label = heapq.heappop(self._heap)
            if label in self._settled:
                continue
            self._settled.add(label)
            return label, distance
        return None

    def is_settled(self, label: str) -> bool:
        """Check whether ``label`` has been returned by :meth:`pop`."""
        return label in self._settled

    def __len__(self) -> int:
        """Return the number of queued entries, stale ones included."""
        return len(self._heap)


@dataclass(frozen=True, slots=True)
class ShortestPathTree:
    """Result of one single-source shortest-path run.

    Attributes:
        source: Label the run started from.
        distances: Final distance per label (``math.inf`` when unreachable).
        parents: Predecessor on the shortest path per label (None for the
            source and unreachable nodes).
        order: Labels in the order they were settled.

    """

    source: str
    distances: dict[str, float]
    parents: dict[str, str | None]
    order: tuple[str, ...]

    def is_reachable(self, label: str) -> bool:
        """Check whether ``label`` can be reached from the source."""
        return self.distances.get(label, math.inf) != math.inf

    def path_to(self, label: str) -> list[str] | None:
        """Reconstruct the node sequence from the source to ``label``.

        Returns:
            Labels from the source to ``label`` (inclusive), or None if the
            label is unknown or unreachable.

        """
        if not self.is_reachable(label):
            return None
        path = [label]
        parent = self.parents[label]
        while parent is not None:
            path.append(parent)
            parent = self.parents[parent]
        path.reverse()
        return path

    def lines(self) -> list[str]:
        """Render ``label: distance`` for every label in settle order."""
        return [f"{label}: {self.distances[label]}" for label in self.order]


def dijkstra(successors: Mapping[str, Mapping[str, int]], source: str) -> ShortestPathTree:
    """Compute single-source shortest paths with lazy-deletion Dijkstra.

    Every node is queued up front at its initial distance; improved
    distances are pushed again and the stale entries are dropped by
    :class:`DistanceQueue` when they surface. Weights must be non-negative;
    with negative weights the distances may be wrong.

    Args:
        successors: Mapping from every node label to ``{dest_label: weight}``.
            Every destination must also be a key.
        source: Label to measure distances from.

    Returns:
        The ShortestPathTree of the run.

    Raises:
        KeyError: If ``source`` is not a node of the graph.

    """
    if source not in successors:
        msg = f"Unknown source node: {source}"
        raise KeyError(msg)

    distances: dict[str, float] = dict.fromkeys(successors, math.inf)
    parents: dict[str, str | None] = dict.fromkeys(successors)
    distances[source] = 0.0

    queue = DistanceQueue()
    for label, distance in distances.items():
        queue.push(label, distance)

    order: list[str] = []
    while (entry := queue.pop()) is not None:
        label, _ = entry
        order.append(label)
        for dest, weight in successors[label].items():
            candidate = distances[label] + weight
            if candidate < distances[dest]:
                distances[dest] = candidate
                parents[dest] = label
                queue.push(dest, candidate)

    logger.debug(f"Settled {len(order)} nodes from '{source}'")
    return ShortestPathTree(source=source, distances=distances, parents=parents, order=tuple(order))
