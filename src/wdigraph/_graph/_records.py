"""Storage records for graph nodes and edges."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Edge:
    """A weighted, optionally labeled, directed connection between two nodes.

    Attributes:
        id: Caller-supplied identifier, unique among all edges.
        source: Label of the node the edge leaves.
        dest: Label of the node the edge enters.
        weight: Integer weight used by shortest-path runs.
        label: Optional edge label.

    """

    id: int
    source: str
    dest: str
    weight: int
    label: str | None = None

    def render(self) -> str:
        """Render the edge as ``(id)--label,weight--> dest``."""
        if self.label is not None:
            return f"({self.id})--{self.label},{self.weight}--> {self.dest}"
        return f"({self.id})--{self.weight}--> {self.dest}"


@dataclass(slots=True)
class Node:
    """A uniquely labeled, uniquely identified graph vertex.

    Attributes:
        id: Caller-supplied identifier, unique among all nodes.
        label: Unique label, the primary lookup key.
        out_edges: Outgoing edges keyed by destination label.
        in_edges: Incoming edges keyed by source label.

    """

    id: int
    label: str
    out_edges: dict[str, Edge] = field(default_factory=dict)
    in_edges: dict[str, Edge] = field(default_factory=dict)

    def render(self) -> str:
        """Render the node header as ``(id)label``."""
        return f"({self.id}){self.label}"
