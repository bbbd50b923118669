"""Tests for the DiGraph container."""

import io
import logging

import pytest

import wdigraph as wg


@pytest.fixture
def triangle() -> wg.DiGraph:
    """A -> B (1), B -> C (1), A -> C (5)."""
    graph = wg.DiGraph()
    graph.add_node(0, "A")
    graph.add_node(1, "B")
    graph.add_node(2, "C")
    graph.add_edge(10, "A", "B", 1)
    graph.add_edge(11, "B", "C", 1)
    graph.add_edge(12, "A", "C", 5, "direct")
    return graph


class TestAddNode:
    def test_add_node(self) -> None:
        graph = wg.DiGraph()
        assert graph.add_node(0, "X") is True
        assert graph.num_nodes() == 1
        assert "X" in graph

    def test_duplicate_id_is_rejected(self) -> None:
        graph = wg.DiGraph()
        assert graph.add_node(1, "X") is True
        assert graph.add_node(1, "Y") is False
        assert graph.num_nodes() == 1
        assert "Y" not in graph

    def test_duplicate_label_is_rejected(self) -> None:
        graph = wg.DiGraph()
        assert graph.add_node(1, "X") is True
        assert graph.add_node(2, "X") is False
        assert graph.num_nodes() == 1
        assert graph.get_node("X").id == 1

    def test_negative_id_is_rejected(self) -> None:
        graph = wg.DiGraph()
        assert graph.add_node(-1, "X") is False
        assert graph.num_nodes() == 0

    def test_missing_label_is_rejected(self) -> None:
        graph = wg.DiGraph()
        assert graph.add_node(0, None) is False  # type: ignore[arg-type]
        assert graph.num_nodes() == 0

    def test_rejection_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        graph = wg.DiGraph()
        graph.add_node(1, "X")
        with caplog.at_level(logging.DEBUG, logger="wdigraph"):
            graph.add_node(1, "Y")
        assert "already in use" in caplog.text

    def test_node_ids_are_freed_on_delete(self) -> None:
        graph = wg.DiGraph()
        graph.add_node(1, "X")
        graph.del_node("X")
        assert graph.add_node(1, "Y") is True


class TestAddEdge:
    def test_add_edge(self, triangle: wg.DiGraph) -> None:
        assert triangle.num_edges() == 3
        edge = triangle.get_edge("A", "C")
        assert edge == wg.Edge(id=12, source="A", dest="C", weight=5, label="direct")

    def test_edge_and_node_ids_are_independent(self) -> None:
        graph = wg.DiGraph()
        graph.add_node(0, "A")
        graph.add_node(1, "B")
        assert graph.add_edge(0, "A", "B", 1) is True

    def test_unknown_endpoint_is_rejected(self, triangle: wg.DiGraph) -> None:
        assert triangle.add_edge(20, "A", "missing", 1) is False
        assert triangle.add_edge(21, "missing", "A", 1) is False
        assert triangle.num_edges() == 3

    def test_duplicate_pair_is_rejected(self, triangle: wg.DiGraph) -> None:
        assert triangle.add_edge(20, "A", "B", 7) is False
        assert triangle.num_edges() == 3
        assert triangle.get_edge("A", "B").weight == 1

    def test_reverse_pair_is_a_different_edge(self, triangle: wg.DiGraph) -> None:
        assert triangle.add_edge(20, "B", "A", 1) is True
        assert triangle.num_edges() == 4

    def test_duplicate_id_is_rejected(self, triangle: wg.DiGraph) -> None:
        assert triangle.add_edge(10, "C", "A", 1) is False
        assert triangle.num_edges() == 3
        assert triangle.get_edge("C", "A") is None

    def test_negative_id_is_rejected(self, triangle: wg.DiGraph) -> None:
        assert triangle.add_edge(-1, "C", "A", 1) is False
        assert triangle.num_edges() == 3

    def test_failed_add_leaves_no_partial_state(self, triangle: wg.DiGraph) -> None:
        triangle.add_edge(20, "C", "missing", 1)
        assert triangle.successors("C") == ()
        assert triangle.add_edge(20, "C", "A", 1) is True

    def test_self_loop(self) -> None:
        graph = wg.DiGraph()
        graph.add_node(0, "A")
        assert graph.add_edge(0, "A", "A", 1) is True
        assert graph.successors("A") == ("A",)
        assert graph.predecessors("A") == ("A",)


class TestDelNode:
    def test_removes_incident_edges(self) -> None:
        graph = wg.DiGraph()
        for node_id, label in enumerate("ABCD"):
            graph.add_node(node_id, label)
        graph.add_edge(0, "A", "B", 1)
        graph.add_edge(1, "B", "C", 1)
        graph.add_edge(2, "C", "B", 1)
        graph.add_edge(3, "D", "A", 1)

        assert graph.del_node("B") is True

        assert graph.num_nodes() == 3
        assert graph.num_edges() == 1
        assert graph.successors("A") == ()
        assert graph.predecessors("C") == ()
        assert graph.successors("C") == ()
        assert [edge.id for edge in graph.edges()] == [3]

    def test_edge_ids_are_freed(self, triangle: wg.DiGraph) -> None:
        triangle.del_node("B")
        assert triangle.num_edges() == 1
        assert triangle.add_edge(10, "C", "A", 2) is True

    def test_removed_edges_do_not_reappear(self, triangle: wg.DiGraph) -> None:
        triangle.del_node("B")
        triangle.add_node(1, "B")
        assert triangle.num_edges() == 1
        assert triangle.successors("B") == ()
        assert triangle.predecessors("B") == ()
        assert triangle.get_edge("A", "B") is None

    def test_self_loop_is_removed(self) -> None:
        graph = wg.DiGraph()
        graph.add_node(0, "A")
        graph.add_edge(0, "A", "A", 1)
        assert graph.del_node("A") is True
        assert graph.num_edges() == 0
        assert graph.num_nodes() == 0

    def test_unknown_label(self, triangle: wg.DiGraph) -> None:
        assert triangle.del_node("missing") is False
        assert triangle.num_nodes() == 3


class TestDelEdge:
    def test_removes_edge_from_both_ends(self, triangle: wg.DiGraph) -> None:
        assert triangle.del_edge("A", "B") is True
        assert triangle.num_edges() == 2
        assert triangle.get_edge("A", "B") is None
        assert "A" not in triangle.predecessors("B")
        assert "B" not in triangle.successors("A")

    def test_frees_edge_id(self, triangle: wg.DiGraph) -> None:
        triangle.del_edge("A", "B")
        assert triangle.add_edge(10, "C", "A", 1) is True

    def test_unknown_source(self, triangle: wg.DiGraph) -> None:
        assert triangle.del_edge("missing", "A") is False

    def test_missing_edge(self, triangle: wg.DiGraph) -> None:
        assert triangle.del_edge("C", "A") is False
        assert triangle.num_edges() == 3


class TestQueries:
    def test_nodes_in_insertion_order(self, triangle: wg.DiGraph) -> None:
        assert triangle.nodes == ("A", "B", "C")

    def test_len_contains_repr(self, triangle: wg.DiGraph) -> None:
        assert len(triangle) == 3
        assert "A" in triangle
        assert "Z" not in triangle
        assert repr(triangle) == "DiGraph(nodes=3, edges=3)"

    def test_successors_and_predecessors(self, triangle: wg.DiGraph) -> None:
        assert triangle.successors("A") == ("B", "C")
        assert triangle.predecessors("C") == ("B", "A")
        assert triangle.successors("missing") == ()
        assert triangle.predecessors("missing") == ()

    def test_get_missing(self, triangle: wg.DiGraph) -> None:
        assert triangle.get_node("missing") is None
        assert triangle.get_edge("missing", "A") is None
        assert triangle.get_edge("C", "A") is None

    def test_clear(self, triangle: wg.DiGraph) -> None:
        triangle.clear()
        assert triangle.num_nodes() == 0
        assert triangle.num_edges() == 0
        assert triangle.add_node(0, "A") is True


class TestDump:
    def test_dump_format(self, triangle: wg.DiGraph) -> None:
        assert triangle.dump().splitlines() == [
            "(0)A",
            "  (10)--1--> B",
            "  (12)--direct,5--> C",
            "(1)B",
            "  (11)--1--> C",
            "(2)C",
        ]

    def test_empty_graph(self) -> None:
        assert wg.DiGraph().dump() == ""

    def test_print_to_stream(self, triangle: wg.DiGraph) -> None:
        buffer = io.StringIO()
        triangle.print(buffer)
        assert buffer.getvalue() == triangle.dump() + "\n"

    def test_print_to_stdout(self, triangle: wg.DiGraph, capsys: pytest.CaptureFixture[str]) -> None:
        triangle.print()
        assert capsys.readouterr().out.splitlines()[0] == "(0)A"


def _respects_edges(graph: wg.DiGraph, order: list[str]) -> bool:
    position = {label: index for index, label in enumerate(order)}
    return all(position[edge.source] < position[edge.dest] for edge in graph.edges())


class TestTopoSort:
    def test_acyclic_graph(self, triangle: wg.DiGraph) -> None:
        order = triangle.topo_sort()
        assert order == ["A", "B", "C"]

    def test_order_is_permutation_respecting_edges(self) -> None:
        graph = wg.DiGraph()
        labels = ["shirt", "tie", "jacket", "belt", "trousers", "shoes", "socks", "watch"]
        for node_id, label in enumerate(labels):
            graph.add_node(node_id, label)
        edges = [
            ("shirt", "tie"),
            ("tie", "jacket"),
            ("shirt", "belt"),
            ("belt", "jacket"),
            ("trousers", "belt"),
            ("trousers", "shoes"),
            ("socks", "shoes"),
        ]
        for edge_id, (source, dest) in enumerate(edges):
            graph.add_edge(edge_id, source, dest, 1)

        order = graph.topo_sort()

        assert order is not None
        assert sorted(order) == sorted(labels)
        assert _respects_edges(graph, order)

    def test_two_node_cycle(self) -> None:
        graph = wg.DiGraph()
        graph.add_node(0, "A")
        graph.add_node(1, "B")
        graph.add_edge(1, "A", "B", 3)
        graph.add_edge(2, "B", "A", 3)
        assert graph.topo_sort() is None
        assert graph.has_cycle()

    def test_self_loop_is_cycle(self) -> None:
        graph = wg.DiGraph()
        graph.add_node(0, "A")
        graph.add_edge(0, "A", "A", 1)
        assert graph.topo_sort() is None
        assert graph.find_cycle() == ["A", "A"]

    def test_breaking_the_cycle(self) -> None:
        graph = wg.DiGraph()
        graph.add_node(0, "A")
        graph.add_node(1, "B")
        graph.add_edge(1, "A", "B", 3)
        graph.add_edge(2, "B", "A", 3)
        graph.del_edge("B", "A")
        assert graph.topo_sort() == ["A", "B"]
        assert graph.find_cycle() is None

    def test_empty_graph(self) -> None:
        assert wg.DiGraph().topo_sort() == []


class TestShortestPath:
    def test_indirect_route_wins(self, triangle: wg.DiGraph) -> None:
        assert triangle.shortest_path("A") == ["A: 0.0", "B: 1.0", "C: 2.0"]

    def test_unknown_source(self, triangle: wg.DiGraph) -> None:
        assert triangle.shortest_path("missing") is None
        assert triangle.shortest_paths("missing") is None

    def test_unreachable_is_infinite(self, triangle: wg.DiGraph) -> None:
        assert triangle.shortest_path("C") == ["C: 0.0", "A: inf", "B: inf"]

    def test_repeated_calls_are_idempotent(self, triangle: wg.DiGraph) -> None:
        first = triangle.shortest_path("A")
        assert triangle.shortest_path("B") == ["B: 0.0", "C: 1.0", "A: inf"]
        assert triangle.shortest_path("A") == first

    def test_reflects_mutations(self, triangle: wg.DiGraph) -> None:
        triangle.del_edge("B", "C")
        assert triangle.shortest_path("A") == ["A: 0.0", "B: 1.0", "C: 5.0"]

    def test_does_not_mutate_graph(self, triangle: wg.DiGraph) -> None:
        before = triangle.dump()
        triangle.shortest_path("A")
        triangle.topo_sort()
        assert triangle.dump() == before

    def test_shortest_path_tree(self, triangle: wg.DiGraph) -> None:
        tree = triangle.shortest_paths("A")
        assert tree is not None
        assert tree.source == "A"
        assert tree.path_to("C") == ["A", "B", "C"]
