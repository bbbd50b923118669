"""Road network between towns, weighted by travel time in minutes.

Run the shortest-path query with:

    wdigraph path examples/roads.py --source depot --target harbor
"""

import wdigraph as wg

graph = wg.DiGraph()

for node_id, town in enumerate(["depot", "mill", "bridge", "market", "harbor", "quarry"]):
    graph.add_node(node_id, town)

graph.add_edge(0, "depot", "mill", 7, "north road")
graph.add_edge(1, "depot", "bridge", 9)
graph.add_edge(2, "depot", "quarry", 14, "old track")
graph.add_edge(3, "mill", "bridge", 10)
graph.add_edge(4, "mill", "market", 15)
graph.add_edge(5, "bridge", "market", 11)
graph.add_edge(6, "bridge", "quarry", 2)
graph.add_edge(7, "quarry", "harbor", 9, "coast road")
graph.add_edge(8, "market", "harbor", 6)
# One-way back road makes the network cyclic
graph.add_edge(9, "harbor", "depot", 30)
