"""Build steps of a small release pipeline.

An edge (a -> b) means step b needs step a to finish first:

    wdigraph topo examples/build_steps.py
"""

import wdigraph as wg

pipeline = wg.DiGraph()

steps = ["fetch", "configure", "compile", "test", "docs", "package", "publish"]
for node_id, step in enumerate(steps):
    pipeline.add_node(node_id, step)

pipeline.add_edge(0, "fetch", "configure", 1)
pipeline.add_edge(1, "configure", "compile", 5)
pipeline.add_edge(2, "compile", "test", 3)
pipeline.add_edge(3, "configure", "docs", 2)
pipeline.add_edge(4, "test", "package", 1)
pipeline.add_edge(5, "docs", "package", 1)
pipeline.add_edge(6, "package", "publish", 1)
