"""
graph_structure.cluster — Graph clustering by reachability.

Modules:
    tarjan  — Strongly connected components (Tarjan, O(V + E)) with the
              condensed component graph.
"""
