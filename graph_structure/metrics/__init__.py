"""
graph_structure.metrics — Partition quality metrics.

Modules:
    modularity  — Raw, maximum, scaled and per-module modularity of a
                  vertex partition.

Metrics read the graph only through graph_structure.graph.queries and use
the full edge set. Tolerances live in graph_structure.config.StructureConfig.
"""
