"""
graph_structure — Structural analysis of directed and undirected graphs.

Two independent capabilities over the same NetworkX graph model:

- Strongly connected component decomposition with a condensed component
  graph (graph_structure.cluster.tarjan)
- Modularity metrics for a vertex partition: raw, maximum, scaled and
  per-module (graph_structure.metrics.modularity)

Supporting layers:
- graph_structure.graph.queries       — degree / neighbor / edge filter queries
- graph_structure.reports.module_report — per-module modularity breakdown
- graph_structure.pipeline            — single-call orchestrator
"""

__version__ = "0.1.0"
