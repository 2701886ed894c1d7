"""
graph_structure.graph — Query layer over NetworkX graphs.

Modules:
    queries  — Degree, neighbor and filtered-edge queries shared by the SCC
               decomposer and the modularity metrics.

Any NetworkX graph class is accepted: Graph, DiGraph, MultiGraph and
MultiDiGraph. Directed graphs use total degree (in + out) and
either-direction adjacency.
"""
