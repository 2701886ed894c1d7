"""
graph_structure.reports — Tabular summaries of structural metrics.

Modules:
    module_report  — Per-module modularity breakdown (pandas DataFrame).
"""
