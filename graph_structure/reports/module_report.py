"""
graph_structure/reports/module_report.py — Per-module modularity breakdown.

Splits the modularity of a partition into the contribution of each module.
The module blocks of the modularity double sum are disjoint, so the
module_modularity column always adds up to compute_modularity() for the same
partition. A module with a negative contribution is less connected internally
than its degrees predict and is the first candidate for a split or merge.
"""

import logging

import networkx as nx
import numpy as np
import pandas as pd

from graph_structure.config import DEFAULT_CONFIG, StructureConfig
from graph_structure.metrics.modularity import Membership, module_sums, resolve_membership

logger = logging.getLogger(__name__)

COLUMNS = ["module", "size", "degree_total", "module_modularity", "share"]


def module_breakdown(
    G: nx.Graph,
    membership: Membership,
    config: StructureConfig = DEFAULT_CONFIG,
) -> pd.DataFrame:
    """
    Tabulate the modularity contribution of every module in a partition.

    Args:
        G:          Any NetworkX graph with at least one edge.
        membership: Mapping or callable vertex → module label.
        config:     StructureConfig. Uses report_sort_descending and
                    zero_tolerance.

    Returns:
        DataFrame with one row per module and columns:
            module             — module label
            size               — number of vertices in the module
            degree_total       — sum of member degrees
            module_modularity  — compute_module_modularity() for the module
            share              — module_modularity / total modularity
                                 (NaN when |total| <= zero_tolerance)
        Rows are sorted by module_modularity (descending by default). Ties
        keep the order in which modules were first seen in G.

    Raises:
        UndefinedMetric:  G has no edges.
        InvalidPartition: some vertex has no module.
    """
    labels = resolve_membership(G, membership)
    modules = module_sums(G, labels)

    records = [
        {
            "module": label,
            "size": sums.size,
            "degree_total": sums.degree_total,
            "module_modularity": sums.modularity,
        }
        for label, sums in modules.items()
    ]

    df = pd.DataFrame(records, columns=COLUMNS[:-1])
    total = float(df["module_modularity"].sum())
    if abs(total) <= config.zero_tolerance:
        df["share"] = np.nan
    else:
        df["share"] = df["module_modularity"] / total

    df = df.sort_values(
        "module_modularity",
        ascending=not config.report_sort_descending,
        kind="mergesort",
    ).reset_index(drop=True)

    logger.debug(
        "Module breakdown: %d modules, total modularity %.4f.",
        len(df),
        total,
    )
    return df
