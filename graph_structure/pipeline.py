"""
graph_structure/pipeline.py — Single-call structural analysis.

Provides run_structure_analysis(), which decomposes a graph into strongly
connected components and scores a partition of it with every modularity
metric, returning all intermediate results in one StructureResult.

Usage:
    from graph_structure.pipeline import run_structure_analysis
    result = run_structure_analysis(G, membership={"a": "core", ...})
    print(result.scaled_modularity)

Without a membership the SCC partition itself is scored, which measures how
much of the graph's connectivity stays inside its strongly connected
components.
"""

import logging
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Optional

import networkx as nx
import pandas as pd

from graph_structure.cluster.tarjan import TarjanDecomposition, tarjan_decomposition
from graph_structure.config import DEFAULT_CONFIG, StructureConfig
from graph_structure.exceptions import UndefinedMetric
from graph_structure.graph.queries import EdgeFilter
from graph_structure.metrics.modularity import (
    Membership,
    compute_max_modularity,
    compute_modularity,
    compute_scaled_modularity,
    resolve_membership,
)
from graph_structure.reports.module_report import module_breakdown

logger = logging.getLogger(__name__)


@dataclass
class StructureResult:
    """
    Complete output of one structural analysis run.

    scaled_modularity is None when the scaled metric is undefined for the
    partition (zero maximum modularity with non-zero modularity).
    """

    decomposition: TarjanDecomposition
    partition: dict[Hashable, Hashable]

    modularity: float
    max_modularity: float
    scaled_modularity: Optional[float]

    module_table: pd.DataFrame = field(default_factory=pd.DataFrame)

    @property
    def component_count(self) -> int:
        return len(self.decomposition.components)

    @property
    def module_count(self) -> int:
        return len(set(self.partition.values()))


def run_structure_analysis(
    G: nx.Graph,
    membership: Membership | None = None,
    edge_filter: EdgeFilter | None = None,
    config: StructureConfig = DEFAULT_CONFIG,
) -> StructureResult:
    """
    Run SCC decomposition and every modularity metric on G.

    Order:
        1. SCC decomposition over the edges accepted by edge_filter.
        2. Partition: membership if given, else the SCC membership.
        3. Modularity, maximum modularity, scaled modularity (full edge set).
        4. Per-module breakdown table.

    Args:
        G:           Any NetworkX graph with at least one edge.
        membership:  Mapping or callable vertex → module label. Defaults to
                     the strongly connected components of G.
        edge_filter: Edge filter for the decomposition only. Modularity
                     always uses every edge.
        config:      StructureConfig passed to every stage.

    Returns:
        StructureResult.

    Raises:
        UndefinedMetric:  G has no edges.
        InvalidPartition: membership leaves a vertex without a module.
    """
    decomposition = tarjan_decomposition(G, edge_filter=edge_filter, config=config)

    if membership is None:
        partition = dict(decomposition.membership)
    else:
        partition = resolve_membership(G, membership)

    modularity = compute_modularity(G, partition)
    max_modularity = compute_max_modularity(G, partition)

    try:
        scaled: Optional[float] = compute_scaled_modularity(G, partition, config=config)
    except UndefinedMetric as exc:
        logger.warning("Scaled modularity unavailable: %s", exc)
        scaled = None

    table = module_breakdown(G, partition, config=config)

    result = StructureResult(
        decomposition=decomposition,
        partition=partition,
        modularity=modularity,
        max_modularity=max_modularity,
        scaled_modularity=scaled,
        module_table=table,
    )

    logger.info(
        "Structure analysis complete: %d vertices, %d components, %d modules, "
        "Q=%.4f, Qmax=%.4f.",
        G.number_of_nodes(),
        result.component_count,
        result.module_count,
        modularity,
        max_modularity,
    )
    return result
