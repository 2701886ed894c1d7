"""
graph_structure/config.py — All tunable parameters for graph_structure.

Numeric tolerances and the attribute names written onto derived graphs live
here so that a caller can change them with a single override instead of
editing algorithm modules.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StructureConfig:
    """
    Immutable configuration for SCC decomposition and modularity metrics.

    Override by constructing a new StructureConfig with the desired values:

        cfg = StructureConfig(zero_tolerance=1e-9)
        compute_scaled_modularity(G, membership, config=cfg)
    """

    # ── Modularity ────────────────────────────────────────────────────────────
    zero_tolerance: float = 1e-12
    # |Qmax| at or below this value is treated as zero by
    # compute_scaled_modularity(). Qmax is a difference of float sums, so an
    # exact 0.0 comparison would miss the single-module case.

    # ── Component graph ───────────────────────────────────────────────────────
    component_edge_id_attr: str = "edge_id"
    # Edge attribute holding the derived edge id on the component graph.
    # Ids come from a counter over filtered original edges; gaps are expected
    # where edges collapsed into an existing pair or stayed inside a component.

    component_size_attr: str = "size"
    # Node attribute holding the number of original vertices in a component.

    # ── Reports ───────────────────────────────────────────────────────────────
    report_sort_descending: bool = True
    # module_breakdown() orders rows by module_modularity, largest first.


# Singleton default — import this everywhere instead of constructing anew.
DEFAULT_CONFIG = StructureConfig()
