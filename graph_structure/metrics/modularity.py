"""
graph_structure/metrics/modularity.py — Modularity of a vertex partition.

Modularity compares how many same-module vertex pairs are adjacent against
how many would be adjacent in a random graph with the same degree sequence:

    Q    = (1/2m) Σ_{v1,v2 same module} [A(v1,v2) − k(v1)·k(v2)/2m]
    Qmax = (1/2m) [2m − Σ_{v1,v2 same module} k(v1)·k(v2)/2m]

The sums range over all ordered pairs in the same module, (v, v) included.
A is the either-direction adjacency and k the total degree from
graph_structure.graph.queries, with A(v, v) = 2 for a self-loop to match the
two endpoints it adds to k(v).

Qmax is the value Q would take if every same-module pair were adjacent. Raw Q
stays below 1 whenever modules are sparse or disconnected (Newman, Networks,
p. 224); dividing by Qmax rescales against the partition's own ceiling, so
that a partition whose modules are as dense as their degrees allow scores 1.

Restricting the sum to the pairs inside one module gives that module's
contribution. Since the module blocks of the double sum are disjoint, the
per-module contributions of a total partition add up to Q.

Both double sums are evaluated without enumerating pairs: the adjacency term
is the number of ordered neighbor pairs sharing a module, and the expected
term factorises into Σ_module (Σ_{v in module} k(v))² / 2m.
"""

import logging
from collections import defaultdict
from collections.abc import Callable, Hashable, Iterable, Mapping
from dataclasses import dataclass

import networkx as nx
import numpy as np

from graph_structure.config import DEFAULT_CONFIG, StructureConfig
from graph_structure.exceptions import InvalidPartition, UndefinedMetric
from graph_structure.graph.queries import degree, edge_count, is_neighbor, neighbors

logger = logging.getLogger(__name__)

Membership = Mapping[Hashable, Hashable] | Callable[[Hashable], Hashable]
ModulePredicate = Callable[[Hashable], bool]


@dataclass(frozen=True)
class ModuleSums:
    """Same-module sums of one module, gathered in a single pass over G."""
    size: int
    degree_total: float   # Σ k(v) over the members
    adjacent: float       # Σ A(v1, v2) over same-module ordered pairs
    two_m: float          # total degree of G, 2 × edge count

    @property
    def expected(self) -> float:
        return self.degree_total ** 2 / self.two_m

    @property
    def modularity(self) -> float:
        """This module's contribution to Q."""
        return (self.adjacent - self.expected) / self.two_m


@dataclass(frozen=True)
class _PairSums:
    """Same-module double sums shared by every modularity variant."""
    adjacent: float   # Σ A(v1, v2) over same-module ordered pairs
    expected: float   # Σ k(v1)·k(v2) / 2m over the same pairs
    two_m: float      # total degree, 2 × edge count

    @property
    def modularity(self) -> float:
        return (self.adjacent - self.expected) / self.two_m

    @property
    def max_modularity(self) -> float:
        return (self.two_m - self.expected) / self.two_m


def resolve_membership(G: nx.Graph, membership: Membership) -> dict[Hashable, Hashable]:
    """
    Resolve membership to a label for every vertex of G.

    Raises:
        InvalidPartition: a vertex has no label (missing key, KeyError from
                          the callable, or None) or its label is unhashable.
    """
    if isinstance(membership, Mapping):
        lookup = membership.__getitem__
    else:
        lookup = membership

    labels: dict[Hashable, Hashable] = {}
    for v in G:
        try:
            label = lookup(v)
        except KeyError as exc:
            raise InvalidPartition(f"Vertex {v!r} is not assigned to any module.") from exc
        if label is None:
            raise InvalidPartition(f"Vertex {v!r} is not assigned to any module.")
        try:
            hash(label)
        except TypeError as exc:
            raise InvalidPartition(
                f"Module label {label!r} of vertex {v!r} is not hashable."
            ) from exc
        labels[v] = label
    return labels


def module_sums(
    G: nx.Graph,
    labels: Mapping[Hashable, Hashable],
) -> dict[Hashable, ModuleSums]:
    """
    Per-module double sums for the vertices in labels, in one pass over G.

    Vertices missing from labels take part in no pair. This is how a
    single-module predicate restricts the sum.

    A self-loop adds 2 to k(v), so the pair (v, v) counts as 2 adjacencies
    and a module holding every edge still scores Q = 0, as in
    nx.community.modularity. Parallel edges count once.

    Args:
        G:      Any NetworkX graph with at least one edge.
        labels: Resolved vertex → module label mapping.

    Returns:
        ModuleSums per label, in the order labels were first seen.

    Raises:
        UndefinedMetric: G has no edges.
    """
    two_m = 2.0 * edge_count(G)
    if two_m == 0:
        raise UndefinedMetric("Modularity is undefined for a graph with no edges.")

    sizes: dict[Hashable, int] = defaultdict(int)
    degree_totals: dict[Hashable, float] = defaultdict(float)
    adjacent: dict[Hashable, int] = defaultdict(int)
    for v, label in labels.items():
        sizes[label] += 1
        degree_totals[label] += degree(G, v)
        adjacent[label] += sum(
            1 for w in neighbors(G, v) if w != v and w in labels and labels[w] == label
        )
        if is_neighbor(G, v, v):
            adjacent[label] += 2

    return {
        label: ModuleSums(
            size=size,
            degree_total=degree_totals[label],
            adjacent=float(adjacent[label]),
            two_m=two_m,
        )
        for label, size in sizes.items()
    }


def _pair_sums(G: nx.Graph, labels: Mapping[Hashable, Hashable]) -> _PairSums:
    """Evaluate the same-module double sums summed over every module."""
    modules = module_sums(G, labels)
    two_m = 2.0 * edge_count(G)

    totals = np.fromiter(
        (sums.degree_total for sums in modules.values()),
        dtype=np.float64,
        count=len(modules),
    )
    expected = float(np.square(totals).sum()) / two_m
    adjacent = float(sum(sums.adjacent for sums in modules.values()))

    return _PairSums(adjacent=adjacent, expected=expected, two_m=two_m)


def compute_modularity(G: nx.Graph, membership: Membership) -> float:
    """
    Modularity Q of the partition given by membership.

    Args:
        G:          Any NetworkX graph with at least one edge.
        membership: Mapping vertex → module label, or a callable returning the
                    label. Labels must be hashable; None means "no module".

    Returns:
        Q, at most 1. Positive when same-module pairs are adjacent more often
        than the degree sequence predicts.

    Raises:
        UndefinedMetric:  G has no edges.
        InvalidPartition: some vertex has no module.
    """
    return _pair_sums(G, resolve_membership(G, membership)).modularity


def compute_max_modularity(G: nx.Graph, membership: Membership) -> float:
    """
    Maximum modularity Qmax reachable with the same module sizes and degrees.

    This is Q under the counterfactual that every same-module ordered pair is
    adjacent. It normalises compute_scaled_modularity() and is not bounded by
    1 from below: a partition concentrating most of the degree in one module
    has a small Qmax.

    Raises:
        UndefinedMetric:  G has no edges.
        InvalidPartition: some vertex has no module.
    """
    return _pair_sums(G, resolve_membership(G, membership)).max_modularity


def compute_scaled_modularity(
    G: nx.Graph,
    membership: Membership,
    config: StructureConfig = DEFAULT_CONFIG,
) -> float:
    """
    Modularity scaled by its maximum, Q / Qmax (an assortativity coefficient).

    A partition that is as modular as its module degrees allow scores 1.0; a
    partition with no same-module edges at all scores negative.

    Args:
        G:          Any NetworkX graph with at least one edge.
        membership: Mapping or callable, as for compute_modularity().
        config:     StructureConfig. Uses zero_tolerance.

    Returns:
        Q / Qmax. When Qmax and Q are both zero (all degree sits in one
        module, e.g. a single-module partition) the partition has no
        discriminating structure and the result is 0.0.

    Raises:
        UndefinedMetric:  G has no edges, or Qmax is zero while Q is not.
        InvalidPartition: some vertex has no module.
    """
    sums = _pair_sums(G, resolve_membership(G, membership))
    q = sums.modularity
    q_max = sums.max_modularity

    if abs(q_max) <= config.zero_tolerance:
        if abs(q) <= config.zero_tolerance:
            logger.debug("Qmax and Q are both zero: single-module partition, scaled = 0.")
            return 0.0
        raise UndefinedMetric(
            f"Scaled modularity is undefined: maximum modularity is zero "
            f"while modularity is {q:.6g}."
        )

    return q / q_max


def compute_module_modularity(G: nx.Graph, in_module: ModulePredicate) -> float:
    """
    Contribution of a single module to the modularity of G.

    Evaluates the same double sum as compute_modularity(), restricted to the
    pairs where both vertices satisfy in_module. Normalisation still uses the
    full edge count, so for a total partition into modules M1..Mk:

        Σ_i compute_module_modularity(G, in Mi) == compute_modularity(G, membership)

    Args:
        G:         Any NetworkX graph with at least one edge.
        in_module: Predicate vertex → bool selecting the module.

    Raises:
        UndefinedMetric: G has no edges.
    """
    selected = {v: True for v in G if in_module(v)}
    return _pair_sums(G, selected).modularity


def membership_from_communities(
    communities: Iterable[Iterable[Hashable]],
) -> dict[Hashable, int]:
    """
    Convert a list of vertex sets into a membership dict.

    Follows the NetworkX community convention (as returned by
    nx.community.louvain_communities or tarjan_clusters). Each vertex is
    labelled with the position of its community in the iterable.

    Raises:
        InvalidPartition: a vertex appears in more than one community.
    """
    membership: dict[Hashable, int] = {}
    for label, community in enumerate(communities):
        for v in community:
            if v in membership:
                raise InvalidPartition(
                    f"Vertex {v!r} appears in communities {membership[v]} and {label}."
                )
            membership[v] = label
    return membership


def module_predicate(membership: Membership, label: Hashable) -> ModulePredicate:
    """Predicate selecting the vertices whose module is label."""
    if isinstance(membership, Mapping):
        return lambda v: membership.get(v) == label
    return lambda v: membership(v) == label
