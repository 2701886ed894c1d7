"""
graph_structure/graph/queries.py — Graph query interface.

Both algorithm families read the graph only through the functions in this
module, so the degree and adjacency conventions are decided in one place.

Convention for directed graphs:
    degree(v)        = in_degree(v) + out_degree(v)
    is_neighbor(u,v) = edge u → v OR edge v → u

This pairs total degree with either-direction adjacency, so a directed graph
is measured like its undirected shadow. For undirected graphs both reduce to
the usual definitions. A vertex is its own neighbor only when it carries a
self-loop.

neighbors() is the bulk form used to walk adjacency; is_neighbor() tests a
single pair, which is how modularity detects a self-loop at v.
"""

from collections.abc import Callable, Hashable, Iterator
from typing import Any

import networkx as nx

EdgeFilter = Callable[[Hashable, Hashable, dict], bool]


def ALL_EDGES(u: Hashable, v: Hashable, data: dict) -> bool:
    """Edge filter that accepts every edge."""
    return True


def edge_type_filter(*edge_types: str, attr: str = "edge_type") -> EdgeFilter:
    """
    Build an edge filter that keeps edges whose `attr` value is in edge_types.

    Example:
        deps_only = edge_type_filter("depends_on")
        tarjan_decomposition(G, edge_filter=deps_only)

    Edges without the attribute are rejected.
    """
    wanted = frozenset(edge_types)

    def _filter(u: Hashable, v: Hashable, data: dict) -> bool:
        return data.get(attr) in wanted

    _filter.__name__ = f"edge_type_filter({', '.join(sorted(wanted))})"
    return _filter


def resolve_edge_filter(edge_filter: EdgeFilter | None) -> EdgeFilter:
    """Return edge_filter, or ALL_EDGES when it is None."""
    return ALL_EDGES if edge_filter is None else edge_filter


def out_edges(
    G: nx.Graph,
    v: Hashable,
    edge_filter: EdgeFilter | None = None,
) -> Iterator[tuple[Hashable, Hashable, dict]]:
    """
    Yield (v, w, data) for every edge leaving v that passes edge_filter.

    Undirected graphs report every incident edge as leaving v. Multigraphs
    yield one triple per parallel edge.
    """
    keep = resolve_edge_filter(edge_filter)
    for u, w, data in G.edges(v, data=True):
        if keep(u, w, data):
            yield u, w, data


def filtered_edges(
    G: nx.Graph,
    edge_filter: EdgeFilter | None = None,
) -> Iterator[tuple[Hashable, Hashable, dict]]:
    """Yield (source, destination, data) for every edge of G passing edge_filter."""
    keep = resolve_edge_filter(edge_filter)
    for u, w, data in G.edges(data=True):
        if keep(u, w, data):
            yield u, w, data


def degree(G: nx.Graph, v: Hashable) -> int:
    """Number of incident edge-endpoints of v (total degree for directed graphs)."""
    return G.degree(v)


def neighbors(G: nx.Graph, v: Hashable) -> set[Any]:
    """All vertices adjacent to v in either direction."""
    if G.is_directed():
        return set(G.successors(v)) | set(G.predecessors(v))
    return set(G.neighbors(v))


def is_neighbor(G: nx.Graph, u: Hashable, v: Hashable) -> bool:
    """True if u and v share an edge in either direction."""
    if G.has_edge(u, v):
        return True
    return G.is_directed() and G.has_edge(v, u)


def edge_count(G: nx.Graph) -> int:
    """Total number of edges, counting each parallel edge of a multigraph."""
    return G.number_of_edges()
