"""
graph_structure/cluster/tarjan.py — Strongly Connected Components (Tarjan).

Decomposes a graph into its maximal strongly connected components and builds
the condensed component graph in the same run.

Two vertices belong to the same component iff each reaches the other over the
edges accepted by the edge filter. Collapsing every component into a single
vertex yields the component graph, which is always acyclic: a cycle between
two components would have merged them.

Reference:
    Tarjan, R. E. (1972). Depth-first search and linear graph algorithms.
    SIAM Journal on Computing 1(2): 146–160. doi:10.1137/0201010
"""

import logging
from collections.abc import Hashable
from dataclasses import dataclass, field

import networkx as nx

from graph_structure.config import DEFAULT_CONFIG, StructureConfig
from graph_structure.graph.queries import (
    EdgeFilter,
    filtered_edges,
    out_edges,
    resolve_edge_filter,
)

logger = logging.getLogger(__name__)


@dataclass
class TarjanDecomposition:
    """
    Result of a single SCC decomposition run.

    Fields:
        membership:       Vertex → the frozenset of vertices in its component.
                          Every vertex of the input graph is a key.
        component_graph:  Directed graph whose nodes are the components.
                          Nodes carry a size attribute; edges carry a derived
                          edge id (names from StructureConfig).
        components:       Distinct components in completion order. Tarjan
                          completes a component only after every component
                          it reaches, so this is a reverse topological order
                          of component_graph.
    """
    membership: dict[Hashable, frozenset]
    component_graph: nx.DiGraph
    components: list[frozenset] = field(default_factory=list)

    def component_of(self, node: Hashable) -> frozenset:
        """Component containing node. Raises KeyError for an unknown vertex."""
        return self.membership[node]

    def __len__(self) -> int:
        return len(self.components)


def tarjan_decomposition(
    G: nx.Graph,
    edge_filter: EdgeFilter | None = None,
    config: StructureConfig = DEFAULT_CONFIG,
) -> TarjanDecomposition:
    """
    Decompose G into strongly connected components and build the component graph.

    Algorithm (Tarjan, O(V + E)):
        1. Every vertex without a discovery index becomes a DFS root, so
           disconnected graphs are fully covered.
        2. Discovering v assigns the next index, sets lowlink(v) = index(v)
           and pushes v on the active stack.
        3. For each filtered out-edge v → w:
             - w undiscovered: descend; on return,
               lowlink(v) = min(lowlink(v), lowlink(w)).
             - w still active: lowlink(v) = min(lowlink(v), index(w)).
             - w already in a finished component: ignored.
        4. When v has no edges left and lowlink(v) == index(v), pop the active
           stack down to v. The popped vertices form one component.
        5. A second pass over the filtered edges adds one component-graph edge
           per ordered pair of distinct components.

    The DFS keeps an explicit stack of (vertex, edge iterator) frames instead
    of recursing, so path-like graphs longer than the interpreter recursion
    limit decompose normally.

    Args:
        G:           Any NetworkX graph. Undirected edges are followed from
                     both endpoints. G is not modified.
        edge_filter: Callable (u, v, data) -> bool selecting the edges that
                     count toward connectivity. None keeps every edge.
        config:      StructureConfig. Uses component_size_attr and
                     component_edge_id_attr.

    Returns:
        TarjanDecomposition with membership, component_graph and components.

    Notes:
        - Edges whose endpoints fall in the same component are not added to
          the component graph, so it never has self-loops.
        - Parallel inter-component edges collapse into one. Every filtered
          edge consumes a derived edge id, so the ids on the component graph
          have gaps wherever an edge was skipped.
        - All traversal state is local to this call.
    """
    keep = resolve_edge_filter(edge_filter)

    counter = 0
    index: dict[Hashable, int] = {}
    lowlink: dict[Hashable, int] = {}
    active_stack: list[Hashable] = []
    active: set[Hashable] = set()

    membership: dict[Hashable, frozenset] = {}
    components: list[frozenset] = []
    component_graph = nx.DiGraph()

    def discover(v: Hashable) -> None:
        nonlocal counter
        index[v] = counter
        lowlink[v] = counter
        counter += 1
        active_stack.append(v)
        active.add(v)

    for root in G:
        if root in index:
            continue

        discover(root)
        frames = [(root, out_edges(G, root, keep))]

        while frames:
            v, edges = frames[-1]

            descended = False
            for _, w, _ in edges:
                if w not in index:
                    discover(w)
                    frames.append((w, out_edges(G, w, keep)))
                    descended = True
                    break
                if w in active:
                    lowlink[v] = min(lowlink[v], index[w])
            if descended:
                # Resume v's edge iterator once w is finished.
                continue

            frames.pop()

            if lowlink[v] == index[v]:
                members = []
                while True:
                    w = active_stack.pop()
                    active.discard(w)
                    members.append(w)
                    if w == v:
                        break
                component = frozenset(members)
                for w in members:
                    membership[w] = component
                components.append(component)
                component_graph.add_node(
                    component, **{config.component_size_attr: len(component)}
                )

            if frames:
                parent = frames[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[v])

    edge_id = 0
    for u, w, _ in filtered_edges(G, keep):
        source, dest = membership[u], membership[w]
        if source is not dest and not component_graph.has_edge(source, dest):
            component_graph.add_edge(
                source, dest, **{config.component_edge_id_attr: edge_id}
            )
        edge_id += 1

    logger.debug(
        "Tarjan decomposition complete: %d vertices, %d components, "
        "%d component-graph edges.",
        len(membership),
        len(components),
        component_graph.number_of_edges(),
    )

    return TarjanDecomposition(
        membership=membership,
        component_graph=component_graph,
        components=components,
    )


def tarjan_clusters(
    G: nx.Graph,
    edge_filter: EdgeFilter | None = None,
) -> set[frozenset]:
    """
    Strongly connected components of G as a set of vertex sets.

    Clusterer-style shortcut over tarjan_decomposition() for callers that
    only need the partition, e.g. to compare against other clusterings or to
    feed membership_from_communities().
    """
    return set(tarjan_decomposition(G, edge_filter).components)
