"""
graph_structure/tests/conftest.py — Shared pytest fixtures for the test suite.

The reference graphs are two groups of three vertices, "c1" and "c2". The
module of a vertex is the first token of its name ("c1.v2" → "c1"), so one
membership function serves every fixture.

Fixtures:
    module_of               — membership function ("c1.v2" → "c1").
    in_module               — factory for single-module predicates.
    graph_cls               — nx.Graph and nx.DiGraph (parametrised).
    two_triangles_joined    — both triangles plus one edge c1.v1 – c2.v1.
    two_triangles_apart     — both triangles, no edge between them.
    two_triangles_laddered  — both triangles plus three edges c1.vi – c2.vi.
    only_inter_edges        — no edge inside a group, three edges between.
    random_digraphs         — seeded sparse random digraphs (session-scoped).
"""

import networkx as nx
import pytest

SEED = 41


# ── Pytest configuration hooks ────────────────────────────────────────────────

def pytest_configure(config):
    """Register the slow marker."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests on large graphs (deselected by default, "
        "pass --run-slow or -m slow to enable)",
    )


def pytest_addoption(parser):
    """Add --run-slow CLI flag to enable large-graph tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run tests on large graphs.",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is passed or -m selects them."""
    markexpr = config.getoption("-m", default="")
    if "slow" in markexpr:
        return

    if config.getoption("--run-slow"):
        return

    skip_slow = pytest.mark.skip(reason="Slow test -- pass --run-slow or -m slow to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


# ── Graph builders ────────────────────────────────────────────────────────────

VERTICES = ["c1.v1", "c1.v2", "c1.v3", "c2.v1", "c2.v2", "c2.v3"]

TRIANGLE_EDGES = [
    ("c1.v1", "c1.v2"), ("c1.v2", "c1.v3"), ("c1.v3", "c1.v1"),
    ("c2.v1", "c2.v2"), ("c2.v2", "c2.v3"), ("c2.v3", "c2.v1"),
]

LADDER_EDGES = [("c1.v1", "c2.v1"), ("c1.v2", "c2.v2"), ("c1.v3", "c2.v3")]


def make_graph(graph_cls, edges) -> nx.Graph:
    """Six reference vertices plus the given edges."""
    G = graph_cls()
    G.add_nodes_from(VERTICES)
    G.add_edges_from(edges)
    return G


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def module_of():
    """Membership function: module is the first token of the vertex name."""
    return lambda vertex: vertex.split(".")[0]


@pytest.fixture
def in_module(module_of):
    """Factory for single-module predicates, e.g. in_module("c1")."""
    return lambda label: (lambda vertex: module_of(vertex) == label)


@pytest.fixture(params=[nx.Graph, nx.DiGraph], ids=["undirected", "directed"])
def graph_cls(request):
    return request.param


@pytest.fixture
def two_triangles_joined(graph_cls) -> nx.Graph:
    return make_graph(graph_cls, TRIANGLE_EDGES + [("c1.v1", "c2.v1")])


@pytest.fixture
def two_triangles_apart(graph_cls) -> nx.Graph:
    return make_graph(graph_cls, TRIANGLE_EDGES)


@pytest.fixture
def two_triangles_laddered(graph_cls) -> nx.Graph:
    return make_graph(graph_cls, TRIANGLE_EDGES + LADDER_EDGES)


@pytest.fixture
def only_inter_edges(graph_cls) -> nx.Graph:
    return make_graph(graph_cls, LADDER_EDGES)


@pytest.fixture(scope="session")
def random_digraphs() -> list[nx.DiGraph]:
    """Sparse random digraphs around the giant-SCC threshold (p ≈ 1/n)."""
    return [
        nx.gnp_random_graph(n, 1.5 / n, seed=SEED + i, directed=True)
        for i, n in enumerate([10, 25, 50, 100, 200])
    ]
