"""
er_giant/tests/conftest.py — Shared pytest fixtures for the er_giant test suite.

Fixtures:
    five_vertex_graph  — n=5, edges (1,2) (1,3) (2,3) (3,4), vertex 5 isolated.
    tie_graph          — two components of size 3 plus a singleton.
    draws_50           — PairDraws for n=50, seed=1 (session-scoped).
    d_grid             — mean degrees 0, 0.25, ..., 4.0.

Tests marked @pytest.mark.slow sample graphs large enough to take seconds;
they are skipped unless --run-slow or -m slow is passed.
"""

import networkx as nx
import pytest

from er_giant.graph.builder import build_graph_from_edges
from er_giant.graph.sampler import PairDraws, pair_draws
from er_giant.pipeline import mean_degree_grid

SEED = 1


# ── Pytest configuration hooks ────────────────────────────────────────────────

def pytest_configure(config):
    """Register the slow marker."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests that sample large graphs (deselected by default, "
        "pass --run-slow or -m slow to enable)",
    )


def pytest_addoption(parser):
    """Add --run-slow CLI flag to enable slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run tests that sample large graphs.",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is passed or -m slow is used."""
    markexpr = config.getoption("-m", default="")
    if "slow" in markexpr:
        return

    if config.getoption("--run-slow"):
        return

    skip_slow = pytest.mark.skip(reason="Slow test -- pass --run-slow or -m slow to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


# ── Graph fixtures ────────────────────────────────────────────────────────────

@pytest.fixture
def five_vertex_graph() -> nx.Graph:
    """Triangle 1-2-3 with pendant 4; vertex 5 isolated. Sizes 4 and 1."""
    return build_graph_from_edges(5, [(1, 2), (1, 3), (2, 3), (3, 4)])


@pytest.fixture
def tie_graph() -> nx.Graph:
    """
    Two paths of three vertices and a singleton:

        4 - 5 - 6     1 - 2 - 3     7

    Both size-3 components tie; the one holding vertex 1 is "the" largest.
    """
    return build_graph_from_edges(7, [(4, 5), (5, 6), (2, 3), (1, 2)])


@pytest.fixture(scope="session")
def draws_50() -> PairDraws:
    """Materialised draws for n=50, seed=1."""
    return pair_draws(50, SEED)


@pytest.fixture(scope="session")
def d_grid() -> list[float]:
    """Mean degrees 0 to 4 in steps of 0.25."""
    return mean_degree_grid(0.0, 4.0, 0.25).tolist()
