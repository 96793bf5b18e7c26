"""
er_giant/graph/builder.py — NetworkX graph construction from explicit edges.

Every graph in er_giant is an undirected nx.Graph whose nodes are exactly the
integers 1..n. The vertex count is recorded on the graph itself
(G.graph["n"]) so that isolated vertices are never lost, and so that
component analysis can check edges against the declared range.

This module builds such graphs from in-memory edge lists or from a CSV with
`u, v` columns, and writes them back out in the same format.
"""

import logging
import numbers
import os
from typing import Iterable

import networkx as nx
import pandas as pd

from er_giant.errors import InvalidInput, InvalidParameter

logger = logging.getLogger(__name__)


EDGE_COLUMNS = ("u", "v")


def empty_graph(n: int, **graph_attrs) -> nx.Graph:
    """
    Return an edgeless graph on vertices 1..n.

    Extra keyword arguments are stored as graph-level attributes alongside
    n (e.g. p=0.1, seed=7 for sampled graphs).
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidParameter(f"n must be an integer, got {n!r}")
    if n < 1:
        raise InvalidParameter(f"n must be >= 1, got {n}")

    G = nx.Graph(n=int(n), **graph_attrs)
    G.add_nodes_from(range(1, int(n) + 1))
    return G


def _check_vertex(v, n: int) -> int:
    if isinstance(v, bool) or not isinstance(v, numbers.Integral):
        raise InvalidInput(f"Vertex label {v!r} is not an integer.")
    if not 1 <= v <= n:
        raise InvalidInput(f"Vertex {v} is outside the range 1..{n}.")
    return int(v)


def build_graph_from_edges(
    n: int,
    edges: Iterable[tuple[int, int]],
) -> nx.Graph:
    """
    Build a graph on vertices 1..n from an explicit edge list.

    Args:
        n:     Vertex count (>= 1).
        edges: Iterable of (u, v) pairs. Order within a pair is irrelevant;
               duplicate and reversed-duplicate pairs collapse to one edge.

    Returns:
        G: nx.Graph with nodes 1..n and G.graph["n"] == n.

    Raises:
        InvalidParameter: n < 1 or not an integer.
        InvalidInput:     an endpoint is outside 1..n, is not an integer,
                          or an edge is a self-loop.
    """
    G = empty_graph(n)
    n = G.graph["n"]

    for edge in edges:
        try:
            u, v = edge
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"Edge {edge!r} is not a (u, v) pair.") from exc
        u = _check_vertex(u, n)
        v = _check_vertex(v, n)
        if u == v:
            raise InvalidInput(f"Self-loop on vertex {u} is not allowed.")
        G.add_edge(u, v)

    logger.debug(
        "Built graph from edge list: %d vertices, %d edges.",
        n,
        G.number_of_edges(),
    )
    return G


def build_graph_from_csv(path: str, n: int | None = None) -> nx.Graph:
    """
    Load an edge list from a CSV file with `u` and `v` columns.

    Args:
        path: CSV path. Extra columns are ignored.
        n:    Vertex count. Defaults to the largest endpoint in the file
              (so trailing isolated vertices need an explicit n).

    Returns:
        G: nx.Graph built via build_graph_from_edges().

    Raises:
        InvalidInput: unreadable or empty file, missing columns, non-integer
                      endpoints, or a header-only file without an explicit n.
    """
    logger.info("Loading edge list from: %s", path)
    try:
        df = pd.read_csv(path)
    except (FileNotFoundError, pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise InvalidInput(f"Cannot read edge list {path}: {exc}") from exc

    missing = [c for c in EDGE_COLUMNS if c not in df.columns]
    if missing:
        raise InvalidInput(
            f"Edge list {path} is missing column(s): {', '.join(missing)}."
        )

    if df[list(EDGE_COLUMNS)].isna().any().any():
        raise InvalidInput(f"Edge list {path} contains empty endpoints.")

    for col in EDGE_COLUMNS:
        # A header-only file reads back as object dtype.
        if not df.empty and not pd.api.types.is_integer_dtype(df[col]):
            raise InvalidInput(
                f"Column '{col}' in {path} must hold integer vertex labels."
            )

    if n is None:
        if df.empty:
            raise InvalidInput(
                f"Edge list {path} is empty; pass n to size the vertex set."
            )
        n = int(max(df["u"].max(), df["v"].max()))
        if n < 1:
            raise InvalidInput(
                f"Edge list {path} has no positive vertex labels (largest is {n})."
            )

    edges = zip(df["u"].astype(int).tolist(), df["v"].astype(int).tolist())
    G = build_graph_from_edges(n, edges)

    logger.info(
        "Loaded graph: %d vertices, %d edges.", G.graph["n"], G.number_of_edges()
    )
    return G


def write_edge_list_csv(G: nx.Graph, path: str) -> str:
    """
    Write G's edges to CSV as sorted (u, v) rows with u < v.

    Parent directories are created as needed. Returns the path written.
    """
    rows = sorted((min(u, v), max(u, v)) for u, v in G.edges())
    df = pd.DataFrame(rows, columns=list(EDGE_COLUMNS))

    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    df.to_csv(path, index=False)

    logger.info("Wrote %d edges to %s", len(rows), path)
    return path
