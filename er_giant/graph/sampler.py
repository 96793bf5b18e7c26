"""
er_giant/graph/sampler.py — Erdős–Rényi G(n, p) sampling with reusable draws.

Every unordered vertex pair (i, j), 1 <= i < j <= n, receives exactly one
uniform [0, 1) draw from numpy.random.default_rng(seed). Pairs are visited in
lexicographic order and the stream is consumed one row at a time:

    row 1: (1,2) (1,3) ... (1,n)      rng.random(n - 1)
    row 2: (2,3) ... (2,n)            rng.random(n - 2)
    ...
    row n-1: (n-1,n)                  rng.random(1)

Edge (i, j) is present iff its draw is strictly less than p.

Because the draws depend only on (n, seed), never on p, sweeping p with the
same seed yields a nested sequence of graphs: every edge present at p1 is
also present at any p2 > p1. Callers that want a "growing graph" must reuse
the same seed (or the same PairDraws object) across the sweep. Redrawing per
p breaks the nesting.

Cost:
    Time is O(n^2) for any p, one draw per pair. This is the dominant cost of
    a trial; component analysis is O(n + m) on top of it. At n = 1,000,000
    that is ~5 * 10^11 draws, i.e. hours of runtime.
    PairDraws keeps all n(n-1)/2 draws in memory (8 bytes each) and is capped
    by SweepConfig.max_materialized_pairs. iter_edges() streams the same
    draws with O(n) working memory.
"""

import logging
import math
import numbers
from typing import Iterator, Sequence

import networkx as nx
import numpy as np

from er_giant.config import DEFAULT_CONFIG, SweepConfig
from er_giant.errors import InvalidParameter
from er_giant.graph.builder import empty_graph

logger = logging.getLogger(__name__)


# ── Parameter validation ──────────────────────────────────────────────────────

def validate_vertex_count(n) -> int:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidParameter(f"n must be an integer, got {n!r}")
    if n < 1:
        raise InvalidParameter(f"n must be >= 1, got {n}")
    return int(n)


def validate_probability(p) -> float:
    if isinstance(p, bool) or not isinstance(p, numbers.Real):
        raise InvalidParameter(f"p must be a real number, got {p!r}")
    p = float(p)
    if math.isnan(p) or not 0.0 <= p <= 1.0:
        raise InvalidParameter(f"p must lie in [0, 1], got {p}")
    return p


def resolve_seed(seed, config: SweepConfig) -> int:
    if seed is None:
        return config.default_seed
    if isinstance(seed, bool) or not isinstance(seed, numbers.Integral):
        raise InvalidParameter(f"seed must be an integer, got {seed!r}")
    if seed < 0:
        raise InvalidParameter(f"seed must be non-negative, got {seed}")
    return int(seed)


def n_pairs(n: int) -> int:
    """Number of unordered vertex pairs, n(n-1)/2."""
    return n * (n - 1) // 2


# ── Mean degree conversions ───────────────────────────────────────────────────

def mean_degree(p: float, n: int) -> float:
    """Expected degree (n - 1) * p of a vertex in G(n, p)."""
    return (validate_vertex_count(n) - 1) * validate_probability(p)


def p_from_mean_degree(d: float, n: int) -> float:
    """
    Convert a target mean degree d into the edge probability d / (n - 1).

    With n = 1 there are no pairs, so every d maps to p = 0.

    Raises:
        InvalidParameter: d < 0, or d > n - 1 (which would need p > 1).
    """
    n = validate_vertex_count(n)
    if isinstance(d, bool) or not isinstance(d, numbers.Real) or math.isnan(d):
        raise InvalidParameter(f"mean degree must be a real number, got {d!r}")
    if d < 0:
        raise InvalidParameter(f"mean degree must be >= 0, got {d}")
    if n == 1:
        return 0.0
    if d > n - 1:
        raise InvalidParameter(
            f"mean degree {d} exceeds n - 1 = {n - 1}; no valid p exists."
        )
    return float(d) / (n - 1)


# ── Materialised draws ────────────────────────────────────────────────────────

class PairDraws:
    """
    All per-pair draws for one (n, seed), held in condensed order.

    values[k] is the draw of the k-th pair in lexicographic order. Use
    edges(p) / graph(p) to threshold without drawing again.
    """

    def __init__(self, n: int, seed: int, values: np.ndarray):
        if values.shape != (n_pairs(n),):
            raise InvalidParameter(
                f"expected {n_pairs(n)} draws for n={n}, got {values.shape}"
            )
        self.n = n
        self.seed = seed
        self.values = values
        # row_offsets[i] = condensed index of pair (i+1, i+2), 0-based row i.
        rows = np.arange(n - 1, dtype=np.int64)
        self._row_offsets = rows * (2 * n - rows - 1) // 2

    def __len__(self) -> int:
        return int(self.values.shape[0])

    def pairs_at(self, index: np.ndarray) -> np.ndarray:
        """Map condensed indices to an (m, 2) array of 1-based (i, j) pairs."""
        index = np.asarray(index, dtype=np.int64)
        if index.size == 0:
            return np.empty((0, 2), dtype=np.int64)
        row = np.searchsorted(self._row_offsets, index, side="right") - 1
        col = index - self._row_offsets[row] + row + 1
        return np.column_stack((row + 1, col + 1))

    def edge_index(self, p: float) -> np.ndarray:
        """Condensed indices of pairs whose draw is strictly below p."""
        p = validate_probability(p)
        return np.flatnonzero(self.values < p)

    def edges(self, p: float) -> np.ndarray:
        """Edges of G(n, p) as an (m, 2) int array, lexicographically ordered."""
        return self.pairs_at(self.edge_index(p))

    def graph(self, p: float) -> nx.Graph:
        """G(n, p) as an nx.Graph on vertices 1..n."""
        p = validate_probability(p)
        G = empty_graph(self.n, p=p, seed=self.seed)
        G.add_edges_from(map(tuple, self.edges(p).tolist()))
        logger.debug(
            "Thresholded G(n=%d, p=%.6g, seed=%d): %d edges.",
            self.n, p, self.seed, G.number_of_edges(),
        )
        return G


def pair_draws(
    n: int,
    seed: int | None = None,
    config: SweepConfig = DEFAULT_CONFIG,
) -> PairDraws:
    """
    Draw one uniform value per vertex pair for (n, seed) and keep them.

    Raises:
        InvalidParameter: invalid n or seed, or n(n-1)/2 exceeds
                          config.max_materialized_pairs (use iter_edges()).
    """
    n = validate_vertex_count(n)
    seed = resolve_seed(seed, config)

    total = n_pairs(n)
    if total > config.max_materialized_pairs:
        raise InvalidParameter(
            f"n={n} needs {total} draws, above max_materialized_pairs="
            f"{config.max_materialized_pairs}; stream with iter_edges() instead."
        )

    values = np.empty(total, dtype=np.float64)
    offset = 0
    for _, row in iter_draw_rows(n, seed, config):
        values[offset:offset + row.size] = row
        offset += row.size

    logger.debug("Materialised %d pair draws for n=%d, seed=%d.", total, n, seed)
    return PairDraws(n, seed, values)


# ── Streaming and convenience entry points ────────────────────────────────────

def iter_draw_rows(
    n: int,
    seed: int | None = None,
    config: SweepConfig = DEFAULT_CONFIG,
) -> Iterator[tuple[int, np.ndarray]]:
    """
    Yield (i, draws) for rows i = 1..n-1, where draws[k] belongs to pair
    (i, i + 1 + k).

    This is the single definition of the draw stream. Every sampler entry
    point consumes it, which is what makes their edges agree.
    """
    n = validate_vertex_count(n)
    seed = resolve_seed(seed, config)

    rng = np.random.default_rng(seed)
    for i in range(1, n):
        yield i, rng.random(n - i)


def iter_edges(
    n: int,
    p: float,
    seed: int | None = None,
    config: SweepConfig = DEFAULT_CONFIG,
) -> Iterator[tuple[int, int]]:
    """
    Yield the edges of G(n, p) in lexicographic order without storing draws.

    Consumes exactly the same random stream as pair_draws(), so the edges are
    identical to pair_draws(n, seed).edges(p). Working memory is O(n).
    """
    n = validate_vertex_count(n)
    p = validate_probability(p)
    seed = resolve_seed(seed, config)

    for i, row in iter_draw_rows(n, seed, config):
        for j in (np.flatnonzero(row < p) + i + 1).tolist():
            yield i, j


def sample_graph(
    n: int,
    p: float,
    seed: int | None = None,
    config: SweepConfig = DEFAULT_CONFIG,
) -> nx.Graph:
    """
    Sample a single G(n, p) graph on vertices 1..n.

    Args:
        n:      Vertex count (>= 1).
        p:      Edge probability in [0, 1].
        seed:   Non-negative integer seed (config.default_seed if None).
        config: SweepConfig instance.

    Returns:
        G: nx.Graph with graph attributes n, p, seed.

    Raises:
        InvalidParameter: n < 1, p outside [0, 1], or a bad seed.
    """
    n = validate_vertex_count(n)
    p = validate_probability(p)
    seed = resolve_seed(seed, config)

    G = empty_graph(n, p=p, seed=seed)
    G.add_edges_from(iter_edges(n, p, seed, config))

    logger.debug(
        "Sampled G(n=%d, p=%.6g, seed=%d): %d edges.",
        n, p, seed, G.number_of_edges(),
    )
    return G


def sample_graph_sequence(
    n: int,
    ps: Sequence[float],
    seed: int | None = None,
    config: SweepConfig = DEFAULT_CONFIG,
) -> list[nx.Graph]:
    """
    Sample one graph per p from a single set of pair draws.

    For p1 < p2 in ps, the graph at p2 contains every edge of the graph at
    p1. The returned list follows the order of ps.
    """
    ps = [validate_probability(p) for p in ps]
    draws = pair_draws(n, seed, config)
    return [draws.graph(p) for p in ps]
