"""
er_giant/metrics/components.py — Connected components and the largest one.

Two interchangeable methods, selected by name:

    "traversal"   BFS from each unvisited vertex via nx.connected_components.
                  O(n + m). Natural when the whole edge set is known upfront,
                  which is the case for every sampled graph.
    "union_find"  DisjointSet over the edge list (union by size, path
                  halving). O(m log* n). Natural when edges arrive
                  incrementally; see er_giant.metrics.percolation.

Both return the same partition. Neither is the bottleneck of a trial: edge
sampling is O(n^2) regardless of p.

Output guarantees:
    - Every vertex 1..n belongs to exactly one component, isolated vertices
      included as singletons.
    - Component sizes sum to n.
    - Components are ordered by decreasing size, ties broken by smallest
      vertex, so the "largest component" is the one containing the
      lowest-indexed vertex among those of maximum size.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Optional

import networkx as nx

from er_giant.config import DEFAULT_CONFIG, SweepConfig
from er_giant.errors import InvalidInput, InvalidParameter
from er_giant.metrics.union_find import DisjointSet

logger = logging.getLogger(__name__)

METHODS = ("traversal", "union_find")


@dataclass(frozen=True)
class SampleResult:
    """
    Outcome of one simulation trial.

    Fields:
        n:                  Vertex count.
        p:                  Edge probability (None for graphs not sampled
                            by er_giant, e.g. loaded from CSV).
        seed:               Random seed (None when not sampled).
        max_component_size: Size of the largest connected component.
        n_components:       Number of connected components, singletons included.
        n_edges:            Number of edges in the graph.
    """

    n: int
    p: Optional[float]
    seed: Optional[int]
    max_component_size: int
    n_components: int
    n_edges: int

    @property
    def mean_degree(self) -> Optional[float]:
        """(n - 1) * p, or None when p is unknown."""
        if self.p is None:
            return None
        return (self.n - 1) * self.p

    @property
    def giant_fraction(self) -> float:
        """Largest component size as a fraction of n."""
        return self.max_component_size / self.n


# ── Validation ────────────────────────────────────────────────────────────────

def _resolve_method(method: str | None, config: SweepConfig) -> str:
    method = method or config.component_method
    if method not in METHODS:
        raise InvalidParameter(
            f"Unknown component method '{method}'; expected one of {METHODS}."
        )
    return method


def validate_graph(G: nx.Graph) -> int:
    """
    Check that G is a simple undirected graph on (a subset of) 1..n.

    n is G.graph["n"] when present, otherwise the node count. Vertices in
    1..n that are absent from G are treated as isolated.

    Returns:
        n: The vertex count.

    Raises:
        InvalidInput: directed or multigraph input, a node that is not an
                      integer in 1..n, or a self-loop.
    """
    if G.is_directed() or G.is_multigraph():
        raise InvalidInput("Component analysis requires a simple undirected nx.Graph.")

    n = G.graph.get("n", G.number_of_nodes())
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 1:
        raise InvalidInput(f"Graph vertex count must be a positive integer, got {n!r}.")

    for v in G.nodes:
        if isinstance(v, bool) or not isinstance(v, numbers.Integral):
            raise InvalidInput(f"Vertex label {v!r} is not an integer.")
        if not 1 <= v <= n:
            raise InvalidInput(f"Vertex {v} is outside the range 1..{n}.")

    if nx.number_of_selfloops(G) > 0:
        loop = next(nx.selfloop_edges(G))
        raise InvalidInput(f"Self-loop on vertex {loop[0]} is not allowed.")

    return int(n)


# ── Component computation ─────────────────────────────────────────────────────

def connected_components(
    G: nx.Graph,
    method: str | None = None,
    config: SweepConfig = DEFAULT_CONFIG,
) -> list[set[int]]:
    """
    Partition the vertices 1..n of G into connected components.

    Args:
        G:      Graph on vertices 1..n (see validate_graph()).
        method: "traversal" or "union_find" (config.component_method if None).
        config: SweepConfig instance.

    Returns:
        components: List of vertex sets, largest first; equal sizes are
                    ordered by their smallest vertex.

    Raises:
        InvalidInput:     malformed graph.
        InvalidParameter: unknown method.
    """
    method = _resolve_method(method, config)
    n = validate_graph(G)

    if method == "traversal":
        components = [set(c) for c in nx.connected_components(G)]
        missing = n - G.number_of_nodes()
        if missing:
            present = set(G.nodes)
            components.extend({v} for v in range(1, n + 1) if v not in present)
    else:
        ds = DisjointSet(n)
        for u, v in G.edges():
            ds.union(u, v)
        components = ds.groups()

    components.sort(key=lambda c: (-len(c), min(c)))

    logger.debug(
        "Found %d components in %d-vertex graph (method=%s, largest=%d).",
        len(components),
        n,
        method,
        len(components[0]),
    )
    return components


def component_partition(
    G: nx.Graph,
    method: str | None = None,
    config: SweepConfig = DEFAULT_CONFIG,
) -> dict[int, int]:
    """
    Map every vertex 1..n to a component id.

    The id is the smallest vertex of the component, so two vertices share an
    id iff a path connects them, and ids do not depend on the method used.
    """
    partition: dict[int, int] = {}
    for component in connected_components(G, method, config):
        label = min(component)
        for v in component:
            partition[v] = label
    return partition


def component_sizes(
    G: nx.Graph,
    method: str | None = None,
    config: SweepConfig = DEFAULT_CONFIG,
) -> list[int]:
    """Component sizes in decreasing order. Always sums to n."""
    return [len(c) for c in connected_components(G, method, config)]


def largest_component(
    G: nx.Graph,
    method: str | None = None,
    config: SweepConfig = DEFAULT_CONFIG,
) -> set[int]:
    """
    Vertex set of the largest component.

    Ties go to the component holding the lowest-indexed vertex.
    """
    return connected_components(G, method, config)[0]


def largest_component_size(
    G: nx.Graph,
    method: str | None = None,
    config: SweepConfig = DEFAULT_CONFIG,
) -> int:
    """Size of the largest connected component."""
    return len(largest_component(G, method, config))


def analyze_graph(
    G: nx.Graph,
    p: float | None = None,
    seed: int | None = None,
    method: str | None = None,
    config: SweepConfig = DEFAULT_CONFIG,
) -> SampleResult:
    """
    Summarise G as a SampleResult.

    p and seed default to the graph attributes set by the sampler
    (G.graph["p"], G.graph["seed"]); both stay None for foreign graphs.
    """
    sizes = component_sizes(G, method, config)
    return SampleResult(
        n=sum(sizes),
        p=G.graph.get("p") if p is None else p,
        seed=G.graph.get("seed") if seed is None else seed,
        max_component_size=sizes[0],
        n_components=len(sizes),
        n_edges=G.number_of_edges(),
    )
