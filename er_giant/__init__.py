"""
er_giant — Erdős–Rényi random graphs and the emergence of the giant component.

Samples G(n, p) graphs from a fixed, seeded per-pair draw order (so a sweep
over p with one seed produces nested, "growing" graphs), measures the largest
connected component, and runs embarrassingly parallel sweeps over
(n, p, seed) that produce tables for downstream plotting.

Modules:
- er_giant.graph.sampler       — G(n, p) sampling, reusable pair draws
- er_giant.graph.builder       — graphs from explicit edge lists / CSV
- er_giant.metrics.components  — connected components, largest component
- er_giant.metrics.percolation — whole p-grid in one pass over the draws
- er_giant.metrics.theory      — asymptotic giant fraction S(d)
- er_giant.pipeline            — batch sweeps with per-trial failure isolation
"""

__version__ = "0.1.0"
