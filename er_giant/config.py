"""
er_giant/config.py — All tunable parameters for the G(n, p) simulator.

Sweep defaults, worker counts and solver tolerances live here so that a
calibration change is a single-file diff. No metric module hardcodes them.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SweepConfig:
    """
    Immutable configuration for sampling, component analysis and sweeps.

    Override by constructing a new SweepConfig with the desired values.
    """

    # ── Sampling ──────────────────────────────────────────────────────────────
    default_seed: int = 1
    # Seed used when the caller does not supply one.

    max_materialized_pairs: int = 50_000_000
    # Upper bound on n(n-1)/2 for PairDraws, which keeps every draw in memory
    # (8 bytes per pair, so the default is ~400 MB). Larger n must go through
    # iter_edges(), which streams one row of draws at a time.

    # ── Component analysis ───────────────────────────────────────────────────
    component_method: str = "traversal"
    # "traversal" (networkx BFS over the full edge set) or "union_find".

    # ── Mean-degree sweep grid ───────────────────────────────────────────────
    d_start: float = 0.0
    d_stop: float = 4.0
    d_step: float = 0.25
    # Inclusive grid of mean degrees d; p = d / (n - 1) per vertex count.

    # ── Batch driver ─────────────────────────────────────────────────────────
    max_workers: int = 1
    # Processes used by run_sweep(). 1 runs every (n, seed) group inline.

    # ── Theory curve ─────────────────────────────────────────────────────────
    theory_tolerance: float = 1e-12
    theory_max_iter: int = 10_000
    # Fixed-point iteration for S = 1 - exp(-d S). Convergence is slow near
    # the critical point d = 1, hence the generous iteration cap.

    # ── Output ───────────────────────────────────────────────────────────────
    output_dir: str = "results"
    # Relative to the working directory. CLI writes CSV tables here by default.


# Singleton default: import this everywhere instead of constructing anew.
DEFAULT_CONFIG = SweepConfig()
