"""
er_giant/metrics/theory.py — Asymptotic giant-component fraction of G(n, p).

For mean degree d = (n - 1) p held fixed as n grows, the fraction S of
vertices in the largest component converges to the largest solution of

    S = 1 - exp(-d * S)

which is S = 0 for d <= 1 and strictly positive for d > 1 (the phase
transition at d = 1). Simulated giant fractions from er_giant.pipeline are
compared against this curve in summarize_sweep().

The equation is solved by fixed-point iteration from S = 1. The map is a
contraction around the positive root (its slope there is d(1 - S) < 1), but
convergence slows as d approaches 1 from above.
"""

import logging
from typing import Sequence

import numpy as np

from er_giant.config import DEFAULT_CONFIG, SweepConfig
from er_giant.errors import InvalidParameter

logger = logging.getLogger(__name__)

CRITICAL_MEAN_DEGREE = 1.0


def giant_fraction(d: float, config: SweepConfig = DEFAULT_CONFIG) -> float:
    """
    Limiting fraction of vertices in the giant component at mean degree d.

    Raises:
        InvalidParameter: d < 0 or NaN.
    """
    return float(giant_fraction_curve([d], config)[0])


def giant_fraction_curve(
    ds: Sequence[float] | np.ndarray,
    config: SweepConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """
    Vectorised giant_fraction() over an array of mean degrees.

    Returns:
        S: float array with the same length as ds.
    """
    d = np.asarray(ds, dtype=np.float64)
    if np.isnan(d).any() or (d < 0).any():
        raise InvalidParameter("mean degrees must be non-negative numbers.")

    # Below threshold the only root is S = 0, so only d > 1 is iterated.
    s = np.zeros_like(d)
    supercritical = d > CRITICAL_MEAN_DEGREE
    d_sup = d[supercritical]
    if d_sup.size == 0:
        return s

    s_sup = np.ones_like(d_sup)
    delta = float("inf")
    for _ in range(config.theory_max_iter):
        s_next = 1.0 - np.exp(-d_sup * s_sup)
        delta = float(np.max(np.abs(s_next - s_sup)))
        s_sup = s_next
        if delta < config.theory_tolerance:
            break
    else:
        logger.warning(
            "Giant fraction iteration hit theory_max_iter=%d (last delta %.3g); "
            "values just above d = 1 may be inexact.",
            config.theory_max_iter,
            delta,
        )

    s[supercritical] = s_sup
    return s

