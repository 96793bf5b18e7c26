"""
er_giant/pipeline.py — Batch driver for (n, p, seed) sweeps.

Each trial is independent, so a sweep is a map over trials with no
coordination. Trials are grouped by (n, seed): one group shares a single
draw stream, which both saves work (the O(n^2) draws happen once per group)
and guarantees the nested-graph property across the group's p values.

Groups run on a ProcessPoolExecutor and are collected with as_completed(),
so results arrive in no particular order; SweepResult.to_frame() sorts them.
A failing trial (bad parameter, or a crashed group) is recorded as a
TrialFailure and the sweep continues.

Usage:
    from er_giant.pipeline import build_trials, mean_degree_grid, run_sweep
    trials = build_trials(ns=[50], seeds=[1], mean_degrees=mean_degree_grid(0, 4, 0.25))
    result = run_sweep(trials)
    df = result.to_frame()
"""

import logging
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import asdict, dataclass, field
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from er_giant.config import DEFAULT_CONFIG, SweepConfig
from er_giant.errors import ErGiantError, InvalidParameter
from er_giant.graph.sampler import (
    n_pairs,
    p_from_mean_degree,
    pair_draws,
    validate_probability,
    validate_vertex_count,
)
from er_giant.metrics.components import SampleResult
from er_giant.metrics.percolation import stream_thresholds, sweep_thresholds
from er_giant.metrics.theory import giant_fraction_curve

logger = logging.getLogger(__name__)


RESULT_COLUMNS = [
    "n",
    "p",
    "seed",
    "mean_degree",
    "max_component_size",
    "giant_fraction",
    "n_components",
    "n_edges",
]


@dataclass(frozen=True)
class Trial:
    """
    One requested (n, p, seed) combination.

    Exactly one of p and mean_degree is set. A mean degree is converted to
    p = d / (n - 1) when the trial runs, so an unreachable d only fails its
    own trial.
    """

    n: int
    seed: int
    p: Optional[float] = None
    mean_degree: Optional[float] = None


@dataclass(frozen=True)
class TrialFailure:
    """A trial that could not be computed, with the reason."""

    n: int
    seed: int
    p: Optional[float]
    mean_degree: Optional[float]
    error_type: str
    error: str


@dataclass
class SweepResult:
    """Collected output of run_sweep()."""

    results: list[SampleResult] = field(default_factory=list)
    failures: list[TrialFailure] = field(default_factory=list)

    def to_frame(self) -> pd.DataFrame:
        """
        One row per successful trial, sorted by (n, seed, p).

        Columns: n, p, seed, mean_degree, max_component_size,
        giant_fraction, n_components, n_edges.
        """
        rows = [
            {
                **asdict(r),
                "mean_degree": r.mean_degree,
                "giant_fraction": r.giant_fraction,
            }
            for r in self.results
        ]
        df = pd.DataFrame(rows, columns=RESULT_COLUMNS)
        return df.sort_values(["n", "seed", "p"], kind="stable").reset_index(drop=True)

    def failures_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [asdict(f) for f in self.failures],
            columns=["n", "seed", "p", "mean_degree", "error_type", "error"],
        )


# ── Trial construction ────────────────────────────────────────────────────────

def mean_degree_grid(start: float, stop: float, step: float) -> np.ndarray:
    """
    Inclusive grid start, start + step, ..., stop.

    Values are rounded to 12 decimals so that e.g. 0.25 steps land exactly
    on 1.0 and 4.0 rather than on accumulated float error.
    """
    if not all(np.isfinite(v) for v in (start, stop, step)):
        raise InvalidParameter(
            f"grid bounds and step must be finite, got start={start}, "
            f"stop={stop}, step={step}"
        )
    if step <= 0:
        raise InvalidParameter(f"step must be > 0, got {step}")
    if stop < start:
        raise InvalidParameter(f"stop ({stop}) must be >= start ({start})")
    count = int(np.floor((stop - start) / step + 1e-9)) + 1
    return np.round(start + step * np.arange(count), 12)


def build_trials(
    ns: Sequence[int],
    seeds: Sequence[int],
    ps: Sequence[float] | None = None,
    mean_degrees: Sequence[float] | None = None,
) -> list[Trial]:
    """
    Cartesian product of vertex counts, seeds and either ps or mean degrees.

    Raises:
        InvalidParameter: both or neither of ps / mean_degrees given.
    """
    if (ps is None) == (mean_degrees is None):
        raise InvalidParameter("Pass exactly one of ps or mean_degrees.")

    trials: list[Trial] = []
    for n in ns:
        for seed in seeds:
            if ps is not None:
                trials.extend(Trial(n=n, seed=seed, p=float(p)) for p in ps)
            else:
                trials.extend(
                    Trial(n=n, seed=seed, mean_degree=float(d)) for d in mean_degrees
                )
    return trials


def _failure(trial: Trial, exc: BaseException) -> TrialFailure:
    return TrialFailure(
        n=trial.n,
        seed=trial.seed,
        p=trial.p,
        mean_degree=trial.mean_degree,
        error_type=type(exc).__name__,
        error=str(exc),
    )


# ── Group execution ───────────────────────────────────────────────────────────

def run_group(
    n: int,
    seed: int,
    trials: Sequence[Trial],
    config: SweepConfig = DEFAULT_CONFIG,
) -> tuple[list[SampleResult], list[TrialFailure]]:
    """
    Run every trial sharing (n, seed) against one draw stream.

    Draws are materialised when n(n-1)/2 fits config.max_materialized_pairs
    and streamed otherwise; both paths give identical results.

    Returns:
        (results, failures) for this group. Parameter errors are isolated
        per trial; anything else propagates to the caller.
    """
    failures: list[TrialFailure] = []
    runnable: list[tuple[Trial, float]] = []

    for trial in trials:
        try:
            if trial.p is not None:
                p = validate_probability(trial.p)
            else:
                p = p_from_mean_degree(trial.mean_degree, n)
            runnable.append((trial, p))
        except ErGiantError as exc:
            failures.append(_failure(trial, exc))

    if not runnable:
        return [], failures

    ps = [p for _, p in runnable]
    try:
        n = validate_vertex_count(n)
        if n_pairs(n) > config.max_materialized_pairs:
            logger.info(
                "n=%d exceeds max_materialized_pairs; streaming draws for seed=%d.",
                n, seed,
            )
            results = stream_thresholds(n, ps, seed, config)
        else:
            results = sweep_thresholds(pair_draws(n, seed, config), ps)
    except ErGiantError as exc:
        # A bad n or seed sinks every trial of the group alike.
        failures.extend(_failure(trial, exc) for trial, _ in runnable)
        return [], failures

    return results, failures


def _group_trials(trials: Sequence[Trial]) -> dict[tuple, list[Trial]]:
    groups: dict[tuple, list[Trial]] = {}
    for trial in trials:
        groups.setdefault((trial.n, trial.seed), []).append(trial)
    return groups


def run_sweep(
    trials: Sequence[Trial],
    config: SweepConfig = DEFAULT_CONFIG,
) -> SweepResult:
    """
    Execute a batch of trials.

    Args:
        trials: Trials from build_trials() (or hand-built).
        config: SweepConfig; config.max_workers > 1 runs (n, seed) groups
                in a process pool, 1 runs them inline.

    Returns:
        SweepResult holding one SampleResult per successful trial and one
        TrialFailure per failed trial. Every input trial lands in exactly
        one of the two lists.
    """
    groups = _group_trials(trials)
    total = len(groups)
    sweep = SweepResult()

    logger.info(
        "Running sweep: %d trials in %d (n, seed) groups, %d worker(s).",
        len(trials), total, config.max_workers,
    )

    def _collect(outcome) -> None:
        results, failures = outcome
        sweep.results.extend(results)
        sweep.failures.extend(failures)
        for failure in failures:
            logger.warning(
                "Trial failed (n=%s, seed=%s, p=%s, d=%s): %s: %s",
                failure.n, failure.seed, failure.p, failure.mean_degree,
                failure.error_type, failure.error,
            )

    def _crash(key: tuple, exc: BaseException) -> None:
        # Called from inside an except block, so the traceback is attached.
        logger.exception("Unhandled error in group n=%s seed=%s: %s", key[0], key[1], exc)
        sweep.failures.extend(_failure(t, exc) for t in groups[key])

    if config.max_workers <= 1:
        for completed, (key, group) in enumerate(groups.items(), start=1):
            logger.info("Processing group %d/%d: n=%s seed=%s", completed, total, *key)
            try:
                _collect(run_group(key[0], key[1], group, config))
            except Exception as exc:  # noqa: BLE001
                _crash(key, exc)
    else:
        with ProcessPoolExecutor(max_workers=config.max_workers) as executor:
            futures_to_key = {
                executor.submit(run_group, key[0], key[1], group, config): key
                for key, group in groups.items()
            }
            for completed, future in enumerate(as_completed(futures_to_key), start=1):
                key = futures_to_key[future]
                logger.info("Processing group %d/%d: n=%s seed=%s", completed, total, *key)
                try:
                    _collect(future.result())
                except Exception as exc:  # noqa: BLE001
                    _crash(key, exc)

    logger.info(
        "Sweep complete: %d results, %d failures.",
        len(sweep.results), len(sweep.failures),
    )
    return sweep


# ── Aggregation and output ────────────────────────────────────────────────────

def summarize_sweep(
    df: pd.DataFrame,
    config: SweepConfig = DEFAULT_CONFIG,
) -> pd.DataFrame:
    """
    Aggregate a results frame over seeds.

    Returns one row per (n, p) with the mean degree, trial count, the mean,
    std, min and max of giant_fraction, and the asymptotic `theory` fraction
    from er_giant.metrics.theory for comparison.
    """
    columns = [
        "n", "p", "mean_degree", "trials",
        "giant_fraction_mean", "giant_fraction_std",
        "giant_fraction_min", "giant_fraction_max", "theory",
    ]
    if df.empty:
        return pd.DataFrame(columns=columns)

    summary = (
        df.groupby(["n", "p"], sort=True)
        .agg(
            mean_degree=("mean_degree", "first"),
            trials=("seed", "count"),
            giant_fraction_mean=("giant_fraction", "mean"),
            giant_fraction_std=("giant_fraction", "std"),
            giant_fraction_min=("giant_fraction", "min"),
            giant_fraction_max=("giant_fraction", "max"),
        )
        .reset_index()
    )
    # A single seed has no spread.
    summary["giant_fraction_std"] = summary["giant_fraction_std"].fillna(0.0)
    summary["theory"] = giant_fraction_curve(summary["mean_degree"].to_numpy(), config)
    return summary[columns]


def write_csv(df: pd.DataFrame, path: str) -> str:
    """Write df to path (parent directories created). Returns the path."""
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    df.to_csv(path, index=False)
    logger.info("Wrote %d rows to %s", len(df), path)
    return path


def write_results_csv(result: SweepResult, path: str) -> str:
    """Write the per-trial results table of a sweep as CSV."""
    return write_csv(result.to_frame(), path)
