"""
er_giant/cli.py — Command-line interface for the G(n, p) simulator.

Usage:
    python -m er_giant sample --n 50 --mean-degree 1.5 --seed 1
    python -m er_giant analyze edges.csv --n 10
    python -m er_giant sweep --n 50 100 --seeds 1 2 3 --d-stop 4 --d-step 0.25
    python -m er_giant theory --d-stop 4 --d-step 0.5

Exit codes: 0 on success, 2 when a parameter or the input graph is invalid.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import sys
import time

from er_giant.config import DEFAULT_CONFIG, SweepConfig
from er_giant.errors import ErGiantError

EXIT_INVALID = 2


# ── Logging setup ─────────────────────────────────────────────────────────────

def _setup_logging(level: str = "INFO") -> None:
    """Configure root logger with timestamps and level names."""
    numeric = getattr(logging, level.upper(), logging.INFO)
    fmt = "%(asctime)s  %(levelname)-8s  %(name)s — %(message)s"
    datefmt = "%H:%M:%S"
    logging.basicConfig(level=numeric, format=fmt, datefmt=datefmt, stream=sys.stderr)


logger = logging.getLogger("er_giant.cli")


def _config_from_args(args: argparse.Namespace) -> SweepConfig:
    overrides = {}
    if getattr(args, "workers", None) is not None:
        overrides["max_workers"] = args.workers
    if getattr(args, "method", None) is not None:
        overrides["component_method"] = args.method
    return dataclasses.replace(DEFAULT_CONFIG, **overrides)


def _resolve_grid(args: argparse.Namespace, config: SweepConfig) -> dict:
    """Return {"ps": [...]} or {"mean_degrees": [...]} from CLI flags."""
    from er_giant.pipeline import mean_degree_grid

    if args.p:
        return {"ps": args.p}
    start = config.d_start if args.d_start is None else args.d_start
    stop = config.d_stop if args.d_stop is None else args.d_stop
    step = config.d_step if args.d_step is None else args.d_step
    return {"mean_degrees": mean_degree_grid(start, stop, step).tolist()}


# ── Subcommand: sample ────────────────────────────────────────────────────────

def cmd_sample(args: argparse.Namespace) -> int:
    """Sample one graph and report its component structure."""
    from er_giant.graph.builder import write_edge_list_csv
    from er_giant.graph.sampler import p_from_mean_degree, sample_graph
    from er_giant.metrics.components import analyze_graph, component_sizes

    config = _config_from_args(args)
    p = args.p if args.p is not None else p_from_mean_degree(args.mean_degree, args.n)

    t0 = time.monotonic()
    G = sample_graph(args.n, p, args.seed, config)
    result = analyze_graph(G, config=config)
    sizes = component_sizes(G, config=config)
    elapsed = time.monotonic() - t0

    if args.edges_out:
        write_edge_list_csv(G, args.edges_out)

    print()
    print("=" * 60)
    print("  G(n, p) SAMPLE")
    print("=" * 60)
    print(f"  n                : {result.n}")
    print(f"  p                : {result.p:.6g}")
    print(f"  mean degree      : {result.mean_degree:.4f}")
    print(f"  seed             : {result.seed}")
    print(f"  edges            : {result.n_edges}")
    print(f"  components       : {result.n_components}")
    print(f"  largest component: {result.max_component_size} "
          f"({result.giant_fraction:.1%} of vertices)")
    print(f"  top sizes        : {sizes[:args.top]}")
    print(f"  elapsed          : {elapsed:.2f}s")
    if args.edges_out:
        print(f"  edges written to : {args.edges_out}")
    print("=" * 60)
    return 0


# ── Subcommand: analyze ───────────────────────────────────────────────────────

def cmd_analyze(args: argparse.Namespace) -> int:
    """Load an edge list CSV and report its components."""
    from er_giant.graph.builder import build_graph_from_csv
    from er_giant.metrics.components import connected_components

    config = _config_from_args(args)
    G = build_graph_from_csv(args.edges_csv, n=args.n)
    components = connected_components(G, config=config)
    largest = components[0]

    print()
    print("=" * 60)
    print("  COMPONENT ANALYSIS")
    print("=" * 60)
    print(f"  source           : {args.edges_csv}")
    print(f"  vertices         : {G.graph['n']}")
    print(f"  edges            : {G.number_of_edges()}")
    print(f"  components       : {len(components)}")
    print(f"  largest component: {len(largest)} (lowest vertex {min(largest)})")
    print(f"  top sizes        : {[len(c) for c in components[:args.top]]}")
    print("=" * 60)
    return 0


# ── Subcommand: sweep ─────────────────────────────────────────────────────────

def cmd_sweep(args: argparse.Namespace) -> int:
    """Run a (n, p, seed) grid and write the results table."""
    from er_giant.pipeline import (
        build_trials,
        run_sweep,
        summarize_sweep,
        write_csv,
        write_results_csv,
    )

    config = _config_from_args(args)
    grid = _resolve_grid(args, config)
    trials = build_trials(args.n, args.seeds, **grid)

    output = args.output or os.path.join(config.output_dir, "sweep_results.csv")

    logger.info("=" * 60)
    logger.info("er_giant — Sweep")
    logger.info("  Vertex counts : %s", args.n)
    logger.info("  Seeds         : %s", args.seeds)
    logger.info("  Grid points   : %d", len(next(iter(grid.values()))))
    logger.info("  Workers       : %d", config.max_workers)
    logger.info("  Output        : %s", output)
    logger.info("=" * 60)

    t0 = time.monotonic()
    result = run_sweep(trials, config)
    elapsed = time.monotonic() - t0

    write_results_csv(result, output)
    if args.summary:
        write_csv(summarize_sweep(result.to_frame(), config), args.summary)

    print()
    print("=" * 60)
    print("  SWEEP COMPLETE")
    print("=" * 60)
    print(f"  Elapsed          : {elapsed:.1f}s")
    print(f"  Trials           : {len(trials)}")
    print(f"  Results          : {len(result.results)}")
    print(f"  Failures         : {len(result.failures)}")
    print(f"  Results CSV      : {output}")
    if args.summary:
        print(f"  Summary CSV      : {args.summary}")
    print("=" * 60)

    if result.failures:
        print("\n  Failures:")
        for failure in result.failures[:10]:
            print(f"    [n={failure.n} seed={failure.seed}] "
                  f"{failure.error_type}: {failure.error}")
        if len(result.failures) > 10:
            print(f"    ... and {len(result.failures) - 10} more")

    return 0


# ── Subcommand: theory ────────────────────────────────────────────────────────

def cmd_theory(args: argparse.Namespace) -> int:
    """Print the asymptotic giant-component fraction over a mean-degree grid."""
    from er_giant.metrics.theory import giant_fraction_curve
    from er_giant.pipeline import mean_degree_grid

    config = DEFAULT_CONFIG
    start = config.d_start if args.d_start is None else args.d_start
    stop = config.d_stop if args.d_stop is None else args.d_stop
    step = config.d_step if args.d_step is None else args.d_step

    ds = mean_degree_grid(start, stop, step)
    fractions = giant_fraction_curve(ds, config)

    print(f"{'d':>8}  {'S(d)':>10}")
    for d, s in zip(ds, fractions):
        print(f"{d:>8.4f}  {s:>10.6f}")
    return 0


# ── Parser ────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="er_giant",
        description="Erdős–Rényi G(n, p) sampling and largest-component sweeps.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    def add_method_flag(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--method",
            default=None,
            choices=["traversal", "union_find"],
            help=f"Component method (default: {DEFAULT_CONFIG.component_method})",
        )

    def add_grid_flags(p: argparse.ArgumentParser) -> None:
        p.add_argument("--d-start", type=float, default=None, metavar="D",
                       help=f"First mean degree (default: {DEFAULT_CONFIG.d_start})")
        p.add_argument("--d-stop", type=float, default=None, metavar="D",
                       help=f"Last mean degree, inclusive (default: {DEFAULT_CONFIG.d_stop})")
        p.add_argument("--d-step", type=float, default=None, metavar="D",
                       help=f"Mean degree step (default: {DEFAULT_CONFIG.d_step})")

    # sample
    p_sample = subparsers.add_parser("sample", help="Sample one G(n, p) graph")
    p_sample.add_argument("--n", type=int, required=True, help="Vertex count")
    group = p_sample.add_mutually_exclusive_group(required=True)
    group.add_argument("--p", type=float, default=None, help="Edge probability")
    group.add_argument("--mean-degree", type=float, default=None, metavar="D",
                       help="Target mean degree; p = D / (n - 1)")
    p_sample.add_argument("--seed", type=int, default=DEFAULT_CONFIG.default_seed,
                          help=f"Random seed (default: {DEFAULT_CONFIG.default_seed})")
    p_sample.add_argument("--edges-out", default=None, metavar="PATH",
                          help="Write the sampled edge list to this CSV")
    p_sample.add_argument("--top", type=int, default=10, metavar="K",
                          help="Number of component sizes to print (default: 10)")
    add_method_flag(p_sample)
    p_sample.set_defaults(func=cmd_sample)

    # analyze
    p_analyze = subparsers.add_parser("analyze", help="Components of an edge list CSV")
    p_analyze.add_argument("edges_csv", metavar="EDGES_CSV",
                           help="CSV with integer columns u, v")
    p_analyze.add_argument("--n", type=int, default=None,
                           help="Vertex count (default: largest endpoint)")
    p_analyze.add_argument("--top", type=int, default=10, metavar="K",
                           help="Number of component sizes to print (default: 10)")
    add_method_flag(p_analyze)
    p_analyze.set_defaults(func=cmd_analyze)

    # sweep
    p_sweep = subparsers.add_parser("sweep", help="Largest component over an (n, p, seed) grid")
    p_sweep.add_argument("--n", type=int, nargs="+", required=True, help="Vertex counts")
    p_sweep.add_argument("--seeds", type=int, nargs="+",
                         default=[DEFAULT_CONFIG.default_seed], help="Random seeds")
    p_sweep.add_argument("--p", type=float, nargs="+", default=None,
                         help="Explicit edge probabilities (overrides the d grid)")
    add_grid_flags(p_sweep)
    p_sweep.add_argument("--workers", type=int, default=None, metavar="N",
                         help=f"Worker processes (default: {DEFAULT_CONFIG.max_workers})")
    p_sweep.add_argument("--output", default=None, metavar="PATH",
                         help="Results CSV (default: <output_dir>/sweep_results.csv)")
    p_sweep.add_argument("--summary", default=None, metavar="PATH",
                         help="Also write per-(n, p) aggregates with the theory curve")
    p_sweep.set_defaults(func=cmd_sweep)

    # theory
    p_theory = subparsers.add_parser("theory", help="Asymptotic giant fraction S(d)")
    add_grid_flags(p_theory)
    p_theory.set_defaults(func=cmd_theory)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.log_level)
    try:
        return args.func(args)
    except ErGiantError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
