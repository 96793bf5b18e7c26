"""
er_giant.metrics — Component metrics on sampled graphs.

Modules:
    components   — Partition, component sizes, largest component, SampleResult.
    union_find   — Disjoint-set forest (union by size, path halving).
    percolation  — Largest component over a whole p grid from shared draws.
    theory       — Asymptotic giant-component fraction S(d).

All tunables live in er_giant.config.SweepConfig.
"""
