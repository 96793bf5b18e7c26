"""
er_giant.graph — NetworkX graph construction layer.

Modules:
    sampler  — Erdős–Rényi G(n, p) sampling from a fixed, seeded draw order.
    builder  — Graphs from explicit edge lists or CSV, and CSV export.

All graph objects are undirected nx.Graph instances on the vertices 1..n,
with n stored in G.graph["n"]. Sampled graphs also carry G.graph["p"] and
G.graph["seed"].
"""
