"""
er_giant/tests/test_builder.py — Tests for er_giant.graph.builder.

Tests verify:
- build_graph_from_edges keeps isolated vertices and collapses duplicates.
- Out-of-range, non-integer and self-loop edges raise InvalidInput.
- CSV round trip through write_edge_list_csv / build_graph_from_csv.
- Malformed CSVs raise InvalidInput.
"""

import networkx as nx
import pandas as pd
import pytest

from er_giant.errors import InvalidInput, InvalidParameter
from er_giant.graph.builder import (
    build_graph_from_csv,
    build_graph_from_edges,
    empty_graph,
    write_edge_list_csv,
)
from er_giant.graph.sampler import sample_graph


# ── build_graph_from_edges ────────────────────────────────────────────────────

class TestBuildGraphFromEdges:
    """Tests for the in-memory edge list builder."""

    def test_returns_undirected_graph(self, five_vertex_graph):
        assert isinstance(five_vertex_graph, nx.Graph)
        assert not five_vertex_graph.is_directed()

    def test_isolated_vertex_kept(self, five_vertex_graph):
        assert 5 in five_vertex_graph
        assert five_vertex_graph.degree(5) == 0
        assert five_vertex_graph.graph["n"] == 5

    def test_duplicates_collapse(self):
        G = build_graph_from_edges(3, [(1, 2), (2, 1), (1, 2)])
        assert G.number_of_edges() == 1

    def test_out_of_range_rejected(self):
        with pytest.raises(InvalidInput):
            build_graph_from_edges(4, [(1, 5)])

    def test_zero_vertex_rejected(self):
        with pytest.raises(InvalidInput):
            build_graph_from_edges(4, [(0, 1)])

    def test_self_loop_rejected(self):
        with pytest.raises(InvalidInput):
            build_graph_from_edges(4, [(2, 2)])

    def test_non_integer_rejected(self):
        with pytest.raises(InvalidInput):
            build_graph_from_edges(4, [(1.5, 2)])

    def test_malformed_pair_rejected(self):
        with pytest.raises(InvalidInput):
            build_graph_from_edges(4, [(1, 2, 3)])

    def test_bad_n_rejected(self):
        with pytest.raises(InvalidParameter):
            build_graph_from_edges(0, [])

    def test_empty_graph_attrs(self):
        G = empty_graph(3, p=0.5, seed=2)
        assert sorted(G.nodes) == [1, 2, 3]
        assert G.graph == {"n": 3, "p": 0.5, "seed": 2}


# ── CSV I/O ───────────────────────────────────────────────────────────────────

class TestEdgeListCsv:
    """Tests for CSV export and import."""

    def test_round_trip(self, tmp_path):
        G = sample_graph(30, 0.1, seed=4)
        path = write_edge_list_csv(G, str(tmp_path / "out" / "edges.csv"))
        loaded = build_graph_from_csv(path, n=30)

        def normalised(H):
            return {(min(u, v), max(u, v)) for u, v in H.edges()}

        assert normalised(loaded) == normalised(G)
        assert loaded.graph["n"] == 30

    def test_rows_sorted_with_u_less_than_v(self, tmp_path):
        G = build_graph_from_edges(4, [(4, 1), (3, 2), (2, 1)])
        path = write_edge_list_csv(G, str(tmp_path / "edges.csv"))
        df = pd.read_csv(path)
        assert df.values.tolist() == [[1, 2], [1, 4], [2, 3]]

    def test_n_defaults_to_largest_endpoint(self, tmp_path):
        path = tmp_path / "edges.csv"
        pd.DataFrame({"u": [1, 3], "v": [2, 7]}).to_csv(path, index=False)
        G = build_graph_from_csv(str(path))
        assert G.graph["n"] == 7
        assert G.number_of_nodes() == 7

    def test_header_only_file_needs_n(self, tmp_path):
        path = tmp_path / "edges.csv"
        path.write_text("u,v\n")
        with pytest.raises(InvalidInput):
            build_graph_from_csv(str(path))
        G = build_graph_from_csv(str(path), n=4)
        assert G.number_of_nodes() == 4
        assert G.number_of_edges() == 0

    def test_missing_column_rejected(self, tmp_path):
        path = tmp_path / "edges.csv"
        pd.DataFrame({"source": [1], "target": [2]}).to_csv(path, index=False)
        with pytest.raises(InvalidInput):
            build_graph_from_csv(str(path))

    def test_non_integer_labels_rejected(self, tmp_path):
        path = tmp_path / "edges.csv"
        pd.DataFrame({"u": ["a"], "v": ["b"]}).to_csv(path, index=False)
        with pytest.raises(InvalidInput):
            build_graph_from_csv(str(path))

    def test_endpoint_beyond_declared_n_rejected(self, tmp_path):
        path = tmp_path / "edges.csv"
        pd.DataFrame({"u": [1], "v": [9]}).to_csv(path, index=False)
        with pytest.raises(InvalidInput):
            build_graph_from_csv(str(path), n=5)

    def test_zero_byte_file_rejected(self, tmp_path):
        path = tmp_path / "edges.csv"
        path.write_text("")
        with pytest.raises(InvalidInput):
            build_graph_from_csv(str(path), n=5)

    def test_missing_file_rejected(self, tmp_path):
        with pytest.raises(InvalidInput):
            build_graph_from_csv(str(tmp_path / "absent.csv"))

    def test_no_positive_labels_without_n_rejected(self, tmp_path):
        """Inferred vertex count below 1 is bad file content, not a bad n."""
        path = tmp_path / "edges.csv"
        path.write_text("u,v\n0,0\n")
        with pytest.raises(InvalidInput, match="no positive vertex labels"):
            build_graph_from_csv(str(path))
