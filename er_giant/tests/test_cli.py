"""
er_giant/tests/test_cli.py — End-to-end tests of the er_giant command line.
"""

import pandas as pd
import pytest

from er_giant.cli import EXIT_INVALID, build_parser, main
from er_giant.pipeline import RESULT_COLUMNS


def test_sample_prints_report(capsys):
    assert main(["sample", "--n", "10", "--p", "1.0", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "G(n, p) SAMPLE" in out
    assert "largest component: 10" in out
    assert "edges            : 45" in out


def test_sample_writes_edges_then_analyze_reads_them(tmp_path, capsys):
    edges = tmp_path / "edges.csv"
    assert main([
        "sample", "--n", "40", "--mean-degree", "2", "--seed", "1",
        "--edges-out", str(edges), "--method", "union_find",
    ]) == 0
    assert edges.exists()
    capsys.readouterr()

    assert main(["analyze", str(edges), "--n", "40"]) == 0
    out = capsys.readouterr().out
    assert "COMPONENT ANALYSIS" in out
    assert "vertices         : 40" in out


def test_analyze_reports_tie_break(tmp_path, capsys):
    path = tmp_path / "edges.csv"
    pd.DataFrame({"u": [4, 5, 1, 2], "v": [5, 6, 2, 3]}).to_csv(path, index=False)
    assert main(["analyze", str(path), "--n", "7"]) == 0
    out = capsys.readouterr().out
    assert "components       : 3" in out
    assert "largest component: 3 (lowest vertex 1)" in out


def test_sweep_writes_results_and_summary(tmp_path, capsys):
    output = tmp_path / "results.csv"
    summary = tmp_path / "summary.csv"
    code = main([
        "sweep", "--n", "30", "--seeds", "1", "2",
        "--d-start", "0", "--d-stop", "2", "--d-step", "0.5",
        "--output", str(output), "--summary", str(summary),
    ])
    assert code == 0
    assert "SWEEP COMPLETE" in capsys.readouterr().out

    df = pd.read_csv(output)
    assert list(df.columns) == RESULT_COLUMNS
    assert len(df) == 10
    assert len(pd.read_csv(summary)) == 5


def test_sweep_reports_failures_but_succeeds(tmp_path, capsys):
    output = tmp_path / "results.csv"
    code = main([
        "sweep", "--n", "5", "--p", "0.5", "1.5", "--output", str(output),
    ])
    assert code == 0
    out = capsys.readouterr().out
    assert "Failures         : 1" in out
    assert "InvalidParameter" in out
    assert len(pd.read_csv(output)) == 1


def test_theory_table(capsys):
    assert main(["theory", "--d-start", "1", "--d-stop", "2", "--d-step", "1"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    assert lines[1].split() == ["1.0000", "0.000000"]
    assert lines[2].split() == ["2.0000", "0.796812"]


@pytest.mark.parametrize(
    "argv",
    [
        ["sample", "--n", "0", "--p", "0.5"],
        ["sample", "--n", "10", "--p", "1.5"],
        ["sample", "--n", "10", "--mean-degree", "20"],
        ["sample", "--n", "10", "--p", "0.5", "--seed", "-1"],
        ["theory", "--d-step", "0"],
        ["theory", "--d-step", "nan"],
        ["sweep", "--n", "10", "--d-stop", "inf"],
    ],
)
def test_invalid_parameters_exit_2(argv, caplog):
    assert main(argv) == EXIT_INVALID
    assert "InvalidParameter" in caplog.text


def test_bad_edge_list_exits_2(tmp_path):
    path = tmp_path / "edges.csv"
    pd.DataFrame({"u": [1], "v": [1]}).to_csv(path, index=False)
    assert main(["analyze", str(path)]) == EXIT_INVALID


def test_sample_requires_p_or_mean_degree():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["sample", "--n", "10"])


def test_unreadable_edge_list_exits_2(tmp_path, caplog):
    empty = tmp_path / "empty.csv"
    empty.write_text("")
    assert main(["analyze", str(empty), "--n", "5"]) == EXIT_INVALID
    assert main(["analyze", str(tmp_path / "absent.csv")]) == EXIT_INVALID
    assert "InvalidInput" in caplog.text
