"""
er_giant/tests/test_theory.py — Tests for the asymptotic giant fraction S(d).
"""

import math

import numpy as np
import pytest

from er_giant.config import SweepConfig
from er_giant.errors import InvalidParameter
from er_giant.metrics.theory import giant_fraction, giant_fraction_curve


@pytest.mark.parametrize("d", [0.0, 0.5, 0.99, 1.0])
def test_zero_at_or_below_critical_point(d):
    assert giant_fraction(d) == 0.0


def test_known_value_at_two():
    assert giant_fraction(2.0) == pytest.approx(0.796812, abs=1e-6)


@pytest.mark.parametrize("d", [1.5, 2.0, 3.0, 4.0, 8.0])
def test_solves_fixed_point_equation(d):
    s = giant_fraction(d)
    assert s == pytest.approx(1.0 - math.exp(-d * s), abs=1e-10)


def test_curve_is_non_decreasing():
    ds = np.linspace(0.0, 5.0, 41)
    s = giant_fraction_curve(ds)
    assert s.shape == ds.shape
    assert np.all(np.diff(s) >= -1e-12)
    assert np.all((s >= 0.0) & (s < 1.0))


def test_curve_matches_scalar():
    ds = [0.5, 1.5, 3.0]
    np.testing.assert_allclose(giant_fraction_curve(ds), [giant_fraction(d) for d in ds])


def test_empty_curve():
    assert giant_fraction_curve([]).size == 0


@pytest.mark.parametrize("bad", [-0.1, float("nan")])
def test_invalid_mean_degree_rejected(bad):
    with pytest.raises(InvalidParameter):
        giant_fraction(bad)


def test_iteration_cap_warns(caplog):
    """Hitting the iteration cap logs a warning and still returns a value."""
    config = SweepConfig(theory_max_iter=2)
    with caplog.at_level("WARNING", logger="er_giant.metrics.theory"):
        s = giant_fraction(1.01, config)
    assert 0.0 < s <= 1.0
    assert "theory_max_iter" in caplog.text
