# tests/bracketroot/test__toms748.py
import math

import numpy as np
import pytest

from bracketroot import RootStatus, Toms748Solver
from bracketroot._toms748 import _distinct, _inverse_cubic, _newton_quadratic

# Check if scipy is available for comparison tests
try:
    from scipy.optimize import toms748 as scipy_toms748

    scipy_available = True
except ImportError:
    scipy_available = False

_EPS = np.finfo(np.float64).eps


class TestToms748Helpers:
    """Tests for the TOMS748 interpolation helpers."""

    def test_distinct(self):
        """Zero exactly when two of the values coincide."""
        assert _distinct(1.0, 2.0, 3.0, 4.0) != 0.0
        assert _distinct(1.0, 1.0, 3.0, 4.0) == 0.0
        assert _distinct(1.0, 2.0, 3.0, 1.0) == 0.0

    def test_newton_quadratic(self):
        """More Newton steps on an exact quadratic model get closer."""
        a, b, d = np.float64(1.0), np.float64(2.0), np.float64(3.0)
        fa, fb, fd = a**2 - 2, b**2 - 2, d**2 - 2

        two = _newton_quadratic(a, b, d, fa, fb, fd, 2)
        three = _newton_quadratic(a, b, d, fa, fb, fd, 3)

        assert abs(three - math.sqrt(2)) < abs(two - math.sqrt(2))
        assert abs(three - math.sqrt(2)) <= 1e-5

    def test_newton_quadratic_falls_back_to_secant(self):
        """A vanishing quadratic term gives the secant root."""
        a, b, d = np.float64(0.0), np.float64(4.0), np.float64(5.0)

        c = _newton_quadratic(a, b, d, a - 1.0, b - 1.0, d - 1.0, 2)

        assert c == 1.0

    def test_inverse_cubic_exact_for_linear(self):
        """Inverse interpolation of a linear function is exact."""
        x = [np.float64(v) for v in (0.0, 2.0, 3.0, 4.0)]
        fx = [v - 1.0 for v in x]

        c = _inverse_cubic(*x, *fx)

        assert abs(c - 1.0) <= 1e-12


class TestToms748:
    """Tests for Algorithm 748."""

    def test_simple_quadratic(self):
        """Find sqrt(2) by solving x^2 - 2 = 0."""
        result = Toms748Solver(lambda x: x**2 - 2, rtol=1e-12).solve(1.0, 2.0)

        assert result.status == RootStatus.SUCCESS
        assert abs(result.xzero - math.sqrt(2)) <= 1e-10

    def test_linear_in_one_step(self):
        """The initial secant step hits the root of a linear function."""
        result = Toms748Solver(lambda x: x - 2.0).solve(0.0, 5.0)

        assert result.status == RootStatus.SUCCESS
        assert result.xzero == 2.0
        assert result.num_iterations == 1
        assert result.num_function_calls == 3

    def test_fewer_evaluations_than_bisection(self):
        """Interpolation needs far fewer evaluations than bisection."""
        f = lambda x: math.exp(x) - 10.0

        result = Toms748Solver(f, rtol=1e-12).solve(0.0, 5.0)

        assert result.status == RootStatus.SUCCESS
        assert result.num_function_calls < 20

    def test_maxiter_exceeded(self):
        """The iteration cap is honoured."""
        f = lambda x: -1.0 if x < 1.0 else 1.0

        result = Toms748Solver(
            f, ftol=0.0, rtol=0.0, atol=0.0, maxiter=3
        ).solve(0.0, 3.0)

        assert result.status == RootStatus.MAX_ITERATIONS_REACHED
        assert result.num_iterations == 3

    @pytest.mark.skipif(not scipy_available, reason="scipy not available")
    @pytest.mark.parametrize(
        "f, a, b",
        [
            (lambda x: x**3 - x - 1, 1.0, 2.0),
            (lambda x: math.cos(x) - x, 0.0, 1.0),
            (lambda x: math.exp(x) - 10.0, 0.0, 5.0),
        ],
    )
    def test_matches_scipy(self, f, a, b):
        """Results match scipy.optimize.toms748."""
        scipy_root = scipy_toms748(f, a, b, xtol=1e-12, rtol=4 * _EPS)
        result = Toms748Solver(f, rtol=4 * _EPS, atol=1e-12).solve(a, b)

        assert result.status == RootStatus.SUCCESS
        assert abs(result.xzero - scipy_root) <= 1e-10
