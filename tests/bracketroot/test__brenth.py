# tests/bracketroot/test__brenth.py
import math

import numpy as np
import pytest

from bracketroot import BrenthSolver, BrentqSolver, RootStatus

# Check if scipy is available for comparison tests
try:
    from scipy.optimize import brenth as scipy_brenth

    scipy_available = True
except ImportError:
    scipy_available = False

_EPS = np.finfo(np.float64).eps


class TestBrenth:
    """Tests for Brent's method with hyperbolic extrapolation."""

    def test_is_brentq_variant(self):
        """brenth only replaces the extrapolation formula."""
        assert issubclass(BrenthSolver, BrentqSolver)
        assert BrenthSolver.name == "brenth"

    def test_simple_quadratic(self):
        """Find sqrt(2) by solving x^2 - 2 = 0."""
        result = BrenthSolver(lambda x: x**2 - 2, rtol=1e-12).solve(1.0, 2.0)

        assert result.status == RootStatus.SUCCESS
        assert abs(result.xzero - math.sqrt(2)) <= 1e-10

    def test_cubic(self):
        """Find the real root of x^3 - x - 2."""
        result = BrenthSolver(lambda x: x**3 - x - 2, ftol=1e-12).solve(
            1.0, 2.0
        )

        assert result.status == RootStatus.SUCCESS
        assert abs(result.xzero - 1.5213797068045676) <= 1e-5

    def test_maxiter_exceeded(self):
        """A discontinuity can't be resolved with zero tolerances."""
        f = lambda x: -1.0 if x < 1.0 else 1.0

        result = BrenthSolver(f, rtol=0.0, atol=0.0, maxiter=10).solve(
            0.0, 3.0
        )

        assert result.status == RootStatus.MAX_ITERATIONS_REACHED
        assert result.num_iterations == 10
        assert result.num_function_calls == 12

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
        """Results match scipy.optimize.brenth."""
        scipy_root = scipy_brenth(f, a, b, xtol=1e-12, rtol=4 * _EPS)
        result = BrenthSolver(f, rtol=4 * _EPS, atol=1e-12).solve(a, b)

        assert result.status == RootStatus.SUCCESS
        assert abs(result.xzero - scipy_root) <= 1e-11
