# tests/bracketroot/test__batched.py
import math

import pytest
import torch

from bracketroot import (
    RootStatus,
    available_methods,
    root_scalar,
    root_scalar_batched,
)


class TestRootScalarBatched:
    """Tests for batched root finding over tensors."""

    def test_simple_quadratic(self):
        """Find sqrt(c) for several c at once."""
        c = torch.tensor([2.0, 3.0, 4.0], dtype=torch.float64)
        a = torch.ones(3, dtype=torch.float64)
        b = torch.full((3,), 10.0, dtype=torch.float64)

        result = root_scalar_batched("brentq", lambda x: x**2 - c, a, b)

        torch.testing.assert_close(
            result.xzero, torch.sqrt(c), rtol=1e-5, atol=1e-10
        )
        assert result.converged.all()
        assert result.status.dtype == torch.int64

    @pytest.mark.parametrize("method", available_methods())
    def test_matches_scalar(self, method):
        """Each element agrees with the scalar solver."""
        c = [2.0, 5.0, 7.5]
        ct = torch.tensor(c, dtype=torch.float64)
        a = torch.zeros(3, dtype=torch.float64)
        b = torch.full((3,), 3.0, dtype=torch.float64)

        result = root_scalar_batched(method, lambda x: x**2 - ct, a, b)

        for i, ci in enumerate(c):
            scalar = root_scalar(method, lambda x: x * x - ci, 0.0, 3.0)
            assert int(result.status[i]) == scalar.status
            assert abs(float(result.xzero[i]) - scalar.xzero) <= 1e-9

    def test_preserves_shape(self):
        """Output has the same shape as the inputs."""
        c = torch.arange(1.0, 7.0, dtype=torch.float64).reshape(2, 3)
        a = torch.zeros(2, 3, dtype=torch.float64)
        b = torch.full((2, 3), 10.0, dtype=torch.float64)

        result = root_scalar_batched(
            "chandrupatla", lambda x: x - c.reshape(-1), a, b
        )

        assert result.xzero.shape == (2, 3)
        assert result.fzero.shape == (2, 3)
        assert result.status.shape == (2, 3)
        torch.testing.assert_close(result.xzero, c, rtol=1e-5, atol=1e-5)

    def test_mixed_statuses(self):
        """Elements fail independently of each other."""
        c = torch.tensor([2.0, -1.0], dtype=torch.float64)
        a = torch.ones(2, dtype=torch.float64)
        b = torch.full((2,), 2.0, dtype=torch.float64)

        result = root_scalar_batched("brent", lambda x: x**2 - c, a, b)

        assert result.status.tolist() == [
            RootStatus.SUCCESS,
            RootStatus.NO_SIGN_CHANGE,
        ]
        assert result.converged.tolist() == [True, False]

    def test_one_call_per_round(self):
        """f is called once per round, whatever the batch size."""
        calls = []

        def f(x):
            calls.append(x.shape)
            one = torch.ones_like(x)
            return torch.where(x < 1.0, -one, one)

        a = torch.zeros(4, dtype=torch.float64)
        b = torch.full((4,), 3.0, dtype=torch.float64)

        result = root_scalar_batched(
            "bisection", f, a, b, ftol=0.0, rtol=0.0, atol=0.0, maxiter=5
        )

        assert (result.status == RootStatus.MAX_ITERATIONS_REACHED).all()
        # two endpoint rounds, five iterations and one autograd probe
        assert len(calls) == 8
        assert all(shape == (4,) for shape in calls)

    def test_float32(self):
        """Works correctly with float32."""
        f = lambda x: x**2 - 2
        a = torch.tensor([1.0], dtype=torch.float32)
        b = torch.tensor([2.0], dtype=torch.float32)

        result = root_scalar_batched("toms748", f, a, b)

        assert result.xzero.dtype == torch.float32
        torch.testing.assert_close(
            result.xzero,
            torch.tensor([math.sqrt(2)], dtype=torch.float32),
            rtol=1e-4,
            atol=1e-4,
        )
        assert result.converged.all()

    def test_half_precision_warns(self):
        """Evaluating f in float16 emits a RuntimeWarning."""
        a = torch.zeros(2, dtype=torch.float16)
        b = torch.ones(2, dtype=torch.float16)

        with pytest.warns(RuntimeWarning, match="float16"):
            result = root_scalar_batched("bisection", lambda x: x - 0.5, a, b)

        assert result.xzero.dtype == torch.float16
        assert result.converged.all()

    def test_invalid_method(self):
        """An unknown method gives NaN roots and INVALID_METHOD everywhere."""
        a = torch.zeros(3, dtype=torch.float64)
        b = torch.ones(3, dtype=torch.float64)

        def f(x):
            raise AssertionError("f must not be called")

        result = root_scalar_batched("secant", f, a, b)

        assert torch.isnan(result.xzero).all()
        assert (result.status == RootStatus.INVALID_METHOD).all()

    def test_shape_mismatch_raises(self):
        """Raise ValueError when a and b have different shapes."""
        a = torch.tensor([1.0, 2.0])
        b = torch.tensor([3.0])

        with pytest.raises(ValueError, match="must have same shape"):
            root_scalar_batched("brent", lambda x: x, a, b)

    def test_empty_input(self):
        """Handle empty input gracefully."""
        a = torch.tensor([])
        b = torch.tensor([])

        result = root_scalar_batched("brent", lambda x: x, a, b)

        assert result.xzero.shape == (0,)
        assert result.status.shape == (0,)

    def test_implicit_differentiation(self):
        """Gradients flow to parameters of f via implicit differentiation."""
        theta = torch.tensor([2.0], dtype=torch.float64, requires_grad=True)
        a = torch.zeros(1, dtype=torch.float64)
        b = torch.full((1,), 2.0, dtype=torch.float64)

        result = root_scalar_batched(
            "toms748", lambda x: x**2 - theta, a, b, rtol=1e-12
        )
        result.xzero.sum().backward()

        # x* = sqrt(theta), dx*/dtheta = 1 / (2 sqrt(theta))
        expected = torch.tensor([1.0 / (2.0 * math.sqrt(2.0))])
        torch.testing.assert_close(
            theta.grad, expected.double(), rtol=1e-4, atol=1e-6
        )

    def test_no_gradient_for_failed_elements(self):
        """Only converged elements receive an implicit gradient."""
        theta = torch.tensor(
            [2.0, -1.0], dtype=torch.float64, requires_grad=True
        )
        a = torch.ones(2, dtype=torch.float64)
        b = torch.full((2,), 2.0, dtype=torch.float64)

        result = root_scalar_batched("brent", lambda x: x**2 - theta, a, b)
        result.xzero.sum().backward()

        assert result.status.tolist() == [
            RootStatus.SUCCESS,
            RootStatus.NO_SIGN_CHANGE,
        ]
        expected = torch.tensor(
            [1.0 / (2.0 * math.sqrt(2.0)), 0.0], dtype=torch.float64
        )
        torch.testing.assert_close(
            theta.grad,
            expected,
            rtol=1e-4,
            atol=1e-6,
        )

    def test_integer_bounds_raise(self):
        """Raise ValueError when a or b is not floating-point."""
        calls = []

        def f(x):
            calls.append(x)
            return x.double() - 2.5

        with pytest.raises(ValueError, match="must be floating-point"):
            root_scalar_batched(
                "bisection", f, torch.tensor([0]), torch.tensor([5])
            )

        assert calls == []

    def test_integer_upper_bound_raises(self):
        """b is checked as well as a."""
        a = torch.tensor([0.0])
        b = torch.tensor([5])

        with pytest.raises(ValueError, match="b must be floating-point"):
            root_scalar_batched("bisection", lambda x: x - 2.5, a, b)
