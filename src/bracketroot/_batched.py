"""Batched bracketed root finding over tensors."""

import math
import warnings
from typing import Callable, NamedTuple, Optional

import numpy as np
import torch
from torch import Tensor

from ._convergence import SolverOptions, default_tolerances
from ._exceptions import InvalidMethodError
from ._result import RootStatus
from ._root_scalar import get_solver
from ._solver import _advance


class BatchedRootResult(NamedTuple):
    """Element-wise results of :func:`root_scalar_batched`.

    Parameters
    ----------
    xzero : Tensor
        Roots, or best estimates where the solve failed. Autograd gradients
        flow through this field where ``status`` is ``SUCCESS``.
    fzero : Tensor
        ``f`` evaluated at ``xzero``.
    status : Tensor
        ``int64`` tensor of :class:`RootStatus` codes.
    """

    xzero: Tensor
    fzero: Tensor
    status: Tensor

    @property
    def converged(self) -> Tensor:
        return self.status == RootStatus.SUCCESS


class _RootImplicitGrad(torch.autograd.Function):
    """Backpropagate through roots with the implicit function theorem.

    At a root ``f(x*, theta) = 0`` the root moves as
    ``dx*/dtheta = -(df/dtheta) / (df/dx)``. Only elements flagged in
    ``converged`` are roots; every other element gets no gradient.
    """

    @staticmethod
    def forward(ctx, xzero: Tensor, converged: Tensor, f) -> Tensor:
        ctx.f = f
        ctx.save_for_backward(xzero, converged)
        return xzero.clone()

    @staticmethod
    def backward(ctx, grad_xzero: Tensor) -> tuple[None, None, None]:
        xzero, converged = ctx.saved_tensors

        with torch.enable_grad():
            x = xzero.detach().requires_grad_(True)
            fx = ctx.f(x)
            if fx.grad_fn is None:
                return None, None, None
            (slope,) = torch.autograd.grad(
                fx, x, grad_outputs=torch.ones_like(fx), retain_graph=True
            )

            # keep |df/dx| away from zero, sign included
            eps = torch.finfo(slope.dtype).eps * 10
            slope = torch.where(
                slope.abs() < eps,
                torch.full_like(slope, eps).copysign(slope),
                slope,
            )
            weights = torch.where(
                converged, -grad_xzero / slope, torch.zeros_like(slope)
            )
            torch.autograd.backward(fx, weights)

        return None, None, None


def _with_implicit_grad(
    xzero: Tensor, converged: Tensor, f: Callable[[Tensor], Tensor]
) -> Tensor:
    """Connect ``xzero`` to the trainable inputs of ``f``, if it has any."""
    try:
        with torch.enable_grad():
            trial = f(xzero.detach().requires_grad_(True))
    except RuntimeError:
        # f is not differentiable, e.g. it leaves torch
        return xzero

    if not trial.requires_grad:
        return xzero

    return _RootImplicitGrad.apply(xzero.requires_grad_(True), converged, f)


def root_scalar_batched(
    method: str,
    f: Callable[[Tensor], Tensor],
    a: Tensor,
    b: Tensor,
    *,
    ftol: Optional[float] = None,
    rtol: Optional[float] = None,
    atol: Optional[float] = None,
    maxiter: Optional[int] = None,
) -> BatchedRootResult:
    """
    Solve many independent bracketed root problems at once.

    Every element runs its own copy of the chosen scalar algorithm, so each
    element's result and status are exactly what :func:`root_scalar` would
    produce for it (up to the precision ``f`` is evaluated in). All elements
    that need a function value are evaluated together with one call of ``f``
    per round.

    Parameters
    ----------
    method : str
        Method identifier, see :func:`root_scalar`.
    f : Callable[[Tensor], Tensor]
        Vectorized function. Takes tensor of shape ``(N,)``, returns ``(N,)``.
        Element ``i`` of the output must only depend on element ``i`` of the
        input. Elements that are not being refined are passed their current
        estimate.
    a, b : Tensor
        Bracket endpoints with the same shape.
    ftol, rtol, atol : float, optional
        Tolerances. Default: dtype-aware (see :func:`default_tolerances`).
    maxiter : int, optional
        Maximum iterations per element. Default: ``2000``.

    Returns
    -------
    BatchedRootResult
        ``xzero``, ``fzero`` and ``status`` with the same shape as ``a``.
        An unknown ``method`` gives ``INVALID_METHOD`` everywhere and NaN
        roots.

    Raises
    ------
    ValueError
        If ``a`` and ``b`` have different shapes or are not floating-point.

    Examples
    --------
    >>> import torch
    >>> from bracketroot import root_scalar_batched
    >>> c = torch.tensor([2.0, 3.0, 4.0], dtype=torch.float64)
    >>> a = torch.ones(3, dtype=torch.float64)
    >>> b = torch.full((3,), 10.0, dtype=torch.float64)
    >>> result = root_scalar_batched("toms748", lambda x: x**2 - c, a, b)
    >>> [f"{v:.4f}" for v in result.xzero.tolist()]
    ['1.4142', '1.7321', '2.0000']

    Notes
    -----
    **Autograd Support**: Gradients with respect to parameters in ``f``
    are computed via implicit differentiation using the implicit function
    theorem. If ``f(x*, theta) = 0``, then:

    .. math::

        \\frac{dx^*}{d\\theta} = -\\left[\\frac{\\partial f}{\\partial x}\\right]^{-1}
        \\frac{\\partial f}{\\partial \\theta}

    Elements that did not converge are not roots, so they receive zero
    gradient.

    **Precision**: The iteration itself always runs in float64; only the
    evaluations of ``f`` happen in the dtype of ``a``.
    """
    if a.shape != b.shape:
        raise ValueError(
            f"a and b must have same shape, got {a.shape} and {b.shape}"
        )
    for name, bound in (("a", a), ("b", b)):
        if not bound.is_floating_point():
            raise ValueError(
                f"{name} must be floating-point, got {bound.dtype}"
            )

    orig_shape = a.shape
    dtype, device = a.dtype, a.device

    if dtype in (torch.float16, torch.bfloat16):
        warnings.warn(
            f"Evaluating f in {dtype} quantizes every trial point. "
            f"Consider using float32 or float64 for tighter roots.",
            RuntimeWarning,
            stacklevel=2,
        )

    options = SolverOptions.from_overrides(
        ftol=ftol,
        rtol=rtol,
        atol=atol,
        maxiter=maxiter,
        defaults=default_tolerances(dtype),
    )

    try:
        solver = get_solver(method)(f, options=options)
    except InvalidMethodError:
        nan = torch.full(orig_shape, math.nan, dtype=dtype, device=device)
        status = torch.full(
            orig_shape,
            int(RootStatus.INVALID_METHOD),
            dtype=torch.int64,
            device=device,
        )
        return BatchedRootResult(nan, nan.clone(), status)

    current = a.detach().flatten().tolist()
    steps = [
        solver._solve_steps(ax, bx)
        for ax, bx in zip(current, b.detach().flatten().tolist())
    ]
    results = [None] * len(steps)

    pending = {}
    for index, state in enumerate(steps):
        x, results[index] = _advance(state)
        if results[index] is None:
            pending[index] = x

    while pending:
        for index, x in pending.items():
            current[index] = float(x)
        with torch.no_grad():
            values = f(torch.tensor(current, dtype=dtype, device=device))
        values = values.detach().reshape(-1).tolist()

        requested = {}
        for index in pending:
            fx = np.float64(values[index])
            x, results[index] = _advance(steps[index], fx)
            if results[index] is None:
                requested[index] = x
        pending = requested

    xzero = torch.tensor(
        [float(r.xzero) for r in results], dtype=dtype, device=device
    )
    fzero = torch.tensor(
        [float(r.fzero) for r in results], dtype=dtype, device=device
    )
    status = torch.tensor(
        [int(r.status) for r in results], dtype=torch.int64, device=device
    )

    if xzero.numel() > 0:
        xzero = _with_implicit_grad(xzero, status == RootStatus.SUCCESS, f)

    return BatchedRootResult(
        xzero.reshape(orig_shape),
        fzero.reshape(orig_shape),
        status.reshape(orig_shape),
    )
