"""Method-name dispatch for the bracketed root finders."""

import math
from typing import Callable, Dict, Optional, Tuple, Type

from ._anderson_bjorck import AndersonBjorckSolver
from ._bdqrf import BdqrfSolver
from ._bisection import BisectionSolver
from ._brent import BrentSolver
from ._brenth import BrenthSolver
from ._brentq import BrentqSolver
from ._chandrupatla import ChandrupatlaSolver
from ._exceptions import InvalidMethodError
from ._muller import MullerSolver
from ._pegasus import PegasusSolver
from ._result import RootResult, RootStatus
from ._ridders import RiddersSolver
from ._solver import RootFinder
from ._toms748 import Toms748Solver

_SOLVERS: Dict[str, Type[RootFinder]] = {
    solver.name: solver
    for solver in (
        BisectionSolver,
        BrentSolver,
        BrenthSolver,
        BrentqSolver,
        AndersonBjorckSolver,
        RiddersSolver,
        PegasusSolver,
        BdqrfSolver,
        MullerSolver,
        ChandrupatlaSolver,
        Toms748Solver,
    )
}
_ALIASES = {"anderson-bjorck": "anderson_bjorck"}


def available_methods() -> Tuple[str, ...]:
    """Canonical names accepted by :func:`root_scalar`."""
    return tuple(_SOLVERS)


def _normalize(method: str) -> str:
    key = method.rstrip().lower()
    return _ALIASES.get(key, key)


def get_solver(method: str) -> Type[RootFinder]:
    """Look up the solver class for ``method``.

    Parameters
    ----------
    method : str
        Method identifier, case-insensitive. Trailing blanks are ignored.

    Returns
    -------
    type[RootFinder]

    Raises
    ------
    InvalidMethodError
        If ``method`` is not recognised.
    """
    try:
        return _SOLVERS[_normalize(method)]
    except (KeyError, AttributeError):
        raise InvalidMethodError(
            f"Unknown root finding method {method!r}. "
            f"Available: {', '.join(available_methods())}"
        ) from None


def root_scalar(
    method: str,
    f: Callable[[float], float],
    ax: float,
    bx: float,
    *,
    fax: Optional[float] = None,
    fbx: Optional[float] = None,
    ftol: Optional[float] = None,
    rtol: Optional[float] = None,
    atol: Optional[float] = None,
    maxiter: Optional[int] = None,
) -> RootResult:
    """
    Find a root of a scalar function inside a sign-changing interval.

    Parameters
    ----------
    method : str
        One of ``bisection``, ``brent``, ``brenth``, ``brentq``,
        ``anderson_bjorck`` (or ``anderson-bjorck``), ``ridders``,
        ``pegasus``, ``bdqrf``, ``muller``, ``chandrupatla``, ``toms748``.
        Case-insensitive.
    f : Callable[[float], float]
        Function to find the root of. Called with Python floats.
    ax, bx : float
        Interval endpoints. ``f(ax)`` and ``f(bx)`` must have opposite signs
        unless one of them is already within ``ftol`` of zero.
    fax, fbx : float, optional
        Already known ``f(ax)`` and ``f(bx)``, to save evaluations.
    ftol : float, optional
        Absolute tolerance on ``|f(x)|``. Default: ``0.0``.
    rtol : float, optional
        Relative tolerance on ``x``. Default: ``1e-6``.
    atol : float, optional
        Absolute tolerance on ``x``. Default: ``1e-12``.
    maxiter : int, optional
        Maximum number of iterations. Default: ``2000``.

    Returns
    -------
    RootResult
        ``(xzero, fzero, status, num_iterations, num_function_calls)``. No
        exception is raised for numeric failures; an unknown ``method``
        yields ``status == RootStatus.INVALID_METHOD`` without calling ``f``.
        Use :meth:`RootResult.raise_for_status` to escalate.

    Examples
    --------
    >>> from bracketroot import root_scalar
    >>> result = root_scalar("brent", lambda x: x**3 - x - 2, 1.0, 2.0)
    >>> result.status
    <RootStatus.SUCCESS: 0>
    >>> round(result.xzero, 6)
    1.52138

    Notes
    -----
    Behaviour for functions returning NaN or Inf is unspecified, but solving
    never raises and the returned status is deterministic.
    """
    try:
        solver_class = get_solver(method)
    except InvalidMethodError:
        return RootResult(math.nan, math.nan, RootStatus.INVALID_METHOD)

    solver = solver_class(f, ftol=ftol, rtol=rtol, atol=atol, maxiter=maxiter)
    return solver.solve(ax, bx, fax, fbx)
