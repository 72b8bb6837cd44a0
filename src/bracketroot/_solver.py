"""Shared contract for the bracketed root finders.

Every algorithm is written as a generator that yields the abscissa it wants
evaluated and receives ``f(x)`` back through ``send``. It finally returns a
:class:`RootResult`. This keeps the state machines independent of how ``f`` is
evaluated: :meth:`RootFinder.solve` evaluates one point at a time, while
:func:`~bracketroot.root_scalar_batched` advances many state machines in lock
step from a single vectorised call.

All arithmetic inside the state machines is done on ``numpy.float64`` scalars
under ``numpy.errstate(all="ignore")`` so vanishing denominators yield
``inf``/``nan`` rather than raising.
"""

import abc
from typing import Callable, Generator, NamedTuple, Optional, Tuple

import numpy as np

from ._convergence import SolverOptions
from ._result import RootResult, RootStatus

Steps = Generator[np.float64, np.float64, RootResult]


class Bracket(NamedTuple):
    """Oriented bracket ``a < b`` with ``f(a) * f(b) < 0``."""

    a: np.float64
    b: np.float64
    fa: np.float64
    fb: np.float64


def _advance(
    steps: Steps, value: Optional[np.float64] = None
) -> Tuple[Optional[np.float64], Optional[RootResult]]:
    """Resume ``steps`` with ``value``.

    Returns
    -------
    tuple
        ``(x, None)`` when another evaluation is requested, otherwise
        ``(None, result)``.
    """
    try:
        with np.errstate(all="ignore"):
            return steps.send(value), None
    except StopIteration as stop:
        return None, stop.value


def _drive(steps: Steps, f: Callable[[float], float]) -> RootResult:
    """Run ``steps`` to completion, evaluating ``f`` one point at a time."""
    num_function_calls = 0
    x, result = _advance(steps)
    while result is None:
        fx = f(float(x))
        num_function_calls += 1
        x, result = _advance(steps, np.float64(float(fx)))
    return result._replace(
        xzero=float(result.xzero),
        fzero=float(result.fzero),
        num_function_calls=num_function_calls,
    )


class RootFinder(abc.ABC):
    """Base class for bracketed root finders.

    Parameters
    ----------
    f : Callable[[float], float]
        Function to find a root of. It must be defined for any ``x`` inside
        the bracket. It is referenced, never copied.
    ftol : float, optional
        Absolute tolerance on ``|f(x)|``. Default: ``0.0``.
    rtol : float, optional
        Relative tolerance on ``x``. Default: ``1e-6``.
    atol : float, optional
        Absolute tolerance on ``x``. Default: ``1e-12``.
    maxiter : int, optional
        Maximum number of iterations. Default: ``2000``.
    options : SolverOptions, optional
        Base options. Explicit keyword arguments take precedence.

    Notes
    -----
    Instances hold only immutable configuration, but ``f`` itself may not be
    thread safe. Use one instance per thread if ``f`` has state.
    """

    name: str = ""

    def __init__(
        self,
        f: Callable[[float], float],
        *,
        ftol: Optional[float] = None,
        rtol: Optional[float] = None,
        atol: Optional[float] = None,
        maxiter: Optional[int] = None,
        options: Optional[SolverOptions] = None,
    ):
        if not callable(f):
            raise TypeError(f"f must be callable, got {type(f).__name__}")
        self.f = f
        self.options = SolverOptions.from_overrides(
            ftol=ftol, rtol=rtol, atol=atol, maxiter=maxiter, defaults=options
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.options})"

    def solve(
        self,
        ax: float,
        bx: float,
        fax: Optional[float] = None,
        fbx: Optional[float] = None,
    ) -> RootResult:
        """Find a root of ``f`` in the interval ``[ax, bx]``.

        Parameters
        ----------
        ax, bx : float
            Interval endpoints, in any order.
        fax, fbx : float, optional
            Already known values of ``f(ax)`` and ``f(bx)``. When given, the
            corresponding evaluation is skipped.

        Returns
        -------
        RootResult
            Never raises for numeric outcomes; inspect ``status``.
        """
        return _drive(self._solve_steps(ax, bx, fax, fbx), self.f)

    def refine(self, bracket: Bracket) -> RootResult:
        """Run the algorithm on an already validated, oriented bracket."""
        bracket = Bracket(*(np.float64(value) for value in bracket))
        return _drive(self._iterate(bracket), self.f)

    def _solve_steps(
        self,
        ax: float,
        bx: float,
        fax: Optional[float] = None,
        fbx: Optional[float] = None,
    ) -> Steps:
        ax = np.float64(ax)
        bx = np.float64(bx)

        if ax == bx:
            fzero = np.float64(np.nan) if fax is None else np.float64(fax)
            return RootResult(ax, fzero, RootStatus.DEGENERATE_INTERVAL)

        fa = (yield ax) if fax is None else np.float64(fax)
        fb = (yield bx) if fbx is None else np.float64(fbx)

        # trivial cases first
        ftol = self.options.ftol
        if abs(fa) <= ftol:
            return RootResult(ax, fa, RootStatus.SUCCESS)
        if abs(fb) <= ftol:
            return RootResult(bx, fb, RootStatus.SUCCESS)
        if fa * fb > 0.0:
            return RootResult(ax, fa, RootStatus.NO_SIGN_CHANGE)

        if ax < bx:
            bracket = Bracket(ax, bx, fa, fb)
        else:
            bracket = Bracket(bx, ax, fb, fa)
        return (yield from self._iterate(bracket))

    @abc.abstractmethod
    def _iterate(self, bracket: Bracket) -> Steps:
        """Refine ``bracket``, yielding each abscissa to evaluate."""
