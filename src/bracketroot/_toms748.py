"""TOMS748 root-finding method (Alefeld, Potra and Shi)."""

from typing import Generator, Tuple

import numpy as np

from ._result import RootResult, RootStatus
from ._solver import Bracket, RootFinder, Steps

_HUGE = np.finfo(np.float64).max

_Enclosure = Tuple[np.float64, ...]


def _distinct(fa, fb, fd, fe):
    """Zero unless the four function values are pairwise distinct."""
    return (
        (fa - fb) * (fa - fd) * (fa - fe) * (fb - fd) * (fb - fe) * (fd - fe)
    )


def _newton_quadratic(a, b, d, fa, fb, fd, k: int):
    """Zero in ``(a, b)`` of the quadratic interpolating ``f`` at a, b and d.

    Uses ``k`` safeguarded Newton steps. ``d`` lies outside ``[a, b]`` and
    ``f(a) * f(b) < 0``. Falls back to the secant root of ``a``, ``b`` when the
    quadratic term vanishes or a Newton derivative is zero.
    """
    a0 = fa
    a1 = (fb - fa) / (b - a)
    a2 = ((fd - fb) / (d - b) - a1) / (d - a)

    if a2 == 0.0:
        return a - a0 / a1

    # start from the end where the parabola and f agree in sign
    c = a if np.sign(a2) * np.sign(fa) > 0.0 else b
    for _ in range(k):
        pc = a0 + (a1 + a2 * (c - b)) * (c - a)
        pdc = a1 + a2 * (2.0 * c - (a + b))
        if pdc == 0.0:
            return a - a0 / a1
        c = c - pc / pdc
    return c


def _inverse_cubic(a, b, d, e, fa, fb, fd, fe):
    """Inverse cubic interpolation of ``f`` at a, b, d and e.

    A slight modification of the Aitken-Neville scheme described by Stoer and
    Bulirsch, "Introduction to Numerical Analysis", Springer, 1980.
    """
    q11 = (d - e) * fd / (fe - fd)
    q21 = (b - d) * fb / (fd - fb)
    q31 = (a - b) * fa / (fb - fa)
    d21 = (b - d) * fd / (fd - fb)
    d31 = (a - b) * fb / (fb - fa)

    q22 = (d21 - q11) * fb / (fe - fb)
    q32 = (d31 - q21) * fa / (fd - fa)
    d32 = (d31 - q21) * fd / (fd - fa)
    q33 = (d32 - q22) * fa / (fe - fa)

    return a + q31 + q32 + q33


class Toms748Solver(RootFinder):
    """Algorithm 748 of Alefeld, Potra and Shi.

    Finds either an exact zero or a tight enclosure of one. At the start of
    every iteration the current enclosing interval is recorded as
    ``[a0, b0]``. The first iteration is a plain secant step. Every later
    iteration takes three steps: two steps of inverse cubic interpolation
    (or Newton-on-a-quadratic when the four tracked function values are not
    distinct or the cubic estimate leaves ``(a, b)``), then a double-size
    secant step. If the interval is still wider than ``(b0 - a0) / 2`` an
    extra bisection step is taken.

    Every step evaluates ``f`` once through :meth:`_bracket`, which keeps
    trial points at least ``tol`` away from the interval ends and shrinks the
    interval around the sign change. The solve stops as soon as
    ``|f(a)| <= ftol`` or ``b - a <= tol`` with
    ``tol = 2 * (atol + 2 * rtol * |x|)`` evaluated at the end with smaller
    ``|f|``.

    The returned root is always the left end ``a`` of the final enclosure.

    References
    ----------
    G. E. Alefeld, F. A. Potra and Y. Shi, "Algorithm 748: Enclosing Zeros
    of Continuous Functions", ACM Transactions on Mathematical Software,
    Vol. 21, No. 3, 1995, pp. 327-344.
    """

    name = "toms748"

    def _tolerance(self, x):
        return 2.0 * (self.options.atol + 2.0 * abs(x) * self.options.rtol)

    def _bracket(
        self, a, b, c, fa, fb, tol
    ) -> Generator[np.float64, np.float64, _Enclosure]:
        """Shrink ``[a, b]`` using a trial point ``c`` in ``(a, b)``.

        Returns
        -------
        tuple
            ``(a, b, fa, fb, tol, d, fd)`` where ``d`` is the discarded end
            point. If ``c`` is a root, ``a`` is set to ``c`` and
            ``d = fd = 0``.
        """
        # keep c away from the ends, or bisect a very small interval
        tol = 0.7 * tol
        if b - a <= 2.0 * tol:
            c = a + 0.5 * (b - a)
        elif c <= a + tol:
            c = a + tol
        elif c >= b - tol:
            c = b - tol

        fc = yield c
        if abs(fc) <= self.options.ftol:
            zero = np.float64(0.0)
            return c, b, fc, fb, tol, zero, zero

        if np.sign(fa) * np.sign(fc) < 0.0:
            d, fd = b, fb
            b, fb = c, fc
        else:
            d, fd = a, fa
            a, fa = c, fc

        tol = self._tolerance(b if abs(fb) <= abs(fa) else a)
        return a, b, fa, fb, tol, d, fd

    def _iterate(self, bracket: Bracket) -> Steps:
        ftol = self.options.ftol
        maxiter = self.options.maxiter

        a, b, fa, fb = bracket
        d = fd = e = fe = np.float64(_HUGE)

        for iteration in range(1, maxiter + 1):
            a0, b0 = a, b

            tol = self._tolerance(b if abs(fb) <= abs(fa) else a)
            if b - a <= tol:
                return RootResult(a, fa, RootStatus.SUCCESS, iteration - 1)

            if iteration == 1:
                # secant step
                c = a - (fa / (fb - fa)) * (b - a)
                a, b, fa, fb, tol, d, fd = yield from self._bracket(
                    a, b, c, fa, fb, tol
                )
                if abs(fa) <= ftol or b - a <= tol:
                    return RootResult(a, fa, RootStatus.SUCCESS, iteration)
                continue

            # first interpolation step: quadratic on the first pass
            if iteration == 2 or _distinct(fa, fb, fd, fe) == 0.0:
                c = _newton_quadratic(a, b, d, fa, fb, fd, 2)
            else:
                c = _inverse_cubic(a, b, d, e, fa, fb, fd, fe)
                if (c - a) * (c - b) >= 0.0:
                    c = _newton_quadratic(a, b, d, fa, fb, fd, 2)
            e, fe = d, fd

            a, b, fa, fb, tol, d, fd = yield from self._bracket(
                a, b, c, fa, fb, tol
            )
            if abs(fa) <= ftol or b - a <= tol:
                return RootResult(a, fa, RootStatus.SUCCESS, iteration)

            # second interpolation step
            if _distinct(fa, fb, fd, fe) == 0.0:
                c = _newton_quadratic(a, b, d, fa, fb, fd, 3)
            else:
                c = _inverse_cubic(a, b, d, e, fa, fb, fd, fe)
                if (c - a) * (c - b) >= 0.0:
                    c = _newton_quadratic(a, b, d, fa, fb, fd, 3)

            a, b, fa, fb, tol, d, fd = yield from self._bracket(
                a, b, c, fa, fb, tol
            )
            if abs(fa) <= ftol or b - a <= tol:
                return RootResult(a, fa, RootStatus.SUCCESS, iteration)
            e, fe = d, fd

            # double-size secant step from the end with smaller |f|
            if abs(fa) < abs(fb):
                u, fu = a, fa
            else:
                u, fu = b, fb
            c = u - 2.0 * (fu / (fb - fa)) * (b - a)
            if abs(c - u) > 0.5 * (b - a):
                c = a + 0.5 * (b - a)

            a, b, fa, fb, tol, d, fd = yield from self._bracket(
                a, b, c, fa, fb, tol
            )
            if abs(fa) <= ftol or b - a <= tol:
                return RootResult(a, fa, RootStatus.SUCCESS, iteration)

            if b - a < 0.5 * (b0 - a0):
                continue
            e, fe = d, fd

            # not enough progress, bisect
            a, b, fa, fb, tol, d, fd = yield from self._bracket(
                a, b, a + 0.5 * (b - a), fa, fb, tol
            )
            if abs(fa) <= ftol or b - a <= tol:
                return RootResult(a, fa, RootStatus.SUCCESS, iteration)

        return RootResult(a, fa, RootStatus.MAX_ITERATIONS_REACHED, maxiter)
