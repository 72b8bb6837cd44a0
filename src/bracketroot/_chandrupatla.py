"""Chandrupatla's root-finding method."""

import numpy as np

from ._result import RootResult, RootStatus
from ._solver import Bracket, RootFinder, Steps


class ChandrupatlaSolver(RootFinder):
    """Chandrupatla's hybrid quadratic/bisection method.

    Each iteration evaluates ``xt = a + t * (b - a)``. With
    ``xi = (a - b) / (c - b)`` and ``phi = (fa - fb) / (fc - fb)``, ``t`` comes
    from inverse quadratic interpolation when
    ``1 - sqrt(1 - xi) < phi < sqrt(xi)`` and is ``0.5`` (bisection)
    otherwise. ``t`` is always clamped to ``[tl, 1 - tl]`` where
    ``tl = tol / |b - c|`` and ``tol = 2 * rtol * |xm| + atol``.

    Convergence: ``|f(xm)| <= ftol`` or ``tl > 0.5``, where ``xm`` is the
    bracket end with the smaller ``|f|``.

    References
    ----------
    T. R. Chandrupatla, "A new hybrid quadratic/bisection algorithm for
    finding the zero of a nonlinear function without using derivatives",
    Advances in Engineering Software, Vol. 28, 1997, pp. 145-149.

    P. Scherer, "Computational Physics: Simulation of Classical and Quantum
    Systems", Section 6.1.7.3.
    """

    name = "chandrupatla"

    def _iterate(self, bracket: Bracket) -> Steps:
        options = self.options
        b, a, fb, fa = bracket
        c, fc = a, fa
        t = 0.5

        for iteration in range(1, options.maxiter + 1):
            xt = a + t * (b - a)
            ft = yield xt

            if ft * fa > 0.0:
                c, fc = a, fa
            else:
                c, b = b, a
                fc, fb = fb, fa
            a, fa = xt, ft

            if abs(fb) < abs(fa):
                xm, fm = b, fb
            else:
                xm, fm = a, fa
            if abs(fm) <= options.ftol:
                return RootResult(xm, fm, RootStatus.SUCCESS, iteration)

            tol = 2.0 * options.rtol * abs(xm) + options.atol
            tl = tol / abs(b - c)
            if tl > 0.5:
                return RootResult(xm, fm, RootStatus.SUCCESS, iteration)

            xi = (a - b) / (c - b)
            phi = (fa - fb) / (fc - fb)
            if 1.0 - np.sqrt(1.0 - xi) < phi < np.sqrt(xi):
                # inverse quadratic interpolation
                t = (fa / (fb - fa)) * (fc / (fb - fc))
                t += ((c - a) / (b - a)) * (fa / (fc - fa)) * (fb / (fc - fb))
            else:
                t = 0.5

            t = min(1.0 - tl, max(tl, t))

        return RootResult(
            xm, fm, RootStatus.MAX_ITERATIONS_REACHED, options.maxiter
        )
