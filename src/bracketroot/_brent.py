"""Brent's (zeroin) root-finding method."""

import numpy as np

from ._result import RootResult, RootStatus
from ._solver import Bracket, RootFinder, Steps

_EPS = np.finfo(np.float64).eps


class BrentSolver(RootFinder):
    """Classic Brent (zeroin) method.

    Combines bisection, linear interpolation and inverse quadratic
    interpolation. An interpolated step is only accepted when it is smaller
    than three quarters of the bracket and smaller than half of the step
    before last; otherwise a bisection step is forced.

    Finds a zero to within ``4 * eps * |x| + rtol`` where ``eps`` is the
    float64 machine epsilon. Here ``rtol`` is used as an absolute tolerance,
    as in Brent's zeroin.

    References
    ----------
    R. P. Brent, "An algorithm with guaranteed convergence for finding a
    zero of a function", The Computer Journal, Vol. 14, No. 4, 1971.

    R. P. Brent, "Algorithms for minimization without derivatives",
    Prentice-Hall, 1973.
    """

    name = "brent"

    def _iterate(self, bracket: Bracket) -> Steps:
        ftol = self.options.ftol
        rtol = self.options.rtol
        maxiter = self.options.maxiter

        a, b, fa, fb = bracket
        c, fc = a, fa
        d = b - a
        e = d

        for iteration in range(1, maxiter + 1):
            if abs(fc) < abs(fb):
                a, b, c = b, c, b
                fa, fb, fc = fb, fc, fb

            tol1 = 2.0 * _EPS * abs(b) + 0.5 * rtol
            xm = 0.5 * (c - b)
            if abs(xm) <= tol1 or fb == 0.0:
                return RootResult(b, fb, RootStatus.SUCCESS, iteration - 1)

            # see if a bisection is forced
            if abs(e) >= tol1 and abs(fa) > abs(fb):
                s = fb / fa
                if a != c:
                    # inverse quadratic interpolation
                    q = fa / fc
                    r = fb / fc
                    p = s * (2.0 * xm * q * (q - r) - (b - a) * (r - 1.0))
                    q = (q - 1.0) * (r - 1.0) * (s - 1.0)
                else:
                    # linear interpolation
                    p = 2.0 * xm * s
                    q = 1.0 - s
                if p <= 0.0:
                    p = -p
                else:
                    q = -q
                s = e
                e = d
                if (
                    2.0 * p >= 3.0 * xm * q - abs(tol1 * q)
                    or p >= abs(0.5 * s * q)
                ):
                    d = xm
                    e = d
                else:
                    d = p / q
            else:
                d = xm
                e = d

            a, fa = b, fb
            if abs(d) <= tol1:
                b = b - tol1 if xm <= 0.0 else b + tol1
            else:
                b = b + d
            fb = yield b
            if abs(fb) <= ftol:
                return RootResult(b, fb, RootStatus.SUCCESS, iteration)
            if fb * (fc / abs(fc)) > 0.0:
                c, fc = a, fa
                d = b - a
                e = d

        return RootResult(b, fb, RootStatus.MAX_ITERATIONS_REACHED, maxiter)
