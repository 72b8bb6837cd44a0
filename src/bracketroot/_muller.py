"""Muller's root-finding method."""

import numpy as np

from ._result import RootResult, RootStatus
from ._solver import Bracket, RootFinder, Steps


class MullerSolver(RootFinder):
    """Muller's method restricted to real roots.

    Starts from the two bracket ends plus their midpoint. Each iteration fits
    a quadratic through the three most recent points, evaluates both of its
    real roots (a negative discriminant is clamped to zero) and keeps the one
    with the smaller ``|f|``. The point with the smallest ``|f|`` is always
    used as the expansion vertex.

    When the quadratic degenerates to a straight line the single linear root
    is used instead. This departs from the classic algorithm, which stops
    with ``SINGULARITY`` as soon as the leading coefficient is zero. Here
    ``SINGULARITY`` is only returned when the model has neither a quadratic
    nor a linear term.

    Convergence: ``|dx| <= atol`` or ``|dx| <= rtol * mean(|x|)`` over the
    three active abscissas.

    Notes
    -----
    Muller's method does not maintain a bracket; iterates may leave
    ``[ax, bx]``.
    """

    name = "muller"

    def _iterate(self, bracket: Bracket) -> Steps:
        options = self.options
        xzero, xold = bracket.a, bracket.b
        fxnew, fxold = bracket.fa, bracket.fb

        # pick a third point in the middle
        xmid = (bracket.a + bracket.b) / 2.0
        fxmid = yield xmid
        if abs(fxmid) < options.ftol:
            return RootResult(xmid, fxmid, RootStatus.SUCCESS, 0)

        for iteration in range(1, options.maxiter + 1):
            if abs(fxnew) >= abs(fxmid):
                xzero, xmid = xmid, xzero
                fxnew, fxmid = fxmid, fxnew
            fzero = fxnew

            u = xold - xzero
            v = xmid - xzero
            a = v * (fxold - fxnew) - u * (fxmid - fxnew)
            b = u**2 * (fxmid - fxnew) - v**2 * (fxold - fxnew)
            c = u * v * (xold - xmid) * fxnew

            if a == 0.0 and b == 0.0:
                return RootResult(
                    xzero, fzero, RootStatus.SINGULARITY, iteration
                )

            xold = xmid
            xmid = xzero

            if a == 0.0:
                candidates = (xzero - c / b,)
            else:
                d = b**2 - 4.0 * a * c
                d = 0.0 if d < 0.0 else np.sqrt(d)  # no complex roots
                a2 = 2.0 * a
                candidates = (xzero + (-b + d) / a2, xzero + (-b - d) / a2)

            # take whichever root is closest to a root of the function
            for index, x in enumerate(candidates):
                fx = yield x
                if abs(fx) <= options.ftol:
                    return RootResult(x, fx, RootStatus.SUCCESS, iteration)
                if index == 0 or abs(fx) < abs(fzero):
                    xzero, fzero = x, fx

            fxold = fxmid
            fxmid = fxnew
            fxnew = fzero

            x_inc = xzero - xmid
            if abs(x_inc) <= options.atol:
                return RootResult(xzero, fzero, RootStatus.SUCCESS, iteration)
            x_ave = (abs(xzero) + abs(xmid) + abs(xold)) / 3.0
            if abs(x_inc) <= options.rtol * x_ave:
                return RootResult(xzero, fzero, RootStatus.SUCCESS, iteration)

        return RootResult(
            xzero, fzero, RootStatus.MAX_ITERATIONS_REACHED, options.maxiter
        )
