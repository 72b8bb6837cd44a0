"""Bisected Direct Quadratic Regula Falsi (BDQRF) root-finding method."""

import numpy as np

from ._result import RootResult, RootStatus
from ._solver import Bracket, RootFinder, Steps

_HUGE = np.finfo(np.float64).max


class BdqrfSolver(RootFinder):
    """Bisected Direct Quadratic Regula Falsi.

    Each iteration fits a quadratic through the two tracked points (one with
    ``f > 0``, "up", and one with ``f < 0``, "down") and their midpoint, and
    takes the root of that quadratic nearest the midpoint using the
    cancellation-free form of the quadratic formula. The up and down points
    are then replaced from the new estimate and the midpoint.

    The loop stops when ``|f| <= ftol`` or when the new estimate equals the
    previous one exactly, i.e. the limit of floating point precision has been
    reached. The latter counts as convergence.

    References
    ----------
    R. G. Gottlieb and B. F. Thompson, "Bisected Direct Quadratic Regula
    Falsi", Applied Mathematical Sciences, Vol. 4, 2010, no. 15, 709-718.
    """

    name = "bdqrf"

    def _iterate(self, bracket: Bracket) -> Steps:
        ftol = self.options.ftol
        maxiter = self.options.maxiter
        xzero, fzero = bracket.a, bracket.fa
        xlast = _HUGE

        if fzero < 0.0:
            xdn, ydn = bracket.a, bracket.fa
            xup, yup = bracket.b, bracket.fb
        else:
            xup, yup = bracket.a, bracket.fa
            xdn, ydn = bracket.b, bracket.fb

        for iteration in range(1, maxiter + 1):
            d = (xup - xdn) / 2.0
            xm = (xup + xdn) / 2.0
            ym = yield xm
            if abs(ym) <= ftol:
                return RootResult(xm, ym, RootStatus.SUCCESS, iteration)

            a = (yup + ydn - 2.0 * ym) / (2.0 * d**2)
            b = (yup - ydn) / (2.0 * d)
            radical = np.sqrt(1.0 - 4.0 * a * ym / b**2)
            xzero = xm - 2.0 * ym / (b * (1.0 + radical))

            if xzero == xlast:
                # fzero was evaluated at xlast on the previous iteration
                return RootResult(xzero, fzero, RootStatus.SUCCESS, iteration)

            xlast = xzero
            fzero = yield xzero
            if abs(fzero) <= ftol:
                return RootResult(xzero, fzero, RootStatus.SUCCESS, iteration)

            if fzero > 0.0:
                xup, yup = xzero, fzero
                if ym < 0.0:
                    xdn, ydn = xm, ym
            else:
                xdn, ydn = xzero, fzero
                if ym > 0.0:
                    xup, yup = xm, ym

        return RootResult(
            xzero, fzero, RootStatus.MAX_ITERATIONS_REACHED, maxiter
        )
