"""Brent's method with inverse quadratic extrapolation (brentq)."""

import numpy as np

from ._result import RootResult, RootStatus
from ._solver import Bracket, RootFinder, Steps


class BrentqSolver(RootFinder):
    """Brent's method, SciPy ``brentq`` formulation.

    Tracks three points: ``cur`` (best estimate, smallest ``|f|``), ``pre``
    (previous estimate) and ``blk`` (the contrapoint, so that ``cur`` and
    ``blk`` always bracket the root). Whenever ``pre`` and ``cur`` straddle
    zero, ``blk`` is reset to ``pre``; whenever ``|f(blk)| < |f(cur)|`` the
    two swap roles.

    A trial step ``stry`` is computed by secant interpolation (when ``pre``
    and ``blk`` coincide) or by extrapolation through all three points, and
    is accepted only when ``2|stry| < min(|spre|, 3|sbis| - delta)``;
    otherwise the step bisects. Steps never get smaller than ``delta``.

    Convergence: ``|f(cur)| <= ftol`` or ``|sbis| < delta`` with
    ``delta = (atol + rtol * |xcur|) / 2``.

    References
    ----------
    SciPy ``brentq.c``.
    """

    name = "brentq"

    @staticmethod
    def _extrapolate(fcur, fpre, fblk, dpre, dblk):
        """Inverse quadratic extrapolation step."""
        denom = dblk * dpre * (fblk - fpre)
        return -fcur * (fblk * dblk - fpre * dpre) / denom

    def _iterate(self, bracket: Bracket) -> Steps:
        ftol = self.options.ftol
        rtol = self.options.rtol
        atol = self.options.atol
        maxiter = self.options.maxiter

        xpre, xcur, fpre, fcur = bracket
        xblk = fblk = spre = scur = np.float64(0.0)

        for iteration in range(1, maxiter + 1):
            if fpre * fcur < 0.0:
                xblk, fblk = xpre, fpre
                scur = spre = xcur - xpre
            if abs(fblk) < abs(fcur):
                xpre, xcur, xblk = xcur, xblk, xcur
                fpre, fcur, fblk = fcur, fblk, fcur

            delta = (atol + rtol * abs(xcur)) / 2.0
            sbis = (xblk - xcur) / 2.0
            if abs(fcur) <= ftol or abs(sbis) < delta:
                return RootResult(
                    xcur, fcur, RootStatus.SUCCESS, iteration - 1
                )

            if abs(spre) > delta and abs(fcur) < abs(fpre):
                if xpre == xblk:
                    # interpolate
                    stry = -fcur * (xcur - xpre) / (fcur - fpre)
                else:
                    # extrapolate
                    dpre = (fpre - fcur) / (xpre - xcur)
                    dblk = (fblk - fcur) / (xblk - xcur)
                    stry = self._extrapolate(fcur, fpre, fblk, dpre, dblk)

                if 2.0 * abs(stry) < min(abs(spre), 3.0 * abs(sbis) - delta):
                    # accept step
                    spre, scur = scur, stry
                else:
                    spre = scur = sbis
            else:
                spre = scur = sbis

            xpre, fpre = xcur, fcur
            if abs(scur) > delta:
                xcur = xcur + scur
            else:
                xcur = xcur + (delta if sbis > 0.0 else -delta)

            fcur = yield xcur
            if abs(fcur) <= ftol:
                return RootResult(xcur, fcur, RootStatus.SUCCESS, iteration)

        return RootResult(
            xcur, fcur, RootStatus.MAX_ITERATIONS_REACHED, maxiter
        )
