"""Ridders' bracketed root-finding method."""

import numpy as np

from ._result import RootResult, RootStatus
from ._solver import Bracket, RootFinder, Steps


class RiddersSolver(RootFinder):
    """Ridders' method.

    Evaluates the midpoint ``xm`` of the bracket ``[xl, xh]`` and then the
    exponential-interpolation estimate

    .. math::

        x_{new} = x_m + (x_m - x_l) \\frac{\\text{sign}(f_l - f_h) f_m}
        {\\sqrt{f_m^2 - f_l f_h}}

    which is guaranteed to lie inside the bracket. The bracket is then
    re-selected from ``{xl, xm, xnew, xh}`` by sign comparison.

    Convergence is absolute in ``x``: either the bracket width or the change
    between successive estimates drops to ``rtol``. A vanishing square root
    ends the solve with ``SINGULARITY``.

    References
    ----------
    C. Ridders, "A new algorithm for computing a single root of a real
    continuous function", IEEE Transactions on Circuits and Systems,
    Vol. 26, Issue 11, 1979.
    """

    name = "ridders"

    def _iterate(self, bracket: Bracket) -> Steps:
        ftol = self.options.ftol
        rtol = self.options.rtol
        maxiter = self.options.maxiter
        xl, xh, fl, fh = bracket

        # no previous estimate yet, so the successive-estimate test can't fire
        xzero = fzero = np.float64(np.nan)

        for iteration in range(1, maxiter + 1):
            xm = (xl + xh) / 2.0
            fm = yield xm
            if abs(fm) <= ftol:
                return RootResult(xm, fm, RootStatus.SUCCESS, iteration)

            denom = np.sqrt(fm**2 - fl * fh)
            if denom == 0.0:
                return RootResult(xm, fm, RootStatus.SINGULARITY, iteration)

            xnew = xm + (xm - xl) * (np.copysign(1.0, fl - fh) * fm / denom)
            if abs(xnew - xzero) <= rtol:
                return RootResult(xzero, fzero, RootStatus.SUCCESS, iteration)

            xzero = xnew
            fzero = yield xzero
            if abs(fzero) <= ftol:
                return RootResult(xzero, fzero, RootStatus.SUCCESS, iteration)

            # keep the root bracketed
            if np.copysign(fm, fzero) != fm:
                xl, fl = xm, fm
                xh, fh = xzero, fzero
            elif np.copysign(fl, fzero) != fl:
                xh, fh = xzero, fzero
            elif np.copysign(fh, fzero) != fh:
                xl, fl = xzero, fzero

            if abs(xh - xl) <= rtol:
                return RootResult(xzero, fzero, RootStatus.SUCCESS, iteration)

        return RootResult(
            xzero, fzero, RootStatus.MAX_ITERATIONS_REACHED, maxiter
        )
