"""Brent's method with hyperbolic extrapolation (brenth)."""

from ._brentq import BrentqSolver


class BrenthSolver(BrentqSolver):
    """Brent's method, SciPy ``brenth`` formulation.

    Identical to :class:`BrentqSolver` except that the extrapolation step
    fits a hyperbola instead of an inverse quadratic:

    .. math::

        s = -f_{cur} \\frac{f_{blk} - f_{pre}}
        {f_{blk} d_{pre} - f_{pre} d_{blk}}

    References
    ----------
    SciPy ``brenth.c``. Bus and Dekker, "Two efficient algorithms with
    guaranteed convergence for finding a zero of a function", ACM
    Transactions on Mathematical Software, Vol. 1, 1975.
    """

    name = "brenth"

    @staticmethod
    def _extrapolate(fcur, fpre, fblk, dpre, dblk):
        """Hyperbolic extrapolation step."""
        return -fcur * (fblk - fpre) / (fblk * dpre - fpre * dblk)
