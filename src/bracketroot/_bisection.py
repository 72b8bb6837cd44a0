"""Bisection root-finding method."""

from ._convergence import x_converged
from ._result import RootResult, RootStatus
from ._solver import Bracket, RootFinder, Steps


class BisectionSolver(RootFinder):
    """Classic bisection.

    Halves the inclusion interval every iteration. Converges when
    ``|x2 - x1| <= |x2| * rtol + atol`` or when a midpoint has
    ``|f| <= ftol``.

    References
    ----------
    G. E. Mullges and F. Uhlig, "Numerical Algorithms with Fortran",
    Springer, 1996. Section 2.8.1, pp. 32-34.
    """

    name = "bisection"

    def _iterate(self, bracket: Bracket) -> Steps:
        options = self.options
        x1, x2, f1, f2 = bracket

        for iteration in range(1, options.maxiter + 1):
            # x1------x3------x2
            x3 = x2 + (x1 - x2) / 2.0
            f3 = yield x3
            if abs(f3) <= options.ftol:
                return RootResult(x3, f3, RootStatus.SUCCESS, iteration)

            if f2 * f3 < 0.0:
                # root lies between x2 and x3
                x1, f1 = x3, f3
            else:
                x2, f2 = x3, f3

            if x_converged(x1, x2, options.rtol, options.atol):
                return RootResult(x2, f2, RootStatus.SUCCESS, iteration)

        return RootResult(
            x2, f2, RootStatus.MAX_ITERATIONS_REACHED, options.maxiter
        )
