"""Pegasus root-finding method."""

from ._convergence import x_converged
from ._result import RootResult, RootStatus
from ._solver import Bracket, RootFinder, Steps


class PegasusSolver(RootFinder):
    """Pegasus variant of regula falsi.

    Like :class:`AndersonBjorckSolver` but, when the secant point keeps the
    same sign, the other retained value is damped with
    ``f1 * f2 / (f2 + f3)``.

    References
    ----------
    G. E. Mullges and F. Uhlig, "Numerical Algorithms with Fortran",
    Springer, 1996. Section 2.8.2, p. 35.
    """

    name = "pegasus"

    def _iterate(self, bracket: Bracket) -> Steps:
        ftol = self.options.ftol
        rtol = self.options.rtol
        atol = self.options.atol
        maxiter = self.options.maxiter
        x1, x2, f1, f2 = bracket

        for iteration in range(1, maxiter + 1):
            slope = (f2 - f1) / (x2 - x1)
            x3 = x2 - f2 / slope
            f3 = yield x3
            if abs(f3) <= ftol:
                return RootResult(x3, f3, RootStatus.SUCCESS, iteration)

            if f2 * f3 <= 0.0:
                x1, f1 = x2, f2
            else:
                f1 = f1 * f2 / (f2 + f3)
            x2, f2 = x3, f3

            if x_converged(x1, x2, rtol, atol):
                return RootResult(x2, f2, RootStatus.SUCCESS, iteration)

        return RootResult(x2, f2, RootStatus.MAX_ITERATIONS_REACHED, maxiter)
