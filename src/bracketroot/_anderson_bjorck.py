"""Anderson-Bjorck root-finding method."""

from ._convergence import x_converged
from ._result import RootResult, RootStatus
from ._solver import Bracket, RootFinder, Steps


class AndersonBjorckSolver(RootFinder):
    """Regula falsi with Anderson-Bjorck damping.

    Each iteration takes a secant step. When the new point lands on the same
    side of the root as the most recent one, the retained endpoint's function
    value is scaled by ``g = 1 - f3 / f2`` (or ``0.5`` when ``g <= 0``) so the
    method can't stall on one side.

    References
    ----------
    G. E. Mullges and F. Uhlig, "Numerical Algorithms with Fortran",
    Springer, 1996. Section 2.8.2, p. 36.
    """

    name = "anderson_bjorck"

    def _iterate(self, bracket: Bracket) -> Steps:
        ftol, rtol, atol, maxiter = (
            self.options.ftol,
            self.options.rtol,
            self.options.atol,
            self.options.maxiter,
        )
        x1, x2, f1, f2 = bracket

        for iteration in range(1, maxiter + 1):
            slope = (f2 - f1) / (x2 - x1)
            x3 = x2 - f2 / slope
            f3 = yield x3
            if abs(f3) <= ftol:
                return RootResult(x3, f3, RootStatus.SUCCESS, iteration)

            if f2 * f3 < 0.0:
                # zero lies between x2 and x3
                x1, f1 = x2, f2
                x2, f2 = x3, f3
            else:
                g = 1.0 - f3 / f2
                if g <= 0.0:
                    g = 0.5
                x2 = x3
                f1 = g * f1
                f2 = f3

            if x_converged(x1, x2, rtol, atol):
                return RootResult(x2, f2, RootStatus.SUCCESS, iteration)

        return RootResult(x2, f2, RootStatus.MAX_ITERATIONS_REACHED, maxiter)
