from enum import IntEnum
from typing import NamedTuple

from ._exceptions import (
    BracketError,
    ConvergenceError,
    InvalidMethodError,
    SingularityError,
)


class RootStatus(IntEnum):
    """Outcome of a root solve. Values match the classic integer flags."""

    SUCCESS = 0
    NO_SIGN_CHANGE = -1
    MAX_ITERATIONS_REACHED = -2
    SINGULARITY = -3
    DEGENERATE_INTERVAL = -4
    INVALID_METHOD = -999


_ERRORS = {
    RootStatus.NO_SIGN_CHANGE: (
        BracketError,
        "f(ax) and f(bx) do not have opposite signs",
    ),
    RootStatus.DEGENERATE_INTERVAL: (
        BracketError,
        "ax must be different from bx",
    ),
    RootStatus.MAX_ITERATIONS_REACHED: (
        ConvergenceError,
        "maximum number of iterations reached",
    ),
    RootStatus.SINGULARITY: (
        SingularityError,
        "numerical singularity, the algorithm can't proceed",
    ),
    RootStatus.INVALID_METHOD: (InvalidMethodError, "invalid method"),
}


class RootResult(NamedTuple):
    """Result of a bracketed root solve.

    Parameters
    ----------
    xzero : float
        Abscissa of the accepted root, or the best estimate on failure.
    fzero : float
        ``f(xzero)``.
    status : RootStatus
        Outcome code.
    num_iterations : int
        Number of completed refinement iterations.
    num_function_calls : int
        Number of evaluations of ``f``, endpoints included.
    """

    xzero: float
    fzero: float
    status: RootStatus
    num_iterations: int = 0
    num_function_calls: int = 0

    @property
    def converged(self) -> bool:
        return self.status == RootStatus.SUCCESS

    def raise_for_status(self) -> "RootResult":
        """Raise the matching :class:`RootFindingError` unless successful.

        Returns
        -------
        RootResult
            ``self``, when the status is ``SUCCESS``.
        """
        if self.status == RootStatus.SUCCESS:
            return self
        error, message = _ERRORS[RootStatus(self.status)]
        raise error(
            f"{message} (xzero={self.xzero!r}, fzero={self.fzero!r}, "
            f"iterations={self.num_iterations})",
            result=self,
        )
