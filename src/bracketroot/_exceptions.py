"""Exception classes for root finding module."""


class RootFindingError(Exception):
    """Base exception for root finding errors.

    Parameters
    ----------
    message : str
        Human readable description.
    result : RootResult, optional
        The result that triggered the error, when there is one.
    """

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result


class BracketError(RootFindingError):
    """Raised when the interval is degenerate or doesn't contain a sign change."""

    pass


class ConvergenceError(RootFindingError):
    """Raised when the iteration cap is exhausted before convergence."""

    pass


class SingularityError(RootFindingError):
    """Raised when an algorithm hits a numerical degeneracy it can't step past."""

    pass


class InvalidMethodError(RootFindingError, ValueError):
    """Raised when a method identifier is not recognised."""

    pass
