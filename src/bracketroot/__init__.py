"""bracketroot: bracketed root finding for continuous scalar functions."""

from ._anderson_bjorck import AndersonBjorckSolver
from ._batched import BatchedRootResult, root_scalar_batched
from ._bdqrf import BdqrfSolver
from ._bisection import BisectionSolver
from ._brent import BrentSolver
from ._brenth import BrenthSolver
from ._brentq import BrentqSolver
from ._chandrupatla import ChandrupatlaSolver
from ._convergence import (
    DEFAULT_ATOL,
    DEFAULT_FTOL,
    DEFAULT_MAXITER,
    DEFAULT_RTOL,
    SolverOptions,
    default_tolerances,
    x_converged,
)
from ._exceptions import (
    BracketError,
    ConvergenceError,
    InvalidMethodError,
    RootFindingError,
    SingularityError,
)
from ._muller import MullerSolver
from ._pegasus import PegasusSolver
from ._result import RootResult, RootStatus
from ._ridders import RiddersSolver
from ._root_scalar import available_methods, get_solver, root_scalar
from ._solver import Bracket, RootFinder
from ._toms748 import Toms748Solver

__all__ = [
    "available_methods",
    "default_tolerances",
    "get_solver",
    "root_scalar",
    "root_scalar_batched",
    "x_converged",
    "AndersonBjorckSolver",
    "BatchedRootResult",
    "BdqrfSolver",
    "BisectionSolver",
    "Bracket",
    "BracketError",
    "BrenthSolver",
    "BrentqSolver",
    "BrentSolver",
    "ChandrupatlaSolver",
    "ConvergenceError",
    "DEFAULT_ATOL",
    "DEFAULT_FTOL",
    "DEFAULT_MAXITER",
    "DEFAULT_RTOL",
    "InvalidMethodError",
    "MullerSolver",
    "PegasusSolver",
    "RiddersSolver",
    "RootFinder",
    "RootFindingError",
    "RootResult",
    "RootStatus",
    "SingularityError",
    "SolverOptions",
    "Toms748Solver",
]

__version__ = "0.1.0"
