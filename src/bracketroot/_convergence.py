"""Tolerances and convergence utilities for root finding."""

import math
from dataclasses import dataclass, fields
from typing import Optional

import torch

DEFAULT_FTOL = 0.0
DEFAULT_RTOL = 1.0e-6
DEFAULT_ATOL = 1.0e-12
DEFAULT_MAXITER = 2000


@dataclass(frozen=True)
class SolverOptions:
    """Per-solve configuration shared by every algorithm.

    Negative values are made non-negative on construction.

    Attributes
    ----------
    ftol : float
        Absolute tolerance on ``|f(x)|``. A point with ``|f| <= ftol`` is a root.
    rtol : float
        Relative tolerance on ``x``.
    atol : float
        Absolute tolerance on ``x``. Not used by every method.
    maxiter : int
        Maximum number of iterations.
    """

    ftol: float = DEFAULT_FTOL
    rtol: float = DEFAULT_RTOL
    atol: float = DEFAULT_ATOL
    maxiter: int = DEFAULT_MAXITER

    def __post_init__(self):
        for field in fields(self):
            value = getattr(self, field.name)
            if field.name == "maxiter":
                if isinstance(value, bool) or int(value) != value:
                    raise ValueError(
                        f"maxiter must be an integer, got {value!r}"
                    )
                value = abs(int(value))
                if value < 1:
                    raise ValueError("maxiter must be at least 1")
            else:
                value = abs(float(value))
                if not math.isfinite(value):
                    raise ValueError(
                        f"{field.name} must be finite, got {value}"
                    )
            object.__setattr__(self, field.name, value)

    @classmethod
    def from_overrides(
        cls,
        ftol: Optional[float] = None,
        rtol: Optional[float] = None,
        atol: Optional[float] = None,
        maxiter: Optional[int] = None,
        defaults: Optional["SolverOptions"] = None,
    ) -> "SolverOptions":
        """Build options, replacing ``defaults`` only where a value is given."""
        if defaults is None:
            defaults = cls()
        return cls(
            ftol=defaults.ftol if ftol is None else ftol,
            rtol=defaults.rtol if rtol is None else rtol,
            atol=defaults.atol if atol is None else atol,
            maxiter=defaults.maxiter if maxiter is None else maxiter,
        )


def default_tolerances(dtype: torch.dtype) -> SolverOptions:
    """Return dtype-appropriate default options.

    Parameters
    ----------
    dtype : torch.dtype
        The dtype ``f`` is evaluated in.

    Returns
    -------
    SolverOptions
        Module defaults for float64, looser tolerances for lower precisions.
    """
    if dtype in (torch.float16, torch.bfloat16):
        return SolverOptions(ftol=1e-3, rtol=1e-2, atol=1e-3)
    elif dtype == torch.float32:
        return SolverOptions(ftol=1e-6, rtol=1e-5, atol=1e-6)
    else:  # float64 and others
        return SolverOptions()


def x_converged(x1, x2, rtol: float, atol: float) -> bool:
    """Mixed interval test ``|x2 - x1| <= |x2| * rtol + atol``."""
    return abs(x2 - x1) <= abs(x2) * rtol + atol
