# finmath_irr/finance/outcomes.py
"""
Failure outcomes of the root finders.

A successful solve simply returns the root (a float). Every other outcome is
one of the exceptions below, so callers can pick the subset they consider a
normal numerical failure and let the rest escalate.
"""
from __future__ import annotations


class SolverError(ArithmeticError):
    """Base class for every non-root outcome of a solver."""


class NotANumber(SolverError):
    """An evaluation (or an iterate) was undefined, e.g. (-0.5) ** 0.25."""


class DivideByZero(SolverError):
    """Secant step with f(x_n) == f(x_n-1)."""


class MaxDepthExceeded(SolverError):
    """Iteration budget spent before reaching the precision target."""


class NotARoot(SolverError):
    """Iterates converged, but the residual at the candidate is not ~0."""


class NoRootInBracket(SolverError):
    """Bracket endpoints do not have opposite signs."""


class InvalidSolverArgument(SolverError):
    """Solver called with arguments outside its contract."""


__all__ = [
    "SolverError",
    "NotANumber",
    "DivideByZero",
    "MaxDepthExceeded",
    "NotARoot",
    "NoRootInBracket",
    "InvalidSolverArgument",
]
