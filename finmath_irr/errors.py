# finmath_irr/errors.py
"""
Caller-facing exceptions.

- InvalidInput    : malformed cash flow / precision / document. Never retried.
- NoSolutionFound : opt-in; the library itself reports "no IRR" as None.
- SolverFault     : a solver was driven outside its contract. Fatal.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class InvalidInput(ValueError):
    pass


class NoSolutionFound(RuntimeError):
    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        msg = "no IRR could be found for this cash flow"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class SolverFault(RuntimeError):
    """
    Raised when a solver fails in a way the fallback chain does not expect.
    Carries the arguments the solver was given so the fault can be reproduced.
    """

    def __init__(
        self,
        solver: str,
        arguments: Dict[str, Any],
        coefficients: Dict[float, float],
        cause: BaseException,
    ):
        self.solver = solver
        self.arguments = dict(arguments)
        self.coefficients = dict(coefficients)
        self.cause = cause
        super().__init__(
            f"BUG: {solver} failed unexpectedly with {type(cause).__name__}: {cause} "
            f"(arguments={self.arguments}, coefficients={self.coefficients})"
        )


__all__ = ["InvalidInput", "NoSolutionFound", "SolverFault"]
