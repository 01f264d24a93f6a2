# finmath_irr/finance/secant.py
from __future__ import annotations

import math
from typing import Callable, Optional

from .outcomes import DivideByZero, InvalidSolverArgument, MaxDepthExceeded, NotANumber, NotARoot

DEFAULT_P0 = 0.5
DEFAULT_P1 = 1.0
DEFAULT_MAX_DEPTH = 50


def _check_arguments(p0: float, p1: float, precision: float, max_depth: int) -> None:
    if not (isinstance(precision, (int, float)) and math.isfinite(precision) and precision > 0):
        raise InvalidSolverArgument(f"precision must be a positive number, got {precision!r}")
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise InvalidSolverArgument(f"max_depth must be a positive integer, got {max_depth!r}")
    for name, p in (("p0", p0), ("p1", p1)):
        if not (isinstance(p, (int, float)) and math.isfinite(p)):
            raise InvalidSolverArgument(f"{name} must be a finite number, got {p!r}")
    if p0 == p1:
        raise InvalidSolverArgument(f"p0 and p1 must differ, both are {p0!r}")


def secant(
    f: Callable[[float], float],
    p0: float = DEFAULT_P0,
    p1: float = DEFAULT_P1,
    *,
    precision: float,
    max_depth: int = DEFAULT_MAX_DEPTH,
    tolerance: Optional[float] = None,
) -> float:
    """
    Secant iteration, no bracket needed:
        x[n+1] = x[n] - f(x[n]) * (x[n] - x[n-1]) / (f(x[n]) - f(x[n-1]))

    Stops when two iterates are within `precision` of each other (or f hits
    exactly 0). The candidate is then checked: |f| must not exceed
    `tolerance` (defaults to `precision`), else NotARoot.

    Raises DivideByZero, MaxDepthExceeded, NotANumber, NotARoot, or
    InvalidSolverArgument for a malformed call.
    """
    _check_arguments(p0, p1, precision, max_depth)
    tol = precision if tolerance is None else float(tolerance)

    p0, p1 = float(p0), float(p1)
    q0 = f(p0)
    q1 = f(p1)
    if q0 == 0.0:
        return p0
    if q1 == 0.0:
        return p1

    for _ in range(max_depth):
        if q1 == q0:
            raise DivideByZero(f"f({p0!r}) == f({p1!r}) == {q1!r}")
        p = p1 - q1 * (p1 - p0) / (q1 - q0)
        if not math.isfinite(p):
            raise NotANumber(f"secant step produced {p!r}")
        q = f(p)
        if q == 0.0 or abs(p - p1) <= precision:
            if abs(q) > tol:
                raise NotARoot(f"secant converged to x={p!r} but f(x)={q!r}")
            return p
        p0, q0 = p1, q1
        p1, q1 = p, q

    raise MaxDepthExceeded(f"secant did not converge in {max_depth} iterations (last x={p1!r})")


__all__ = ["secant", "DEFAULT_P0", "DEFAULT_P1", "DEFAULT_MAX_DEPTH"]
