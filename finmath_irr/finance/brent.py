# finmath_irr/finance/brent.py
"""
Brent's method on a sign-changing bracket.

Zeroin formulation: b is the best estimate, c the opposite end of the
bracket, a the previous b. Each step tries inverse quadratic interpolation
(or a secant step when only two distinct points are known) and falls back to
bisection when the interpolated step is unsafe or the steps stop shrinking.
The root always stays between b and c.
"""
from __future__ import annotations

import math
import sys
from typing import Callable, Optional

from .outcomes import InvalidSolverArgument, MaxDepthExceeded, NoRootInBracket, NotARoot

DEFAULT_MAX_DEPTH = 50

_EPS = sys.float_info.epsilon


def _check_arguments(a: float, b: float, precision: float, max_depth: int) -> None:
    if not (isinstance(precision, (int, float)) and math.isfinite(precision) and precision > 0):
        raise InvalidSolverArgument(f"precision must be a positive number, got {precision!r}")
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise InvalidSolverArgument(f"max_depth must be a positive integer, got {max_depth!r}")
    for name, p in (("a", a), ("b", b)):
        if not (isinstance(p, (int, float)) and math.isfinite(p)):
            raise InvalidSolverArgument(f"{name} must be a finite number, got {p!r}")
    if a == b:
        raise InvalidSolverArgument(f"bracket is empty: a == b == {a!r}")


def _same_sign(u: float, v: float) -> bool:
    return (u > 0.0 and v > 0.0) or (u < 0.0 and v < 0.0)


def brent(
    f: Callable[[float], float],
    a: float,
    b: float,
    *,
    precision: float,
    max_depth: int = DEFAULT_MAX_DEPTH,
    tolerance: Optional[float] = None,
) -> float:
    """
    Returns x with the bracket around it narrowed to about `precision`, and
    |f(x)| <= tolerance (defaults to `precision`).

    Raises NoRootInBracket if f(a) and f(b) share a sign, MaxDepthExceeded,
    NotANumber (from f), NotARoot, or InvalidSolverArgument.
    """
    _check_arguments(a, b, precision, max_depth)
    tol = precision if tolerance is None else float(tolerance)

    a, b = float(a), float(b)
    fa = f(a)
    fb = f(b)
    if fa == 0.0:
        return a
    if fb == 0.0:
        return b
    if _same_sign(fa, fb):
        raise NoRootInBracket(f"f({a!r})={fa!r} and f({b!r})={fb!r} have the same sign")

    c, fc = b, fb
    d = e = b - a

    for _ in range(max_depth):
        if _same_sign(fb, fc):
            c, fc = a, fa
            d = e = b - a
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb

        tol1 = 2.0 * _EPS * abs(b) + 0.5 * precision
        xm = 0.5 * (c - b)
        if fb == 0.0 or abs(xm) <= tol1:
            if abs(fb) > tol:
                raise NotARoot(f"brent narrowed to x={b!r} but f(x)={fb!r}")
            return b

        if abs(e) >= tol1 and abs(fa) > abs(fb):
            s = fb / fa
            if a == c:
                # secant
                p = 2.0 * xm * s
                q = 1.0 - s
            else:
                # inverse quadratic interpolation
                q = fa / fc
                r = fb / fc
                p = s * (2.0 * xm * q * (q - r) - (b - a) * (r - 1.0))
                q = (q - 1.0) * (r - 1.0) * (s - 1.0)
            if p > 0.0:
                q = -q
            p = abs(p)
            if 2.0 * p < min(3.0 * xm * q - abs(tol1 * q), abs(e * q)):
                e, d = d, p / q
            else:
                d = e = xm
        else:
            d = e = xm

        a, fa = b, fb
        b += d if abs(d) > tol1 else math.copysign(tol1, xm)
        fb = f(b)

    raise MaxDepthExceeded(f"brent did not converge in {max_depth} iterations (bracket [{b!r}, {c!r}])")


__all__ = ["brent", "DEFAULT_MAX_DEPTH"]
