# finmath_irr/finance/polynomial.py
"""
Present value of a dated cash flow as a function of the discount factor:

    f(x) = sum_i a_i * x ** t_i        with x = 1 / (1 + IRR)

t_i are year offsets (days / 365), so exponents are fractional in general and
this is not a polynomial in the usual sense. The object also remembers the
first point seen with f > 0 (xpos) and with f < 0 (xneg); the root finders
and the bracket search share that history.
"""
from __future__ import annotations

import math
from typing import Dict, List, Mapping, Optional, Tuple

import numpy as np

from .outcomes import NotANumber


class PresentValueFunction:
    def __init__(self, coefficients: Mapping[float, float]):
        self._coefficients: Dict[float, float] = {float(t): float(a) for t, a in coefficients.items()}
        # zero amounts contribute nothing and would turn 0 * inf into nan
        terms = [(t, a) for t, a in sorted(self._coefficients.items()) if a != 0.0]
        self._offsets = np.array([t for t, _ in terms], dtype=float)
        self._amounts = np.array([a for _, a in terms], dtype=float)
        self._fractional = bool(np.any(self._offsets != np.floor(self._offsets)))
        self._xpos: Optional[float] = None
        self._xneg: Optional[float] = None
        self.evaluations = 0

    # ---------- evaluation ----------
    def evaluate(self, x: float) -> float:
        """
        Sum of a_i * x ** t_i. Raises NotANumber when the value is undefined
        (negative x with a fractional exponent) or overflows.
        """
        x = float(x)
        self.evaluations += 1
        if math.isnan(x):
            raise NotANumber("cannot evaluate at x=nan")
        if x < 0.0 and self._fractional:
            raise NotANumber(f"fractional power of negative x={x!r}")

        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            value = float(np.dot(self._amounts, np.power(x, self._offsets)))
        if not math.isfinite(value):
            raise NotANumber(f"f({x!r}) is not a finite number")

        # first found wins
        if value > 0.0 and self._xpos is None:
            self._xpos = x
        elif value < 0.0 and self._xneg is None:
            self._xneg = x
        return value

    __call__ = evaluate

    # ---------- sign history ----------
    @property
    def xpos(self) -> Optional[float]:
        return self._xpos

    @property
    def xneg(self) -> Optional[float]:
        return self._xneg

    def has_bracket(self) -> bool:
        return self._xpos is not None and self._xneg is not None

    # ---------- introspection ----------
    @property
    def coefficients(self) -> Dict[float, float]:
        return dict(self._coefficients)

    @property
    def degree(self) -> float:
        return max(self._coefficients) if self._coefficients else 0.0

    def terms(self) -> List[Tuple[float, float]]:
        return sorted(self._coefficients.items())

    def residual_tolerance(self, precision: float) -> float:
        """
        Largest |f(x)| accepted at a candidate root: `precision` times the
        gross amount of the flow (sum |a_i|, at least 1).
        """
        scale = float(np.abs(self._amounts).sum()) if self._amounts.size else 0.0
        return float(precision) * max(scale, 1.0)

    def __repr__(self) -> str:
        return f"PresentValueFunction({self.terms()!r}, xpos={self._xpos!r}, xneg={self._xneg!r})"


__all__ = ["PresentValueFunction"]
