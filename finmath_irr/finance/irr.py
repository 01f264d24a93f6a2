# finmath_irr/finance/irr.py
"""
IRR / NPV entry points. The only module that defines them.

Dated flows (XIRR) are solved on x = 1/(1+IRR):

    f(x) = sum_i a_i * x ** (days_i / 365)

1. secant from (0.5, 1.0)
2. on an expected secant failure, probe for a sign change
3. Brent on that bracket
Any other solver failure is a bug and surfaces as SolverFault.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple, Type

import numpy_financial as npf

from ..config import SolverConfig, default_config
from ..errors import InvalidInput, NoSolutionFound, SolverFault
from ..validate import as_number, validate_cashflow, validate_precision
from .bracket import find_bracket
from .brent import brent
from .daycount import year_offsets
from .outcomes import DivideByZero, MaxDepthExceeded, NotANumber, NotARoot, SolverError
from .polynomial import PresentValueFunction
from .secant import secant

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 0.001

# precision left out: take it from the config (XIRR_PRECISION, else DEFAULT_PRECISION)
_FROM_CONFIG: Any = object()

SUCCESS = "success"
NO_SOLUTION = "no_solution"

NO_BRACKET = "no_bracket"
BRENT_FAILED = "brent_failed"
INFINITE_IRR = "infinite_irr"

EXPECTED_SECANT_FAILURES: Tuple[Type[SolverError], ...] = (NotANumber, DivideByZero, MaxDepthExceeded, NotARoot)
EXPECTED_BRENT_FAILURES: Tuple[Type[SolverError], ...] = (NotANumber, MaxDepthExceeded, NotARoot)


@dataclass(frozen=True)
class IrrResult:
    irr: Optional[float]
    status: str
    reason: Optional[str] = None
    method: Optional[str] = None
    root: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS


# ---------- NPV ----------
def npv(rate: float, cashflows: Iterable[float]) -> float:
    """
    Classic discounted cash flow:
        NPV(r) = sum_{t=0..N} CF[t] / (1+r)^t
    """
    r = as_number(rate, "rate")
    if r <= -1.0:
        raise InvalidInput(f"rate must be > -1 [{rate!r}]")
    total = 0.0
    for t, cf in enumerate(cashflows):
        total += as_number(cf, f"cashflow[{t}]") / ((1.0 + r) ** t)
    return total


def xnpv(rate: float, cashflow: Mapping[Any, Any]) -> float:
    """
    Dated NPV on the same 365-day year as xirr:
        XNPV(r) = sum_i a_i / (1+r)^(t_i)
    """
    r = as_number(rate, "rate")
    if r <= -1.0:
        raise InvalidInput(f"rate must be > -1 [{rate!r}]")
    f = PresentValueFunction(year_offsets(validate_cashflow(cashflow)))
    return f(1.0 / (1.0 + r))


# ---------- IRR (periodic) ----------
def irr(cashflows: Iterable[float]) -> Optional[float]:
    """
    Periodic IRR via numpy-financial. Returns a decimal rate (0.18 = 18%),
    0.0 for an all-zero series, None when there is no real solution.
    """
    cfs = [as_number(x, f"cashflow[{t}]") for t, x in enumerate(cashflows)]
    if len(cfs) < 2:
        raise InvalidInput("the cashflow you provided is too small (at least 2 periods needed)")
    if all(cf == 0.0 for cf in cfs):
        return 0.0
    val = float(npf.irr(cfs))
    if val != val:  # NaN: not bracketed
        return None
    return val


# ---------- IRR (dated) ----------
def _attempt(
    name: str,
    solver: Callable[..., float],
    f: PresentValueFunction,
    expected: Tuple[Type[SolverError], ...],
    **kwargs: Any,
) -> float:
    """Run one solver; let expected failures through, escalate the rest."""
    try:
        return solver(f, **kwargs)
    except expected:
        raise
    except SolverError as e:
        raise SolverFault(name, kwargs, f.coefficients, e) from e


def _from_root(root: float, method: str) -> IrrResult:
    if root == 0.0:
        # 1/x undefined: infinite IRR
        logger.debug("%s found x=0; no finite IRR", method)
        return IrrResult(None, NO_SOLUTION, reason=INFINITE_IRR, method=method, root=root)
    return IrrResult(1.0 / root - 1.0, SUCCESS, method=method, root=root)


def solve_irr(
    cashflow: Mapping[Any, Any],
    precision: Any = _FROM_CONFIG,
    *,
    config: Optional[SolverConfig] = None,
) -> IrrResult:
    """
    Internal rate of return of a dated cash flow ({'YYYY-MM-DD': amount}),
    with the outcome spelled out (status, reason, method).

    Without an explicit `precision` the config's is used; with no config
    either, default_config() applies ($XIRR_PRECISION, else 0.001).

    Raises InvalidInput for malformed input and SolverFault for solver
    misuse; "no IRR found" is a normal result, not an exception.
    """
    flow = validate_cashflow(cashflow)
    cfg = config or default_config()
    if precision is not _FROM_CONFIG:
        cfg = replace(cfg, precision=validate_precision(precision))

    if all(a == 0.0 for a in flow.values()):
        return IrrResult(0.0, SUCCESS, method="zero_flow")

    f = PresentValueFunction(year_offsets(flow))
    x_precision = cfg.x_precision
    tolerance = f.residual_tolerance(cfg.precision)

    try:
        root = _attempt(
            "secant", secant, f, EXPECTED_SECANT_FAILURES,
            p0=cfg.p0, p1=cfg.p1, precision=x_precision, max_depth=cfg.max_depth, tolerance=tolerance,
        )
        return _from_root(root, "secant")
    except EXPECTED_SECANT_FAILURES as e:
        logger.debug("secant failed (%s: %s); looking for a bracket", type(e).__name__, e)

    bracket = find_bracket(f, cfg.bracket_attempts)
    if bracket is None:
        return IrrResult(None, NO_SOLUTION, reason=NO_BRACKET)

    xneg, xpos = bracket
    try:
        root = _attempt(
            "brent", brent, f, EXPECTED_BRENT_FAILURES,
            a=xneg, b=xpos, precision=x_precision, max_depth=cfg.max_depth, tolerance=tolerance,
        )
    except EXPECTED_BRENT_FAILURES as e:
        logger.debug("brent failed on [%r, %r] (%s: %s)", xneg, xpos, type(e).__name__, e)
        return IrrResult(None, NO_SOLUTION, reason=BRENT_FAILED)
    return _from_root(root, "brent")


def xirr(
    cashflow: Mapping[Any, Any],
    precision: Any = _FROM_CONFIG,
    *,
    config: Optional[SolverConfig] = None,
) -> Optional[float]:
    """
    IRR of a dated cash flow as a decimal (0.12 = 12%), within `precision`
    of the exact value, or None when no IRR could be found.
    """
    return solve_irr(cashflow, precision, config=config).irr


compute_irr = xirr


def require_irr(
    cashflow: Mapping[Any, Any],
    precision: Any = _FROM_CONFIG,
    *,
    config: Optional[SolverConfig] = None,
) -> float:
    """Like xirr, but raises NoSolutionFound instead of returning None."""
    res = solve_irr(cashflow, precision, config=config)
    if res.irr is None:
        raise NoSolutionFound(res.reason)
    return res.irr


__all__ = [
    "IrrResult",
    "DEFAULT_PRECISION",
    "EXPECTED_SECANT_FAILURES",
    "EXPECTED_BRENT_FAILURES",
    "npv",
    "xnpv",
    "irr",
    "solve_irr",
    "xirr",
    "compute_irr",
    "require_irr",
]
