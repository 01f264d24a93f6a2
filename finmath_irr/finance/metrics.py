"""
Finance metrics façade.

Design:
- IRR/NPV implementations live only in finmath_irr.finance.irr (singleton).
- This module must not *define* irr/npv (no 'def irr' / 'def npv' here).
- It re-exports the public entry points used by callers and tests.
"""
from .irr import IrrResult as IrrResult
from .irr import irr as irr
from .irr import npv as npv
from .irr import solve_irr as solve_irr
from .irr import xirr as xirr
from .irr import xnpv as xnpv  # re-exports only

__all__ = ["IrrResult", "irr", "npv", "solve_irr", "xirr", "xnpv"]
