# finmath_irr/finance/daycount.py
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Dict, Mapping

from finmath_irr.errors import InvalidInput

DAYS_PER_YEAR = 365.0

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(value: Any) -> date:
    """Accept a date/datetime or a 'YYYY-MM-DD' string that names a real calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise InvalidInput(f"invalid date in the provided cashflow [{value}]")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidInput(f"invalid date in the provided cashflow [{value}]: {e}") from e


def elapsed_days(start: date, end: date) -> int:
    """Signed day count end - start (proleptic Gregorian)."""
    return (end - start).days


def year_offsets(cashflow: Mapping[date, float]) -> Dict[float, float]:
    """
    Re-key a dated cash flow by years elapsed since its earliest date:
        t_i = elapsed_days(anchor, d_i) / 365
    Dates are unique, so offsets are too.
    """
    if not cashflow:
        return {}
    anchor = min(cashflow)
    return {elapsed_days(anchor, d) / DAYS_PER_YEAR: float(a) for d, a in cashflow.items()}


__all__ = ["DAYS_PER_YEAR", "parse_date", "elapsed_days", "year_offsets"]
