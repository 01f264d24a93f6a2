# finmath_irr/finance/bracket.py
from __future__ import annotations

import logging
from typing import Optional, Tuple

from .outcomes import NotANumber
from .polynomial import PresentValueFunction

logger = logging.getLogger(__name__)

DEFAULT_ATTEMPTS = 1024


def probe_points(i: int) -> Tuple[float, float]:
    """i-th pair of probes: i itself, and -1 + 10/(i+9) which tends to -1."""
    return float(i), -1.0 + 10.0 / (i + 9)


def find_bracket(
    f: PresentValueFunction, attempts: int = DEFAULT_ATTEMPTS
) -> Optional[Tuple[float, float]]:
    """
    Probe f until it has been seen both negative and positive.
    Returns (xneg, xpos), or None when the probe budget runs out; that is a
    normal outcome for flows with no real root in reach.
    """
    i = 1
    while not f.has_bracket() and i <= attempts:
        for x in probe_points(i):
            try:
                f(x)
            except NotANumber:
                # undefined here; keep probing elsewhere
                continue
        i += 1

    if not f.has_bracket():
        logger.debug("no bracket after %d probe pairs (xneg=%r, xpos=%r)", i - 1, f.xneg, f.xpos)
        return None
    logger.debug("bracket found after %d probe pairs: xneg=%r xpos=%r", i - 1, f.xneg, f.xpos)
    return f.xneg, f.xpos


__all__ = ["find_bracket", "probe_points", "DEFAULT_ATTEMPTS"]
