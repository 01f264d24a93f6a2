# finmath_irr/config.py
from __future__ import annotations

import io
import math
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import InvalidInput

PRECISION_ENV = "XIRR_PRECISION"


@dataclass(frozen=True)
class SolverConfig:
    """
    Knobs of the XIRR pipeline.

    precision        : wanted accuracy on the IRR itself (0.001 = 0.1%)
    precision_scale  : factor turning it into an accuracy on x = 1/(1+IRR);
                       1/1000 keeps the IRR error bounded for IRRs up to ~1000%
    p0, p1           : secant seeds
    max_depth        : iteration cap for secant and Brent
    bracket_attempts : probe pairs tried when looking for a sign change
    """

    precision: float = 0.001
    precision_scale: float = 0.001
    p0: float = 0.5
    p1: float = 1.0
    max_depth: int = 50
    bracket_attempts: int = 1024

    @property
    def x_precision(self) -> float:
        return self.precision * self.precision_scale


_INT_KEYS = ("max_depth", "bracket_attempts")
_POSITIVE_KEYS = ("precision", "precision_scale")


def _coerce(key: str, value: Any) -> Any:
    if isinstance(value, bool) or value is None:
        raise InvalidInput(f"solver.{key} must be a number, got {value!r}")
    try:
        num = float(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidInput(f"solver.{key} must be a number, got {value!r}") from e
    if not math.isfinite(num):
        raise InvalidInput(f"solver.{key} must be finite, got {value!r}")
    if key in _POSITIVE_KEYS and num <= 0:
        raise InvalidInput(f"solver.{key} must be > 0, got {value!r}")
    if key in _INT_KEYS:
        if num != int(num) or num < 1:
            raise InvalidInput(f"solver.{key} must be a positive integer, got {value!r}")
        return int(num)
    return num


def config_from_dict(data: Optional[Mapping[str, Any]], base: Optional[SolverConfig] = None) -> SolverConfig:
    """
    Build a SolverConfig from a mapping. Settings may be top-level or grouped
    under 'solver'; grouped values win. Unknown keys are ignored. The
    secant seeds p0 and p1 must differ.
    """
    cfg = base or SolverConfig()
    if not data:
        return cfg
    known = {f.name for f in fields(SolverConfig)}
    flat: Dict[str, Any] = {k: v for k, v in data.items() if k in known}
    grouped = data.get("solver")
    if isinstance(grouped, Mapping):
        flat.update({k: v for k, v in grouped.items() if k in known})
    if not flat:
        return cfg
    out = replace(cfg, **{k: _coerce(k, v) for k, v in flat.items()})
    if out.p0 == out.p1:
        raise InvalidInput(f"solver.p0 and solver.p1 must differ, both are {out.p0!r}")
    return out


def default_config() -> SolverConfig:
    """Defaults, with XIRR_PRECISION from the environment when set."""
    env = os.environ.get(PRECISION_ENV)
    if env is None or not env.strip():
        return SolverConfig()
    return config_from_dict({"precision": env.strip()})


def load_solver_config(source: str | os.PathLike | io.StringIO) -> SolverConfig:
    """
    Load solver settings from a YAML path or text stream on top of
    default_config().
    """
    text: str
    if hasattr(source, "read"):
        text = str(source.read())
    else:
        p = os.fspath(source)
        with open(p, "r", encoding="utf-8") as f:
            text = f.read()

    try:
        cfg = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise InvalidInput(f"unreadable solver config: {e}") from e
    if not isinstance(cfg, dict):
        raise InvalidInput("solver config must be a mapping")
    return config_from_dict(cfg, base=default_config())


__all__ = ["SolverConfig", "PRECISION_ENV", "config_from_dict", "default_config", "load_solver_config"]
