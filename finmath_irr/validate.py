# finmath_irr/validate.py
from __future__ import annotations

import json
import math
import os
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

import yaml

from .errors import InvalidInput
from .finance.daycount import parse_date

DOCUMENT_KEYS = {"cashflow", "precision", "name", "solver"}


def mode_from_env_or_flag(flag: str | None) -> str:
    if flag in ("strict", "relaxed"):
        return flag
    env = (os.environ.get("VALIDATION_MODE") or "").lower()
    return env if env in ("strict", "relaxed") else "relaxed"


def as_number(value: Any, what: str) -> float:
    """float(value) for ints, floats, Decimals and numeric strings; bools and None are rejected."""
    if value is None:
        raise InvalidInput(f"{what} is undefined")
    if isinstance(value, bool):
        raise InvalidInput(f"{what} is not a number [{value!r}]")
    try:
        num = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidInput(f"{what} is not a number [{value!r}]") from e
    if not math.isfinite(num):
        raise InvalidInput(f"{what} is not a finite number [{value!r}]")
    return num


def validate_precision(precision: Any) -> float:
    p = as_number(precision, "precision")
    if p <= 0:
        raise InvalidInput(f"precision must be > 0 [{precision!r}]")
    return p


def validate_cashflow(cashflow: Any) -> Dict[date, float]:
    """
    Check a date -> amount mapping and return it normalized:
      - at least two entries
      - keys: 'YYYY-MM-DD' strings or date objects, unique once parsed
      - values: finite numbers
    """
    if not isinstance(cashflow, Mapping):
        raise InvalidInput(f"cashflow must be a mapping of date -> amount, got {type(cashflow).__name__}")

    out: Dict[date, float] = {}
    for raw_date, amount in cashflow.items():
        if raw_date is None or amount is None:
            raise InvalidInput("the provided cashflow contains undefined values")
        d = parse_date(raw_date)
        if d in out:
            raise InvalidInput(f"duplicate date in the provided cashflow [{d.isoformat()}]")
        out[d] = as_number(amount, f"amount at date [{raw_date}]")

    if len(out) < 2:
        raise InvalidInput("the cashflow you provided is too small (at least 2 transactions needed)")
    return out


def validate_document(data: Any, *, mode: str = "relaxed") -> Dict[str, Any]:
    """
    A cash-flow document is a mapping with a 'cashflow' section and optional
    'precision', 'name' and 'solver' entries. Strict mode rejects unknown
    top-level keys.
    """
    if not isinstance(data, Mapping):
        raise InvalidInput("document must be a mapping")
    if "cashflow" not in data:
        raise InvalidInput("missing required keys: ['cashflow']")
    if mode == "strict":
        unknown = sorted(str(k) for k in data.keys() if k not in DOCUMENT_KEYS)
        if unknown:
            raise InvalidInput(f"unknown top-level keys (strict mode): {unknown}")

    doc: Dict[str, Any] = {"cashflow": validate_cashflow(data["cashflow"])}
    if "precision" in data:
        doc["precision"] = validate_precision(data["precision"])
    if data.get("name") is not None:
        doc["name"] = str(data["name"])
    solver = data.get("solver")
    if solver is not None and not isinstance(solver, Mapping):
        raise InvalidInput("'solver' must be a mapping")
    doc["solver"] = dict(solver or {})
    return doc


def load_document_from_file(path: Path) -> Dict[str, Any]:
    p = Path(path)
    if p.is_dir():
        raise InvalidInput(f"{p} is a directory (expected a file)")
    try:
        text = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidInput(f"{p}: not UTF-8 text: {e}") from e
    try:
        if p.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(text) or {}
        return json.loads(text or "{}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise InvalidInput(f"{p}: unreadable document: {e}") from e


def iter_input_files(p: Path) -> Iterable[Path]:
    if p.is_file():
        yield p
    elif p.is_dir():
        found: List[Path] = []
        for ext in ("*.yaml", "*.yml", "*.json"):
            found.extend(p.rglob(ext))
        yield from sorted(found)


def _main(argv: List[str] | None = None) -> int:
    import argparse
    parser = argparse.ArgumentParser(prog="finmath_irr.validate", add_help=True)
    parser.add_argument("paths", nargs="+", help="YAML/JSON cash-flow files or directories to validate")
    parser.add_argument("--mode", choices=["strict", "relaxed"], default=None, help="validation mode")
    args = parser.parse_args(argv)

    mode = mode_from_env_or_flag(args.mode)
    had_error = False

    for raw in args.paths:
        target = Path(raw)
        any_seen = False
        for f in iter_input_files(target):
            any_seen = True
            try:
                validate_document(load_document_from_file(f), mode=mode)
                print(f"OK: {f}")
            except InvalidInput as e:
                print(f"{f}: {e}", file=sys.stderr)
                had_error = True
        if not any_seen:
            print(f"{target}: no YAML/JSON files found", file=sys.stderr)
            had_error = True

    return 1 if had_error else 0


if __name__ == "__main__":
    raise SystemExit(_main())
