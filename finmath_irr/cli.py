# finmath_irr/cli.py
from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from .config import default_config, load_solver_config
from .errors import InvalidInput, SolverFault
from .runner import ROW_KEYS, run_paths, write_rows

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID = 2
EXIT_NO_IRR = 3


def parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="finmath_irr",
        description="Internal rate of return (XIRR) of dated cash flows",
    )
    p.add_argument(
        "paths",
        nargs="+",
        help="YAML/JSON cash-flow documents, or directories holding them.",
    )
    p.add_argument(
        "--precision",
        type=float,
        default=None,
        help="Wanted precision on the IRR (default: document value, else $XIRR_PRECISION, else 0.001).",
    )
    p.add_argument(
        "--config",
        default=None,
        help="YAML file with solver settings (precision, max_depth, bracket_attempts, ...).",
    )
    p.add_argument(
        "--format",
        dest="fmt",
        default="text",
        choices=["text", "json", "jsonl", "csv"],
        help="Output format (default: text).",
    )
    p.add_argument(
        "--out",
        default=None,
        help="Write results to this file instead of stdout (json/jsonl/csv only).",
    )
    p.add_argument(
        "--require-irr",
        action="store_true",
        help="Exit with status 3 if any cash flow has no IRR.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log solver progress to stderr.")
    v = p.add_mutually_exclusive_group()
    v.add_argument(
        "--strict",
        action="store_true",
        help="Enable strict validation (unknown top-level keys raise).",
    )
    v.add_argument(
        "--relaxed",
        action="store_true",
        help="Enable relaxed validation (unknown top-level keys ignored).",
    )
    return p.parse_args(argv)


def _validation_mode(ns: argparse.Namespace) -> str | None:
    # flags override $VALIDATION_MODE
    if ns.strict:
        return "strict"
    if ns.relaxed:
        return "relaxed"
    return None


def _format_text(row: Dict[str, Any]) -> str:
    if row["status"] == "invalid":
        return f"{row['name']}: INVALID ({row['error']})"
    if row["irr"] is None:
        return f"{row['name']}: no IRR found ({row['reason']})"
    return f"{row['name']}: {row['irr_pct']:.4f}% ({row['method']})"


def _emit(rows: List[Dict[str, Any]], fmt: str, out: str | None) -> None:
    if out:
        write_rows(rows, Path(out), "json" if fmt == "text" else fmt)
        return
    if fmt == "text":
        for row in rows:
            print(_format_text(row))
    elif fmt == "json":
        print(json.dumps(rows, indent=2))
    elif fmt == "jsonl":
        for row in rows:
            print(json.dumps(row))
    else:
        w = csv.DictWriter(sys.stdout, fieldnames=list(ROW_KEYS))
        w.writeheader()
        w.writerows(rows)


def main(argv: list[str] | None = None) -> int:
    ns = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_solver_config(ns.config) if ns.config else default_config()
        rows = run_paths(ns.paths, precision=ns.precision, mode=_validation_mode(ns), config=cfg)
    except InvalidInput as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID
    except SolverFault as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR

    _emit(rows, ns.fmt, ns.out)

    if any(r["status"] == "invalid" for r in rows):
        return EXIT_INVALID
    if ns.require_irr and any(r["irr"] is None for r in rows):
        return EXIT_NO_IRR
    return EXIT_OK


__all__ = ["main", "parse_args"]
