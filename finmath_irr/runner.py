# finmath_irr/runner.py
from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .config import SolverConfig, config_from_dict, default_config
from .errors import InvalidInput
from .finance.irr import solve_irr
from .validate import (
    iter_input_files,
    load_document_from_file,
    mode_from_env_or_flag,
    validate_document,
    validate_precision,
)

logger = logging.getLogger(__name__)

ROW_KEYS = ("name", "path", "entries", "irr", "irr_pct", "status", "reason", "method", "error")


def _row(path: Path, **values: Any) -> Dict[str, Any]:
    row: Dict[str, Any] = {k: None for k in ROW_KEYS}
    row["name"] = path.stem
    row["path"] = str(path)
    row.update(values)
    return row


def run_file(
    path: str | Path,
    *,
    precision: Optional[float] = None,
    mode: str = "relaxed",
    config: Optional[SolverConfig] = None,
) -> Dict[str, Any]:
    """
    Solve one cash-flow document. Invalid documents give a row with
    status 'invalid'; solver faults propagate.

    Precision: explicit argument, else the document's, else config.precision.
    """
    p = Path(path)
    base = config or default_config()
    try:
        doc = validate_document(load_document_from_file(p), mode=mode)
        cfg = config_from_dict(doc["solver"], base=base)
        prec = validate_precision(precision) if precision is not None else doc.get("precision", cfg.precision)
    except InvalidInput as e:
        logger.warning("%s: %s", p, e)
        return _row(p, status="invalid", error=str(e))

    res = solve_irr(doc["cashflow"], prec, config=cfg)
    return _row(
        p,
        name=doc.get("name", p.stem),
        entries=len(doc["cashflow"]),
        irr=res.irr,
        irr_pct=None if res.irr is None else res.irr * 100.0,
        status=res.status,
        reason=res.reason,
        method=res.method,
    )


def run_paths(
    paths: Iterable[str | Path],
    *,
    precision: Optional[float] = None,
    mode: Optional[str] = None,
    config: Optional[SolverConfig] = None,
) -> List[Dict[str, Any]]:
    """Solve every YAML/JSON document found under `paths` (files or directories)."""
    m = mode_from_env_or_flag(mode)
    rows: List[Dict[str, Any]] = []
    for raw in paths:
        target = Path(raw)
        found = list(iter_input_files(target))
        if not found:
            raise InvalidInput(f"{target}: no YAML/JSON files found")
        for f in found:
            rows.append(run_file(f, precision=precision, mode=m, config=config))
    return rows


def _write_jsonl(path: Path, rows: List[Dict[str, Any]]) -> None:
    with path.open("w", encoding="utf-8") as f:
        for row in rows:
            f.write(json.dumps(row) + "\n")


def _write_csv(path: Path, rows: List[Dict[str, Any]]) -> None:
    if not rows:
        path.write_text("", encoding="utf-8")
        return
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(ROW_KEYS))
        w.writeheader()
        w.writerows(rows)


def write_rows(rows: List[Dict[str, Any]], path: str | Path, fmt: str) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "jsonl":
        _write_jsonl(out, rows)
    elif fmt == "csv":
        _write_csv(out, rows)
    elif fmt == "json":
        out.write_text(json.dumps(rows, indent=2), encoding="utf-8")
    else:
        raise ValueError(f"unknown fmt: {fmt}")
    return out


__all__ = ["ROW_KEYS", "run_file", "run_paths", "write_rows"]
