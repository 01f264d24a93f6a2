import json

from finmath_irr.config import SolverConfig
from finmath_irr.runner import ROW_KEYS, run_file, run_paths, write_rows

DOUBLING = "name: doubling\ncashflow:\n  2001-01-01: 10\n  2002-01-01: -20\n"
NO_IRR = "cashflow:\n  '2001-01-01': 705.57\n  '2001-06-15': 563.43\n  '2002-03-20': 0.0\n"


def test_run_file_row(tmp_path):
    p = tmp_path / "a.yaml"
    p.write_text(DOUBLING, encoding="utf-8")
    row = run_file(p)
    assert set(row) == set(ROW_KEYS)
    assert row["name"] == "doubling"
    assert row["entries"] == 2
    assert row["status"] == "success"
    assert abs(row["irr"] - 1.0) < 1e-3
    assert abs(row["irr_pct"] - 100.0) < 1e-1


def test_run_file_precision_order(tmp_path):
    p = tmp_path / "a.yaml"
    p.write_text(DOUBLING + "precision: 0.5\n", encoding="utf-8")
    assert run_file(p)["status"] == "success"
    assert run_file(p, precision=-1.0)["status"] == "invalid"


def test_run_file_invalid_and_no_irr(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("cashflow: {'2001-01-01': 1}\n", encoding="utf-8")
    row = run_file(bad)
    assert row["status"] == "invalid"
    assert "too small" in row["error"]

    none = tmp_path / "none.yaml"
    none.write_text(NO_IRR, encoding="utf-8")
    row = run_file(none, config=SolverConfig())
    assert row["irr"] is None and row["reason"] == "no_bracket"


def test_run_paths_directory_and_writers(tmp_path):
    d = tmp_path / "flows"
    d.mkdir()
    (d / "a.yaml").write_text(DOUBLING, encoding="utf-8")
    (d / "b.yml").write_text(NO_IRR, encoding="utf-8")
    rows = run_paths([d], mode="relaxed")
    assert [r["status"] for r in rows] == ["success", "no_solution"]

    out = write_rows(rows, tmp_path / "out" / "rows.jsonl", "jsonl")
    lines = out.read_text(encoding="utf-8").splitlines()
    assert [json.loads(x)["name"] for x in lines] == ["doubling", "b"]

    out = write_rows(rows, tmp_path / "out" / "rows.csv", "csv")
    assert out.read_text(encoding="utf-8").splitlines()[0] == ",".join(ROW_KEYS)
