import json

import pytest

from finmath_irr import cli
from finmath_irr.finance import irr as irr_mod

DOUBLING = "cashflow:\n  2001-01-01: 10\n  2002-01-01: -20\n"
NO_IRR = "cashflow:\n  '2001-01-01': 705.57\n  '2001-06-15': 563.43\n  '2002-03-20': 0.0\n"


def _write(tmp_path, name, text):
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_cli_text_output(tmp_path, capsys):
    p = _write(tmp_path, "doubling.yaml", DOUBLING)
    assert cli.main([str(p)]) == 0
    assert "doubling: 100.0000% (secant)" in capsys.readouterr().out


def test_cli_json_to_stdout(tmp_path, capsys):
    p = _write(tmp_path, "doubling.yaml", DOUBLING)
    assert cli.main([str(p), "--format", "json"]) == 0
    rows = json.loads(capsys.readouterr().out)
    assert rows[0]["status"] == "success"


def test_cli_writes_output_file(tmp_path):
    in_dir = tmp_path / "flows"
    in_dir.mkdir()
    _write(in_dir, "a.yaml", DOUBLING)
    _write(in_dir, "b.yaml", NO_IRR)
    out = tmp_path / "out" / "results.jsonl"
    assert cli.main([str(in_dir), "--format", "jsonl", "--out", str(out)]) == 0
    assert len(out.read_text(encoding="utf-8").splitlines()) == 2


def test_cli_require_irr(tmp_path):
    p = _write(tmp_path, "none.yaml", NO_IRR)
    assert cli.main([str(p)]) == 0
    assert cli.main([str(p), "--require-irr"]) == 3


def test_cli_invalid_document_exits_2(tmp_path, capsys):
    p = _write(tmp_path, "one.yaml", "cashflow: {'2001-01-01': 1}\n")
    assert cli.main([str(p)]) == 2
    assert "INVALID" in capsys.readouterr().out


def test_cli_strict_rejects_unknown_keys(tmp_path, monkeypatch):
    monkeypatch.delenv("VALIDATION_MODE", raising=False)
    p = _write(tmp_path, "extra.yaml", DOUBLING + "owner: me\n")
    assert cli.main([str(p)]) == 0
    assert cli.main([str(p), "--strict"]) == 2


def test_cli_empty_directory_exits_2(tmp_path):
    assert cli.main([str(tmp_path)]) == 2


def test_cli_solver_fault_exits_1(tmp_path, capsys, monkeypatch):
    # a bracket without a sign change drives Brent outside its contract
    monkeypatch.setattr(irr_mod, "find_bracket", lambda f, attempts: (0.5, 1.0))
    p = _write(tmp_path, "none.yaml", NO_IRR)
    assert cli.main([str(p)]) == 1
    assert "BUG" in capsys.readouterr().err


def test_cli_equal_secant_seeds_in_config_exit_2(tmp_path, capsys):
    p = _write(tmp_path, "doubling.yaml", DOUBLING)
    cfg = _write(tmp_path, "solver.yaml", "solver: {p0: 1.0, p1: 1.0}\n")
    assert cli.main([str(p), "--config", str(cfg)]) == 2
    assert "p0 and solver.p1 must differ" in capsys.readouterr().err


def test_cli_equal_secant_seeds_in_document_are_invalid(tmp_path, capsys):
    p = _write(tmp_path, "seeds.yaml", DOUBLING + "solver: {p0: 0.7, p1: 0.7}\n")
    assert cli.main([str(p)]) == 2
    assert "seeds: INVALID" in capsys.readouterr().out


def test_cli_non_utf8_document_is_invalid(tmp_path, capsys):
    p = tmp_path / "latin1.yaml"
    p.write_bytes(DOUBLING.encode("utf-8") + b"name: caf\xe9 \xff\n")
    assert cli.main([str(p)]) == 2
    assert "not UTF-8" in capsys.readouterr().out


def test_cli_invalid_format_exits_2():
    with pytest.raises(SystemExit) as ei:
        cli.parse_args(["x.yaml", "--format", "nope"])
    assert ei.value.code == 2


def test_cli_missing_paths_exits_2():
    with pytest.raises(SystemExit) as ei:
        cli.parse_args([])
    assert ei.value.code == 2
