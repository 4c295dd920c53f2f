# File: backend/tests/test_scan_cli.py
# Version: v0.1.0
"""
scan_cli: FASTA and table modes, exit codes.
"""
import json
import logging

import pytest

from backend.app.cli import scan_cli
from backend.app.config import config_scan

HIT = "AAAACG" + "A" * 14


@pytest.fixture(autouse=True)
def isolated_params(tmp_path, monkeypatch):
    monkeypatch.setattr(config_scan, "CURRENT_FILE", tmp_path / "no_such_param.json")


def test_fasta_mode_writes_outputs(tmp_path):
    fasta = tmp_path / "in.fasta"
    fasta.write_text(f">r1\n{HIT}TGG\n", encoding="utf-8")
    out = tmp_path / "out"
    rc = scan_cli.main(["--fasta", str(fasta), "--outdir", str(out), "--workers", "2"])
    assert rc == 0
    csv_lines = (out / "fasta_lambda_scores.csv").read_text(encoding="utf-8").splitlines()
    assert csv_lines[1] == f"{HIT},TGG,0,r1,0.1819"
    payload = json.loads((out / "lambda_scores.json").read_text(encoding="utf-8"))
    assert payload["motif_pattern"] == "NGG"
    assert payload["candidates"][0]["factorization_details"][0]["q"] == 3


def test_pam_override_and_no_candidates(tmp_path, caplog):
    fasta = tmp_path / "in.fasta"
    fasta.write_text(f">r1\n{HIT}TGG\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert scan_cli.main(["--fasta", str(fasta), "--outdir", str(tmp_path / "o"), "--pam", "NAG"]) == 1
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING and "No candidates found" in r.getMessage()]
    assert len(warnings) == 1


def test_invalid_input_exit_code(tmp_path, capsys):
    fasta = tmp_path / "in.fasta"
    fasta.write_text(">r1\nACGTXACGT\n", encoding="utf-8")
    assert scan_cli.main(["--fasta", str(fasta), "--outdir", str(tmp_path / "o")]) == 2
    assert "[ERROR]" in capsys.readouterr().err
    assert scan_cli.main(["--fasta", str(fasta), "--outdir", str(tmp_path / "o"), "--pam", "NXG"]) == 2


def test_table_mode(tmp_path):
    table = tmp_path / "guides.csv"
    table.write_text(f"protospacer,PAM,id\n{HIT},TGG,g1\n,AGG,g2\n", encoding="utf-8")
    out = tmp_path / "out"
    assert scan_cli.main(["--table", str(table), "--outdir", str(out), "--no-factorizations"]) == 0
    lines = (out / "table_lambda_scores.csv").read_text(encoding="utf-8").splitlines()
    assert lines[0] == "protospacer,PAM,lambda_score,id,error"
    assert lines[1] == f"{HIT},TGG,0.1819,g1,"


def test_params_json(tmp_path):
    params = tmp_path / "p.json"
    params.write_text(json.dumps({"motifPattern": "NGG", "step": 3}), encoding="utf-8")
    fasta = tmp_path / "in.fasta"
    fasta.write_text(f">r1\n{HIT}TGG\n", encoding="utf-8")
    out = tmp_path / "out"
    assert scan_cli.main(["--fasta", str(fasta), "--outdir", str(out), "--params-json", str(params)]) == 0
    assert json.loads((out / "lambda_scores.json").read_text(encoding="utf-8"))["step"] == 3


def test_missing_params_json_is_an_input_error(tmp_path, capsys):
    fasta = tmp_path / "in.fasta"
    fasta.write_text(f">r1\n{HIT}TGG\n", encoding="utf-8")
    out = tmp_path / "out"
    rc = scan_cli.main(["--fasta", str(fasta), "--outdir", str(out), "--params-json", str(tmp_path / "typo.json")])
    assert rc == 2
    assert "Parameters file not found" in capsys.readouterr().err
    assert not (out / "fasta_lambda_scores.csv").exists()
