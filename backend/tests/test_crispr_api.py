# File: backend/tests/test_crispr_api.py
# Version: v0.1.0
"""
CRISPR scan endpoints, end to end through FastAPI and the SQLite store.
"""
import pytest
from fastapi.testclient import TestClient

from backend.app.config import config_scan
from backend.app.main import app

HIT = "AAAACG" + "A" * 14
BASE = "/api/v1/crispr"


@pytest.fixture(scope="module")
def client():
    # context manager runs startup (SQLite schema auto-heal)
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def isolated_params(tmp_path, monkeypatch):
    monkeypatch.setattr(config_scan, "CURRENT_FILE", tmp_path / "scan_param.json")


def test_discover(client):
    r = client.post(f"{BASE}/discover", json={"sequence": "A" * 20 + "CGG", "motifPattern": "NGG", "sourceId": "demo"})
    assert r.status_code == 200
    data = r.json()
    assert data["count"] == 1
    assert data["candidates"][0] == {"protospacer": "A" * 20, "PAM": "CGG", "sequence_location": 0, "source": "demo"}


def test_discover_invalid_symbol_is_400(client):
    r = client.post(f"{BASE}/discover", json={"sequence": "ACGX" + "A" * 20, "motifPattern": "NGG"})
    assert r.status_code == 400
    assert "'X' at position 3" in r.json()["detail"]


def test_discover_invalid_pattern_is_400(client):
    r = client.post(f"{BASE}/discover", json={"sequence": "A" * 30, "motifPattern": "NZG"})
    assert r.status_code == 400


def test_score(client):
    r = client.post(f"{BASE}/score", json={"combinedSequence": HIT + "TGG"})
    assert r.status_code == 200
    data = r.json()
    assert data["lambdaScore"] == 0.1819
    assert data["factorizationRecords"][0]["window_integer"] == 6

    miss = client.post(f"{BASE}/score", json={"combinedSequence": HIT + "TTT", "motifPattern": "NGG"}).json()
    assert miss["totalScore"] == 0.0 and miss["factorizationRecords"] == []

    assert client.post(f"{BASE}/score", json={"combinedSequence": HIT + "TGG", "step": 0}).status_code == 422


def test_parameters_get_and_put(client):
    r = client.get(f"{BASE}/parameters")
    assert r.status_code == 200
    assert r.json()["motifPattern"] == "NGG"

    r = client.put(f"{BASE}/parameters", json={"motifPattern": "nag", "step": 2})
    assert r.status_code == 200
    assert r.json()["motifPattern"] == "NAG"
    assert client.get(f"{BASE}/parameters").json()["step"] == 2

    assert client.put(f"{BASE}/parameters", json={"motifPattern": "NQG"}).status_code == 422


def test_scan_persist_fetch_export_delete(client):
    fasta = f">r1 first\n{HIT}TGG\n>r2\n{'C' * 20}AGG\n"
    r = client.post(f"{BASE}/scan", json={"fasta": fasta, "note": "api test"})
    assert r.status_code == 200
    data = r.json()
    assert data["count"] == 2
    assert data["sources"] == ["r1 first", "r2"]
    assert data["summary"]["max_score"] == 0.1819
    assert data["candidates"][0]["factorization_details"][0]["p"] == 2
    run_id = data["runId"]
    assert run_id

    listing = client.get(f"{BASE}/runs", params={"q": "api test"}).json()
    assert any(item["id"] == run_id for item in listing["items"])

    detail = client.get(f"{BASE}/runs/{run_id}").json()
    assert detail["candidateCount"] == 2
    assert detail["status"] == "completed"
    assert [c["source"] for c in detail["candidates"]] == ["r1 first", "r2"]

    csv_resp = client.get(f"{BASE}/runs/{run_id}/export.csv")
    assert csv_resp.status_code == 200
    lines = csv_resp.text.strip().splitlines()
    assert lines[0] == "protospacer,PAM,sequence_location,source,lambda_score"
    assert lines[1].endswith(",r1 first,0.1819")

    assert client.delete(f"{BASE}/runs/{run_id}").status_code == 204
    assert client.get(f"{BASE}/runs/{run_id}").status_code == 404
    assert client.delete(f"{BASE}/runs/{run_id}").status_code == 404


def test_scan_without_candidates_and_without_persist(client):
    r = client.post(f"{BASE}/scan", json={"fasta": ">r\n" + "A" * 40, "persist": False})
    assert r.status_code == 200
    data = r.json()
    assert data["count"] == 0
    assert data["runId"] is None
    assert "No gRNA candidates found" in data["message"]


def test_scan_rejects_invalid_fasta(client):
    assert client.post(f"{BASE}/scan", json={"fasta": ">r\nACGTN" + "A" * 30}).status_code == 400
    assert client.post(f"{BASE}/scan", json={"fasta": ""}).status_code == 400


def test_score_table(client):
    csv_text = f"id,protospacer,PAM\ng1,{HIT},TGG\ng2,,AGG\n"
    r = client.post(f"{BASE}/score-table", json={"csv": csv_text, "note": "table run"})
    assert r.status_code == 200
    data = r.json()
    assert data["count"] == 2
    assert data["rows"][0]["lambda_score"] == 0.1819
    assert data["rows"][1]["error"] == "Missing protospacer or PAM"
    assert data["csv"].splitlines()[0].startswith("protospacer,PAM,")

    run = client.get(f"{BASE}/runs/{data['runId']}").json()
    assert run["mode"] == "table"
    assert run["status"] == "completed"
    assert run["candidateCount"] == 2
    assert [c["source"] for c in run["candidates"]] == ["g1", "g2"]
    assert run["candidates"][0]["lambda_score"] == 0.1819
    assert run["candidates"][0]["factorization_details"][0]["window_integer"] == 6

    unsaved = client.post(f"{BASE}/score-table", json={"csv": csv_text, "persist": False}).json()
    assert unsaved["runId"] is None

    assert client.post(f"{BASE}/score-table", json={"csv": "id,protospacer,PAM\n"}).status_code == 400
