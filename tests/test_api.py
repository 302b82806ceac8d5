"""FastAPI endpoints via TestClient."""
import json
from pathlib import Path

from fastapi.testclient import TestClient

from mptcp_stats.api.main import app

client = TestClient(app)


def test_health():
    assert client.get("/health").json() == {"ok": True}


def test_classify_body(scenario_results):
    resp = client.post("/classify", json=scenario_results)
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 5
    assert data["categories"]["mptcp"]["hosts"] == ["b.example"]
    assert data["categories"]["timeout_80"]["count"] == 2
    assert data["mptcp_records"][0]["Host"] == "b.example"


def test_classify_body_rejects_non_array():
    resp = client.post("/classify", json={"Host": "x"})
    assert resp.status_code == 422


def test_classify_path(tmp_path: Path, scenario_results):
    results = tmp_path / "results.json"
    results.write_text(json.dumps(scenario_results))

    resp = client.post("/classify/path", json={"results_path": str(results), "out_dir": str(tmp_path / "out")})
    assert resp.status_code == 200
    data = resp.json()
    assert data["ok"] is True
    assert data["report"]["categories"]["unresolved"]["hosts"] == ["a.example"]
    assert Path(data["summary_path"]).exists()
    assert Path(data["report_path"]).exists()
    assert [r["Host"] for r in json.loads(Path(data["mptcp_path"]).read_text())] == ["b.example"]


def test_classify_path_missing(tmp_path: Path):
    resp = client.post("/classify/path", json={"results_path": str(tmp_path / "nope.json")})
    assert resp.status_code == 400


def test_classify_path_not_array(tmp_path: Path):
    results = tmp_path / "results.json"
    results.write_text("{}")
    resp = client.post("/classify/path", json={"results_path": str(results), "out_dir": str(tmp_path / "out")})
    assert resp.status_code == 400


def test_upload(tmp_path: Path, scenario_results):
    resp = client.post(
        "/upload",
        files={"file": ("results.json", json.dumps(scenario_results).encode(), "application/json")},
        data={"out_dir": str(tmp_path / "jobs")},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["report"]["categories"]["wrong_receiver_key"]["hosts"] == ["c.example"]
    assert Path(data["summary_path"]).parent.parent == tmp_path / "jobs"


def test_classify_body_degrades_malformed_entry(scenario_results):
    body = [{"Host": "bad.example", "Address": "192.0.2.9", "PortResults": "nope"}] + scenario_results
    resp = client.post("/classify", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 6
    assert data["categories"]["mptcp"]["hosts"] == ["b.example"]
    assert data["categories"]["unconnected"]["hosts"] == ["bad.example", "d.example"]


def test_failed_upload_leaves_no_job_dir(tmp_path: Path):
    jobs = tmp_path / "jobs"
    resp = client.post(
        "/upload",
        files={"file": ("results.json", b"{}", "application/json")},
        data={"out_dir": str(jobs)},
    )
    assert resp.status_code == 400
    assert list(jobs.iterdir()) == []


def test_failed_path_request_leaves_no_job_dir(tmp_path: Path):
    results = tmp_path / "results.json"
    results.write_text("[{")
    out = tmp_path / "out"
    resp = client.post("/classify/path", json={"results_path": str(results), "out_dir": str(out)})
    assert resp.status_code == 400
    assert not out.exists()
