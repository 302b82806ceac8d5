# mptcp_stats/api/main.py
from fastapi import Body, FastAPI, HTTPException
from pydantic import BaseModel
from typing import Any, List, Optional
from pathlib import Path
from datetime import datetime, timezone
import logging
import shutil
from fastapi import UploadFile, File, Form
from mptcp_stats.config import get_settings
from mptcp_stats.core.ingest import load_results, parse_records
from mptcp_stats.core.records import HostRecord
from mptcp_stats.core.report import write_artifacts
from mptcp_stats.core.summary import ClassificationReport, classify_hosts

logger = logging.getLogger(__name__)

app = FastAPI(title="MPTCP Stats API", version="0.1.0")

@app.get("/health", tags=["system"])
def health():
    return {"ok": True}

# ----- Schemas -----
class ClassifyPathRequest(BaseModel):
    results_path: str
    out_dir: Optional[str] = None  # base folder for artifacts, settings.out_dir if unset

class ClassifyPathResponse(BaseModel):
    ok: bool
    report: ClassificationReport
    summary_path: str
    mptcp_path: str
    report_path: str

def _job_dir(base: Optional[str]) -> Path:
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S-%f")
    job_dir = Path(base or get_settings().out_dir) / f"job-{ts}"
    job_dir.mkdir(parents=True, exist_ok=True)
    return job_dir

def _load(results_path: Path) -> List[HostRecord]:
    try:
        return load_results(results_path)
    except (FileNotFoundError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

def _classify(records: List[HostRecord]) -> ClassificationReport:
    return classify_hosts(records, extra_timeout_ports=get_settings().extra_timeout_ports)

def _classify_into(records: List[HostRecord], job_dir: Path) -> ClassifyPathResponse:
    report = _classify(records)
    paths = write_artifacts(report, job_dir)

    return ClassifyPathResponse(
        ok=True,
        report=report,
        summary_path=str(paths["summary"]),
        mptcp_path=str(paths["mptcp"]),
        report_path=str(paths["report"]),
    )

# ----- Endpoints -----
@app.post("/classify", response_model=ClassificationReport, tags=["classify"])
def classify(records: List[Any] = Body(...)):
    # in-memory only, nothing written; bad entries are degraded like in results files
    return _classify(parse_records(records))

@app.post("/classify/path", response_model=ClassifyPathResponse, tags=["classify"])
def classify_path(req: ClassifyPathRequest):
    path = Path(req.results_path)
    if not path.exists():
        raise HTTPException(status_code=400, detail=f"results_path not found: {path}")
    records = _load(path)
    return _classify_into(records, _job_dir(req.out_dir))

@app.post("/upload", response_model=ClassifyPathResponse, tags=["classify"])
async def upload_and_classify(
    file: UploadFile = File(...),
    out_dir: Optional[str] = Form(None),
):
    job_dir = _job_dir(out_dir)

    # Save the uploaded file to disk in chunks
    results_path = job_dir / "results.json"
    with results_path.open("wb") as f:
        while True:
            chunk = await file.read(1024 * 1024)  # 1MB
            if not chunk:
                break
            f.write(chunk)
    logger.info("Saved upload %s to %s", file.filename, results_path)

    try:
        records = _load(results_path)
    except HTTPException:
        shutil.rmtree(job_dir, ignore_errors=True)
        raise
    return _classify_into(records, job_dir)
