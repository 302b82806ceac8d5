"""
Preflight checks and loading of a scanner results file.
We keep this separate so classify.py only ever sees validated HostRecords.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, List

from pydantic import ValidationError

from .records import HostRecord

logger = logging.getLogger(__name__)

MAX_DEFAULT_BYTES = 500_000_000  # soft guard, warn only


class ResultsFormatError(ValueError):
    """Results file is not a JSON array of host records."""


def preflight(path: Path) -> Path:
    """Validate the input path and return it resolved."""
    if not path.exists():
        raise FileNotFoundError(f"Results file not found: {path}")
    if not path.is_file():
        raise ValueError(f"Not a file: {path}")

    size = path.stat().st_size
    if size > MAX_DEFAULT_BYTES:
        logger.warning("Large results file (~%.1f MB): %s", size / 1_048_576, path)
    return path.resolve()


def _degraded(raw: Any) -> HostRecord:
    """Keep what is usable of a broken entry: host name and address, no port results."""
    raw = raw if isinstance(raw, dict) else {}
    host = raw.get("Host")
    address = raw.get("Address")
    return HostRecord(
        host=host if isinstance(host, str) else "",
        address=address if isinstance(address, str) else None,
    )


def parse_records(data: Any) -> List[HostRecord]:
    """Turn a decoded JSON array into HostRecords, one bad entry never aborts the rest."""
    if not isinstance(data, list):
        raise ResultsFormatError(f"Expected a JSON array of host records, got {type(data).__name__}")

    records: List[HostRecord] = []
    for i, raw in enumerate(data):
        try:
            records.append(HostRecord.model_validate(raw))
        except ValidationError as exc:
            record = _degraded(raw)
            logger.warning("Record %d (%r) is malformed, keeping host/address only: %s",
                           i, record.host, exc.errors()[0].get("msg", exc))
            records.append(record)
    return records


def load_results(path: Path) -> List[HostRecord]:
    """Read a results.json written by the scanner."""
    path = preflight(Path(path))
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ResultsFormatError(f"{path} is not valid JSON: {exc}") from exc

    records = parse_records(data)
    logger.info("Loaded %d host records from %s", len(records), path)
    return records
