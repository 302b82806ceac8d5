# mptcp_stats/core/report.py
"""
Rendering of a ClassificationReport: console text, markdown, JSON artifacts.
The classifier never formats anything; everything user-facing is built here.
"""
from __future__ import annotations
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

from .summary import ClassificationReport

SUMMARY_FILE = "summary.json"
MPTCP_FILE = "mptcp_hosts.json"
REPORT_FILE = "mptcp_report.md"

EXTRA_CATEGORIES = ("plain_tcp", "wrong_version", "reset")


def _timeout_line(report: ClassificationReport) -> str:
    return (f"Timeout MPTCP {report.count('timeout_any')} "
            f"Port80 {report.count('timeout_80')} "
            f"Port443 {report.count('timeout_443')} "
            f"Both {report.count('timeout_both')}")


def build_text_summary(report: ClassificationReport, verbose: bool = True) -> str:
    """Console summary: one count per line, MPTCP and wrong-key host lists inline."""
    lines: List[str] = []

    lines.append(f"MPTCP Sites {report.count('mptcp')}")
    if verbose:
        lines.extend(report.hosts("mptcp"))
    lines.append(f"Wrong Receiver Key Sites {report.count('wrong_receiver_key')}")
    if verbose:
        lines.extend(report.hosts("wrong_receiver_key"))
    lines.append(f"Unresolved Domain Hosts {report.count('unresolved')}")
    lines.append(f"Unconnected Hosts {report.count('unconnected')}")
    lines.append(_timeout_line(report))
    for port in report.extra_timeout_ports:
        cat = report.categories[f"timeout_{port}"]
        lines.append(f"{cat.name} {cat.count}")

    for name in EXTRA_CATEGORIES:
        cat = report.categories[name]
        lines.append(f"{cat.name} {cat.count}")
    if report.mptcp_versions:
        versions = " ".join(f"v{v}={n}" for v, n in report.mptcp_versions.items())
        lines.append(f"MPTCP versions {versions}")
    return "\n".join(lines) + "\n"


def summary_dict(report: ClassificationReport) -> Dict:
    """Counts and host lists only (no full records)."""
    return {
        "total": report.total,
        "extra_timeout_ports": report.extra_timeout_ports,
        "categories": {
            name: {"count": cat.count, "hosts": cat.hosts}
            for name, cat in report.categories.items()
        },
        "mptcp_versions": {str(v): n for v, n in report.mptcp_versions.items()},
    }


def build_markdown_report(report: ClassificationReport) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    md = [
        "# MPTCP Scan Report",
        "",
        f"Generated: {ts}  ",
        f"Hosts in results: **{report.total}**",
        "",
        "| Category | Key | Count | Meaning |",
        "|---|---|---:|---|",
    ]
    for name, cat in report.categories.items():
        md.append(f"| {cat.name} | `{name}` | {cat.count} | {cat.description} |")
    md.append("")

    for name in ("mptcp", "wrong_receiver_key") + EXTRA_CATEGORIES:
        cat = report.categories[name]
        if not cat.hosts:
            continue
        md.append(f"## {cat.name} ({cat.count})")
        md.append("")
        md.extend(f"- {h}" for h in cat.hosts)
        md.append("")

    md.append("> Timeout counts include hosts with no connectable result on that port "
              "(an empty set of results counts as all timed out).")
    md.append("")
    return "\n".join(md)


def write_artifacts(report: ClassificationReport, out_dir: Path) -> Dict[str, Path]:
    """Write summary.json, mptcp_hosts.json and mptcp_report.md into out_dir."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    summary_path = out_dir / SUMMARY_FILE
    with summary_path.open("w", encoding="utf-8") as f:
        json.dump(summary_dict(report), f, indent=2)

    # full records keep the scanner's keys so they can be fed back in
    mptcp_path = out_dir / MPTCP_FILE
    with mptcp_path.open("w", encoding="utf-8") as f:
        json.dump([r.to_json() for r in report.mptcp_records], f, indent=2)

    report_path = out_dir / REPORT_FILE
    report_path.write_text(build_markdown_report(report), encoding="utf-8")

    return {"summary": summary_path, "mptcp": mptcp_path, "report": report_path}
