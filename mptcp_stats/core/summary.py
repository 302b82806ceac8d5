# mptcp_stats/core/summary.py
"""
One classification pass over a results collection.

Runs every category from classify.py in a fixed order and packs the outcome into
a ClassificationReport: per category a count and the ordered host names, plus the
full MPTCP-capable records for export. Rendering lives in report.py.
"""
from __future__ import annotations
import logging
from typing import Dict, List, Sequence

from pydantic import BaseModel, Field

from . import classify
from .records import HostRecord

logger = logging.getLogger(__name__)

CORE_TIMEOUT_PORTS = (classify.HTTP_PORT, classify.HTTPS_PORT)

LABELS = {
    "mptcp": "MPTCP Sites",
    "wrong_receiver_key": "Wrong Receiver Key Sites",
    "unresolved": "Unresolved Domain Hosts",
    "unconnected": "Unconnected Hosts",
    "timeout_any": "Timeout MPTCP (Port80 or Port443)",
    "timeout_both": "Timeout MPTCP (Port80 and Port443)",
    "plain_tcp": "Plain TCP Fallback Sites",
    "wrong_version": "Wrong Version Sites",
    "reset": "Reset Sites",
}

DESCRIPTIONS = {
    "mptcp": "Valid MP_CAPABLE SYN-ACK on a connectable port.",
    "wrong_receiver_key": "MPTCP reply echoed our key back (middlebox or broken stack).",
    "unresolved": "DNS lookup failed, never probed.",
    "unconnected": "Resolved but no probed port accepted a TCP handshake.",
    "timeout_any": "MPTCP SYN timed out on port 80 or on port 443.",
    "timeout_both": "MPTCP SYN timed out on port 80 and on port 443.",
    "plain_tcp": "SYN-ACK without MPTCP option (fell back to plain TCP).",
    "wrong_version": "Peer answered with a higher MPTCP version than offered.",
    "reset": "Peer answered the MPTCP SYN with RST.",
}


def _timeout_label(port: int) -> str:
    return f"Timeout MPTCP Port{port}"


def _timeout_description(port: int) -> str:
    # includes hosts with no connectable result on this port
    return f"MPTCP SYN timed out on port {port}."


class CategoryResult(BaseModel):
    name: str
    description: str
    count: int
    hosts: List[str]


class ClassificationReport(BaseModel):
    total: int
    extra_timeout_ports: List[int] = Field(default_factory=list)
    categories: Dict[str, CategoryResult]
    mptcp_records: List[HostRecord] = Field(default_factory=list)
    mptcp_versions: Dict[int, int] = Field(default_factory=dict)

    def count(self, name: str) -> int:
        return self.categories[name].count

    def hosts(self, name: str) -> List[str]:
        return self.categories[name].hosts


def _category(key: str, matched: Sequence[HostRecord], label: str = "", description: str = "") -> CategoryResult:
    return CategoryResult(
        name=label or LABELS[key],
        description=description or DESCRIPTIONS[key],
        count=len(matched),
        hosts=[h.host for h in matched],
    )


def _timeout_category(records: Sequence[HostRecord], port: int) -> CategoryResult:
    return _category(f"timeout_{port}", classify.timeout_hosts(records, port),
                     _timeout_label(port), _timeout_description(port))


def _version_counts(records: Sequence[HostRecord]) -> Dict[int, int]:
    counts: Dict[int, int] = {}
    for host in records:
        for version in classify.mptcp_versions(host):
            counts[version] = counts.get(version, 0) + 1
    return dict(sorted(counts.items()))


def classify_hosts(
    records: Sequence[HostRecord],
    extra_timeout_ports: Sequence[int] = (),
) -> ClassificationReport:
    """Run every category over records. Pure; same input gives the same report.

    Timeout categories for ports 80 and 443 (and their either/both combinations)
    are always reported; extra_timeout_ports only add per-port categories.
    """
    records = list(records)
    extra = [p for p in dict.fromkeys(extra_timeout_ports) if p not in CORE_TIMEOUT_PORTS]

    mptcp = classify.mptcp_hosts(records)
    categories: Dict[str, CategoryResult] = {
        "mptcp": _category("mptcp", mptcp),
        "wrong_receiver_key": _category("wrong_receiver_key", classify.wrong_receiver_key_hosts(records)),
        "unresolved": _category("unresolved", classify.unresolved_hosts(records)),
        "unconnected": _category("unconnected", classify.unconnected_hosts(records)),
    }
    for port in CORE_TIMEOUT_PORTS:
        categories[f"timeout_{port}"] = _timeout_category(records, port)
    categories["timeout_any"] = _category("timeout_any", classify.timeout_any_hosts(records, CORE_TIMEOUT_PORTS))
    categories["timeout_both"] = _category("timeout_both", classify.timeout_all_hosts(records, CORE_TIMEOUT_PORTS))
    for port in extra:
        categories[f"timeout_{port}"] = _timeout_category(records, port)
    categories["plain_tcp"] = _category("plain_tcp", classify.plain_tcp_hosts(records))
    categories["wrong_version"] = _category("wrong_version", classify.wrong_version_hosts(records))
    categories["reset"] = _category("reset", classify.reset_hosts(records))

    for name, cat in categories.items():
        logger.debug("%s: %d", name, cat.count)

    return ClassificationReport(
        total=len(records),
        extra_timeout_ports=extra,
        categories=categories,
        mptcp_records=mptcp,
        mptcp_versions=_version_counts(mptcp),
    )
