"""
Outcome categories for MPTCP probe results.

Each category is a predicate over one HostRecord plus a stable filter over the
whole sequence. Categories are independent and may overlap; none of them raise.

Known quirk, kept so counts stay comparable with earlier scan reports:
the timeout rule is "every connectable port-N result has every attempt timed out",
and "every" over an empty list is True. So a host with no connectable port 80
counts as timed out on port 80, and so does a connectable port with no attempts.
"""
from __future__ import annotations
from typing import Callable, Iterable, List, Sequence

from .records import HostRecord, MptcpAttempt, PortResult

HTTP_PORT = 80
HTTPS_PORT = 443

HostPredicate = Callable[[HostRecord], bool]
AttemptPredicate = Callable[[MptcpAttempt], bool]


def select(records: Iterable[HostRecord], predicate: HostPredicate) -> List[HostRecord]:
    """Records matching predicate, input order kept."""
    return [r for r in records if predicate(r)]


# ---- attempt-level rules ----

def is_mptcp_capable(m: MptcpAttempt) -> bool:
    """Peer answered with a SYN-ACK carrying a valid MP_CAPABLE option."""
    return (m.synack and not m.no_mptcp_option and not m.wrong_version
            and not m.wrong_receiver_key and not m.timeout)


def is_wrong_receiver_key(m: MptcpAttempt) -> bool:
    """Valid-looking MPTCP reply whose key echoes ours back."""
    return (m.synack and not m.no_mptcp_option and not m.wrong_version
            and m.wrong_receiver_key and not m.timeout)


def is_plain_tcp(m: MptcpAttempt) -> bool:
    """SYN-ACK came back without the MPTCP option (fell back to TCP)."""
    return m.synack and m.no_mptcp_option and not m.timeout


def is_wrong_version(m: MptcpAttempt) -> bool:
    return m.synack and not m.no_mptcp_option and m.wrong_version and not m.timeout


def is_reset(m: MptcpAttempt) -> bool:
    return m.rst and not m.timeout


# ---- host-level rules ----

def _answered(host: HostRecord, rule: AttemptPredicate) -> bool:
    """Resolved host with some connectable port where some attempt satisfies rule."""
    return host.resolved and any(
        p.tcp_connectable and any(rule(m) for m in p.mptcp_results)
        for p in host.port_results
    )


def supports_mptcp(host: HostRecord) -> bool:
    return _answered(host, is_mptcp_capable)


def has_wrong_receiver_key(host: HostRecord) -> bool:
    return _answered(host, is_wrong_receiver_key)


def falls_back_to_tcp(host: HostRecord) -> bool:
    return _answered(host, is_plain_tcp)


def has_wrong_version(host: HostRecord) -> bool:
    return _answered(host, is_wrong_version)


def was_reset(host: HostRecord) -> bool:
    return _answered(host, is_reset)


def is_unresolved(host: HostRecord) -> bool:
    return not host.resolved


def is_unconnected(host: HostRecord) -> bool:
    # empty port_results is vacuously unconnected
    return host.resolved and all(not p.tcp_connectable for p in host.port_results)


def _connectable_on(host: HostRecord, port: int) -> List[PortResult]:
    return [p for p in host.port_results if p.tcp_connectable and p.port == port]


def mptcp_timed_out(host: HostRecord, port: int) -> bool:
    """Every connectable result for port timed out on every attempt (vacuously True)."""
    return host.resolved and all(
        all(m.timeout for m in p.mptcp_results) for p in _connectable_on(host, port)
    )


def mptcp_versions(host: HostRecord) -> List[int]:
    """Sender versions (0 = RFC 6824, 1 = RFC 8684) that got a valid MPTCP answer."""
    if not host.resolved:
        return []
    return sorted({
        m.sender_version
        for p in host.port_results if p.tcp_connectable
        for m in p.mptcp_results if is_mptcp_capable(m)
    })


# ---- categories over the whole sequence ----

def mptcp_hosts(records: Sequence[HostRecord]) -> List[HostRecord]:
    return select(records, supports_mptcp)


def wrong_receiver_key_hosts(records: Sequence[HostRecord]) -> List[HostRecord]:
    return select(records, has_wrong_receiver_key)


def unresolved_hosts(records: Sequence[HostRecord]) -> List[HostRecord]:
    return select(records, is_unresolved)


def unconnected_hosts(records: Sequence[HostRecord]) -> List[HostRecord]:
    return select(records, is_unconnected)


def timeout_hosts(records: Sequence[HostRecord], port: int) -> List[HostRecord]:
    return select(records, lambda h: mptcp_timed_out(h, port))


def timeout_any_hosts(records: Sequence[HostRecord],
                      ports: Sequence[int] = (HTTP_PORT, HTTPS_PORT)) -> List[HostRecord]:
    return select(records, lambda h: any(mptcp_timed_out(h, port) for port in ports))


def timeout_all_hosts(records: Sequence[HostRecord],
                      ports: Sequence[int] = (HTTP_PORT, HTTPS_PORT)) -> List[HostRecord]:
    ports = list(ports)
    if not ports:
        return []
    return select(records, lambda h: all(mptcp_timed_out(h, port) for port in ports))


def plain_tcp_hosts(records: Sequence[HostRecord]) -> List[HostRecord]:
    return select(records, falls_back_to_tcp)


def wrong_version_hosts(records: Sequence[HostRecord]) -> List[HostRecord]:
    return select(records, has_wrong_version)


def reset_hosts(records: Sequence[HostRecord]) -> List[HostRecord]:
    return select(records, was_reset)
