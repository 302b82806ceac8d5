"""Whole-pass properties of classify_hosts()."""
from mptcp_stats.core.ingest import parse_records
from mptcp_stats.core.summary import classify_hosts

from tests.builders import attempt, host, port


def _mixed_records():
    return parse_records([
        host("one.example", ports=[port(80, attempts=[attempt(Timeout=True, SYNACK=False)]),
                                   port(443, attempts=[attempt(Timeout=True, SYNACK=False)])]),
        host("two.example", ports=[port(80, attempts=[attempt()]),
                                   port(443, attempts=[attempt(Timeout=True, SYNACK=False)])]),
        host("three.example", address=None),
        host("four.example", ports=[port(80, connectable=False), port(443, connectable=False)]),
        host("five.example", ports=[port(80, attempts=[attempt(SenderVersion=1)]),
                                    port(443, attempts=[attempt()])]),
    ])


def test_scenario_counts(scenario_results):
    report = classify_hosts(parse_records(scenario_results))
    assert report.total == 5
    assert report.count("mptcp") == 1
    assert report.count("wrong_receiver_key") == 1
    assert report.count("unresolved") == 1
    assert report.count("unconnected") == 1
    assert report.hosts("timeout_80") == ["d.example", "e.example"]
    assert "e.example" not in report.hosts("timeout_443")
    assert [r.host for r in report.mptcp_records] == ["b.example"]


def test_timeout_set_relations():
    report = classify_hosts(_mixed_records())
    t80 = set(report.hosts("timeout_80"))
    t443 = set(report.hosts("timeout_443"))
    both = set(report.hosts("timeout_both"))
    either = set(report.hosts("timeout_any"))
    assert both <= t80 and both <= t443
    assert either == t80 | t443
    assert both == t80 & t443
    assert "one.example" in both
    assert "two.example" in t443 and "two.example" not in t80


def test_resolved_hosts_split_by_connectivity():
    records = _mixed_records()
    report = classify_hosts(records)
    unconnected = set(report.hosts("unconnected"))
    for r in records:
        if r.address is None:
            continue
        connectable = any(p.tcp_connectable for p in r.port_results)
        assert (r.host in unconnected) != connectable


def test_idempotent():
    records = _mixed_records()
    assert classify_hosts(records) == classify_hosts(records)


def test_version_counts():
    report = classify_hosts(_mixed_records())
    assert report.mptcp_versions == {0: 2, 1: 1}


def test_extra_timeout_ports_only_add_categories():
    records = _mixed_records()
    base = classify_hosts(records)
    report = classify_hosts(records, extra_timeout_ports=[8080, 443, 8080])
    assert report.extra_timeout_ports == [8080]
    for name in ("timeout_80", "timeout_443", "timeout_any", "timeout_both"):
        assert report.categories[name] == base.categories[name]
    # no connectable 8080 anywhere: every resolved host counts (vacuous rule)
    assert report.hosts("timeout_8080") == ["one.example", "two.example", "four.example", "five.example"]


def test_unresolved_host_never_in_timeout_categories():
    records = parse_records([host("a.example", address="")])
    for extra in ([], [8080]):
        report = classify_hosts(records, extra_timeout_ports=extra)
        assert report.hosts("unresolved") == ["a.example"]
        assert report.hosts("timeout_both") == []
        assert report.hosts("timeout_any") == []


def test_category_names_are_labels():
    report = classify_hosts(_mixed_records(), extra_timeout_ports=[8080])
    assert report.categories["mptcp"].name == "MPTCP Sites"
    assert report.categories["unresolved"].name == "Unresolved Domain Hosts"
    assert report.categories["timeout_8080"].name == "Timeout MPTCP Port8080"


def test_empty_input():
    report = classify_hosts([])
    assert report.total == 0
    assert all(cat.count == 0 for cat in report.categories.values())
    assert report.mptcp_records == []
