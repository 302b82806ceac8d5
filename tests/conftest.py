import pytest

from tests.builders import attempt, host, port


@pytest.fixture
def scenario_results():
    """Hosts A-E: unresolved, MPTCP, wrong key, unconnected, timeout on 80 only."""
    return [
        host("a.example", address="", ports=None),
        host("b.example", ports=[port(80, attempts=[attempt()])]),
        host("c.example", ports=[port(80, attempts=[attempt(WrongReceiverKey=True)])]),
        host("d.example", ports=[port(80, connectable=False)]),
        host("e.example", ports=[
            port(80, attempts=[attempt(SYNACK=False, Timeout=True)]),
            port(443, attempts=[attempt(NoMPTCPOption=True)]),
        ]),
    ]
