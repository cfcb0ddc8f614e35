import socket
from datetime import datetime, timezone

import pytest

from jsonsyslog_emitter.environment import HostEnvironment
from jsonsyslog_emitter.receiver import TcpLineReceiver


@pytest.fixture
def receiver():
    r = TcpLineReceiver("127.0.0.1", 0)
    yield r
    r.close()


@pytest.fixture
def closed_port():
    """A loopback port with nothing listening on it."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port


@pytest.fixture
def fixed_env():
    return HostEnvironment.fixed(
        now=datetime(2025, 7, 20, 11, 24, 0, tzinfo=timezone.utc),
        user="AdminUser",
        hostname="MYSERVER01",
    )


@pytest.fixture
def diagnostics():
    """A list that collects diagnostic lines; pass .append as the sink."""
    return []
