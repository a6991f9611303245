import socket

import pytest

from tests.common import fake_getaddrinfo


@pytest.fixture(autouse=True)
def _offline_dns(monkeypatch: pytest.MonkeyPatch) -> None:
    """Host names resolve from tests.common.HOSTS only; nothing reaches a real resolver."""
    monkeypatch.setattr(socket, "getaddrinfo", fake_getaddrinfo)
