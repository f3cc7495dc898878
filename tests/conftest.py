"""Shared test fixtures for autotask-connection.

Provides a recording mock transport standing in for the Autotask API, an
on-disk cache in ``tmp_path``, and a pre-populated
:class:`~autotask_connection.factory.ConnectionFactory`.  These fixtures
are automatically discovered by pytest and available to all test modules.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import diskcache
import httpx
import pytest

from autotask_connection import ConnectionFactory

BASE_URL = "https://autotask.net"
USERNAME = "test.user@example.com"
PASSWORD = "Abc123"
INTEGRATION_CODE = "Xyz123"


# ---------------------------------------------------------------------------
# Mock API
# ---------------------------------------------------------------------------


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Every request that reached the mock transport, in order."""
    return []


@pytest.fixture
def api_handler(
    sent_requests: list[httpx.Request],
) -> Callable[[httpx.Request], httpx.Response]:
    """Default mock API handler.

    Records the request and answers with a JSON body echoing the method and
    URL, plus an ``X-Request-Number`` header counting calls so tests can
    tell a cached response from a fresh one.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        sent_requests.append(request)
        return httpx.Response(
            200,
            headers={"X-Request-Number": str(len(sent_requests))},
            json={"method": request.method, "url": str(request.url)},
        )

    return handler


@pytest.fixture
def http_client(
    api_handler: Callable[[httpx.Request], httpx.Response],
) -> Iterator[httpx.Client]:
    """An :class:`httpx.Client` backed by :func:`api_handler`."""
    client = httpx.Client(transport=httpx.MockTransport(api_handler))
    yield client
    client.close()


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------


@pytest.fixture
def disk_cache(tmp_path: Path) -> Iterator[diskcache.Cache]:
    """A real :class:`diskcache.Cache` isolated in ``tmp_path``."""
    cache = diskcache.Cache(str(tmp_path / "cache"))
    yield cache
    cache.close()


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@pytest.fixture
def factory(http_client: httpx.Client) -> ConnectionFactory:
    """A factory with test credentials and the mock client, without a cache."""
    return (
        ConnectionFactory.new()
        .username(USERNAME)
        .password(PASSWORD)
        .integration_code(INTEGRATION_CODE)
        .base_url(BASE_URL)
        .client(http_client)
    )


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep real ``AUTOTASK_*`` variables and the user's cache out of tests."""
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))
    for var in [
        "AUTOTASK_USERNAME",
        "AUTOTASK_SECRET",
        "AUTOTASK_INTEGRATION_CODE",
        "AUTOTASK_BASE_URL",
        "AUTOTASK_CACHE",
        "AUTOTASK_CACHE_TTL",
        "AUTOTASK_CACHE_DIR",
        "AUTOTASK_TIMEOUT",
    ]:
        monkeypatch.delenv(var, raising=False)
