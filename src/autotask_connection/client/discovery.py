"""Discovery of default HTTP collaborators.

When a :class:`~autotask_connection.factory.ConnectionFactory` is built
without an explicit client, request factory, or stream factory, it asks
this module for one.

Raw clients can be supplied by other packages through the
``autotask_connection.clients`` entry-point group; each entry point names a
zero-argument callable returning an :class:`httpx.Client`::

    [project.entry-points."autotask_connection.clients"]
    proxied = "my_package.http:make_client"

The first entry point that yields a client wins.  Without one, a plain
:class:`httpx.Client` is created.
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Callable

import httpx

from autotask_connection.models import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

CLIENT_ENTRY_POINT_GROUP = "autotask_connection.clients"
"""The entry-point group searched by :func:`find_client`."""


def _client_entry_points() -> list[importlib.metadata.EntryPoint]:
    return list(importlib.metadata.entry_points(group=CLIENT_ENTRY_POINT_GROUP))


def find_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.Client:
    """Return a raw HTTP client.

    Entry points that fail to load, or that return something other than an
    :class:`httpx.Client`, are logged and skipped.

    Args:
        timeout: Timeout for the fallback client, in seconds.
    """
    for ep in _client_entry_points():
        try:
            client = ep.load()()
        except Exception as exc:
            logger.warning("Failed to load HTTP client '%s': %s", ep.name, exc)
            continue
        if not isinstance(client, httpx.Client):
            logger.warning(
                "Entry point '%s' returned %s, not an httpx.Client; skipping",
                ep.name,
                type(client).__name__,
            )
            continue
        logger.debug("Using HTTP client from entry point '%s'", ep.name)
        return client

    logger.debug("No HTTP client entry point found, creating httpx.Client")
    return httpx.Client(timeout=timeout)


def find_request_factory() -> Callable[..., httpx.Request]:
    """Return the default request factory, :class:`httpx.Request`."""
    return httpx.Request


def find_stream_factory() -> Callable[[bytes], httpx.SyncByteStream]:
    """Return the default stream factory, :class:`httpx.ByteStream`."""
    return httpx.ByteStream
