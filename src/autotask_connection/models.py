"""Pydantic models shared across autotask-connection.

* :class:`ConnectionSettings` -- connection settings as read from the
  environment by :func:`~autotask_connection.config.load_settings`.
* :class:`CacheEntry` -- the serialisable snapshot of a GET response that
  is written to the cache store.

The immutable :class:`~autotask_connection.configuration.Configuration`
lives in its own module because it carries live objects (the HTTP client,
the cache handle) rather than plain data.
"""

from __future__ import annotations

import time
from typing import Mapping, Optional, Sequence, Union

from pydantic import BaseModel, Field

DEFAULT_CACHE_TTL = 3306
"""Default lifetime of a cached GET response, in seconds."""

DEFAULT_TIMEOUT = 30
"""Default request timeout for a discovered client, in seconds."""


class ConnectionSettings(BaseModel):
    """Connection settings gathered from the environment.

    Every credential is optional here so that a partially configured
    environment can still seed a
    :class:`~autotask_connection.factory.ConnectionFactory`; missing values
    are reported when the factory builds.
    """

    username: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)
    integration_code: Optional[str] = None
    base_url: Optional[str] = None
    cache_enabled: bool = Field(default=True, description="Cache GET responses on disk")
    cache_ttl_seconds: int = Field(
        default=DEFAULT_CACHE_TTL, ge=0, description="Cache TTL in seconds"
    )
    cache_dir: Optional[str] = Field(
        default=None, description="Override the default cache directory"
    )
    timeout: int = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")


class CacheEntry(BaseModel):
    """A GET response captured for the cache.

    Holds the response metadata and the *entire* decoded body so the
    response can be rebuilt later without touching the network.  Headers are
    kept as ``(name, value)`` pairs to preserve repeated header names.
    """

    status_code: int
    headers: list[tuple[str, str]] = Field(default_factory=list)
    http_version: str = "HTTP/1.1"
    reason_phrase: str = ""
    url: str
    body: bytes = b""
    stored_at: float
    expires_at: float

    def is_expired(self, now: Optional[float] = None) -> bool:
        """Return ``True`` once ``expires_at`` has passed."""
        if now is None:
            now = time.time()
        return now >= self.expires_at


HeaderValue = Union[str, Sequence[str]]
"""A single header value, or several values for a repeated header."""

Headers = Mapping[str, HeaderValue]
"""Request headers keyed by name, as accepted by the connection."""
