"""Request-sending facade over a :class:`~autotask_connection.configuration.Configuration`.

:class:`Connection` adds the Autotask authentication headers to every
request, resolves relative URIs against the configured base URL, and hands
the request to the plugin-wrapped client.

GET requests go through the response cache when one is configured:

1. The cache key is derived from the base URL, the URI with surrounding
   slashes removed, and the caller's headers.
2. With :meth:`Connection.with_refresh` the entry is deleted first, so the
   lookup is guaranteed to miss.
3. On a miss the response is fetched, its full body captured, and the
   snapshot stored with the configured TTL; on a hit the network is skipped.
4. Either way the caller receives a response rebuilt from the snapshot,
   readable from the first byte.

Per-call behaviour is chosen with :meth:`Connection.with_cache` and
:meth:`Connection.with_refresh`, which return new connections sharing the
same configuration::

    fresh = connection.with_refresh().get("Tickets/42")
    live = connection.with_cache(False).get("Tickets/42")
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import httpx

from autotask_connection.cache import make_cache_key, restore_response, snapshot_response
from autotask_connection.configuration import Configuration
from autotask_connection.models import CacheEntry, HeaderValue, Headers

logger = logging.getLogger(__name__)

Body = Union[str, bytes, None]

DEFAULT_CONTENT_TYPE = "application/json"


def merge_headers(headers: Optional[Headers], defaults: Headers) -> dict[str, HeaderValue]:
    """Merge *defaults* into the caller's *headers*.

    Header names are compared case-insensitively.  When both sides carry the
    same header, the values are accumulated into a list (caller values
    first) instead of one replacing the other; identical values are kept
    once.
    """
    merged: dict[str, HeaderValue] = dict(headers or {})
    names = {name.lower(): name for name in merged}

    for name, value in defaults.items():
        existing_name = names.get(name.lower())
        if existing_name is None:
            merged[name] = value
            names[name.lower()] = name
            continue

        values = _as_list(merged[existing_name])
        for item in _as_list(value):
            if item not in values:
                values.append(item)
        merged[existing_name] = values[0] if len(values) == 1 else values
    return merged


def _as_list(value: HeaderValue) -> list[str]:
    if isinstance(value, str):
        return [value]
    return list(value)


class Connection:
    """Sends authenticated requests to the Autotask REST API.

    A connection holds no state besides its configuration and two flags;
    the ``with_*`` methods never modify it in place.

    Args:
        configuration: The immutable configuration to send requests with.
        cache_enabled: Serve GET requests from the cache when one is
            configured.
        force_refresh: Drop the cached entry before each GET lookup.
    """

    def __init__(
        self,
        configuration: Configuration,
        cache_enabled: bool = True,
        force_refresh: bool = False,
    ) -> None:
        self._configuration = configuration
        self._cache_enabled = cache_enabled
        self._force_refresh = force_refresh

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def cache_enabled(self) -> bool:
        return self._cache_enabled

    @property
    def force_refresh(self) -> bool:
        return self._force_refresh

    def with_cache(self, enabled: bool = True) -> Connection:
        """Return a connection that does (or does not) use the GET cache."""
        return Connection(self._configuration, enabled, self._force_refresh)

    def with_refresh(self, refresh: bool = True) -> Connection:
        """Return a connection that invalidates cached GET responses before lookup."""
        return Connection(self._configuration, self._cache_enabled, refresh)

    def __repr__(self) -> str:
        return (
            f"Connection(base_url={self._configuration.base_url!r}, "
            f"cache_enabled={self._cache_enabled}, force_refresh={self._force_refresh})"
        )

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def get(self, uri: str, headers: Optional[Headers] = None) -> httpx.Response:
        """Send a GET request, using the response cache when possible.

        Args:
            uri: Path relative to the base URL, or an absolute URL.
            headers: Extra request headers; they are part of the cache key.

        Returns:
            The response.  Cached and freshly fetched responses are both
            fully read and readable from the start.
        """
        if self.is_cacheable():
            return self._cached_get(uri, headers)
        return self.send("GET", uri, headers)

    def head(self, uri: str, headers: Optional[Headers] = None) -> httpx.Response:
        return self.send("HEAD", uri, headers)

    def trace(self, uri: str, headers: Optional[Headers] = None) -> httpx.Response:
        return self.send("TRACE", uri, headers)

    def post(self, uri: str, headers: Optional[Headers] = None, body: Body = None) -> httpx.Response:
        return self.send("POST", uri, headers, body)

    def put(self, uri: str, headers: Optional[Headers] = None, body: Body = None) -> httpx.Response:
        return self.send("PUT", uri, headers, body)

    def patch(self, uri: str, headers: Optional[Headers] = None, body: Body = None) -> httpx.Response:
        return self.send("PATCH", uri, headers, body)

    def delete(self, uri: str, headers: Optional[Headers] = None, body: Body = None) -> httpx.Response:
        return self.send("DELETE", uri, headers, body)

    def options(self, uri: str, headers: Optional[Headers] = None, body: Body = None) -> httpx.Response:
        return self.send("OPTIONS", uri, headers, body)

    def send(
        self,
        method: str,
        uri: str,
        headers: Optional[Headers] = None,
        body: Body = None,
    ) -> httpx.Response:
        """Send a request with the authentication headers added.

        Args:
            method: HTTP method.
            uri: Path relative to the base URL, or an absolute URL.
            headers: Extra request headers, merged with the defaults.
            body: Raw request body, sent unchanged.

        Returns:
            The :class:`httpx.Response` from the plugin-wrapped client.

        Raises:
            httpx.HTTPError: Transport failures, unchanged.
        """
        config = self._configuration
        merged = merge_headers(
            headers,
            {
                "Username": config.username,
                "Secret": config.password,
                "APIIntegrationCode": config.integration_code,
                "Content-Type": DEFAULT_CONTENT_TYPE,
            },
        )
        return config.client.send(method, self.resolve_url(uri), merged, body)

    def resolve_url(self, uri: str) -> str:
        """Return *uri* unchanged if absolute, else joined onto the base URL."""
        if uri.startswith(("http://", "https://")):
            return uri
        return self._configuration.base_url + uri.strip("/")

    def is_cacheable(self) -> bool:
        return self._cache_enabled and self._configuration.cache is not None

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _cached_get(self, uri: str, headers: Optional[Headers]) -> httpx.Response:
        config = self._configuration
        cache = config.cache
        assert cache is not None, "Caller must check is_cacheable() first"

        key = make_cache_key(config.base_url, uri, headers)

        if self._force_refresh:
            cache.delete(key)
            logger.debug("Cache invalidated: GET %s", uri)

        entry = self._load_entry(key)
        if entry is None:
            logger.debug("Cache miss: GET %s", uri)
            url = self.resolve_url(uri)
            response = self.send("GET", url, headers)
            entry = snapshot_response(response, url, config.cache_ttl_seconds)
            cache.set(key, entry.model_dump(), expire=config.cache_ttl_seconds)
        else:
            logger.debug("Cache hit: GET %s", uri)

        return restore_response(entry, config.request_factory, config.stream_factory)

    def _load_entry(self, key: str) -> Optional[CacheEntry]:
        """Return the live entry under *key*, or ``None`` on a miss."""
        raw = self._configuration.cache.get(key)
        if raw is None:
            return None
        entry = CacheEntry.model_validate(raw)
        if entry.is_expired():
            return None
        return entry
