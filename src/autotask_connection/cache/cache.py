"""Cache-store contract, cache keys, and response snapshots for GET requests.

A cache store is anything with ``get``/``set``/``delete`` -- the subset of
the :class:`diskcache.Cache` API the connection relies on.  Entries are
written as plain dicts (:meth:`pydantic.BaseModel.model_dump`) so any
pickling backend can hold them, and expire after the configured TTL.

Cache keys are SHA-256 hashes of a canonical JSON encoding of
``[base_url, path, headers]`` with header names sorted, so identical
requests always resolve to the same entry regardless of header insertion
order.
"""

from __future__ import annotations

import hashlib
import json
import time
from typing import Any, Callable, Optional, Protocol, runtime_checkable

import httpx

from autotask_connection.models import CacheEntry, Headers

# The stored body is already decoded, so these no longer describe it.
_DROPPED_HEADERS = frozenset({"content-encoding", "transfer-encoding"})


@runtime_checkable
class CacheStore(Protocol):
    """Key-value store of opaque values with per-entry expiration."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any, expire: Optional[float] = None) -> Any: ...

    def delete(self, key: str) -> Any: ...


def make_cache_key(base_url: str, uri: str, headers: Optional[Headers] = None) -> str:
    """Derive the cache key for a GET request.

    Args:
        base_url: The configuration's normalised base URL.
        uri: Request URI; surrounding slashes are ignored.
        headers: Caller-supplied request headers.  Multi-valued headers keep
            the order of their values.

    Returns:
        A 64-character hex digest.
    """
    normalized = {
        name: value if isinstance(value, str) else list(value)
        for name, value in (headers or {}).items()
    }
    raw = json.dumps(
        [base_url, uri.strip("/"), normalized], sort_keys=True, separators=(",", ":")
    )
    return hashlib.sha256(raw.encode()).hexdigest()


def snapshot_response(
    response: httpx.Response,
    url: str,
    ttl_seconds: int,
    now: Optional[float] = None,
) -> CacheEntry:
    """Capture *response* metadata and its full body as a :class:`CacheEntry`.

    The body is read completely, so a streamed response is materialised
    here.  ``Content-Length`` is rewritten to match the decoded body.
    """
    body = response.read()
    if now is None:
        now = time.time()

    headers: list[tuple[str, str]] = []
    had_length = False
    for name, value in response.headers.multi_items():
        lowered = name.lower()
        if lowered in _DROPPED_HEADERS:
            continue
        if lowered == "content-length":
            had_length = True
            continue
        headers.append((name, value))
    if had_length:
        headers.append(("content-length", str(len(body))))

    return CacheEntry(
        status_code=response.status_code,
        headers=headers,
        http_version=response.http_version,
        reason_phrase=response.reason_phrase,
        url=url,
        body=body,
        stored_at=now,
        expires_at=now + ttl_seconds,
    )


def restore_response(
    entry: CacheEntry,
    request_factory: Callable[..., httpx.Request],
    stream_factory: Callable[[bytes], httpx.SyncByteStream],
) -> httpx.Response:
    """Rebuild a readable :class:`httpx.Response` from a cache entry.

    The body is attached as a fresh stream and read immediately, so the
    returned response is readable from the first byte via ``content``,
    ``text``, ``json()`` or ``iter_bytes()``.
    """
    extensions: dict[str, Any] = {
        "http_version": entry.http_version.encode("ascii", errors="ignore"),
    }
    if entry.reason_phrase:
        extensions["reason_phrase"] = entry.reason_phrase.encode("ascii", errors="ignore")

    response = httpx.Response(
        status_code=entry.status_code,
        headers=entry.headers,
        stream=stream_factory(entry.body),
        request=request_factory("GET", entry.url),
        extensions=extensions,
    )
    response.read()
    return response
