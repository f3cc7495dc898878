"""Response caching for GET requests.

This package defines the narrow contract a cache backend must satisfy
(:class:`CacheStore`), the cache-key derivation (:func:`make_cache_key`)
and the conversion between live :class:`httpx.Response` objects and
storable :class:`~autotask_connection.models.CacheEntry` snapshots.

:class:`diskcache.Cache` satisfies :class:`CacheStore` as-is and is what
:func:`~autotask_connection.config.open_cache` hands out by default.
"""

from autotask_connection.cache.cache import (
    CacheStore,
    make_cache_key,
    restore_response,
    snapshot_response,
)

__all__ = ["CacheStore", "make_cache_key", "restore_response", "snapshot_response"]
