"""Immutable connection configuration.

:class:`Configuration` bundles the credentials, the normalised base URL,
the optional cache handle and TTL, and the plugin-wrapped client.  It is a
frozen Pydantic model: it is created once, normally by
:meth:`~autotask_connection.factory.ConnectionFactory.build`, and any
attempt to assign to it afterwards raises a
:class:`pydantic.ValidationError`.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from autotask_connection.cache import CacheStore
from autotask_connection.client import PluginClient
from autotask_connection.models import DEFAULT_CACHE_TTL


class Configuration(BaseModel):
    """Everything a :class:`~autotask_connection.connection.Connection` needs.

    Attributes:
        username: API user name, sent as the ``Username`` header.
        password: API secret, sent as the ``Secret`` header.  Hidden from
            ``repr()``.
        integration_code: Sent as the ``APIIntegrationCode`` header.
        base_url: Always ends with exactly one ``/``.
        cache: Cache store for GET responses; ``None`` disables caching.
        cache_ttl_seconds: Lifetime of cached entries.
        client: The raw client wrapped with the plugin chain.
        request_factory: Builds :class:`httpx.Request` objects.
        stream_factory: Turns cached body bytes back into a stream.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    username: str
    password: str = Field(repr=False)
    integration_code: str
    base_url: str
    cache: Optional[Any] = None
    cache_ttl_seconds: int = Field(default=DEFAULT_CACHE_TTL, ge=0)
    client: PluginClient
    request_factory: Callable[..., httpx.Request] = httpx.Request
    stream_factory: Callable[[bytes], httpx.SyncByteStream] = httpx.ByteStream

    @field_validator("base_url")
    @classmethod
    def _normalize_base_url(cls, value: str) -> str:
        return value.rstrip("/") + "/"

    @field_validator("cache")
    @classmethod
    def _check_cache(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, CacheStore):
            raise ValueError(
                f"cache must provide get/set/delete, got {type(value).__name__}"
            )
        return value
