"""Fluent builder for :class:`~autotask_connection.configuration.Configuration`.

:class:`ConnectionFactory` collects the connection settings one call at a
time and produces an immutable configuration (:meth:`ConnectionFactory.build`)
or a ready-to-use connection (:meth:`ConnectionFactory.make`)::

    connection = (
        ConnectionFactory.new()
        .username("api.user@example.com")
        .password("secret")
        .integration_code("ABC123")
        .base_url("https://webservices.autotask.net/atservicesrest/v1.0")
        .cache(diskcache.Cache("/tmp/autotask"))
        .make()
    )

Required settings are checked at build time in a fixed order (username,
password, integration code, base URL); the first missing one is reported.
Plugins are checked as they are added.
"""

from __future__ import annotations

from typing import Callable, Optional

import httpx

from autotask_connection.cache import CacheStore
from autotask_connection.client import (
    PluginClient,
    find_client,
    find_request_factory,
    find_stream_factory,
)
from autotask_connection.config import open_cache
from autotask_connection.configuration import Configuration
from autotask_connection.connection import Connection
from autotask_connection.exceptions import MissingConfigurationError
from autotask_connection.models import DEFAULT_CACHE_TTL, DEFAULT_TIMEOUT, ConnectionSettings
from autotask_connection.plugins import PluginCollection


class ConnectionFactory:
    """Mutable, fluent assembly of a :class:`Configuration`.

    Every setter returns the factory itself so calls can be chained.  The
    factory can be built any number of times; each build returns a new
    configuration.
    """

    def __init__(self) -> None:
        self._username: Optional[str] = None
        self._password: Optional[str] = None
        self._integration_code: Optional[str] = None
        self._base_url: Optional[str] = None
        self._cache: Optional[CacheStore] = None
        self._cache_ttl: int = DEFAULT_CACHE_TTL
        self._client: Optional[httpx.Client] = None
        self._timeout: float = DEFAULT_TIMEOUT
        self._request_factory: Optional[Callable[..., httpx.Request]] = None
        self._stream_factory: Optional[Callable[[bytes], httpx.SyncByteStream]] = None
        self._plugins = PluginCollection()

    @classmethod
    def new(cls) -> ConnectionFactory:
        return cls()

    @classmethod
    def from_settings(cls, settings: ConnectionSettings) -> ConnectionFactory:
        """Create a factory seeded from *settings*.

        Credentials absent from *settings* stay unset, so :meth:`build`
        still reports them.  When caching is enabled a disk cache is opened
        in ``settings.cache_dir`` (or the default cache directory).
        """
        factory = cls()
        if settings.username is not None:
            factory.username(settings.username)
        if settings.password is not None:
            factory.password(settings.password)
        if settings.integration_code is not None:
            factory.integration_code(settings.integration_code)
        if settings.base_url is not None:
            factory.base_url(settings.base_url)
        factory.timeout(settings.timeout)
        return factory.cache(open_cache(settings)).cache_ttl(settings.cache_ttl_seconds)

    # ------------------------------------------------------------------ #
    # Credentials and endpoint
    # ------------------------------------------------------------------ #

    def username(self, username: str) -> ConnectionFactory:
        self._username = username
        return self

    def get_username(self) -> str:
        if self._username is not None:
            return self._username
        raise MissingConfigurationError("username", "No username was specified.")

    def password(self, password: str) -> ConnectionFactory:
        self._password = password
        return self

    def get_password(self) -> str:
        if self._password is not None:
            return self._password
        raise MissingConfigurationError("password", "No password was specified.")

    def integration_code(self, integration_code: str) -> ConnectionFactory:
        self._integration_code = integration_code
        return self

    def get_integration_code(self) -> str:
        if self._integration_code is not None:
            return self._integration_code
        raise MissingConfigurationError(
            "integration_code", "No integration code was specified."
        )

    def base_url(self, url: str) -> ConnectionFactory:
        self._base_url = url
        return self

    def get_base_url(self) -> str:
        if self._base_url is not None:
            return self._base_url
        raise MissingConfigurationError("base_url", "No base url was specified.")

    # ------------------------------------------------------------------ #
    # Cache
    # ------------------------------------------------------------------ #

    def cache(self, cache: Optional[CacheStore]) -> ConnectionFactory:
        """Set the cache store; ``None`` disables caching."""
        self._cache = cache
        return self

    def get_cache(self) -> Optional[CacheStore]:
        return self._cache

    def cache_ttl(self, seconds: int) -> ConnectionFactory:
        """Set how long cached GET responses live, in seconds."""
        self._cache_ttl = seconds
        return self

    def get_cache_ttl(self) -> int:
        return self._cache_ttl

    # ------------------------------------------------------------------ #
    # HTTP collaborators
    # ------------------------------------------------------------------ #

    def client(self, client: httpx.Client) -> ConnectionFactory:
        self._client = client
        return self

    def get_client(self) -> httpx.Client:
        """Return the configured client, or discover one."""
        if self._client is not None:
            return self._client
        return find_client(timeout=self._timeout)

    def timeout(self, seconds: float) -> ConnectionFactory:
        """Set the timeout given to a discovered client; ignored when a client is set."""
        self._timeout = seconds
        return self

    def request_factory(self, request_factory: Callable[..., httpx.Request]) -> ConnectionFactory:
        self._request_factory = request_factory
        return self

    def get_request_factory(self) -> Callable[..., httpx.Request]:
        return self._request_factory or find_request_factory()

    def stream_factory(
        self, stream_factory: Callable[[bytes], httpx.SyncByteStream]
    ) -> ConnectionFactory:
        self._stream_factory = stream_factory
        return self

    def get_stream_factory(self) -> Callable[[bytes], httpx.SyncByteStream]:
        return self._stream_factory or find_stream_factory()

    def add_plugin(self, plugin: object) -> ConnectionFactory:
        """Register a plugin.

        Raises:
            InvalidPluginError: If *plugin* is not a
                :class:`~autotask_connection.plugins.base.Plugin`.
        """
        self._plugins.add(plugin)
        return self

    def get_plugins(self) -> PluginCollection:
        return self._plugins

    # ------------------------------------------------------------------ #
    # Terminal operations
    # ------------------------------------------------------------------ #

    def build(self) -> Configuration:
        """Build an immutable :class:`Configuration`.

        Raises:
            MissingConfigurationError: For the first of username, password,
                integration code, or base URL that was never set.
        """
        username = self.get_username()
        password = self.get_password()
        integration_code = self.get_integration_code()
        base_url = self.get_base_url()
        request_factory = self.get_request_factory()

        return Configuration(
            username=username,
            password=password,
            integration_code=integration_code,
            base_url=base_url,
            cache=self.get_cache(),
            cache_ttl_seconds=self.get_cache_ttl(),
            client=PluginClient(
                self.get_client(), self._plugins.to_list(), request_factory
            ),
            request_factory=request_factory,
            stream_factory=self.get_stream_factory(),
        )

    def make(self) -> Connection:
        """Build the configuration and wrap it in a :class:`Connection`."""
        return Connection(self.build())
