"""autotask-connection -- an authenticated, caching HTTP connection to the Autotask REST API.

A :class:`ConnectionFactory` assembles credentials, the base URL, an
optional response cache, and a chain of middleware plugins into an
immutable :class:`Configuration`, wrapped by a :class:`Connection` that
sends requests::

    from autotask_connection import ConnectionFactory

    connection = (
        ConnectionFactory.new()
        .username("api.user@example.com")
        .password("secret")
        .integration_code("ABC123")
        .base_url("https://webservices.autotask.net/atservicesrest/v1.0")
        .make()
    )
    tickets = connection.get("Tickets/query?search={}").json()

Modules:
    factory: The fluent configuration builder.
    configuration: The immutable configuration model.
    connection: Verb dispatch and the cached GET pipeline.
    cache: Cache-store contract, cache keys, and response snapshots.
    client: The plugin-wrapped HTTP client and default discovery.
    plugins: Middleware base class, collection, and built-in plugins.
    config: Environment settings and the default on-disk cache.
    models: Pydantic models shared across the package.
    exceptions: Exception hierarchy.
"""

from autotask_connection.configuration import Configuration
from autotask_connection.connection import Connection
from autotask_connection.exceptions import (
    AutotaskError,
    ConfigError,
    InvalidPluginError,
    MissingConfigurationError,
)
from autotask_connection.factory import ConnectionFactory
from autotask_connection.plugins import LoggerPlugin, Plugin, PluginCollection

__version__ = "0.1.0"

__all__ = [
    "AutotaskError",
    "ConfigError",
    "Configuration",
    "Connection",
    "ConnectionFactory",
    "InvalidPluginError",
    "LoggerPlugin",
    "MissingConfigurationError",
    "Plugin",
    "PluginCollection",
]
