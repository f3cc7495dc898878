"""HTTP client layer for autotask-connection.

Classes and functions:
    :class:`PluginClient` -- the raw :class:`httpx.Client` wrapped with the
    plugin chain.
    :func:`find_client`, :func:`find_request_factory`,
    :func:`find_stream_factory` -- defaults used when a factory is built
    without explicit collaborators.
"""

from autotask_connection.client.discovery import (
    find_client,
    find_request_factory,
    find_stream_factory,
)
from autotask_connection.client.plugin_client import PluginClient

__all__ = ["PluginClient", "find_client", "find_request_factory", "find_stream_factory"]
