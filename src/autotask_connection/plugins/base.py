"""Abstract base class for connection plugins.

A plugin is middleware composed around the raw HTTP client.  Every plugin
must subclass :class:`Plugin` and implement the :attr:`name` property.  The
hooks (``on_request``, ``on_response``, ``on_error``) are optional --
default implementations pass values through unchanged so plugins only
override what they need.

Plugins are registered on a
:class:`~autotask_connection.factory.ConnectionFactory` with
:meth:`~autotask_connection.factory.ConnectionFactory.add_plugin` and run
by :class:`~autotask_connection.client.PluginClient`.

Example:
    Minimal plugin implementation::

        class TracePlugin(Plugin):
            @property
            def name(self) -> str:
                return "trace"

            def on_request(self, request):
                request.headers["X-Trace"] = "1"
                return request
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import httpx


class Plugin(ABC):
    """Base class for all connection plugins.

    Request hooks run in registration order; response hooks run in reverse
    registration order, so the first plugin registered is the outermost
    layer around the client.

    See Also:
        :class:`~autotask_connection.client.PluginClient` for details on
        how hooks are chained across multiple plugins.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the plugin name used in log messages.

        Returns:
            A short, human-readable identifier (e.g. ``"logger"``).
        """
        ...

    @property
    def version(self) -> str:
        """Return the plugin version string. Defaults to ``"0.1.0"``."""
        return "0.1.0"

    @property
    def description(self) -> str:
        """Return a brief description of what the plugin does."""
        return ""

    def on_request(self, request: httpx.Request) -> httpx.Request:
        """Called before the request is handed to the raw client.

        Args:
            request: The outgoing request.

        Returns:
            The request to pass to the next plugin (the same object, a
            modified one, or a replacement).
        """
        return request

    def on_response(self, request: httpx.Request, response: httpx.Response) -> httpx.Response:
        """Called after a response is received from the raw client.

        Args:
            request: The request as it was sent.
            response: The response returned so far.

        Returns:
            The (possibly replaced) response.
        """
        return response

    def on_error(self, request: httpx.Request, error: Exception) -> None:
        """Called when the raw client raises a transport error.

        The original error is always re-raised after every plugin has been
        notified.  Exceptions raised here are logged and discarded.

        Args:
            request: The request that failed.
            error: The exception raised by the client.
        """
