"""Raw HTTP client wrapped with the plugin chain.

:class:`PluginClient` is the transport stored on a
:class:`~autotask_connection.configuration.Configuration`.  It builds an
:class:`httpx.Request`, threads it through each plugin's
:meth:`~autotask_connection.plugins.base.Plugin.on_request`, sends it with
the raw :class:`httpx.Client`, and threads the response back through
:meth:`~autotask_connection.plugins.base.Plugin.on_response` in reverse
order.

Transport errors are never retried or wrapped: after the plugins'
``on_error`` hooks have run, the original exception is re-raised.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Union

import httpx

from autotask_connection.models import Headers
from autotask_connection.plugins.base import Plugin

logger = logging.getLogger(__name__)


def header_items(headers: Optional[Headers]) -> list[tuple[str, str]]:
    """Flatten a header mapping with multi-valued entries into ``(name, value)`` pairs."""
    items: list[tuple[str, str]] = []
    for name, value in (headers or {}).items():
        if isinstance(value, str):
            items.append((name, value))
        else:
            items.extend((name, item) for item in value)
    return items


class PluginClient:
    """An :class:`httpx.Client` composed with an ordered list of plugins.

    Args:
        client: The raw client that performs the network exchange.
        plugins: Plugins in registration order.  The list is copied, so
            later changes to the caller's collection have no effect.
        request_factory: Callable used to build outgoing requests; takes the
            same arguments as :class:`httpx.Request`.

    Example::

        transport = PluginClient(httpx.Client(), [LoggerPlugin()])
        response = transport.send("GET", "https://example.com/Tickets")
    """

    def __init__(
        self,
        client: httpx.Client,
        plugins: Iterable[Plugin] = (),
        request_factory: Callable[..., httpx.Request] = httpx.Request,
    ) -> None:
        self._client = client
        self._plugins: tuple[Plugin, ...] = tuple(plugins)
        self._request_factory = request_factory

    @property
    def client(self) -> httpx.Client:
        """The raw client underneath the plugin chain."""
        return self._client

    @property
    def plugins(self) -> tuple[Plugin, ...]:
        return self._plugins

    def send(
        self,
        method: str,
        url: str,
        headers: Optional[Headers] = None,
        body: Union[str, bytes, None] = None,
    ) -> httpx.Response:
        """Send a request through the plugin chain.

        Args:
            method: HTTP method.
            url: Absolute request URL.
            headers: Request headers; list values become repeated headers.
            body: Raw request body, sent unchanged.

        Returns:
            The :class:`httpx.Response` after every ``on_response`` hook.

        Raises:
            httpx.HTTPError: Whatever the raw client raised, unchanged.
        """
        request = self._request_factory(
            method, url, headers=header_items(headers), content=body
        )
        for plugin in self._plugins:
            request = plugin.on_request(request)

        try:
            response = self._client.send(request)
        except httpx.HTTPError as exc:
            self._run_error_hooks(request, exc)
            raise

        for plugin in reversed(self._plugins):
            response = plugin.on_response(request, response)
        return response

    def _run_error_hooks(self, request: httpx.Request, error: Exception) -> None:
        for plugin in self._plugins:
            try:
                plugin.on_error(request, error)
            except Exception as exc:
                logger.warning("Plugin '%s' failed in on_error: %s", plugin.name, exc)
