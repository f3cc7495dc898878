"""Plugin that logs every request and response through :mod:`logging`."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from autotask_connection.plugins.base import Plugin


class LoggerPlugin(Plugin):
    """Logs the request line, the response status, and transport errors.

    Credentials travel in headers, so headers are never logged.

    Args:
        logger: Logger to write to.  Defaults to this module's logger.
        level: Level used for request and response messages.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._level = level

    @property
    def name(self) -> str:
        return "logger"

    @property
    def description(self) -> str:
        return "Logs request lines and response statuses"

    def on_request(self, request: httpx.Request) -> httpx.Request:
        self._logger.log(self._level, "Sending request: %s %s", request.method, request.url)
        return request

    def on_response(self, request: httpx.Request, response: httpx.Response) -> httpx.Response:
        self._logger.log(
            self._level,
            "Received response: %s %s -> %s",
            request.method,
            request.url,
            response.status_code,
        )
        return response

    def on_error(self, request: httpx.Request, error: Exception) -> None:
        self._logger.error("Request failed: %s %s: %s", request.method, request.url, error)
