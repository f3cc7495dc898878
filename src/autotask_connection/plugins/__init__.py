"""Middleware plugins composed around the raw HTTP client.

* :class:`~autotask_connection.plugins.base.Plugin` -- the abstract base
  every plugin extends.
* :class:`~autotask_connection.plugins.collection.PluginCollection` -- the
  ordered collection that rejects non-plugins at insertion time.
* :class:`~autotask_connection.plugins.logger.LoggerPlugin` -- request and
  response logging.
"""

from autotask_connection.plugins.base import Plugin
from autotask_connection.plugins.collection import PluginCollection
from autotask_connection.plugins.logger import LoggerPlugin

__all__ = ["Plugin", "PluginCollection", "LoggerPlugin"]
