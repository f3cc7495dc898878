"""Ordered, validated collection of plugins."""

from __future__ import annotations

from typing import Iterable, Iterator, Union, overload

from autotask_connection.exceptions import InvalidPluginError
from autotask_connection.plugins.base import Plugin


def _ensure_plugin(value: object) -> Plugin:
    if not isinstance(value, Plugin):
        raise InvalidPluginError(
            f"Expecting instance of [{Plugin.__module__}.{Plugin.__qualname__}] "
            f"received [{type(value).__name__}]."
        )
    return value


class PluginCollection:
    """List of :class:`Plugin` instances that rejects anything else on insertion.

    Validation happens when a value is added, never later, so a bad plugin
    fails at registration instead of at build or request time.

    Example::

        plugins = PluginCollection([LoggerPlugin()])
        plugins.add(object())  # raises InvalidPluginError
    """

    def __init__(self, plugins: Iterable[object] = ()) -> None:
        self._plugins: list[Plugin] = []
        self.extend(plugins)

    def add(self, plugin: object) -> PluginCollection:
        """Append *plugin*, raising :class:`InvalidPluginError` if it is not a plugin."""
        self._plugins.append(_ensure_plugin(plugin))
        return self

    def extend(self, plugins: Iterable[object]) -> PluginCollection:
        for plugin in plugins:
            self.add(plugin)
        return self

    def to_list(self) -> list[Plugin]:
        """Return a copy of the plugins in registration order."""
        return list(self._plugins)

    @overload
    def __getitem__(self, index: int) -> Plugin: ...

    @overload
    def __getitem__(self, index: slice) -> list[Plugin]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Plugin, list[Plugin]]:
        return self._plugins[index]

    def __setitem__(self, index: int, plugin: object) -> None:
        self._plugins[index] = _ensure_plugin(plugin)

    def __iter__(self) -> Iterator[Plugin]:
        return iter(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)

    def __repr__(self) -> str:
        names = ", ".join(plugin.name for plugin in self._plugins)
        return f"PluginCollection([{names}])"
