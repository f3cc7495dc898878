"""Exception hierarchy for autotask-connection.

All exceptions raised by this package inherit from :class:`AutotaskError`.
Transport failures are *not* wrapped: :class:`httpx.HTTPError` subclasses
raised by the underlying client reach the caller unchanged, as do errors
raised by the cache store.

Subclass hierarchy::

    AutotaskError
    +-- MissingConfigurationError
    +-- InvalidPluginError
    +-- ConfigError
"""


class AutotaskError(Exception):
    """Base exception for all autotask-connection errors."""


class MissingConfigurationError(AutotaskError):
    """Raised when a required connection setting was never provided.

    Args:
        field: Name of the missing setting (``"username"``, ``"password"``,
            ``"integration_code"`` or ``"base_url"``).
        message: Human-readable error description.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class InvalidPluginError(AutotaskError):
    """Raised when an object that is not a plugin is registered as one."""


class ConfigError(AutotaskError):
    """Raised for unreadable settings (bad environment values, credential sources)."""
