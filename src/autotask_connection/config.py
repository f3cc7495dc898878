"""Environment-driven settings, credential sources, and the default cache location.

* **Settings** -- :func:`load_settings` reads ``AUTOTASK_*`` environment
  variables into a :class:`~autotask_connection.models.ConnectionSettings`.
* **Credential resolution** -- :func:`resolve_credential` reads a secret
  from another environment variable or a file, so credentials can be kept
  out of the process environment itself (e.g. Docker/Kubernetes secrets).
* **Cache location** -- :func:`get_cache_dir` is XDG Base Directory
  compliant on Linux/BSD and falls back to ``~/.autotask-connection/cache``
  elsewhere; :func:`open_cache` opens a :class:`diskcache.Cache` there.

Environment variables::

    AUTOTASK_USERNAME / AUTOTASK_USERNAME_SOURCE
    AUTOTASK_SECRET / AUTOTASK_SECRET_SOURCE
    AUTOTASK_INTEGRATION_CODE / AUTOTASK_INTEGRATION_CODE_SOURCE
    AUTOTASK_BASE_URL
    AUTOTASK_CACHE          (0, false, no, off disable caching)
    AUTOTASK_CACHE_TTL      (seconds)
    AUTOTASK_CACHE_DIR
    AUTOTASK_TIMEOUT        (seconds)
"""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Any, Mapping, Optional

import diskcache
from pydantic import ValidationError

from autotask_connection.exceptions import ConfigError
from autotask_connection.models import ConnectionSettings

_APP_NAME = "autotask-connection"
ENV_PREFIX = "AUTOTASK_"

_CREDENTIAL_VARS = {
    "username": "USERNAME",
    "password": "SECRET",
    "integration_code": "INTEGRATION_CODE",
}
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_cache_dir() -> Path:
    """Return the cache directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CACHE_HOME/autotask-connection/`` (default
    ``~/.cache/autotask-connection/``).
    On macOS/Windows: ``~/.autotask-connection/cache/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CACHE_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".cache"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Credentials ---


def resolve_credential(source: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads the ``VAR_NAME`` environment variable
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace

    Args:
        source: The source descriptor string.
        environ: Environment to read from.  Defaults to :data:`os.environ`.

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if environ is None:
        environ = os.environ

    if source.startswith("env:"):
        var_name = source[4:]
        value = environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    raise ConfigError(f"Unknown credential source: {source!r}")


# --- Settings ---


def load_settings(environ: Optional[Mapping[str, str]] = None) -> ConnectionSettings:
    """Read connection settings from ``AUTOTASK_*`` environment variables.

    For each credential the plain variable wins; otherwise its ``_SOURCE``
    variant is passed to :func:`resolve_credential`.

    Args:
        environ: Environment to read from.  Defaults to :data:`os.environ`.

    Raises:
        ConfigError: If a credential source can't be resolved or a value
            is invalid (e.g. a non-numeric TTL).
    """
    if environ is None:
        environ = os.environ

    data: dict[str, Any] = {}
    for field, suffix in _CREDENTIAL_VARS.items():
        value = environ.get(ENV_PREFIX + suffix)
        if value is None:
            source = environ.get(f"{ENV_PREFIX}{suffix}_SOURCE")
            if source:
                value = resolve_credential(source, environ)
        if value is not None:
            data[field] = value

    if ENV_PREFIX + "BASE_URL" in environ:
        data["base_url"] = environ[ENV_PREFIX + "BASE_URL"]
    if ENV_PREFIX + "CACHE" in environ:
        data["cache_enabled"] = environ[ENV_PREFIX + "CACHE"].strip().lower() not in _FALSE_VALUES
    if ENV_PREFIX + "CACHE_TTL" in environ:
        data["cache_ttl_seconds"] = environ[ENV_PREFIX + "CACHE_TTL"]
    if ENV_PREFIX + "CACHE_DIR" in environ:
        data["cache_dir"] = environ[ENV_PREFIX + "CACHE_DIR"]
    if ENV_PREFIX + "TIMEOUT" in environ:
        data["timeout"] = environ[ENV_PREFIX + "TIMEOUT"]

    try:
        return ConnectionSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid connection settings: {exc}") from exc


def open_cache(settings: ConnectionSettings) -> Optional[diskcache.Cache]:
    """Open the on-disk response cache described by *settings*.

    Returns:
        A :class:`diskcache.Cache` in ``<cache_dir>/responses``, or ``None``
        when caching is disabled.
    """
    if not settings.cache_enabled:
        return None
    base = Path(settings.cache_dir).expanduser() if settings.cache_dir else get_cache_dir()
    return diskcache.Cache(str(base / "responses"))
