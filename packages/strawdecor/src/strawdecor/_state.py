"""Active-configuration tracking.

A ``ContextVar`` holds the configuration used by the interceptor when none is
passed explicitly, giving predictable nesting semantics via
:func:`push_configuration`. A process-wide default is built lazily from
:class:`strawdecor.conf.Settings` on first access: the module named by
``STRAWDECOR_CONFIG_MODULE``, then ``STRAWDECOR_<KEY>`` environment variables.
"""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, Generator

from .utils.proxy import Proxy

if TYPE_CHECKING:
    from .config import Configuration

_current_configuration: ContextVar["Configuration | None"] = ContextVar(
    "strawdecor_current_configuration", default=None
)
_default_configuration: "Configuration | None" = None


def _build_default_configuration() -> "Configuration":
    from .conf import Settings
    from .config import Configuration

    settings = Settings()
    settings.update_from_envvar()
    settings.update_from_environ()
    return Configuration.from_settings(settings)


def get_configuration() -> "Configuration":
    """Return the active configuration, falling back to the process-wide default."""
    configuration = _current_configuration.get()
    if configuration is not None:
        return configuration
    global _default_configuration
    if _default_configuration is None:
        _default_configuration = _build_default_configuration()
    return _default_configuration


def set_configuration(configuration: "Configuration") -> None:
    _current_configuration.set(configuration)


@contextmanager
def push_configuration(configuration: "Configuration") -> Generator["Configuration", None, None]:
    token = _current_configuration.set(configuration)
    try:
        yield configuration
    finally:
        _current_configuration.reset(token)


def configure(**options: Any) -> "Configuration":
    """Apply setup-time options to the active configuration."""
    return get_configuration().configure(**options)


configuration = Proxy(get_configuration)

__all__ = [
    "configuration",
    "configure",
    "get_configuration",
    "push_configuration",
    "set_configuration",
]
