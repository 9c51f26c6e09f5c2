# strawdecor/exceptions.py
"""Exception hierarchy for strawdecor.

Errors raised by user-supplied blocks (``decorate_when``, metadata blocks) and
by the decoration strategy are never wrapped; they reach the GraphQL engine's
field-error channel unmodified. The classes below cover the failures strawdecor
detects itself.
"""

from __future__ import annotations

__all__ = [
    "StrawdecorError",
    "ConfigurationError",
    "ConfigurationFrozenError",
    "DecorationError",
    "IncompatibleCollectionError",
    "IncompatibleDecoratorError",
    "MetadataTypeError",
    "DecoratorSelectionError",
]


class StrawdecorError(Exception):
    """Base class for all strawdecor errors."""


# ----------------------------------------------------------------------------
# Configuration errors
# ----------------------------------------------------------------------------
class ConfigurationError(StrawdecorError):
    """Invalid configuration value (bad strategy, bad collection class, ...)."""


class ConfigurationFrozenError(RuntimeError, ConfigurationError):
    """Raised when a frozen configuration is mutated."""


# ----------------------------------------------------------------------------
# Decoration errors
# ----------------------------------------------------------------------------
class DecorationError(StrawdecorError):
    """Base class for errors detected while decorating a resolved value."""


class IncompatibleCollectionError(TypeError, DecorationError):
    """A registered collection class cannot map over its elements."""

    def __init__(self, collection_class: type) -> None:
        self.collection_class = collection_class
        name = f"{collection_class.__module__}.{collection_class.__qualname__}"
        super().__init__(
            f"Collection class `{name}` is registered for decoration but does not "
            f"support element mapping; give it a `map(fn)` method or register it "
            f"with an explicit mapper"
        )


class IncompatibleDecoratorError(TypeError, DecorationError):
    """The default strategy cannot construct the selected decorator class."""


class MetadataTypeError(TypeError, DecorationError):
    """A metadata block returned something other than a mapping."""


class DecoratorSelectionError(TypeError, DecorationError):
    """A ``decorate_when`` block returned something other than a class or None."""
