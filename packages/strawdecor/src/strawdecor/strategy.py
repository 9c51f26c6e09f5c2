# strawdecor/strategy.py
"""Decoration strategies.

A strategy turns ``(decorator_class, obj, metadata)`` into the value surfaced to
the GraphQL engine. The default calls the decorator class's ``decorate``
classmethod, the wrap-and-construct entry point of
:class:`strawdecor.decorators.Decorator`. Projects with other conventions swap
in their own callable through ``configure(decorate=...)`` or the ``DECORATE``
setting.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from .exceptions import IncompatibleDecoratorError

__all__ = ["DecorationStrategy", "default_decorate"]

DecorationStrategy = Callable[[type, Any, Mapping[str, Any]], Any]


def default_decorate(decorator_class: type, obj: Any, metadata: Mapping[str, Any]) -> Any:
    factory = getattr(decorator_class, "decorate", None)
    if not callable(factory):
        raise IncompatibleDecoratorError(
            f"{decorator_class.__qualname__} has no `decorate` classmethod; subclass "
            f"strawdecor.Decorator or configure a custom decoration strategy"
        )
    return factory(obj, context=metadata)
