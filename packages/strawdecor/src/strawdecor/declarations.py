# strawdecor/declarations.py
"""
Declaration decorators for GraphQL types.

Usage
-----
    @decorate_when(lambda shape: SquareDecorator if shape.is_square else RectangleDecorator)
    @scoped_decorator_metadata(lambda shape, context: {"viewer": context["user"]})
    @strawberry.type
    class ShapeType: ...

Each declaration records one field of the type's
:class:`~strawdecor.spec.TypeDecorationSpec` in a
:class:`~strawdecor.registry.DecorationRegistry` (the process-wide
``decorations`` registry unless one is passed) and returns the class unchanged,
so they stack in any order with ``@strawberry.type``.

Blocks may take ``(obj)`` or ``(obj, context)``; the arity is read once here.
"""

import logging
from typing import Any, Callable, TypeVar

from .registry import DecorationRegistry, decorations
from .spec import Block

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

__all__ = [
    "Declaration",
    "decorate_with",
    "decorate_when",
    "decorator_metadata",
    "scoped_decorator_metadata",
]


class Declaration:
    """Class decorator that records a single spec field for the decorated type."""

    log_category = "strawdecor"

    def __init__(self, field: str, value: Any, *, registry: DecorationRegistry | None = None) -> None:
        self.field = field
        self.value = value
        self.registry = registry

    def get_registry(self) -> DecorationRegistry:
        return self.registry if self.registry is not None else decorations

    def __call__(self, cls: T) -> T:
        self.get_registry().declare(cls, **{self.field: self.value})
        logger.debug(
            "[%s] declared %s on `%s.%s`",
            self.log_category.upper(),
            self.field,
            cls.__module__,
            cls.__qualname__,
        )
        return cls


def decorate_with(decorator_class: type, *, registry: DecorationRegistry | None = None) -> Declaration:
    """Always decorate instances of the type with ``decorator_class``."""
    if not isinstance(decorator_class, type):
        raise TypeError(f"decorate_with expects a decorator class, got {decorator_class!r}")
    return Declaration("decorator_class", decorator_class, registry=registry)


def decorate_when(block: Callable[..., Any], *, registry: DecorationRegistry | None = None) -> Declaration:
    """Pick the decorator class per object; ignored when ``decorate_with`` is declared."""
    return Declaration("decorate_when", Block.wrap(block), registry=registry)


def decorator_metadata(block: Callable[..., Any], *, registry: DecorationRegistry | None = None) -> Declaration:
    """Metadata passed to this type's decorator only."""
    return Declaration("metadata_block", Block.wrap(block), registry=registry)


def scoped_decorator_metadata(
        block: Callable[..., Any], *, registry: DecorationRegistry | None = None
) -> Declaration:
    """Metadata for this type that also replaces what every descendant field inherits."""
    return Declaration("scoped_metadata_block", Block.wrap(block), registry=registry)
