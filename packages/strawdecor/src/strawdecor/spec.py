# strawdecor/spec.py
"""Per-type decoration specs.

A :class:`TypeDecorationSpec` is the static, immutable description of how (and
whether) instances resolved for a GraphQL type get wrapped. Specs are built by
the declaration decorators in :mod:`strawdecor.declarations` and stored in a
:class:`~strawdecor.registry.DecorationRegistry`; they are never mutated after
creation (declarations build a new spec with :func:`dataclasses.replace`).

User blocks are stored as :class:`Block` values, which remember whether the
wrapped callable accepts the request context as a second positional argument.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable

__all__ = ["Block", "TypeDecorationSpec", "accepts_context"]

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def accepts_context(func: Callable[..., Any]) -> bool:
    """Return True when ``func`` can be called as ``func(obj, context)``.

    Callables whose signature cannot be inspected are called with the object only.
    """
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return False

    positional = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if param.kind in _POSITIONAL:
            positional += 1
    return positional >= 2


@dataclass(frozen=True, slots=True)
class Block:
    """A user-supplied callable plus its arity."""

    func: Callable[..., Any]
    takes_context: bool

    @classmethod
    def wrap(cls, func: Callable[..., Any] | Block) -> Block:
        if isinstance(func, Block):
            return func
        if not callable(func):
            raise TypeError(f"Expected a callable block, got {func!r}")
        return cls(func=func, takes_context=accepts_context(func))

    def __call__(self, obj: Any, context: Any) -> Any:
        if self.takes_context:
            return self.func(obj, context)
        return self.func(obj)


@dataclass(frozen=True, slots=True)
class TypeDecorationSpec:
    """Static decoration configuration for one GraphQL type.

    Attributes
    ----------
    decorator_class:
        Set by ``decorate_with``; wins over ``decorate_when``.
    decorate_when:
        Dynamic selector returning a decorator class (or None) per object.
    metadata_block:
        Metadata for this type's own decoration only.
    scoped_metadata_block:
        Metadata for this type that also replaces the scoped metadata seen by
        every descendant field.
    """

    decorator_class: type | None = None
    decorate_when: Block | None = None
    metadata_block: Block | None = None
    scoped_metadata_block: Block | None = None

    @property
    def is_decorated(self) -> bool:
        """True when some decorator class can be selected for this type."""
        return self.decorator_class is not None or self.decorate_when is not None

    @property
    def is_empty(self) -> bool:
        return not self.is_decorated and self.metadata_block is None and self.scoped_metadata_block is None
