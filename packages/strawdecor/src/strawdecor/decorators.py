# strawdecor/decorators.py
"""Base class for decorator objects.

:class:`Decorator` wraps a domain object and forwards every attribute it does
not define itself, in the spirit of :class:`strawdecor.utils.proxy.Proxy`.
Subclasses add presentation logic as properties, which GraphQL default
resolvers pick up exactly like attributes of the wrapped object:

    class RectangleDecorator(Decorator):
        @property
        def area(self) -> int:
            return self.length * self.width

The metadata computed for the field is available read-only as ``context``.

``object`` and ``context`` are the wrapper's own accessors and shadow
attributes of the same name on the wrapped object. A GraphQL field backed by
such an attribute must be exposed through a property on the decorator:

    class DocumentDecorator(Decorator):
        @property
        def body_context(self) -> str:
            return self.object.context

``__class__`` reports the wrapped object's class so ``isinstance`` checks made
by the GraphQL layer (e.g. ``is_type_of`` on model-backed types) still accept
the wrapper; ``type(wrapper)`` remains the decorator class.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping

from .scope import freeze_metadata

__all__ = ["Decorator"]


class Decorator:
    __slots__ = ("_object", "_context", "__dict__")

    def __init__(self, obj: Any, context: Mapping[str, Any] | None = None) -> None:
        self._object = obj
        self._context = freeze_metadata(context)

    # ---------------- construction ----------------
    @classmethod
    def decorate(cls, obj: Any, context: Mapping[str, Any] | None = None) -> Decorator:
        return cls(obj, context=context)

    @classmethod
    def decorate_collection(cls, items: Iterable[Any], context: Mapping[str, Any] | None = None) -> list:
        return [cls.decorate(item, context=context) for item in items]

    # ---------------- accessors ----------------
    @property
    def object(self) -> Any:
        return self._object

    @property
    def context(self) -> MappingProxyType:
        return self._context

    def _wrapped_class(self) -> type:
        return self._object.__class__

    __class__ = property(_wrapped_class)  # type: ignore[assignment]

    def __getattr__(self, name: str) -> Any:
        # only reached when normal lookup fails
        if name in ("_object", "_context"):
            raise AttributeError(name)
        return getattr(self._object, name)

    # ---------------- identity ----------------
    def __eq__(self, other: object) -> bool:
        if isinstance(other, Decorator):
            other = other._object
        return self._object == other

    def __hash__(self) -> int:
        return hash(self._object)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} of {self._object!r}>"
