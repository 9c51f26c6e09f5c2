# strawdecor/interceptor.py
"""Field decoration interceptor.

For each resolved field value the interceptor

1. passes ``None`` through untouched (no block is evaluated);
2. classifies the value as a single item or a collection;
3. resolves metadata and the decorator class *per object* (collections are
   decorated element by element, so each element may get its own class);
4. wraps the object through the configured strategy;
5. derives the scope that the field's children inherit.

Collections nested inside collections (``list[list[T]]`` fields) are walked
recursively; user blocks only ever see leaf objects.

When the field's GraphQL type is abstract (an interface or union) there is no
single spec for the field; pass ``spec_for`` instead and the spec is looked up
from each object's own class.

It never mutates ``parent_scope``; every derived scope is a new value. Errors
from user blocks and from the strategy propagate unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Union

from ._state import get_configuration
from .config import Configuration
from .containers import Classification, classify, map_collection
from .resolve import ResolutionResult, resolve_decorator_class, resolve_metadata
from .scope import ExecutionScope
from .spec import TypeDecorationSpec

__all__ = ["Interception", "SpecLookup", "intercept"]

SpecLookup = Callable[[Any], Union[TypeDecorationSpec, None]]

# one entry per element: an ExecutionScope, or a nested tuple for an inner collection
ItemScopes = tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class Interception:
    """Outcome of intercepting one field value.

    ``scope`` is the scope for the field's children. For collections, each
    element gets its own child scope in ``item_scopes`` (same order as the
    elements; a tuple of scopes for an inner collection) and ``scope`` is the
    parent scope unchanged.

    ``resolutions`` holds the decorator-class resolution of every object that
    went through the resolvers, in order.
    """

    value: Any
    scope: ExecutionScope
    item_scopes: ItemScopes = ()
    resolutions: tuple[ResolutionResult, ...] = ()

    @property
    def is_collection(self) -> bool:
        return bool(self.item_scopes)


class _Pass:
    """Per-field state shared by every object the field resolves."""

    __slots__ = ("spec", "spec_for", "context", "parent_scope", "configuration")

    def __init__(
            self,
            spec: TypeDecorationSpec | None,
            spec_for: SpecLookup | None,
            context: Any,
            parent_scope: ExecutionScope,
            configuration: Configuration,
    ) -> None:
        self.spec = spec
        self.spec_for = spec_for
        self.context = context
        self.parent_scope = parent_scope
        self.configuration = configuration

    def spec_of(self, obj: Any) -> TypeDecorationSpec | None:
        if self.spec is not None:
            return self.spec
        return self.spec_for(obj) if self.spec_for is not None else None

    def is_collection(self, value: Any) -> bool:
        return classify(value, self.configuration.collections) is Classification.COLLECTION

    def one(self, obj: Any) -> Interception:
        parent = self.parent_scope
        if obj is None:
            return Interception(obj, parent)
        spec = self.spec_of(obj)
        if spec is None or spec.is_empty:
            return Interception(obj, parent)

        metadata = resolve_metadata(spec, obj, self.context, parent.scoped_metadata)
        resolution = resolve_decorator_class(spec, obj, self.context)
        if resolution.value is None:
            value = obj
        else:
            value = self.configuration.decorate(resolution.value, obj, metadata.own)
        return Interception(value, parent.derive(metadata.scoped), resolutions=(resolution,))

    def many(self, collection: Any) -> Interception:
        item_scopes: list[Any] = []
        resolutions: list[ResolutionResult] = []

        def _decorate_item(item: Any) -> Any:
            if item is not None and self.is_collection(item):
                result = self.many(item)
                item_scopes.append(result.item_scopes)
            else:
                result = self.one(item)
                item_scopes.append(result.scope)
            resolutions.extend(result.resolutions)
            return result.value

        decorated = map_collection(collection, _decorate_item, self.configuration.collections)
        if not item_scopes:
            # empty collections are surfaced as-is
            return Interception(collection, self.parent_scope)
        return Interception(decorated, self.parent_scope, tuple(item_scopes), tuple(resolutions))


def intercept(
        raw_value: Any,
        spec: TypeDecorationSpec | None,
        context: Any,
        parent_scope: ExecutionScope,
        *,
        configuration: Configuration | None = None,
        spec_for: SpecLookup | None = None,
) -> Interception:
    """Decorate ``raw_value`` according to ``spec`` and derive the child scope.

    ``spec_for(obj)`` is consulted per object only when ``spec`` is None.
    """
    if raw_value is None:
        return Interception(raw_value, parent_scope)
    if spec is None and spec_for is None:
        return Interception(raw_value, parent_scope)
    if spec is not None and spec.is_empty:
        return Interception(raw_value, parent_scope)

    field_pass = _Pass(spec, spec_for, context, parent_scope, configuration or get_configuration())
    if field_pass.is_collection(raw_value):
        return field_pass.many(raw_value)
    return field_pass.one(raw_value)
