# strawdecor/extension.py
"""
Strawberry integration.

Install :class:`DecorationExtension` on a schema and every field whose GraphQL
return type maps back to a decorated strawberry type is decorated on the way
out of its resolver:

    schema = strawberry.Schema(query=Query, extensions=[DecorationExtension])

Pass the extension *class* (or a class built with :meth:`DecorationExtension.using`)
so strawberry creates one instance per operation; the scope table lives on
that instance.

Scope threading
---------------
Scoped metadata follows the response path. When a field at path ``P`` is
decorated, its children's scope is recorded at ``P``; for a list, element ``i``
gets its own scope at ``P + (i,)``. A field looks up its parent scope at the
longest recorded proper prefix of its own path, so sibling subtrees never see
each other's scopes. Recorded scopes are immutable and written once.

Interface and union fields have no single decorated type; for those the spec
is looked up from each resolved object's own class, so a decorated concrete
type is decorated whichever field returns it. Lists nested in lists record
scopes at ``P + (i, j)``.
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Iterator

from graphql import GraphQLNamedType, GraphQLResolveInfo, get_named_type, is_abstract_type
from strawberry.extensions import SchemaExtension
from strawberry.schema.schema_converter import GraphQLCoreConverter

from ._state import get_configuration
from .config import Configuration
from .interceptor import Interception, intercept
from .registry import DecorationRegistry, decorations
from .resolve import ResolutionResult
from .scope import ExecutionScope
from .spec import TypeDecorationSpec
from .tracing import apply_attributes, service_span_sync

__all__ = ["DecorationExtension", "ScopeTable"]

Path = tuple[str | int, ...]


class ScopeTable:
    """Per-operation record of the scopes derived along response paths."""

    __slots__ = ("_scopes",)

    def __init__(self) -> None:
        self._scopes: dict[Path, ExecutionScope] = {}

    def parent_of(self, path: Path) -> ExecutionScope:
        for end in range(len(path) - 1, 0, -1):
            scope = self._scopes.get(path[:end])
            if scope is not None:
                return scope
        return ExecutionScope.root()

    def record(self, path: Path, parent: ExecutionScope, interception: Interception) -> None:
        if interception.scope is not parent:
            self._scopes[path] = interception.scope
        self._record_items(path, parent, interception.item_scopes)

    def _record_items(self, path: Path, parent: ExecutionScope, item_scopes: tuple) -> None:
        for index, scope in enumerate(item_scopes):
            if isinstance(scope, tuple):
                self._record_items(path + (index,), parent, scope)
            elif scope is not parent:
                self._scopes[path + (index,)] = scope

    def __len__(self) -> int:
        return len(self._scopes)


def _origin_of(named: GraphQLNamedType) -> Any:
    extensions = getattr(named, "extensions", None) or {}
    definition = extensions.get(GraphQLCoreConverter.DEFINITION_BACKREF)
    return getattr(definition, "origin", None)


class DecorationExtension(SchemaExtension):
    """Decorates resolved values and threads scoped metadata down the tree."""

    configuration: Configuration | None = None
    registry: DecorationRegistry | None = None

    @classmethod
    def using(
        cls,
        *,
        configuration: Configuration | None = None,
        registry: DecorationRegistry | None = None,
    ) -> type[DecorationExtension]:
        """Return a subclass bound to an explicit configuration and/or registry."""
        return type(
            cls.__name__,
            (cls,),
            {
                "configuration": configuration if configuration is not None else cls.configuration,
                "registry": registry if registry is not None else cls.registry,
            },
        )

    # ---------------- lifecycle ----------------
    def on_operation(self) -> Iterator[None]:
        self._scope_table = ScopeTable()
        yield

    @property
    def scope_table(self) -> ScopeTable:
        table = getattr(self, "_scope_table", None)
        if table is None:
            table = self._scope_table = ScopeTable()
        return table

    # ---------------- resolution ----------------
    def resolve(
        self,
        _next: Callable[..., Any],
        root: Any,
        info: GraphQLResolveInfo,
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        result = _next(root, info, *args, **kwargs)
        named = get_named_type(info.return_type)
        if is_abstract_type(named):
            # interfaces and unions: the concrete type is only known per object
            if not self.get_registry().count():
                return result
            spec = None
        else:
            spec = self.get_registry().spec_for(_origin_of(named))
            if spec is None or spec.is_empty:
                return result
        if inspect.isawaitable(result):
            return self._decorate_awaitable(result, spec, info)
        return self.decorate(result, spec, info)

    def get_registry(self) -> DecorationRegistry:
        return self.registry if self.registry is not None else decorations

    def spec_for(self, info: GraphQLResolveInfo) -> TypeDecorationSpec | None:
        """Spec of the field's declared type; None for interface and union fields."""
        named = get_named_type(info.return_type)
        if is_abstract_type(named):
            return None
        return self.get_registry().spec_for(_origin_of(named))

    def spec_for_object(self, obj: Any) -> TypeDecorationSpec | None:
        """Spec of an object resolved for an interface or union field."""
        return self.get_registry().spec_for(type(obj))

    def decorate(self, value: Any, spec: TypeDecorationSpec | None, info: GraphQLResolveInfo) -> Any:
        configuration = self.configuration or get_configuration()
        path: Path = tuple(info.path.as_list())
        table = self.scope_table
        parent = table.parent_of(path)
        spec_for = self.spec_for_object if spec is None else None

        if configuration.trace_decoration:
            type_name = get_named_type(info.return_type).name
            with service_span_sync(
                f"strawdecor.decorate ({type_name})",
                attributes={
                    "strawdecor.type": type_name,
                    "strawdecor.field": info.field_name,
                    "strawdecor.path": ".".join(str(p) for p in path),
                },
            ) as span:
                interception = intercept(
                    value, spec, info.context, parent, configuration=configuration, spec_for=spec_for
                )
                if interception.resolutions:
                    apply_attributes(
                        span, ResolutionResult.summarize(interception.resolutions, "strawdecor.decorator")
                    )
        else:
            interception = intercept(
                value, spec, info.context, parent, configuration=configuration, spec_for=spec_for
            )

        table.record(path, parent, interception)
        return interception.value

    async def _decorate_awaitable(
        self, awaitable: Awaitable[Any], spec: TypeDecorationSpec | None, info: GraphQLResolveInfo
    ) -> Any:
        value = await awaitable
        return self.decorate(value, spec, info)
