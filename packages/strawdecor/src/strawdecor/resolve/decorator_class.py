"""Decorator class resolver: explicit ``decorate_with`` beats ``decorate_when``."""

from __future__ import annotations

from typing import Any

from strawdecor.exceptions import DecoratorSelectionError
from strawdecor.spec import TypeDecorationSpec

from .result import ResolutionBranch, ResolutionResult


def _class_label(cls: type | None) -> str | None:
    if cls is None:
        return None
    return f"{cls.__module__}.{cls.__qualname__}"


def resolve_decorator_class(
        spec: TypeDecorationSpec,
        obj: Any,
        context: Any = None,
) -> ResolutionResult[type]:
    """Select the decorator class for ``obj``.

    Branches:
      - ``explicit``: ``spec.decorator_class`` is set; ``decorate_when`` is not consulted.
      - ``dynamic``: ``spec.decorate_when`` chose a class (or None) for this object.
      - ``none``: the type declares no decorator.

    Errors raised by ``decorate_when`` propagate unchanged.
    """
    if spec.decorator_class is not None:
        branch = ResolutionBranch(
            "explicit",
            spec.decorator_class,
            label=_class_label(spec.decorator_class),
            reason="decorate_with",
        )
        return ResolutionResult(spec.decorator_class, branch)

    if spec.decorate_when is not None:
        selected = spec.decorate_when(obj, context)
        if selected is not None and not isinstance(selected, type):
            raise DecoratorSelectionError(
                f"decorate_when must return a decorator class or None, got {selected!r}"
            )
        branch = ResolutionBranch(
            "dynamic",
            selected,
            label=_class_label(selected),
            reason="decorate_when",
        )
        return ResolutionResult(selected, branch)

    branch = ResolutionBranch("none", None, reason="type declares no decorator")
    return ResolutionResult(None, branch)


__all__ = ["resolve_decorator_class"]
