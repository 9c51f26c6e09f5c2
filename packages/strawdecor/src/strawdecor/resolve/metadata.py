"""Metadata resolver with scoped-metadata inheritance.

Own metadata (what this field's decorator receives):
  1. ``metadata_block`` result, when the type defines one;
  2. otherwise the scoped metadata in effect here, when non-empty;
  3. otherwise ``{}``.

Scoped metadata handed to children is the ``scoped_metadata_block`` result when
the type defines one (replacing the inherited mapping wholesale), otherwise the
inherited mapping unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from strawdecor.exceptions import MetadataTypeError
from strawdecor.scope import EMPTY_METADATA, freeze_metadata
from strawdecor.spec import Block, TypeDecorationSpec


@dataclass(frozen=True, slots=True)
class MetadataResolution:
    own: dict[str, Any]
    scoped: Mapping[str, Any]
    branch: str


def _evaluate(block: Block, obj: Any, context: Any, *, kind: str) -> Mapping[str, Any]:
    result = block(obj, context)
    if result is None:
        return EMPTY_METADATA
    if not isinstance(result, Mapping):
        raise MetadataTypeError(
            f"{kind} must return a mapping, got {type(result).__name__}"
        )
    return result


def resolve_metadata(
        spec: TypeDecorationSpec,
        obj: Any,
        context: Any = None,
        inherited: Mapping[str, Any] = EMPTY_METADATA,
) -> MetadataResolution:
    local: Mapping[str, Any] | None = None
    if spec.metadata_block is not None:
        local = _evaluate(spec.metadata_block, obj, context, kind="decorator_metadata")

    if spec.scoped_metadata_block is not None:
        scoped = freeze_metadata(
            _evaluate(spec.scoped_metadata_block, obj, context, kind="scoped_decorator_metadata")
        )
        scoped_branch = "scoped"
    else:
        scoped = inherited
        scoped_branch = "inherited"

    if local is not None:
        return MetadataResolution(own=dict(local), scoped=scoped, branch="local")
    if scoped:
        return MetadataResolution(own=dict(scoped), scoped=scoped, branch=scoped_branch)
    return MetadataResolution(own={}, scoped=scoped, branch="none")


__all__ = ["MetadataResolution", "resolve_metadata"]
