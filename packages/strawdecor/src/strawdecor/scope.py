# strawdecor/scope.py
"""Tree-scoped metadata environment.

An :class:`ExecutionScope` is the value threaded along each root-to-leaf path of
a resolution tree. It is immutable: a field derives a *new* scope for its
children and never touches its parent's, so concurrently resolving siblings
cannot observe each other's overrides.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

__all__ = ["EMPTY_METADATA", "ExecutionScope", "freeze_metadata"]

EMPTY_METADATA: Mapping[str, Any] = MappingProxyType({})


def freeze_metadata(metadata: Mapping[str, Any] | None) -> Mapping[str, Any]:
    """Return a read-only snapshot of ``metadata``."""
    if metadata is None:
        return EMPTY_METADATA
    if isinstance(metadata, MappingProxyType):
        return metadata
    if not metadata:
        return EMPTY_METADATA
    return MappingProxyType(dict(metadata))


@dataclass(frozen=True, slots=True)
class ExecutionScope:
    """Scoped metadata visible at one point of the resolution tree."""

    # mappingproxy is unhashable before 3.12, so dataclasses treats it as mutable
    scoped_metadata: Mapping[str, Any] = field(default_factory=lambda: EMPTY_METADATA)

    @classmethod
    def root(cls) -> ExecutionScope:
        return ROOT_SCOPE

    def derive(self, scoped_metadata: Mapping[str, Any]) -> ExecutionScope:
        """Return the scope for this field's children.

        The mapping replaces the current one wholesale; it is never merged.
        """
        if scoped_metadata is self.scoped_metadata:
            return self
        return ExecutionScope(freeze_metadata(scoped_metadata))


ROOT_SCOPE = ExecutionScope()
