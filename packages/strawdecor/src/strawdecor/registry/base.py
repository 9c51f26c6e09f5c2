# strawdecor/registry/base.py


import logging
from dataclasses import replace
from threading import RLock
from typing import Any

from strawdecor.spec import TypeDecorationSpec

from .exceptions import RegistryFrozenError, RegistryLookupError

logger = logging.getLogger(__name__)

_SPEC_FIELDS = frozenset(TypeDecorationSpec.__dataclass_fields__)


class DecorationRegistry:
    """Thread-safe mapping of GraphQL type classes to their decoration specs.

    Declarations are recorded at schema-definition time; the registry is read
    during execution and can be frozen once the schema is built.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._store: dict[type, TypeDecorationSpec] = {}
        self._frozen = False

    # --- registration ---

    def declare(self, cls: type, **changes: Any) -> TypeDecorationSpec:
        """Replace the given spec fields for ``cls`` and return the new spec.

        Unknown field names raise ``TypeError``. Declaring a field twice keeps
        the latest value.
        """
        if not isinstance(cls, type):
            raise TypeError(f"Decoration can only be declared on classes, got {cls!r}")
        unknown = set(changes) - _SPEC_FIELDS
        if unknown:
            raise TypeError(f"Unknown decoration spec fields: {', '.join(sorted(unknown))}")

        with self._lock:
            if self._frozen:
                raise RegistryFrozenError("Registry is frozen")
            current = self._store.get(cls)
            if current is not None:
                overridden = [k for k in changes if getattr(current, k) is not None]
                if overridden:
                    logger.debug(
                        "redeclared %s on %s", ", ".join(overridden), cls.__qualname__
                    )
            spec = replace(current or TypeDecorationSpec(), **changes)
            self._store[cls] = spec
        return spec

    # --- retrieval ---

    def get(self, cls: type) -> TypeDecorationSpec:
        """
        Return the spec declared directly on ``cls``.

        :raises RegistryLookupError: If nothing was declared for ``cls``.
        """
        with self._lock:
            try:
                return self._store[cls]
            except KeyError as err:
                raise RegistryLookupError(
                    f"No decoration declared for {getattr(cls, '__qualname__', cls)!r}"
                ) from err

    def try_get(self, cls: type) -> TypeDecorationSpec | None:
        try:
            return self.get(cls)
        except RegistryLookupError:
            return None

    def spec_for(self, cls: Any) -> TypeDecorationSpec | None:
        """Return the spec for ``cls`` or its nearest decorated base class."""
        if not isinstance(cls, type):
            return None
        with self._lock:
            if not self._store:
                return None
            for base in cls.__mro__:
                spec = self._store.get(base)
                if spec is not None:
                    return spec
        return None

    # --- enumeration ---

    def count(self) -> int:
        with self._lock:
            return len(self._store)

    def items(self) -> tuple[tuple[type, TypeDecorationSpec], ...]:
        with self._lock:
            return tuple(self._store.items())

    def __contains__(self, cls: type) -> bool:
        with self._lock:
            return cls in self._store

    # --- mutation / control ---

    def clear(self) -> None:
        """Clear the registry if not frozen."""
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError("Registry is frozen")
            self._store.clear()

    def freeze(self) -> None:
        """Mark the registry as frozen (no further declarations)."""
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen
