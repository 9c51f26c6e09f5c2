# strawdecor/containers.py
"""Collection classification.

A resolved value is decorated element-wise when its class (or a base class) is
registered in a :class:`CollectionClassRegistry` and the value can be mapped
over. The built-in collection classes (``list`` and ``tuple``) are always
recognized; custom ones are added at configuration time. Named tuples are
records, not collections, and are never matched through ``tuple``.

Mappers have the signature ``mapper(value, fn) -> container`` and must apply
``fn`` to every element in order. Custom classes registered without a mapper
are mapped through their own ``map(fn)`` method.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable, Iterable

from .exceptions import ConfigurationError, ConfigurationFrozenError, IncompatibleCollectionError

logger = logging.getLogger(__name__)

__all__ = [
    "Classification",
    "CollectionEntry",
    "CollectionClassRegistry",
    "classify",
    "map_collection",
    "map_list",
    "map_tuple",
]

Mapper = Callable[[Any, Callable[[Any], Any]], Any]


class Classification(enum.Enum):
    SINGLE = "single"
    COLLECTION = "collection"


def map_list(value: list, fn: Callable[[Any], Any]) -> list:
    return [fn(item) for item in value]


def map_tuple(value: tuple, fn: Callable[[Any], Any]) -> tuple:
    return tuple(fn(item) for item in value)


def _is_namedtuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


DEFAULT_BUILTINS: tuple[tuple[type, Mapper], ...] = ((list, map_list), (tuple, map_tuple))


@dataclass(frozen=True, slots=True)
class CollectionEntry:
    cls: type
    mapper: Mapper | None = None
    builtin: bool = False

    def supports_mapping(self, value: Any) -> bool:
        return self.mapper is not None or callable(getattr(value, "map", None))

    def map(self, value: Any, fn: Callable[[Any], Any]) -> Any:
        if self.mapper is not None:
            return self.mapper(value, fn)
        method = getattr(value, "map", None)
        if not callable(method):
            raise IncompatibleCollectionError(self.cls)
        return method(fn)


class CollectionClassRegistry:
    """Recognized collection classes: built-ins plus user registrations."""

    def __init__(self, builtins: Iterable[tuple[type, Mapper | None]] | None = None) -> None:
        self._lock = RLock()
        self._builtin: dict[type, CollectionEntry] = {}
        self._custom: dict[type, CollectionEntry] = {}
        self._frozen = False
        for cls, mapper in builtins if builtins is not None else DEFAULT_BUILTINS:
            self._builtin[cls] = CollectionEntry(cls, mapper, builtin=True)

    # --- registration ---

    def register(self, cls: type, mapper: Mapper | None = None) -> None:
        """Register a custom collection class (idempotent; re-registering replaces the mapper)."""
        self._store(self._custom, CollectionEntry(self._check_class(cls), mapper))
        logger.debug("registered custom collection class %s", cls.__qualname__)

    def add_builtin(self, cls: type, mapper: Mapper | None = None) -> None:
        """Register a framework-provided collection class that survives :meth:`reset`."""
        self._store(self._builtin, CollectionEntry(self._check_class(cls), mapper, builtin=True))
        logger.debug("registered built-in collection class %s", cls.__qualname__)

    def reset(self) -> None:
        """Drop custom registrations; built-ins are kept."""
        with self._lock:
            if self._frozen:
                raise ConfigurationFrozenError("Collection class registry is frozen")
            self._custom.clear()

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # --- retrieval ---

    def lookup(self, cls: type) -> CollectionEntry | None:
        """Return the entry for ``cls`` or its nearest registered base class."""
        with self._lock:
            for base in cls.__mro__:
                if base is tuple and _is_namedtuple(cls):
                    break
                entry = self._custom.get(base) or self._builtin.get(base)
                if entry is not None:
                    return entry
        return None

    def classes(self) -> tuple[type, ...]:
        with self._lock:
            return tuple(self._builtin) + tuple(c for c in self._custom if c not in self._builtin)

    def custom_classes(self) -> tuple[type, ...]:
        with self._lock:
            return tuple(self._custom)

    def __contains__(self, cls: type) -> bool:
        return self.lookup(cls) is not None

    # --- internals ---

    def _store(self, target: dict[type, CollectionEntry], entry: CollectionEntry) -> None:
        with self._lock:
            if self._frozen:
                raise ConfigurationFrozenError("Collection class registry is frozen")
            target[entry.cls] = entry

    @staticmethod
    def _check_class(cls: Any) -> type:
        if not isinstance(cls, type):
            raise ConfigurationError(f"Collection classes must be classes, got {cls!r}")
        return cls


def classify(value: Any, registry: CollectionClassRegistry) -> Classification:
    """Classify ``value`` as a single item or a decoratable collection.

    Raises IncompatibleCollectionError when the value's class is registered but
    the value cannot be mapped over.
    """
    if value is None:
        return Classification.SINGLE
    entry = registry.lookup(type(value))
    if entry is None:
        return Classification.SINGLE
    if not entry.supports_mapping(value):
        raise IncompatibleCollectionError(entry.cls)
    return Classification.COLLECTION


def map_collection(value: Any, fn: Callable[[Any], Any], registry: CollectionClassRegistry) -> Any:
    """Apply ``fn`` to every element of a registered collection, preserving order."""
    entry = registry.lookup(type(value))
    if entry is None:
        raise IncompatibleCollectionError(type(value))
    return entry.map(value, fn)
