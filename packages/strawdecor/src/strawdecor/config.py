# strawdecor/config.py
"""Process-wide decoration configuration.

A :class:`Configuration` holds the decoration strategy, the collection class
registry and the tracing flag. It is mutated at setup time only; call
:meth:`Configuration.freeze` once the schema is built to make accidental
runtime changes fail loudly.

    import strawdecor

    strawdecor.configure(
        decorate=lambda cls, obj, metadata: cls(obj, **metadata),
        custom_collection_classes=[PaginatedList],
    )
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from .conf import DecorationSettings, Settings
from .containers import CollectionClassRegistry, Mapper
from .exceptions import ConfigurationError, ConfigurationFrozenError
from .strategy import DecorationStrategy, default_decorate

logger = logging.getLogger(__name__)

__all__ = ["Configuration"]


def _as_pairs(classes: Iterable[Any]) -> list[tuple[type, Mapper | None]]:
    try:
        validated = DecorationSettings.model_validate({"CUSTOM_COLLECTION_CLASSES": list(classes)})
    except ValidationError as err:
        raise ConfigurationError(f"Invalid custom collection classes: {err}") from err
    return validated.CUSTOM_COLLECTION_CLASSES


class Configuration:
    """Decoration strategy plus recognized collection classes."""

    def __init__(
        self,
        *,
        decorate: DecorationStrategy | None = None,
        collections: CollectionClassRegistry | None = None,
        trace_decoration: bool = False,
    ) -> None:
        self._lock = RLock()
        self._strategy: DecorationStrategy = decorate or default_decorate
        self.collections = collections if collections is not None else CollectionClassRegistry()
        self._trace_decoration = bool(trace_decoration)
        self._frozen = False

    # --- construction ---

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any] | None = None) -> Configuration:
        configuration = cls()
        configuration.apply_settings(settings if settings is not None else Settings())
        return configuration

    # --- read side ---

    @property
    def strategy(self) -> DecorationStrategy:
        return self._strategy

    @property
    def trace_decoration(self) -> bool:
        return self._trace_decoration

    @property
    def frozen(self) -> bool:
        return self._frozen

    def decorate(self, decorator_class: type, obj: Any, metadata: Mapping[str, Any]) -> Any:
        """Run the configured strategy."""
        return self._strategy(decorator_class, obj, metadata)

    # --- mutation ---

    def configure(
        self,
        *,
        decorate: DecorationStrategy | None = None,
        custom_collection_classes: Iterable[Any] = (),
        trace_decoration: bool | None = None,
    ) -> Configuration:
        """Apply setup-time options; unspecified options keep their current value."""
        pairs = _as_pairs(custom_collection_classes) if custom_collection_classes else []
        with self._lock:
            self._check_mutable()
            if decorate is not None:
                if not callable(decorate):
                    raise ConfigurationError(f"decorate must be callable, got {decorate!r}")
                self._strategy = decorate
                logger.debug("decoration strategy set to %r", decorate)
            for klass, mapper in pairs:
                self.collections.register(klass, mapper)
            if trace_decoration is not None:
                self._trace_decoration = bool(trace_decoration)
        return self

    def register_collection_class(self, cls: type, mapper: Mapper | None = None) -> None:
        with self._lock:
            self._check_mutable()
            self.collections.register(cls, mapper)

    def apply_settings(self, settings: Mapping[str, Any]) -> Configuration:
        """Validate a settings mapping and apply the keys it actually provides."""
        try:
            validated = DecorationSettings.model_validate(dict(settings))
        except ValidationError as err:
            raise ConfigurationError(f"Invalid strawdecor settings: {err}") from err

        provided = validated.model_fields_set
        with self._lock:
            self._check_mutable()
            if "DECORATE" in provided and validated.DECORATE is not None:
                self._strategy = validated.DECORATE
            for klass, mapper in validated.CUSTOM_COLLECTION_CLASSES:
                self.collections.register(klass, mapper)
            if "TRACE_DECORATION" in provided:
                self._trace_decoration = validated.TRACE_DECORATION
        logger.debug("applied strawdecor settings: %s", ", ".join(sorted(provided)) or "<none>")
        return self

    def freeze(self) -> None:
        """Make this configuration (and its collection registry) read-only."""
        with self._lock:
            self._frozen = True
            self.collections.freeze()
        logger.info("strawdecor configuration frozen")

    def _check_mutable(self) -> None:
        if self._frozen:
            raise ConfigurationFrozenError("Configuration is frozen")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return (
            f"Configuration(strategy={self._strategy!r}, "
            f"collections={self.collections.classes()!r}, frozen={self._frozen})"
        )
