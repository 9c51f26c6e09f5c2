"""Layered decoration settings.

Lookup order, first hit wins:

1. values assigned on the instance (``settings["TRACE_DECORATION"] = True``);
2. loaded layers, most recently loaded first (``update_from_*``);
3. :data:`~strawdecor.conf.defaults.DEFAULTS`.

Only the keys present in ``DEFAULTS`` are read from modules and the
environment. In a module, ``STRAWDECOR_<KEY>`` takes precedence over a bare
``<KEY>``, so a project-wide settings module can namespace its entries.
"""

from __future__ import annotations

import importlib
import logging
import os
from collections import ChainMap
from typing import Any, Iterator, Mapping, MutableMapping

from .defaults import DEFAULTS

logger = logging.getLogger(__name__)

NAMESPACE = "STRAWDECOR"
CONFIG_MODULE_ENVVAR = f"{NAMESPACE}_CONFIG_MODULE"


def _pick_known_keys(mapping: Mapping[str, Any], namespace: str = NAMESPACE) -> dict[str, Any]:
    picked: dict[str, Any] = {}
    for key in DEFAULTS:
        namespaced = f"{namespace}_{key}"
        if namespaced in mapping:
            picked[key] = mapping[namespaced]
        elif key in mapping:
            picked[key] = mapping[key]
    return picked


def _split_list(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


# environment values are strings; these keys hold lists
_ENVIRON_PARSERS = {"CUSTOM_COLLECTION_CLASSES": _split_list}


class Settings(MutableMapping[str, Any]):
    """Decoration settings assembled from defaults, modules and the environment."""

    def __init__(self, *layers: Mapping[str, Any]) -> None:
        self._assigned: dict[str, Any] = {}
        self._storage = ChainMap(self._assigned, *(dict(layer) for layer in layers), dict(DEFAULTS))

    # Mapping protocol -------------------------------------------------
    def __getitem__(self, key: str) -> Any:
        return self._storage[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._assigned[key] = value

    def __delitem__(self, key: str) -> None:
        del self._assigned[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    # Loading ----------------------------------------------------------
    def _push(self, layer: dict[str, Any], source: str) -> None:
        if not layer:
            return
        self._storage.maps.insert(1, layer)
        logger.debug("loaded %s from %s", ", ".join(sorted(layer)), source)

    def update_from_mapping(self, mapping: Mapping[str, Any]) -> None:
        self._push(_pick_known_keys(mapping), "mapping")

    def update_from_object(self, obj: Any) -> None:
        """Load settings from a module (or its dotted import path) or any object."""
        if isinstance(obj, str):
            obj = importlib.import_module(obj)
        self._push(_pick_known_keys(vars(obj)), getattr(obj, "__name__", repr(obj)))

    def update_from_envvar(self, envvar: str = CONFIG_MODULE_ENVVAR) -> None:
        """Load the settings module named by ``envvar``, when it is set."""
        module_name = os.environ.get(envvar)
        if not module_name:
            return
        self.update_from_object(module_name)

    def update_from_environ(self, environ: Mapping[str, str] | None = None) -> None:
        """Load ``STRAWDECOR_<KEY>`` variables; list values are comma-separated."""
        environ = os.environ if environ is None else environ
        layer: dict[str, Any] = {}
        for key in DEFAULTS:
            raw = environ.get(f"{NAMESPACE}_{key}")
            if raw is None:
                continue
            parse = _ENVIRON_PARSERS.get(key)
            layer[key] = parse(raw) if parse else raw
        self._push(layer, "environment")
