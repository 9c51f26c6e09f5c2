"""Import-string helpers used by the settings layer."""

from __future__ import annotations

import importlib
from typing import Any


def import_string(path: str) -> Any:
    """Import ``"pkg.module:attr"`` or ``"pkg.module.attr"`` into a Python object."""
    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    if not module_name:
        raise ImportError(f"Could not import from path: {path!r}")
    module = importlib.import_module(module_name)
    obj: Any = module
    for part in attr.split(".") if attr else ():
        obj = getattr(obj, part)
    return obj


def maybe_import(value: Any) -> Any:
    """Import ``value`` when it is an import string, otherwise return it unchanged."""
    if isinstance(value, str):
        return import_string(value)
    return value
