"""Decoration spec registry.

``decorations`` is the process-wide registry the declaration decorators write
to by default.
"""

from .base import DecorationRegistry
from .exceptions import RegistryError, RegistryFrozenError, RegistryLookupError

decorations = DecorationRegistry()

__all__ = [
    "DecorationRegistry",
    "RegistryError",
    "RegistryFrozenError",
    "RegistryLookupError",
    "decorations",
]
