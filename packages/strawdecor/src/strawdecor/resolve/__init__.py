"""Resolver helpers for decoration."""

from .result import ResolutionBranch, ResolutionResult
from .decorator_class import resolve_decorator_class
from .metadata import MetadataResolution, resolve_metadata

__all__ = [
    "ResolutionBranch",
    "ResolutionResult",
    "MetadataResolution",
    "resolve_decorator_class",
    "resolve_metadata",
]
