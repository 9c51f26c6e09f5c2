"""Resolver outcomes, kept small enough to attach to a tracing span."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ResolutionBranch(Generic[T]):
    """Which rule produced a resolver's value."""

    name: str
    value: T | None
    reason: str | None = None
    label: str | None = None


@dataclass(frozen=True, slots=True)
class ResolutionResult(Generic[T]):
    value: T | None
    selected: ResolutionBranch[T]

    @property
    def branch(self) -> str:
        return self.selected.name

    def context(self, prefix: str) -> dict[str, object]:
        """Span attributes describing this resolution."""
        return {
            f"{prefix}.branch": self.selected.name,
            f"{prefix}.reason": self.selected.reason or "",
            f"{prefix}.label": self.selected.label or "<none>",
        }

    @staticmethod
    def summarize(results: Iterable[ResolutionResult], prefix: str) -> dict[str, object]:
        """Span attributes for a field that resolved several objects (collections).

        ``<prefix>.labels`` counts objects per selected class, e.g.
        ``"app.SquareDecorator:2 | <none>:1"``.
        """
        results = list(results)
        if len(results) == 1:
            return results[0].context(prefix)
        labels = Counter(r.selected.label or "<none>" for r in results)
        return {
            f"{prefix}.count": len(results),
            f"{prefix}.branches": sorted({r.branch for r in results}),
            f"{prefix}.labels": " | ".join(f"{label}:{n}" for label, n in labels.items()),
        }


__all__ = [
    "ResolutionBranch",
    "ResolutionResult",
]
