"""Read-only stand-in for a value that is looked up on every access.

``strawdecor.configuration`` is a :class:`Proxy` over
:func:`strawdecor.get_configuration`, so module-level code can hold on to it and
still see the configuration pushed with :func:`strawdecor.push_configuration`.
"""

from __future__ import annotations

from typing import Any, Callable


class Proxy:
    __slots__ = ("_resolver",)

    def __init__(self, resolver: Callable[[], Any]) -> None:
        object.__setattr__(self, "_resolver", resolver)

    @property
    def __wrapped__(self) -> Any:
        """The current target."""
        return self._resolver()

    def __getattr__(self, name: str) -> Any:
        return getattr(self._resolver(), name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(
            f"cannot set {name!r} through a proxy; configure the target object instead"
        )

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Proxy for {self._resolver()!r}>"
