# strawdecor/conf/models.py
"""Validated view of the decoration settings.

Import strings are resolved here so the rest of the package only deals with
real callables and classes.
"""

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from strawdecor.utils.imports import maybe_import


def _resolve(value: Any) -> Any:
    try:
        return maybe_import(value)
    except (ImportError, AttributeError) as err:
        raise ValueError(f"Could not import {value!r}: {err}") from err


class DecorationSettings(BaseModel):
    model_config = ConfigDict(extra="ignore", arbitrary_types_allowed=True)

    DECORATE: Callable[..., Any] | None = None
    CUSTOM_COLLECTION_CLASSES: list[Any] = Field(default_factory=list)
    TRACE_DECORATION: bool = False

    @field_validator("DECORATE", mode="before")
    @classmethod
    def _import_strategy(cls, value: Any) -> Any:
        value = _resolve(value)
        if value is not None and not callable(value):
            raise ValueError(f"DECORATE must be callable, got {value!r}")
        return value

    @field_validator("CUSTOM_COLLECTION_CLASSES", mode="before")
    @classmethod
    def _normalize_collections(cls, value: Any) -> list[tuple[type, Any]]:
        if value is None:
            return []
        if isinstance(value, (str, type)):
            value = [value]
        out: list[tuple[type, Any]] = []
        for item in value:
            if isinstance(item, (tuple, list)):
                if len(item) != 2:
                    raise ValueError(f"Expected (class, mapper) pair, got {item!r}")
                klass, mapper = _resolve(item[0]), _resolve(item[1])
            else:
                klass, mapper = _resolve(item), None
            if not isinstance(klass, type):
                raise ValueError(f"Collection classes must be classes, got {klass!r}")
            if mapper is not None and not callable(mapper):
                raise ValueError(f"Collection mapper for {klass.__qualname__} must be callable")
            out.append((klass, mapper))
        return out
