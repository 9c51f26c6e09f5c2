# strawdecor_django/containers.py
"""QuerySet support for strawdecor collection classification."""

import logging
from typing import Any, Callable

from django.db.models import QuerySet

from strawdecor import Configuration, get_configuration

logger = logging.getLogger(__name__)


def map_queryset(queryset: QuerySet, fn: Callable[[Any], Any]) -> list:
    """Evaluate ``queryset`` and map ``fn`` over its rows, preserving order."""
    return [fn(obj) for obj in queryset]


def register_queryset_collection(configuration: Configuration | None = None) -> None:
    """Register ``QuerySet`` (and its subclasses) as a built-in collection class."""
    configuration = configuration or get_configuration()
    configuration.collections.add_builtin(QuerySet, map_queryset)
    logger.debug("QuerySet registered as a decoratable collection")
