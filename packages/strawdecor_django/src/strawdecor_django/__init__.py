"""
strawdecor_django — Django integration for strawdecor.

Add ``"strawdecor_django"`` to ``INSTALLED_APPS`` to

- treat ``QuerySet`` values as decoratable collections, and
- apply the ``STRAWDECOR`` settings dict (``DECORATE``,
  ``CUSTOM_COLLECTION_CLASSES``, ``TRACE_DECORATION``) to the active
  strawdecor configuration at startup.
"""

from .containers import map_queryset, register_queryset_collection
from .conf import apply_django_settings

__all__ = ["apply_django_settings", "map_queryset", "register_queryset_collection"]
