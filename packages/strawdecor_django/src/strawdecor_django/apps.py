# strawdecor_django/apps.py
"""
strawdecor_django.apps
======================

Wires strawdecor into Django at ``AppConfig.ready()``:

- registers ``QuerySet`` as a built-in decoratable collection;
- applies ``settings.STRAWDECOR`` to the active configuration.

Settings
--------
- STRAWDECOR (dict): ``DECORATE`` (callable or import string),
  ``CUSTOM_COLLECTION_CLASSES`` (classes, import strings or
  ``(class, mapper)`` pairs), ``TRACE_DECORATION`` (bool).
"""

import logging
import threading

from django.apps import AppConfig

from strawdecor.tracing import service_span_sync

from .conf import apply_django_settings
from .containers import register_queryset_collection

logger = logging.getLogger(__name__)

_ready_lock = threading.RLock()
_ready = False


class StrawdecorConfig(AppConfig):
    name = "strawdecor_django"
    label = "strawdecor_django"
    verbose_name = "strawdecor"

    def ready(self) -> None:
        global _ready
        with _ready_lock:
            if _ready:
                return
            with service_span_sync("strawdecor.django.ready"):
                register_queryset_collection()
                apply_django_settings()
            _ready = True
        logger.debug("strawdecor_django ready")
