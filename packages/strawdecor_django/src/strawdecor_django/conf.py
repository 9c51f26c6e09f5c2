# strawdecor_django/conf.py
"""Apply ``settings.STRAWDECOR`` to a strawdecor configuration."""

import logging
from collections.abc import Mapping

from django.conf import settings as dj_settings
from django.core.exceptions import ImproperlyConfigured

from strawdecor import Configuration, get_configuration
from strawdecor.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SETTINGS_NAME = "STRAWDECOR"


def apply_django_settings(configuration: Configuration | None = None) -> Configuration:
    configuration = configuration or get_configuration()
    options = getattr(dj_settings, SETTINGS_NAME, None)
    if not options:
        return configuration
    if not isinstance(options, Mapping):
        raise ImproperlyConfigured(f"settings.{SETTINGS_NAME} must be a dict, got {type(options).__name__}")
    try:
        configuration.apply_settings(options)
    except ConfigurationError as err:
        raise ImproperlyConfigured(f"settings.{SETTINGS_NAME}: {err}") from err
    logger.info("[STRAWDECOR] ✅ applied settings.%s (%s)", SETTINGS_NAME, ", ".join(sorted(options)))
    return configuration
