from .defaults import DEFAULTS
from .models import DecorationSettings
from .settings import CONFIG_MODULE_ENVVAR, NAMESPACE, Settings

__all__ = ["CONFIG_MODULE_ENVVAR", "DEFAULTS", "DecorationSettings", "NAMESPACE", "Settings"]
