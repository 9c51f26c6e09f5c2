"""
strawdecor — decorator objects for strawberry GraphQL types.

GraphQL types stay declarative; presentation and business logic live in
decorator classes that wrap resolved values automatically:

- Declarations (`strawdecor.declarations`): ``decorate_with``, ``decorate_when``,
  ``decorator_metadata``, ``scoped_decorator_metadata``.
- Decorator base class (`strawdecor.decorators.Decorator`).
- Engine-agnostic core: collection classification (`strawdecor.containers`),
  resolvers (`strawdecor.resolve`), scopes (`strawdecor.scope`) and the field
  interceptor (`strawdecor.interceptor`).
- Strawberry hook (`strawdecor.extension.DecorationExtension`).
- Process-wide configuration (`strawdecor.config`, `strawdecor.conf`).

Framework integrations (e.g. `strawdecor_django`) register extra collection
classes and wire settings on top of this package.
"""

from importlib.metadata import PackageNotFoundError, version

from ._state import configuration, configure, get_configuration, push_configuration, set_configuration
from .config import Configuration
from .declarations import decorate_when, decorate_with, decorator_metadata, scoped_decorator_metadata
from .decorators import Decorator
from .extension import DecorationExtension
from .interceptor import Interception, intercept
from .registry import DecorationRegistry, decorations
from .scope import ExecutionScope
from .spec import TypeDecorationSpec

try:
    __version__ = version("strawdecor")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "Configuration",
    "DecorationExtension",
    "DecorationRegistry",
    "Decorator",
    "ExecutionScope",
    "Interception",
    "TypeDecorationSpec",
    "configuration",
    "configure",
    "decorate_when",
    "decorate_with",
    "decorations",
    "decorator_metadata",
    "get_configuration",
    "intercept",
    "push_configuration",
    "scoped_decorator_metadata",
    "set_configuration",
]
