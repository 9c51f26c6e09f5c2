# strawdecor/tracing/__init__.py
from .tracing import apply_attributes, get_tracer, service_span_sync

__all__ = [
    "apply_attributes",
    "get_tracer",
    "service_span_sync",
]
