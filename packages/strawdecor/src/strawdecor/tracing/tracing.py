import logging
from collections.abc import Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Iterator

from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind, Status, StatusCode, Tracer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Tracer utilities
# ---------------------------------------------------------------------------

_DEFAULT_TRACER_NAME = "strawdecor"
_ALLOWED = (bool, str, bytes, int, float)


def get_tracer(name: str | None = None) -> Tracer:
    """Return an OpenTelemetry tracer for this package."""
    return trace.get_tracer(name or _DEFAULT_TRACER_NAME)


def apply_attributes(span: Span, attrs: Mapping[str, Any] | None) -> None:
    if not attrs:
        return
    # OpenTelemetry allows only: bool, str, bytes, int, float, or sequences of those.
    for k, v in attrs.items():
        try:
            if v is None:
                continue
            if isinstance(v, _ALLOWED):
                span.set_attribute(k, v)
                continue
            if isinstance(v, Sequence) and not isinstance(v, (str, bytes)):
                cleaned = [x for x in v if isinstance(x, _ALLOWED)]
                if cleaned:
                    span.set_attribute(k, cleaned)
        except Exception:
            # never let tracing raise
            logger.debug("trace.attr.set_failed", extra={"key": k}, exc_info=True)


def _record_exception(span: Span, err: BaseException) -> None:
    try:
        span.record_exception(err)
        span.set_status(Status(StatusCode.ERROR, description=str(err)))
        span.set_attribute("exception.type", type(err).__name__)
        span.set_attribute("exception.msg", str(err)[:500])
    except Exception:
        logger.exception("trace.record_exception_failed")


@contextmanager
def service_span_sync(name: str, *, attributes: Mapping[str, Any] | None = None) -> Iterator[Span]:
    """Synchronous span context.

    Usage:
        with service_span_sync("strawdecor.decorate (ShapeType)", attributes={"strawdecor.path": "shapes.0"}):
            ...
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(name, kind=SpanKind.INTERNAL) as span:
        apply_attributes(span, attributes)
        try:
            yield span
            span.set_attribute("ok", True)
        except Exception as e:
            span.set_attribute("ok", False)
            _record_exception(span, e)
            raise


__all__ = [
    "apply_attributes",
    "get_tracer",
    "service_span_sync",
]
