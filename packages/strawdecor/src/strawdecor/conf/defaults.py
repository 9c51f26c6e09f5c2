"""Default configuration values for strawdecor."""

DEFAULTS: dict[str, object] = {
    # Callable (or import string) building a decorated value from
    # (decorator_class, obj, metadata).
    "DECORATE": "strawdecor.strategy:default_decorate",
    # Extra collection classes, each a class / import string or a
    # (class, mapper) pair.
    "CUSTOM_COLLECTION_CLASSES": (),
    "TRACE_DECORATION": False,
}
