"""Span helpers for refresh cycles and aggregation calls.

traced() wraps a coroutine function in a span. Arguments whose names are
in the allowlist (generation, category, interval, ...) are copied onto the
span, whether they are passed positionally or by keyword.
"""

import inspect
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

T = TypeVar("T")

_TRACER_NAME = "app.overview"

# Argument names recorded on spans. Query strings stay out of traces.
SPAN_ARG_ALLOWLIST = frozenset({
    "generation", "category", "event_type", "field", "size", "interval",
    "time_range", "series_index", "label",
})

_SpanValue = str | int | float | bool


def _span_value(value: Any) -> _SpanValue:
    if isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def _allowlisted_args(
    signature: inspect.Signature, args: tuple, kwargs: dict
) -> dict[str, _SpanValue]:
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        return {}
    return {
        f"arg.{name}": _span_value(value)
        for name, value in bound.arguments.items()
        if name in SPAN_ARG_ALLOWLIST and value is not None
    }


def traced(
    operation_name: str | None = None,
    attributes: dict[str, _SpanValue] | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Run a coroutine function inside a span named operation_name.

    The span status is ERROR when the coroutine raises (the exception is
    recorded and re-raised). Cancellation is not recorded as an error.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        span_name = operation_name or f"{func.__module__}.{func.__qualname__}"
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            tracer = trace.get_tracer(_TRACER_NAME)
            span_attributes = dict(attributes or {})
            span_attributes.update(_allowlisted_args(signature, args, kwargs))
            with tracer.start_as_current_span(
                span_name,
                attributes=span_attributes,
                record_exception=False,
                set_status_on_exception=False,
            ) as span:
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: _SpanValue) -> None:
    """Set attributes on the current span (no-op when it is not recording)."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def add_span_event(name: str, attributes: dict[str, _SpanValue] | None = None) -> None:
    """Add an event to the current span (no-op when it is not recording)."""
    span = trace.get_current_span()
    if span.is_recording():
        span.add_event(name, attributes=attributes or {})


def get_trace_id() -> str | None:
    """Current trace ID as 32-char hex, or None outside a valid span."""
    ctx = trace.get_current_span().get_span_context()
    if not ctx.is_valid:
        return None
    return format(ctx.trace_id, "032x")
