"""OpenTelemetry tracing helpers.

Only the opentelemetry API is used here. Without an SDK configured by the
deployment, spans are non-recording and cost next to nothing.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode, Tracer

TRACER_NAME = "admin_authz"


def get_tracer(name: str = TRACER_NAME) -> Tracer:
    return trace.get_tracer(name)


@contextmanager
def traced(tracer: Tracer, name: str, **attributes: Any) -> Iterator[Span]:
    """Run the block inside a span, marking it ERROR if the block raises.

    Callers that detect failure without an exception set the status themselves.

    Attribute values of None are dropped (OpenTelemetry rejects them).
    """
    with tracer.start_as_current_span(
        name, record_exception=False, set_status_on_exception=False
    ) as span:
        for key, value in attributes.items():
            if value is not None:
                span.set_attribute(key, value)
        try:
            yield span
        except BaseException as e:
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise
