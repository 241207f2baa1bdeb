"""
Tracer factory for pipeline stage spans.

get_tracer() hands out an OTel-backed tracer once init_tracing() has set
up a provider, and a NoOpTracer otherwise, so nodes can always open spans
without checking whether tracing is on.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Protocol

import numpy as np


class SpanProtocol(Protocol):
    """What a pipeline node may do with its stage span."""

    def set_attribute(self, key: str, value: Any) -> None:
        ...

    def set_status(self, status: str, description: str | None = None) -> None:
        """status is "ok" or "error"."""
        ...

    def record_exception(self, exception: Exception) -> None:
        ...


class TracerProtocol(Protocol):
    def start_span(
        self, name: str, attributes: dict[str, Any] | None = None
    ) -> Iterator[SpanProtocol]:
        ...


# ---------------------------------------------------------------------------
# DISABLED TRACING
# ---------------------------------------------------------------------------


class NoOpSpan:
    def set_attribute(self, key: str, value: Any) -> None:
        pass

    def set_status(self, status: str, description: str | None = None) -> None:
        pass

    def record_exception(self, exception: Exception) -> None:
        pass


class NoOpTracer:
    """Used when tracing is off; spans cost one generator frame."""

    @contextmanager
    def start_span(
        self, name: str, attributes: dict[str, Any] | None = None
    ) -> Iterator[NoOpSpan]:
        yield NoOpSpan()


# ---------------------------------------------------------------------------
# OPENTELEMETRY
# ---------------------------------------------------------------------------


def to_otel_value(value: Any) -> Any:
    """
    Coerce a value into a type OTel accepts as an attribute.

    Scores and dimensions often arrive as numpy scalars, and candidate
    ids as tuples; OTel only takes str/bool/int/float and flat lists of them.
    """
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, (list, tuple, np.ndarray)):
        return [to_otel_value(item) for item in value]
    if isinstance(value, (str, bool, int, float)):
        return value
    return str(value)


class OTelSpan:
    def __init__(self, span: Any):
        self._span = span

    def set_attribute(self, key: str, value: Any) -> None:
        self._span.set_attribute(key, to_otel_value(value))

    def set_status(self, status: str, description: str | None = None) -> None:
        from opentelemetry.trace import Status, StatusCode

        code = StatusCode.OK if status == "ok" else StatusCode.ERROR
        # OTel only keeps descriptions on error statuses
        self._span.set_status(Status(code, description if code == StatusCode.ERROR else None))

    def record_exception(self, exception: Exception) -> None:
        self._span.record_exception(exception)


class OTelTracer:
    """
    Opens stage spans on an OTel tracer.

    Errors that escape the span body (contract violations such as a
    dimension mismatch during ranking) are recorded on the span before
    they propagate.
    """

    def __init__(self, tracer: Any):
        self._tracer = tracer

    @contextmanager
    def start_span(
        self, name: str, attributes: dict[str, Any] | None = None
    ) -> Iterator[OTelSpan]:
        clean = {k: to_otel_value(v) for k, v in (attributes or {}).items()}
        with self._tracer.start_as_current_span(
            name,
            attributes=clean,
            record_exception=False,
            set_status_on_exception=False,
        ) as raw_span:
            span = OTelSpan(raw_span)
            try:
                yield span
            except Exception as e:
                span.record_exception(e)
                span.set_status("error", f"{type(e).__name__}: {e}")
                raise


# ---------------------------------------------------------------------------
# FACTORY
# ---------------------------------------------------------------------------

_tracer: TracerProtocol | None = None


def get_tracer(service_name: str = "movie-rag") -> TracerProtocol:
    """
    Get the process-wide tracer.

    The choice is made on the first call and cached; call reset_tracer()
    after init_tracing() or a config change to re-evaluate it.
    """
    global _tracer
    if _tracer is not None:
        return _tracer

    from movie_rag.observability.config import get_config

    _tracer = NoOpTracer()
    if not get_config().enabled:
        return _tracer

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.trace import TracerProvider
    except ImportError:
        return _tracer

    # Until init_tracing() installs an SDK provider, spans would go nowhere
    if isinstance(trace.get_tracer_provider(), TracerProvider):
        _tracer = OTelTracer(trace.get_tracer(service_name))
    return _tracer


def reset_tracer() -> None:
    global _tracer
    _tracer = None
