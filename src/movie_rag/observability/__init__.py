"""
Observability Module - Phoenix + OpenTelemetry Integration

Provides tracing for pipeline stages and model calls using Arize Phoenix
with OpenInference auto-instrumentation. Everything degrades to no-ops
when tracing is disabled or the packages are not installed.

USAGE:
------
# At application startup:
from movie_rag.observability import init_tracing

init_tracing()  # Starts local Phoenix UI if PHOENIX_ENABLED=true

# In code that needs tracing:
from movie_rag.observability import get_tracer

tracer = get_tracer()
with tracer.start_span("rag.ranking", attributes={"rag.top_k": 3}) as span:
    ...
"""

from __future__ import annotations

import logging

from movie_rag.observability.config import (
    TracingConfig,
    get_config,
    reset_config,
)
from movie_rag.observability.tracer import (
    TracerProtocol,
    SpanProtocol,
    NoOpTracer,
    NoOpSpan,
    get_tracer,
    reset_tracer,
)
from movie_rag.observability import attributes

logger = logging.getLogger(__name__)

_tracing_initialized = False

# Phoenix groups traces by this resource attribute
PROJECT_NAME_ATTRIBUTE = "openinference.project.name"


def _create_exporter(config: TracingConfig):
    """OTLP exporter for a remote collector, or for a local Phoenix app."""
    from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

    if config.collector_endpoint:
        logger.info(f"Sending traces to collector at {config.collector_endpoint}")
        return OTLPSpanExporter(endpoint=config.collector_endpoint)

    import phoenix as px

    session = px.launch_app()
    logger.info(f"Phoenix UI available at: {session.url}")
    return OTLPSpanExporter(endpoint=f"{session.url.rstrip('/')}/v1/traces")


def init_tracing(config: TracingConfig | None = None) -> bool:
    """
    Initialize tracing for the pipeline.

    Call once at startup, before the first pipeline is built: installs an
    OTel tracer provider tagged with the Phoenix project name and
    registers the OpenAI auto-instrumentor.

    Returns:
        True if tracing is active, False if disabled or unavailable
    """
    global _tracing_initialized
    if _tracing_initialized:
        return True

    config = config or get_config()
    if not config.enabled:
        logger.debug("Tracing disabled")
        return False

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
    except ImportError as e:
        logger.warning(f"OpenTelemetry not installed, tracing disabled: {e}")
        return False

    try:
        exporter = _create_exporter(config)
    except ImportError as e:
        logger.warning(f"Phoenix not installed, tracing disabled: {e}")
        return False
    except Exception as e:
        logger.error(f"Failed to start trace exporter: {e}")
        return False

    resource = Resource.create({
        "service.name": config.project_name,
        PROJECT_NAME_ATTRIBUTE: config.project_name,
    })
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    from movie_rag.observability.instrumentation import register_instrumentors
    register_instrumentors()

    reset_tracer()
    _tracing_initialized = True
    return True


def shutdown_tracing() -> None:
    """Flush spans and reset tracing state."""
    global _tracing_initialized

    if not _tracing_initialized:
        return

    from opentelemetry import trace

    provider = trace.get_tracer_provider()
    if hasattr(provider, "shutdown"):
        provider.shutdown()

    reset_tracer()
    reset_config()
    _tracing_initialized = False


__all__ = [
    # Initialization
    "init_tracing",
    "shutdown_tracing",
    # Config
    "TracingConfig",
    "get_config",
    "reset_config",
    # Tracer
    "TracerProtocol",
    "SpanProtocol",
    "NoOpTracer",
    "NoOpSpan",
    "get_tracer",
    "reset_tracer",
    # Attribute keys
    "attributes",
]
