"""
Unit Tests for Observability Module

Tests the Phoenix/OpenTelemetry integration with focus on:
1. Graceful degradation (NoOpTracer when disabled)
2. Configuration loading from environment
3. Span attributes recorded by the pipeline

Tests work WITHOUT Phoenix installed; environment handling uses patch.dict.
"""

import numpy as np
import pytest
from unittest.mock import patch, MagicMock

from movie_rag.config import PipelineConfig
from movie_rag.core import DimensionMismatch
from movie_rag.observability import init_tracing
from movie_rag.observability.config import (
    TracingConfig,
    get_config,
    reset_config,
)
from movie_rag.observability.tracer import (
    NoOpSpan,
    NoOpTracer,
    OTelTracer,
    get_tracer,
    reset_tracer,
    to_otel_value,
)
from movie_rag.observability.attributes import (
    GEN_AI_COMPLETION,
    GEN_AI_PROMPT,
    RAG_CANDIDATE_COUNT,
    RAG_FAILURE_KIND,
    RAG_STAGE,
    failure_attributes,
    ranking_attributes,
)
from movie_rag.pipeline import RAGPipeline
from movie_rag.retrieval import Document, InMemoryCorpus


@pytest.fixture(autouse=True)
def fresh_tracing_state():
    reset_config()
    reset_tracer()
    yield
    reset_config()
    reset_tracer()


# ---------------------------------------------------------------------------
# CONFIG TESTS
# ---------------------------------------------------------------------------


class TestTracingConfig:
    """Test configuration loading."""

    def test_config_defaults(self):
        """Config should have sensible defaults when env vars not set."""
        with patch.dict("os.environ", {}, clear=True):
            config = TracingConfig.from_env()

        assert config.enabled is False
        assert config.project_name == "movie-rag"
        assert config.collector_endpoint is None
        # Questions and answers are not exported unless asked for
        assert config.capture_llm_content is False

    @pytest.mark.parametrize("value", ["true", "1", "YES"])
    def test_enabled_flag(self, value):
        with patch.dict("os.environ", {"PHOENIX_ENABLED": value}):
            assert TracingConfig.from_env().enabled is True

    def test_collector_and_capture(self):
        env = {
            "PHOENIX_COLLECTOR_ENDPOINT": "http://collector:6006/v1/traces",
            "PHOENIX_CAPTURE_LLM_CONTENT": "true",
            "PHOENIX_PROJECT_NAME": "movies-dev",
        }
        with patch.dict("os.environ", env):
            config = TracingConfig.from_env()

        assert config.collector_endpoint == "http://collector:6006/v1/traces"
        assert config.capture_llm_content is True
        assert config.project_name == "movies-dev"

    def test_get_config_is_cached(self):
        assert get_config() is get_config()


# ---------------------------------------------------------------------------
# TRACER TESTS
# ---------------------------------------------------------------------------


class TestTracer:
    """Test tracer selection and no-op behavior."""

    def test_disabled_gives_noop_tracer(self):
        with patch.dict("os.environ", {"PHOENIX_ENABLED": "false"}):
            assert isinstance(get_tracer(), NoOpTracer)

    def test_noop_span_accepts_everything(self):
        with NoOpTracer().start_span("rag.test", attributes={"a": 1}) as span:
            assert isinstance(span, NoOpSpan)
            span.set_attribute("k", "v")
            span.set_status("error", "bad")
            span.record_exception(ValueError("x"))

    def test_noop_span_does_not_swallow_exceptions(self):
        with pytest.raises(ValueError):
            with NoOpTracer().start_span("rag.test"):
                raise ValueError("boom")

    def test_init_tracing_disabled(self):
        assert init_tracing(TracingConfig(enabled=False)) is False

    def test_enabled_without_provider_stays_noop(self):
        """Until init_tracing() installs a provider, spans would go nowhere."""
        pytest.importorskip("opentelemetry.sdk.trace")
        with patch.dict("os.environ", {"PHOENIX_ENABLED": "true"}):
            reset_config()
            with patch("opentelemetry.trace.get_tracer_provider", return_value=object()):
                assert isinstance(get_tracer(), NoOpTracer)


class TestOTelTracer:
    """Test the OTel wrapper with a mocked OTel tracer."""

    @pytest.fixture
    def raw_tracer(self):
        raw_span = MagicMock()
        tracer = MagicMock()
        tracer.start_as_current_span.return_value.__enter__.return_value = raw_span
        tracer.start_as_current_span.return_value.__exit__.return_value = False
        return tracer

    def test_attributes_coerced(self, raw_tracer):
        tracer = OTelTracer(raw_tracer)

        with tracer.start_span("rag.ranking", attributes={"rag.top_k": np.int64(3)}) as span:
            span.set_attribute("rag.candidate.ids", ("1", "4"))

        kwargs = raw_tracer.start_as_current_span.call_args.kwargs
        assert kwargs["attributes"] == {"rag.top_k": 3}
        assert type(kwargs["attributes"]["rag.top_k"]) is int
        raw_span = raw_tracer.start_as_current_span.return_value.__enter__.return_value
        raw_span.set_attribute.assert_called_once_with("rag.candidate.ids", ["1", "4"])

    def test_escaping_error_recorded_and_reraised(self, raw_tracer):
        pytest.importorskip("opentelemetry.trace")
        tracer = OTelTracer(raw_tracer)
        raw_span = raw_tracer.start_as_current_span.return_value.__enter__.return_value

        with pytest.raises(DimensionMismatch):
            with tracer.start_span("rag.ranking"):
                raise DimensionMismatch(3, 2)

        raw_span.record_exception.assert_called_once()
        raw_span.set_status.assert_called_once()

    @pytest.mark.parametrize(
        "value,expected",
        [
            (np.float32(0.5), 0.5),
            (np.array([1, 2]), [1, 2]),
            (["a", np.int64(2)], ["a", 2]),
            ("text", "text"),
            (None, "None"),
        ],
    )
    def test_to_otel_value(self, value, expected):
        assert to_otel_value(value) == expected


# ---------------------------------------------------------------------------
# ATTRIBUTE HELPERS
# ---------------------------------------------------------------------------


class TestAttributes:
    """Test attribute helper functions."""

    def test_ranking_attributes(self):
        attrs = ranking_attributes(
            top_k=3, strategy="max", corpus_size=8, candidate_ids=["1", "4"]
        )

        assert attrs[RAG_CANDIDATE_COUNT] == 2
        assert attrs["rag.scoring.strategy"] == "max"
        assert attrs["rag.corpus.size"] == 8

    def test_failure_attributes(self):
        attrs = failure_attributes("embedding", "Timeout")

        assert attrs == {RAG_STAGE: "embedding", RAG_FAILURE_KIND: "Timeout"}


# ---------------------------------------------------------------------------
# PIPELINE SPANS
# ---------------------------------------------------------------------------


class RecordingTracer:
    """Tracer double that keeps every span it opens."""

    def __init__(self):
        self.spans: dict[str, MagicMock] = {}

    def start_span(self, name, attributes=None):
        span = MagicMock()
        span.initial_attributes = attributes
        self.spans[name] = span
        context = MagicMock()
        context.__enter__.return_value = span
        context.__exit__.return_value = False
        return context


def run_pipeline(tracer, capture: bool):
    embedder = MagicMock()
    embedder.embed.return_value = np.array([1.0, 0.0])
    generator = MagicMock()
    generator.complete.return_value = "Star Wars."
    corpus = InMemoryCorpus(
        [Document(id="1", title="Star Wars", vectors={"embedding": np.array([1.0, 0.0])})]
    )
    env = {"PHOENIX_CAPTURE_LLM_CONTENT": "true" if capture else "false"}
    with patch.dict("os.environ", env):
        reset_config()
        return RAGPipeline(PipelineConfig(top_k=1), embedder, corpus, generator, tracer=tracer).answer(
            "space movies"
        )


class TestPipelineSpans:
    """The pipeline opens one span per stage."""

    def test_stage_spans(self):
        tracer = RecordingTracer()

        run_pipeline(tracer, capture=False)

        assert set(tracer.spans) == {
            "rag.embedding",
            "rag.ranking",
            "rag.context_building",
            "rag.generating",
        }
        assert tracer.spans["rag.ranking"].initial_attributes == {RAG_STAGE: "ranking"}
        tracer.spans["rag.ranking"].set_attribute.assert_any_call("rag.candidate.ids", ["1"])

    def test_llm_content_not_captured_by_default(self):
        tracer = RecordingTracer()

        run_pipeline(tracer, capture=False)

        keys = [c.args[0] for c in tracer.spans["rag.generating"].set_attribute.call_args_list]
        assert GEN_AI_PROMPT not in keys
        assert GEN_AI_COMPLETION not in keys

    def test_llm_content_captured_when_enabled(self):
        tracer = RecordingTracer()

        run_pipeline(tracer, capture=True)

        span = tracer.spans["rag.generating"]
        span.set_attribute.assert_any_call(GEN_AI_COMPLETION, "Star Wars.")
        keys = [c.args[0] for c in span.set_attribute.call_args_list]
        assert GEN_AI_PROMPT in keys
