"""
Pipeline runner - the public API for answering questions.

This module provides the single entry point the CLI, demos and tests call.
It handles:
- Input validation (fail fast, raised)
- State initialization and graph invocation
- Result conversion: PipelineAnswer on success, PipelineFailure otherwise

The runner holds no per-question state. Each answer() call starts from a
fresh initial state and reads a fresh corpus snapshot.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from movie_rag.config import PipelineConfig
from movie_rag.core import ContextBlock, InvalidArgument, ScoredCandidate
from movie_rag.pipeline.graph import build_pipeline_graph
from movie_rag.pipeline.state import PipelineStage, create_initial_state
from movie_rag.retrieval.ranker import rank, validate_top_k

if TYPE_CHECKING:
    from movie_rag.core import Corpus, Embedder, Generator
    from movie_rag.observability import TracerProtocol

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# RESULT TYPES
# ---------------------------------------------------------------------------


@dataclass
class PipelineAnswer:
    """Successful result: the answer plus what it was grounded on."""

    text: str
    candidates: list[ScoredCandidate]
    context: ContextBlock
    stages: list[PipelineStage]
    latency_ms: float
    stage_latency_ms: dict[str, float] = field(default_factory=dict)

    @property
    def stage(self) -> PipelineStage:
        return PipelineStage.DONE

    def __str__(self) -> str:
        return self.text


@dataclass
class PipelineFailure:
    """Failed result: which kind of failure, and why. Never carries answer text."""

    kind: str
    message: str
    stages: list[PipelineStage]

    @property
    def stage(self) -> PipelineStage:
        return PipelineStage.FAILED

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


# ---------------------------------------------------------------------------
# PIPELINE
# ---------------------------------------------------------------------------


class RAGPipeline:
    """
    Question -> embedding -> ranking -> context -> answer.

    Dependencies are INJECTED, not created internally.
    Use create_pipeline() to build one from configuration.
    """

    def __init__(
        self,
        config: PipelineConfig,
        embedder: Embedder,
        corpus: Corpus,
        generator: Generator,
        tracer: TracerProtocol | None = None,
    ):
        self.config = config
        self.embedder = embedder
        self.corpus = corpus
        self.generator = generator
        self._graph = build_pipeline_graph(
            config, embedder, corpus, generator, tracer=tracer
        )

    def _validate(self, question: str, top_k: int | None) -> tuple[str, int]:
        if not isinstance(question, str) or not question.strip():
            raise InvalidArgument("question must be a non-empty string")
        top_k = self.config.top_k if top_k is None else top_k
        return question.strip(), validate_top_k(top_k)

    def answer(
        self, question: str, top_k: int | None = None
    ) -> PipelineAnswer | PipelineFailure:
        """
        Answer one question.

        Args:
            question: Free-text question
            top_k: Documents to retrieve (default: config.top_k)

        Returns:
            PipelineAnswer on success, PipelineFailure when the embedding or
            generation call failed or timed out

        Raises:
            InvalidArgument: empty question or top_k <= 0
            DimensionMismatch: query and corpus vectors disagree in length
        """
        question, top_k = self._validate(question, top_k)
        start = time.time()

        final_state = self._graph.invoke(create_initial_state(question, top_k))
        total_latency = (time.time() - start) * 1000

        if final_state["stage"] == PipelineStage.FAILED:
            logger.info(
                f"Pipeline failed with {final_state['failure_kind']} "
                f"after {total_latency:.0f}ms"
            )
            return PipelineFailure(
                kind=final_state["failure_kind"],
                message=final_state["failure_message"],
                stages=list(final_state["stages"]),
            )

        logger.info(
            f"Answered with {len(final_state['candidates'])} documents "
            f"in {total_latency:.0f}ms"
        )
        return PipelineAnswer(
            text=final_state["answer"],
            candidates=list(final_state["candidates"]),
            context=final_state["context"],
            stages=list(final_state["stages"]),
            latency_ms=total_latency,
            stage_latency_ms=dict(final_state["latency_ms"]),
        )

    def search(self, question: str, top_k: int | None = None) -> list[ScoredCandidate]:
        """
        Retrieve ranked candidates without generating an answer.

        Unlike answer(), embedding errors are raised, not returned.
        """
        question, top_k = self._validate(question, top_k)
        query_vector = self.embedder.embed(question, timeout=self.config.embed_timeout_s)
        return rank(
            query_vector,
            self.corpus.all_documents(),
            top_k,
            policy=self.config.scoring,
            max_workers=self.config.scoring_workers,
        )


# ---------------------------------------------------------------------------
# FACTORY FUNCTION
# ---------------------------------------------------------------------------


def create_pipeline(
    config: PipelineConfig | None = None,
    use_mock: bool = False,
    corpus: Corpus | None = None,
) -> RAGPipeline:
    """
    Build a pipeline from configuration.

    Args:
        config: Pipeline settings (defaults loaded from the environment)
        use_mock: Use MockEmbeddings/MockGenerator instead of OpenAI
        corpus: Corpus override; otherwise config.data_path or seed movies

    Returns:
        Ready-to-use RAGPipeline
    """
    from movie_rag.embeddings import get_embedding_provider
    from movie_rag.generation import get_generator
    from movie_rag.retrieval.corpus import get_corpus

    config = config or PipelineConfig.from_env()

    embedder = get_embedding_provider(use_mock=use_mock, config=config.embedding)
    generator = get_generator(use_mock=use_mock, config=config.llm)
    if corpus is None:
        corpus = get_corpus(config.data_path, embeddings=embedder)

    return RAGPipeline(config, embedder, corpus, generator)
