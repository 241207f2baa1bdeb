"""
Ranking node - scores a fresh corpus snapshot against the query vector.

An empty ranking is NOT a failure: the pipeline carries on and the
generator answers from an empty context. Contract violations raised by the
ranker (DimensionMismatch) propagate to the caller.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

from movie_rag.observability import attributes as attrs
from movie_rag.pipeline.state import PipelineStage
from movie_rag.retrieval.ranker import rank

if TYPE_CHECKING:
    from movie_rag.core import Corpus
    from movie_rag.observability import TracerProtocol
    from movie_rag.pipeline.state import PipelineState
    from movie_rag.retrieval.similarity import ScoringPolicy

logger = logging.getLogger(__name__)


def create_rank_node(
    corpus: Corpus,
    policy: ScoringPolicy,
    tracer: TracerProtocol,
    max_workers: int = 1,
) -> Callable[[PipelineState], dict]:
    """
    Factory that creates the ranking node with an injected corpus.

    Args:
        corpus: Corpus implementation (read once per invocation)
        policy: Scoring policy for composite scores
        tracer: Tracer for the stage span
        max_workers: Threads used to score documents
    """

    def rank_candidates(state: PipelineState) -> dict:
        """
        Reads from state:
        - query_vector, top_k

        Writes to state:
        - candidates, stage, stages, latency_ms
        """
        start = time.time()
        stage = PipelineStage.RANKING

        with tracer.start_span("rag.ranking", attributes={attrs.RAG_STAGE: stage.value}) as span:
            documents = corpus.all_documents()
            candidates = rank(
                state["query_vector"],
                documents,
                state["top_k"],
                policy=policy,
                max_workers=max_workers,
            )
            for key, value in attrs.ranking_attributes(
                top_k=state["top_k"],
                strategy=policy.strategy,
                corpus_size=len(documents),
                candidate_ids=[c.id for c in candidates],
            ).items():
                span.set_attribute(key, value)

        latency = (time.time() - start) * 1000
        if not candidates:
            logger.info(f"No eligible documents among {len(documents)}; continuing with empty context")
        else:
            logger.debug(
                f"Ranked {len(documents)} documents, kept "
                f"{[c.document.title for c in candidates]}"
            )

        return {
            "candidates": candidates,
            "stage": PipelineStage.CONTEXT_BUILDING,
            "stages": [stage],
            "latency_ms": {stage.value: latency},
        }

    return rank_candidates
