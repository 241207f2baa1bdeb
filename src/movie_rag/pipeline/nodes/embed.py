"""
Embedding node - turns the question into the query vector.

No retry here: retries, if any, belong to the embedder's transport.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

import numpy as np

from movie_rag.core import EmbeddingFailure, failure_kind
from movie_rag.observability import attributes as attrs
from movie_rag.pipeline.state import PipelineStage, failed

if TYPE_CHECKING:
    from movie_rag.core import Embedder
    from movie_rag.observability import TracerProtocol
    from movie_rag.pipeline.state import PipelineState

logger = logging.getLogger(__name__)


def create_embed_node(
    embedder: Embedder,
    tracer: TracerProtocol,
    timeout: float | None = None,
) -> Callable[[PipelineState], dict]:
    """
    Factory that creates the embedding node with an injected embedder.

    Args:
        embedder: Embedder implementation
        tracer: Tracer for the stage span
        timeout: Seconds the embedder may take before failing with Timeout
    """

    def embed_question(state: PipelineState) -> dict:
        """
        Reads from state:
        - question

        Writes to state:
        - query_vector, stage, stages, latency_ms
        - or failure_kind/failure_message on error
        """
        start = time.time()
        stage = PipelineStage.EMBEDDING

        with tracer.start_span("rag.embedding", attributes={attrs.RAG_STAGE: stage.value}) as span:
            try:
                vector = np.asarray(embedder.embed(state["question"], timeout=timeout))
                if vector.ndim != 1 or vector.size == 0:
                    raise EmbeddingFailure(
                        f"Embedder returned an unusable vector of shape {vector.shape}"
                    )
            except Exception as e:
                kind = failure_kind(e, EmbeddingFailure.kind)
                logger.warning(f"Embedding failed ({kind}): {e}")
                span.record_exception(e)
                span.set_status("error", str(e))
                for key, value in attrs.failure_attributes(stage.value, kind).items():
                    span.set_attribute(key, value)
                return failed(stage, kind, str(e) or type(e).__name__)

            span.set_attribute(attrs.RAG_QUERY_DIMENSIONS, int(vector.size))

        latency = (time.time() - start) * 1000
        logger.debug(f"Embedded question into {vector.size} dimensions in {latency:.0f}ms")

        return {
            "query_vector": vector,
            "stage": PipelineStage.RANKING,
            "stages": [stage],
            "latency_ms": {stage.value: latency},
        }

    return embed_question
