"""
Context node - formats ranked candidates into the context block.

Pure apart from configuration: no external calls.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Callable

from movie_rag.observability import NoOpTracer
from movie_rag.observability import attributes as attrs
from movie_rag.pipeline.context_builder import build_context, cap_candidates
from movie_rag.pipeline.state import PipelineStage

if TYPE_CHECKING:
    from movie_rag.observability import TracerProtocol
    from movie_rag.pipeline.state import PipelineState


def create_context_node(
    max_items: int | None = None,
    max_field_chars: int | None = None,
    tracer: TracerProtocol | None = None,
) -> Callable[[PipelineState], dict]:
    """
    Factory that creates the context node.

    Args:
        max_items: Cap on excerpts in the block (default: every candidate)
        max_field_chars: Per-field character cap applied before building
        tracer: Tracer for the stage span (no-op if not provided)
    """
    tracer = tracer or NoOpTracer()

    def build_context_block(state: PipelineState) -> dict:
        stage = PipelineStage.CONTEXT_BUILDING
        start = time.time()

        with tracer.start_span("rag.context_building", attributes={attrs.RAG_STAGE: stage.value}) as span:
            candidates = state["candidates"]
            if max_field_chars is not None:
                candidates = cap_candidates(candidates, max_field_chars)
            context = build_context(candidates, max_items=max_items)
            span.set_attribute(attrs.RAG_CONTEXT_ITEMS, len(context))

        latency = (time.time() - start) * 1000

        return {
            "context": context,
            "stage": PipelineStage.GENERATING,
            "stages": [stage],
            "latency_ms": {stage.value: latency},
        }

    return build_context_block
