"""
Graph construction with dependency injection.

The graph is just WIRING - all logic lives in nodes.
This separation means:
- Nodes can be tested in isolation
- Graph structure can change without touching node logic
- Dependencies are explicit and injectable

Graph structure:
    START -> embed_question -> rank_candidates -> build_context -> generate_answer -> END
                  |                                                    |
                  +----------------------- END <-----------------------+  (on failure)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from langgraph.graph import END, StateGraph

from movie_rag.observability import get_tracer
from movie_rag.pipeline.nodes import (
    create_context_node,
    create_embed_node,
    create_generate_node,
    create_rank_node,
)
from movie_rag.pipeline.state import PipelineStage, PipelineState

if TYPE_CHECKING:
    from movie_rag.config import PipelineConfig
    from movie_rag.core import Corpus, Embedder, Generator
    from movie_rag.observability import TracerProtocol


def route_after_stage(state: PipelineState) -> str:
    """Stop the graph as soon as a stage has failed."""
    return "failed" if state["stage"] == PipelineStage.FAILED else "continue"


def build_pipeline_graph(
    config: PipelineConfig,
    embedder: Embedder,
    corpus: Corpus,
    generator: Generator,
    tracer: TracerProtocol | None = None,
):
    """
    Build the RAG workflow with injected dependencies.

    Args:
        config: Pipeline settings (timeouts, scoring, context caps)
        embedder: Embedder for the question
        corpus: Corpus read once per invocation
        generator: Answer generator
        tracer: Optional tracer (global tracer if not provided)

    Returns:
        Compiled StateGraph ready for invocation
    """
    tracer = tracer or get_tracer()
    workflow = StateGraph(PipelineState)

    workflow.add_node(
        "embed_question",
        create_embed_node(embedder, tracer, timeout=config.embed_timeout_s),
    )
    workflow.add_node(
        "rank_candidates",
        create_rank_node(
            corpus, config.scoring, tracer, max_workers=config.scoring_workers
        ),
    )
    workflow.add_node(
        "build_context",
        create_context_node(
            max_items=config.max_context_items,
            max_field_chars=config.max_field_chars,
            tracer=tracer,
        ),
    )
    workflow.add_node(
        "generate_answer",
        create_generate_node(generator, tracer, timeout=config.generate_timeout_s),
    )

    workflow.set_entry_point("embed_question")
    workflow.add_conditional_edges(
        "embed_question",
        route_after_stage,
        {"continue": "rank_candidates", "failed": END},
    )
    workflow.add_edge("rank_candidates", "build_context")
    workflow.add_edge("build_context", "generate_answer")
    workflow.add_edge("generate_answer", END)

    return workflow.compile()
