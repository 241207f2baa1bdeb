"""
Pipeline module - the RAG orchestrator.

- pipeline/state.py - PipelineState TypedDict and PipelineStage
- pipeline/nodes/ - One node per stage
- pipeline/graph.py - Graph construction with DI
- pipeline/runner.py - RAGPipeline (public API) and create_pipeline()
- pipeline/context_builder.py / prompts.py - Pure formatting helpers

WHY LANGGRAPH:
--------------
1. STATE MACHINE: The stages and the failure exit are explicit edges
2. TESTABILITY: Each node can be tested in isolation
3. OBSERVABILITY: Each node is traceable
"""

from movie_rag.pipeline.state import PipelineStage, PipelineState, create_initial_state

from movie_rag.pipeline.context_builder import (
    build_context,
    cap_candidates,
    cap_fields,
    format_excerpt,
)
from movie_rag.pipeline.prompts import SYSTEM_PROMPT, build_user_prompt

from movie_rag.pipeline.graph import build_pipeline_graph

from movie_rag.pipeline.runner import (
    PipelineAnswer,
    PipelineFailure,
    RAGPipeline,
    create_pipeline,
)
from movie_rag.pipeline.health import ModelCheck, validate_models

__all__ = [
    # State
    "PipelineStage",
    "PipelineState",
    "create_initial_state",
    # Context
    "build_context",
    "cap_candidates",
    "cap_fields",
    "format_excerpt",
    # Prompts
    "SYSTEM_PROMPT",
    "build_user_prompt",
    # Graph
    "build_pipeline_graph",
    # Runner (public API)
    "PipelineAnswer",
    "PipelineFailure",
    "RAGPipeline",
    "create_pipeline",
    # Health
    "ModelCheck",
    "validate_models",
]
