"""
Pipeline state definition - the data flowing through the LangGraph.

Separated because the state schema changes for different reasons than
node logic or graph structure.

The stage machine is:
    EMBEDDING -> RANKING -> CONTEXT_BUILDING -> GENERATING -> DONE
with FAILED reachable from any stage. `stage` holds the current stage and
`stages` accumulates the trail of stages visited in this invocation.
"""

import operator
from enum import Enum
from typing import Annotated, TypedDict

import numpy as np

from movie_rag.core import ContextBlock, ScoredCandidate


class PipelineStage(str, Enum):
    EMBEDDING = "embedding"
    RANKING = "ranking"
    CONTEXT_BUILDING = "context_building"
    GENERATING = "generating"
    DONE = "done"
    FAILED = "failed"


def merge_latencies(left: dict[str, float], right: dict[str, float]) -> dict[str, float]:
    return {**left, **right}


class PipelineState(TypedDict):
    """
    State that flows through the LangGraph.

    Input fields are set at invocation time.
    Intermediate fields are populated by nodes.
    Output fields contain the final result or the failure.
    """

    # -------------------------------------------------------------------------
    # INPUT (set at invocation)
    # -------------------------------------------------------------------------
    question: str
    top_k: int

    # -------------------------------------------------------------------------
    # INTERMEDIATE (populated by nodes)
    # -------------------------------------------------------------------------
    query_vector: np.ndarray | None
    candidates: list[ScoredCandidate]
    context: ContextBlock | None

    # -------------------------------------------------------------------------
    # OUTPUT
    # -------------------------------------------------------------------------
    answer: str | None
    failure_kind: str | None
    failure_message: str | None

    # -------------------------------------------------------------------------
    # STAGE TRACKING / METRICS
    # -------------------------------------------------------------------------
    stage: PipelineStage
    stages: Annotated[list[PipelineStage], operator.add]
    latency_ms: Annotated[dict[str, float], merge_latencies]


def create_initial_state(question: str, top_k: int) -> PipelineState:
    """Create an initial state for graph invocation."""
    return PipelineState(
        question=question,
        top_k=top_k,
        query_vector=None,
        candidates=[],
        context=None,
        answer=None,
        failure_kind=None,
        failure_message=None,
        stage=PipelineStage.EMBEDDING,
        stages=[],
        latency_ms={},
    )


def failed(stage: PipelineStage, kind: str, message: str) -> dict:
    """State update that moves the pipeline to FAILED."""
    return {
        "stage": PipelineStage.FAILED,
        "stages": [stage, PipelineStage.FAILED],
        "failure_kind": kind,
        "failure_message": message,
    }
