"""
Generation node - asks the model to answer from the context block.

The generator is called exactly once per invocation, also when the
context is empty.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

from movie_rag.core import GenerationFailure, failure_kind
from movie_rag.observability import attributes as attrs
from movie_rag.observability import get_config as get_tracing_config
from movie_rag.pipeline.prompts import SYSTEM_PROMPT, build_user_prompt
from movie_rag.pipeline.state import PipelineStage, failed

if TYPE_CHECKING:
    from movie_rag.core import Generator
    from movie_rag.observability import TracerProtocol
    from movie_rag.pipeline.state import PipelineState

logger = logging.getLogger(__name__)


def create_generate_node(
    generator: Generator,
    tracer: TracerProtocol,
    timeout: float | None = None,
    system_prompt: str = SYSTEM_PROMPT,
) -> Callable[[PipelineState], dict]:
    """
    Factory that creates the generation node with an injected generator.

    Args:
        generator: Generator implementation
        tracer: Tracer for the stage span
        timeout: Seconds the generator may take before failing with Timeout
        system_prompt: Instruction sent as the system message
    """

    def generate_answer(state: PipelineState) -> dict:
        """
        Reads from state:
        - question, context

        Writes to state:
        - answer, stage, stages, latency_ms
        - or failure_kind/failure_message on error
        """
        start = time.time()
        stage = PipelineStage.GENERATING
        user_prompt = build_user_prompt(state["question"], state["context"])
        capture = get_tracing_config().capture_llm_content

        with tracer.start_span("rag.generating", attributes={attrs.RAG_STAGE: stage.value}) as span:
            span.set_attribute(attrs.RAG_CONTEXT_ITEMS, len(state["context"]))
            if capture:
                span.set_attribute(attrs.GEN_AI_PROMPT, user_prompt)
            try:
                answer = generator.complete(system_prompt, user_prompt, timeout=timeout)
            except Exception as e:
                kind = failure_kind(e, GenerationFailure.kind)
                logger.warning(f"Generation failed ({kind}): {e}")
                span.record_exception(e)
                span.set_status("error", str(e))
                for key, value in attrs.failure_attributes(stage.value, kind).items():
                    span.set_attribute(key, value)
                return failed(stage, kind, str(e) or type(e).__name__)

            if capture:
                span.set_attribute(attrs.GEN_AI_COMPLETION, answer)

        latency = (time.time() - start) * 1000
        logger.debug(f"Generated answer in {latency:.0f}ms")

        return {
            "answer": answer,
            "stage": PipelineStage.DONE,
            "stages": [stage, PipelineStage.DONE],
            "latency_ms": {stage.value: latency},
        }

    return generate_answer
