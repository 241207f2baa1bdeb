"""
Model availability checks.

Sends one tiny request to each model and reports whether it answered.
Never raises: a failed check is reported, not thrown, so startup can
continue and show the user what is wrong.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from movie_rag.core import Embedder, Generator

logger = logging.getLogger(__name__)

VALIDATION_TIMEOUT_S = 10.0


@dataclass
class ModelCheck:
    name: str
    available: bool
    detail: str = ""


def check_embedder(embedder: Embedder, timeout: float = VALIDATION_TIMEOUT_S) -> ModelCheck:
    try:
        vector = embedder.embed("test validation", timeout=timeout)
    except Exception as e:
        logger.warning(f"Embedding model validation failed: {e}")
        return ModelCheck("embedding", False, f"{type(e).__name__}: {e}")
    if len(vector) == 0:
        return ModelCheck("embedding", False, "returned an empty vector")
    return ModelCheck("embedding", True, f"{len(vector)} dimensions")


def check_generator(generator: Generator, timeout: float = VALIDATION_TIMEOUT_S) -> ModelCheck:
    try:
        generator.complete("Reply with OK.", "test", timeout=timeout)
    except Exception as e:
        logger.warning(f"LLM validation failed: {e}")
        return ModelCheck("llm", False, f"{type(e).__name__}: {e}")
    return ModelCheck("llm", True, "responded")


def validate_models(
    embedder: Embedder,
    generator: Generator,
    timeout: float = VALIDATION_TIMEOUT_S,
) -> list[ModelCheck]:
    """Check both models; the result lists one ModelCheck per model."""
    return [check_embedder(embedder, timeout), check_generator(generator, timeout)]
