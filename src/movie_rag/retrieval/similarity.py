"""
Similarity engine - cosine similarity and per-document scoring.

A document is scored against one designated field (the "primary" policy,
default) or, when configured, against every field vector it carries:

- max:          best single field wins
- weighted-sum: sum of weight(field) * score(field); unweighted fields add 0

Documents without a usable vector are INELIGIBLE (score_document returns
None). They are dropped from ranking rather than scored as 0, so documents
with fewer embedded fields are not biased downwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Sequence

import numpy as np

from movie_rag.core import DimensionMismatch, InvalidArgument, ScoredCandidate
from movie_rag.retrieval.document import Document

ScoringStrategy = Literal["primary", "max", "weighted-sum"]

SCORING_STRATEGIES: tuple[str, ...] = ("primary", "max", "weighted-sum")
DEFAULT_PRIMARY_FIELD = "embedding"


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """
    Cosine similarity between two equal-length vectors, in [-1, 1].

    Raises DimensionMismatch when the lengths differ.
    Similarity to an all-zero vector is defined as exactly 0.0.
    """
    va = np.asarray(a, dtype=np.float64).ravel()
    vb = np.asarray(b, dtype=np.float64).ravel()

    if va.shape[0] != vb.shape[0]:
        raise DimensionMismatch(va.shape[0], vb.shape[0])

    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    score = float(np.dot(va, vb) / (norm_a * norm_b))
    # Rounding can push |score| a hair past 1
    return max(-1.0, min(1.0, score))


@dataclass
class ScoringPolicy:
    """How a document's composite score is derived from its field vectors."""

    strategy: ScoringStrategy = "primary"
    primary_field: str = DEFAULT_PRIMARY_FIELD
    weights: dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.strategy not in SCORING_STRATEGIES:
            raise InvalidArgument(
                f"Unknown scoring strategy {self.strategy!r}; "
                f"expected one of {', '.join(SCORING_STRATEGIES)}"
            )
        if self.strategy == "weighted-sum" and not self.weights:
            raise InvalidArgument("weighted-sum scoring requires field weights")
        if not self.primary_field:
            raise InvalidArgument("primary_field must be a non-empty field name")

    @property
    def is_multi_field(self) -> bool:
        return self.strategy != "primary"


def field_scores(query_vector: np.ndarray, document: Document) -> dict[str, float]:
    """Cosine similarity of the query against every vector on the document."""
    return {
        name: cosine_similarity(query_vector, vector)
        for name, vector in document.vectors.items()
    }


def score_document(
    query_vector: np.ndarray,
    document: Document,
    policy: ScoringPolicy | None = None,
) -> ScoredCandidate | None:
    """
    Score one document against the query vector.

    Returns None when the document is not eligible under the policy.
    """
    policy = policy or ScoringPolicy()

    if not document.vectors:
        return None

    if policy.strategy == "primary":
        vector = document.vector(policy.primary_field)
        if vector is None:
            return None
        score = cosine_similarity(query_vector, vector)
        return ScoredCandidate(
            document=document,
            score=score,
            field_scores={policy.primary_field: score},
        )

    scores = field_scores(query_vector, document)

    if policy.strategy == "max":
        composite = max(scores.values())
    else:
        composite = sum(
            policy.weights.get(name, 0.0) * score for name, score in scores.items()
        )

    return ScoredCandidate(document=document, score=composite, field_scores=scores)
