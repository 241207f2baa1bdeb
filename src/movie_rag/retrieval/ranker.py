"""
Ranker - orders corpus documents by similarity and keeps the top K.

Scoring is embarrassingly parallel across documents. With max_workers > 1
the documents are scored on a thread pool; results come back in corpus
order (Executor.map preserves input order) so the stable sort below gives
exactly the same output as the sequential path.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

import numpy as np

from movie_rag.core import InvalidArgument, ScoredCandidate
from movie_rag.retrieval.document import Document
from movie_rag.retrieval.similarity import ScoringPolicy, score_document

logger = logging.getLogger(__name__)


def validate_top_k(top_k: int) -> int:
    """Reject top_k values that are not positive integers."""
    if isinstance(top_k, bool) or not isinstance(top_k, int):
        raise InvalidArgument(f"top_k must be an integer, got {top_k!r}")
    if top_k <= 0:
        raise InvalidArgument(f"top_k must be positive, got {top_k}")
    return top_k


def rank(
    query_vector: np.ndarray,
    documents: Iterable[Document],
    top_k: int,
    policy: ScoringPolicy | None = None,
    max_workers: int = 1,
) -> list[ScoredCandidate]:
    """
    Rank documents by composite score, highest first, truncated to top_k.

    Args:
        query_vector: Embedding of the question
        documents: Corpus snapshot, in corpus iteration order
        top_k: Maximum number of candidates to return (must be > 0)
        policy: Scoring policy (primary field only by default)
        max_workers: Threads used for scoring; 1 scores inline

    Returns:
        Up to top_k candidates. Empty when no document is eligible.
    """
    validate_top_k(top_k)
    policy = policy or ScoringPolicy()
    docs = list(documents)

    if max_workers > 1 and len(docs) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            scored = list(
                pool.map(lambda doc: score_document(query_vector, doc, policy), docs)
            )
    else:
        scored = [score_document(query_vector, doc, policy) for doc in docs]

    eligible = [candidate for candidate in scored if candidate is not None]
    logger.debug(
        f"Scored {len(eligible)} eligible of {len(docs)} documents "
        f"(strategy={policy.strategy})"
    )

    # sorted() is stable: equal scores keep corpus order
    ranked = sorted(eligible, key=lambda candidate: candidate.score, reverse=True)
    return ranked[:top_k]
