"""
Context builder - turns ranked candidates into the model's movie data.

Each candidate becomes one self-contained excerpt; order is preserved from
the ranking (most relevant first). Text fields are rendered as-is. When
upstream text may be unbounded, the caller applies cap_candidates() first;
the builder itself never truncates.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from movie_rag.core import ContextBlock, InvalidArgument, ScoredCandidate
from movie_rag.retrieval.document import Document


def format_excerpt(doc: Document) -> str:
    """Render one movie with the attributes a model needs to ground an answer."""
    title = f"{doc.title} ({doc.year})" if doc.year is not None else doc.title
    actors = ", ".join(doc.actors) if doc.actors else "Unknown"
    reviews = "; ".join(f"{r.reviewer}: {r.review}" for r in doc.reviews) or "None"
    return (
        f"Title: {title}\n"
        f"Genre: {doc.genre or 'Unknown'}\n"
        f"Actors: {actors}\n"
        f"Description: {doc.description}\n"
        f"Reviews: {reviews}"
    )


def build_context(
    candidates: Sequence[ScoredCandidate],
    max_items: int | None = None,
) -> ContextBlock:
    """
    Build the context block from ranked candidates.

    Args:
        candidates: Ranked candidates, most relevant first
        max_items: Maximum number of excerpts (default: all candidates)

    Returns:
        ContextBlock; empty when there are no candidates
    """
    if max_items is not None and max_items < 0:
        raise InvalidArgument(f"max_items must not be negative, got {max_items}")

    selected = list(candidates) if max_items is None else list(candidates)[:max_items]
    return ContextBlock(
        excerpts=[format_excerpt(c.document) for c in selected],
        document_ids=[c.document.id for c in selected],
    )


# ---------------------------------------------------------------------------
# EXPLICIT FIELD CAPS
# ---------------------------------------------------------------------------


def _cap(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip() + "..."


def cap_fields(doc: Document, max_chars: int) -> Document:
    """Copy of the document with description and review texts capped."""
    if max_chars <= 0:
        raise InvalidArgument(f"max_chars must be positive, got {max_chars}")
    return replace(
        doc,
        description=_cap(doc.description, max_chars),
        reviews=[replace(r, review=_cap(r.review, max_chars)) for r in doc.reviews],
    )


def cap_candidates(
    candidates: Sequence[ScoredCandidate], max_chars: int
) -> list[ScoredCandidate]:
    """Apply cap_fields to every candidate's document, keeping scores."""
    return [replace(c, document=cap_fields(c.document, max_chars)) for c in candidates]
