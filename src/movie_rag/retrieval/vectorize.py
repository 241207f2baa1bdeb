"""
Vectorization job - fills in document embeddings.

This runs OUTSIDE the query pipeline: it prepares a corpus ahead of time.
The pipeline never mutates documents, so this module returns new Document
objects instead of updating the ones it is given.

Batches keep the number of embedding requests small; documents that
already carry a combined `embedding` are skipped.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Callable, Sequence

from movie_rag.core import InvalidArgument
from movie_rag.retrieval.document import Document
from movie_rag.retrieval.similarity import DEFAULT_PRIMARY_FIELD

if TYPE_CHECKING:
    from movie_rag.core import Embedder

logger = logging.getLogger(__name__)


def movie_text(doc: Document) -> str:
    """Combined text used for the whole-document embedding."""
    actors = ", ".join(doc.actors) if doc.actors else "Unknown"
    parts = [
        doc.title,
        doc.description,
        doc.genre,
        f"Year: {doc.year}" if doc.year is not None else "",
        f"Actors: {actors}",
        " ".join(r.review for r in doc.reviews),
    ]
    return " ".join(part for part in parts if part)


# Text extractors for per-field vectors
FIELD_TEXT: dict[str, Callable[[Document], str]] = {
    "titleVector": lambda doc: doc.title,
    "descriptionVector": lambda doc: doc.description,
    "genreVector": lambda doc: doc.genre,
    "yearVector": lambda doc: str(doc.year) if doc.year is not None else "",
    "actorsVector": lambda doc: ", ".join(doc.actors),
    "reviewsVector": lambda doc: " ".join(r.review for r in doc.reviews),
}


def vectorize_documents(
    documents: Sequence[Document],
    embedder: Embedder,
    batch_size: int = 5,
    fields: Sequence[str] | None = None,
    timeout: float | None = None,
) -> list[Document]:
    """
    Embed documents that are missing vectors.

    Args:
        documents: Documents to process (not modified)
        embedder: Embedding provider
        batch_size: Texts per embedding request
        fields: Per-field vectors to compute in addition to the combined
            embedding (names from FIELD_TEXT). Existing vectors are kept.
        timeout: Per-request timeout passed to the embedder

    Returns:
        New documents, in the same order, with vectors filled in
    """
    if batch_size <= 0:
        raise InvalidArgument(f"batch_size must be positive, got {batch_size}")

    fields = list(fields or [])
    unknown = [name for name in fields if name not in FIELD_TEXT]
    if unknown:
        raise InvalidArgument(f"Unknown vector fields: {', '.join(unknown)}")

    # (document index, field name, text) for every missing vector
    pending: list[tuple[int, str, str]] = []
    for i, doc in enumerate(documents):
        if doc.vector(DEFAULT_PRIMARY_FIELD) is None:
            pending.append((i, DEFAULT_PRIMARY_FIELD, movie_text(doc)))
        else:
            logger.debug(f"Movie {doc.title!r} already has embedding, skipping")
        for name in fields:
            text = FIELD_TEXT[name](doc)
            if doc.vector(name) is None and text:
                pending.append((i, name, text))

    new_vectors: list[dict] = [dict(doc.vectors) for doc in documents]

    for start in range(0, len(pending), batch_size):
        batch = pending[start:start + batch_size]
        vectors = embedder.embed_batch([text for _, _, text in batch], timeout=timeout)
        for (i, name, _), vector in zip(batch, vectors):
            new_vectors[i][name] = vector
        logger.info(
            f"Vectorized {min(start + batch_size, len(pending))}/{len(pending)} fields"
        )

    return [
        replace(doc, vectors=vectors) for doc, vectors in zip(documents, new_vectors)
    ]
