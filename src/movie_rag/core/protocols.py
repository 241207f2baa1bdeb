"""
Core protocols defining contracts for the entire system.

All infrastructure components implement these protocols,
enabling dependency injection and easy testing.

PATTERN:
- Protocol defines the contract
- Multiple implementations possible (OpenAI-backed, mock)
- Factory functions for instantiation
- Test doubles for fast unit tests

The pipeline only ever talks to these three collaborators:
Embedder (question -> vector), Corpus (read-only documents) and
Generator (prompt -> answer text).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from movie_rag.retrieval.document import Document


# ---------------------------------------------------------------------------
# EMBEDDER PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class Embedder(Protocol):
    """
    Contract for embedding generation.

    Implementations:
    - OpenAIEmbeddings (production, OpenAI or Azure OpenAI)
    - MockEmbeddings (testing)

    Implementations raise EmbeddingFailure on transport/model errors
    and Timeout when the call exceeds `timeout` seconds.
    """

    def embed(self, text: str, timeout: float | None = None) -> np.ndarray:
        """Generate embedding for a single text."""
        ...

    def embed_batch(
        self, texts: list[str], timeout: float | None = None
    ) -> list[np.ndarray]:
        """Generate embeddings for multiple texts."""
        ...


# ---------------------------------------------------------------------------
# CORPUS PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class Corpus(Protocol):
    """
    Read-only snapshot accessor for the documents available at query time.

    Implementations:
    - InMemoryCorpus (testing/seed data)
    - JsonFileCorpus (movies.json on disk)
    """

    def all_documents(self) -> Sequence[Document]:
        """Return every document in corpus iteration order."""
        ...


# ---------------------------------------------------------------------------
# GENERATOR PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class Generator(Protocol):
    """
    Contract for answer generation.

    Implementations:
    - OpenAIGenerator (production)
    - MockGenerator (testing)

    Implementations raise GenerationFailure on transport/model errors
    and Timeout when the call exceeds `timeout` seconds.
    """

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        timeout: float | None = None,
    ) -> str:
        """Produce an answer for the given prompts."""
        ...


# ---------------------------------------------------------------------------
# RETRIEVAL RESULTS
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScoredCandidate:
    """A document with its composite relevance score (higher is better)."""

    document: Document
    score: float
    field_scores: dict[str, float] = field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.document.id

    def to_dict(self) -> dict:
        """Convert to dictionary for display/serialization."""
        return {
            "id": self.document.id,
            "title": self.document.title,
            "score": self.score,
            "field_scores": dict(self.field_scores),
        }


@dataclass
class ContextBlock:
    """
    Ordered, bounded sequence of formatted document excerpts.

    An empty block is valid: it means retrieval found nothing.
    """

    excerpts: list[str] = field(default_factory=list)
    document_ids: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.excerpts

    @property
    def text(self) -> str:
        return "\n\n".join(self.excerpts)

    def __len__(self) -> int:
        return len(self.excerpts)
