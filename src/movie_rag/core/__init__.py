"""
Core module - shared protocols, result types and errors.

This module provides the foundational contracts that enable:
- Dependency injection throughout the codebase
- Easy testing with mock implementations
- Clear separation of concerns

USAGE:
------
from movie_rag.core import Embedder, Generator, Corpus

class MyEmbedder:
    '''Implements Embedder protocol.'''
    ...
"""

from movie_rag.core.errors import (
    PipelineError,
    InvalidArgument,
    DimensionMismatch,
    EmbeddingFailure,
    GenerationFailure,
    Timeout,
    TRANSPORT_ERRORS,
    failure_kind,
)
from movie_rag.core.protocols import (
    # Protocols
    Embedder,
    Corpus,
    Generator,
    # Data classes
    ScoredCandidate,
    ContextBlock,
)

__all__ = [
    # Errors
    "PipelineError",
    "InvalidArgument",
    "DimensionMismatch",
    "EmbeddingFailure",
    "GenerationFailure",
    "Timeout",
    "TRANSPORT_ERRORS",
    "failure_kind",
    # Protocols
    "Embedder",
    "Corpus",
    "Generator",
    # Data classes
    "ScoredCandidate",
    "ContextBlock",
]
