"""
Retrieval module - documents, similarity scoring and ranking for RAG.

This module provides:
- Document: The movie document model
- cosine_similarity / ScoringPolicy / score_document: Similarity engine
- rank(): Top-K ranker
- InMemoryCorpus / JsonFileCorpus / get_corpus(): Corpus snapshots
- vectorize_documents(): Offline vectorization job

ARCHITECTURE:
-------------
1. Protocol defines the contract (Corpus, in core.protocols)
2. Multiple implementations (JsonFileCorpus, InMemoryCorpus)
3. Factory function for instantiation
4. Seed data for fast unit tests and demos
"""

from movie_rag.retrieval.document import Document, Review

from movie_rag.retrieval.similarity import (
    SCORING_STRATEGIES,
    DEFAULT_PRIMARY_FIELD,
    ScoringPolicy,
    cosine_similarity,
    field_scores,
    score_document,
)
from movie_rag.retrieval.ranker import rank, validate_top_k

from movie_rag.retrieval.corpus import (
    InMemoryCorpus,
    JsonFileCorpus,
    load_documents,
    save_documents,
    get_corpus,
)
from movie_rag.retrieval.vectorize import FIELD_TEXT, movie_text, vectorize_documents

from movie_rag.retrieval.seeds import get_movie_documents, seed_corpus

__all__ = [
    # Document
    "Document",
    "Review",
    # Similarity
    "SCORING_STRATEGIES",
    "DEFAULT_PRIMARY_FIELD",
    "ScoringPolicy",
    "cosine_similarity",
    "field_scores",
    "score_document",
    # Ranking
    "rank",
    "validate_top_k",
    # Corpus
    "InMemoryCorpus",
    "JsonFileCorpus",
    "load_documents",
    "save_documents",
    "get_corpus",
    # Vectorization
    "FIELD_TEXT",
    "movie_text",
    "vectorize_documents",
    # Seeds
    "get_movie_documents",
    "seed_corpus",
]
