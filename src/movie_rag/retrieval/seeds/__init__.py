"""
Seed data for the retrieval system.

This package contains a built-in movie set so the pipeline can run
without a corpus file. Separating data from infrastructure enables:
- Different datasets for different environments
- Easy testing with controlled data
"""

from movie_rag.retrieval.seeds.movies import get_movie_documents, seed_corpus

__all__ = ["get_movie_documents", "seed_corpus"]
