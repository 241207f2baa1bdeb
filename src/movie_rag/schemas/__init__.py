"""Pydantic schemas for corpus files."""

from movie_rag.schemas.movie import VECTOR_FIELDS, MovieRecord, ReviewRecord

__all__ = ["VECTOR_FIELDS", "MovieRecord", "ReviewRecord"]
