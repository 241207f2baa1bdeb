"""
Document model for the retrieval system.

Single responsibility: define the structure of movie documents
as the pipeline reads them.

Vectors are held in an explicit mapping from field name to vector.
A field that was never vectorized is simply absent from the mapping;
it is never represented as a zero vector.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from movie_rag.schemas.movie import MovieRecord, ReviewRecord


@dataclass
class Review:
    reviewer: str
    rating: float
    review: str


@dataclass
class Document:
    """
    A movie with zero or more field embeddings.

    This is the internal representation used by corpora and the ranker.
    For files on disk, we convert from/to MovieRecord
    (defined in schemas.movie).
    """

    id: str
    title: str
    description: str = ""
    genre: str = ""
    year: int | None = None
    actors: list[str] = field(default_factory=list)
    reviews: list[Review] = field(default_factory=list)
    vectors: dict[str, np.ndarray] = field(default_factory=dict)

    @property
    def is_vectorized(self) -> bool:
        return bool(self.vectors)

    def vector(self, name: str) -> np.ndarray | None:
        """Return the vector for a field, or None if absent."""
        return self.vectors.get(name)

    @classmethod
    def from_record(cls, record: MovieRecord) -> Document:
        """Build a Document from a validated on-disk record."""
        return cls(
            id=record.id,
            title=record.title,
            description=record.description,
            genre=record.genre,
            year=record.year,
            actors=list(record.actors),
            reviews=[
                Review(reviewer=r.reviewer, rating=r.rating, review=r.review)
                for r in record.reviews
            ],
            vectors={
                name: np.asarray(values, dtype=np.float32)
                for name, values in record.vectors().items()
            },
        )

    @classmethod
    def from_dict(cls, data: dict) -> Document:
        """Validate a raw dict (e.g. one JSON array item) and convert it."""
        return cls.from_record(MovieRecord.model_validate(data))

    def to_record(self) -> MovieRecord:
        """Convert back to the on-disk record shape."""
        payload = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "genre": self.genre,
            "year": self.year,
            "actors": list(self.actors),
            "reviews": [
                ReviewRecord(reviewer=r.reviewer, rating=r.rating, review=r.review)
                for r in self.reviews
            ],
        }
        for name, vector in self.vectors.items():
            payload[name] = [float(x) for x in vector]
        return MovieRecord(**payload)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (vectors excluded)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "genre": self.genre,
            "year": self.year,
            "actors": list(self.actors),
            "vector_fields": sorted(self.vectors),
        }
