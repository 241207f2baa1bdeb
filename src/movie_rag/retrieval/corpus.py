"""
Corpus implementations following the same pattern as embeddings/.

Pattern: Protocol -> Implementations -> Factory

This module contains:
1. InMemoryCorpus - documents held in a list (testing/seed data)
2. JsonFileCorpus - movies.json array on disk
3. get_corpus() - Factory function

The pipeline only calls all_documents(). Each call returns a fresh list,
so one pipeline invocation works on one snapshot even if the corpus is
reloaded between invocations.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from pydantic import ValidationError

from movie_rag.core import InvalidArgument
from movie_rag.retrieval.document import Document

if TYPE_CHECKING:
    from movie_rag.core import Embedder

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# IN-MEMORY CORPUS (Testing/Development)
# ---------------------------------------------------------------------------


class InMemoryCorpus:
    """Corpus backed by a list, keeping insertion order."""

    def __init__(self, documents: Iterable[Document] | None = None):
        self._documents: dict[str, Document] = {}
        for doc in documents or []:
            self.add(doc)

    def add(self, doc: Document) -> None:
        """Insert or replace a document (replacement keeps its position)."""
        self._documents[doc.id] = doc

    def all_documents(self) -> list[Document]:
        return list(self._documents.values())

    def __len__(self) -> int:
        return len(self._documents)


# ---------------------------------------------------------------------------
# JSON FILE CORPUS
# ---------------------------------------------------------------------------


def load_documents(path: str | Path) -> list[Document]:
    """
    Read a JSON array of movie records.

    Raises:
        FileNotFoundError: if the file does not exist
        InvalidArgument: if the file is not a JSON array of valid records
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidArgument(f"{path} is not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise InvalidArgument(f"{path} must contain a JSON array of movies")

    documents = []
    for index, item in enumerate(raw):
        try:
            documents.append(Document.from_dict(item))
        except ValidationError as e:
            raise InvalidArgument(f"{path}: movie #{index} is invalid: {e}") from e

    logger.debug(f"Loaded {len(documents)} movies from {path}")
    return documents


def save_documents(path: str | Path, documents: Iterable[Document]) -> None:
    """Write documents (including vectors) as a JSON array."""
    path = Path(path)
    payload = [
        doc.to_record().model_dump(exclude_none=True) for doc in documents
    ]
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info(f"Wrote {len(payload)} movies to {path}")


class JsonFileCorpus:
    """
    Corpus read from a movies.json file.

    The file is re-read on every all_documents() call, so external jobs
    (loading, vectorizing) can update it between questions.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def all_documents(self) -> list[Document]:
        return load_documents(self.path)

    def save(self, documents: Iterable[Document]) -> None:
        save_documents(self.path, documents)


# ---------------------------------------------------------------------------
# FACTORY FUNCTION
# ---------------------------------------------------------------------------


def get_corpus(
    data_path: str | Path | None = None,
    embeddings: Embedder | None = None,
) -> JsonFileCorpus | InMemoryCorpus:
    """
    Factory function to get the appropriate corpus.

    Args:
        data_path: movies.json path; when None the built-in seed movies are used
        embeddings: Embedder used to vectorize seed movies (mock if not provided)

    Returns:
        Corpus implementation

    Raises:
        InvalidArgument: if data_path does not point to a file
    """
    if data_path is not None:
        if not Path(data_path).is_file():
            raise InvalidArgument(f"Movie data file not found: {data_path}")
        return JsonFileCorpus(data_path)

    from movie_rag.retrieval.seeds import seed_corpus

    if embeddings is None:
        from movie_rag.embeddings import get_embedding_provider

        embeddings = get_embedding_provider(use_mock=True)

    return seed_corpus(embeddings)
