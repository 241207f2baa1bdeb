"""
Embeddings Module - Single Responsibility: Generate text embeddings.

It has ONE job: convert text to vector embeddings.

- This module ONLY handles embedding generation
- No corpus logic, no ranking
- Easy to swap for different embedding providers

Transport errors from the OpenAI SDK are translated into the pipeline's
own error types (Timeout, EmbeddingFailure) so callers never need to
import openai to handle them.
"""

from __future__ import annotations

import hashlib
import logging
import os
import re
from typing import TYPE_CHECKING

import numpy as np
from openai import APITimeoutError, AzureOpenAI, OpenAI, OpenAIError

from movie_rag.core import EmbeddingFailure, Embedder, Timeout

if TYPE_CHECKING:
    from movie_rag.config import ModelConfig

logger = logging.getLogger(__name__)


def create_openai_client(config: ModelConfig) -> OpenAI:
    """OpenAI client for a model config: Azure when an endpoint is set."""
    if config.is_azure:
        return AzureOpenAI(
            api_key=config.api_key,
            azure_endpoint=config.endpoint,
            api_version=config.api_version,
        )
    return OpenAI(api_key=config.api_key or os.environ.get("OPENAI_API_KEY"))


class OpenAIEmbeddings:
    """
    OpenAI-based embedding provider.

    Uses text-embedding-ada-002 by default (1536 dimensions).
    """

    def __init__(
        self,
        model: str = "text-embedding-ada-002",
        api_key: str | None = None,
        client: OpenAI | None = None,
    ):
        self.model = model
        self._client = client or OpenAI(api_key=api_key or os.environ.get("OPENAI_API_KEY"))

    @classmethod
    def from_config(cls, config: ModelConfig) -> OpenAIEmbeddings:
        return cls(model=config.deployment, client=create_openai_client(config))

    @property
    def dimensions(self) -> int:
        """Return embedding dimensions for the model."""
        model_dims = {
            "text-embedding-3-small": 1536,
            "text-embedding-3-large": 3072,
            "text-embedding-ada-002": 1536,
        }
        return model_dims.get(self.model, 1536)

    def _create(self, payload: str | list[str], timeout: float | None):
        client = self._client
        if timeout is not None:
            # One attempt per call, so the timeout bounds the whole request
            client = client.with_options(timeout=timeout, max_retries=0)
        try:
            return client.embeddings.create(input=payload, model=self.model)
        except APITimeoutError as e:
            logger.warning(f"Embedding request timed out after {timeout}s")
            raise Timeout(f"Embedding request exceeded {timeout}s") from e
        except OpenAIError as e:
            logger.warning(f"Embedding request failed: {e}")
            raise EmbeddingFailure(f"Embedding model {self.model!r} failed: {e}") from e

    def embed(self, text: str, timeout: float | None = None) -> np.ndarray:
        """Generate embedding for a single text."""
        response = self._create(text, timeout)
        if not response.data:
            raise EmbeddingFailure(f"Embedding model {self.model!r} returned no data")
        return np.array(response.data[0].embedding, dtype=np.float32)

    def embed_batch(
        self, texts: list[str], timeout: float | None = None
    ) -> list[np.ndarray]:
        """Generate embeddings for multiple texts efficiently."""
        if not texts:
            return []

        response = self._create(texts, timeout)
        if len(response.data) != len(texts):
            raise EmbeddingFailure(
                f"Embedding model returned {len(response.data)} vectors "
                f"for {len(texts)} texts"
            )
        # The API may return items out of order; index restores input order
        items = sorted(response.data, key=lambda item: item.index)
        return [np.array(item.embedding, dtype=np.float32) for item in items]


class MockEmbeddings:
    """
    Mock embedding provider for testing without API calls.

    Generates deterministic pseudo-embeddings by hashing each word into a
    bucket (the "hashing trick"), so texts sharing words get similar vectors.
    NOT for production use - only for testing/development.
    """

    def __init__(self, dimensions: int = 1536):
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def embed(self, text: str, timeout: float | None = None) -> np.ndarray:
        """Generate deterministic pseudo-embedding from word hashes."""
        vector = np.zeros(self._dimensions, dtype=np.float32)
        for word in re.findall(r"[a-z0-9]+", text.lower()):
            digest = hashlib.sha256(word.encode()).digest()
            bucket = int.from_bytes(digest[:4], "big") % self._dimensions
            vector[bucket] += 1.0 if digest[4] % 2 == 0 else -1.0
        return vector

    def embed_batch(
        self, texts: list[str], timeout: float | None = None
    ) -> list[np.ndarray]:
        """Generate embeddings for multiple texts."""
        return [self.embed(text) for text in texts]


def get_embedding_provider(
    use_mock: bool = False,
    config: ModelConfig | None = None,
) -> Embedder:
    """
    Factory function to get the appropriate embedding provider.

    Args:
        use_mock: If True, return MockEmbeddings (for testing)
        config: Model settings; OpenAI defaults from the environment if omitted
    """
    if use_mock:
        return MockEmbeddings()
    if config is not None:
        return OpenAIEmbeddings.from_config(config)
    return OpenAIEmbeddings()
