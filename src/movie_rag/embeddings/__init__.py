"""
Embeddings module - text embedding generation.

1. Protocol (Embedder, in core.protocols) defines the interface
2. Production implementation (OpenAIEmbeddings)
3. Test double (MockEmbeddings) for fast testing
4. Factory function (get_embedding_provider)
"""

from movie_rag.embeddings.openai_embeddings import (
    OpenAIEmbeddings,
    MockEmbeddings,
    create_openai_client,
    get_embedding_provider,
)

__all__ = [
    "OpenAIEmbeddings",
    "MockEmbeddings",
    "create_openai_client",
    "get_embedding_provider",
]
