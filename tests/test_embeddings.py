"""
Unit Tests for Embedding Providers

OpenAI calls are replaced by a MagicMock client; no network access.
"""

import httpx
import numpy as np
import pytest
from unittest.mock import MagicMock, patch

from openai import APITimeoutError, OpenAI, OpenAIError

from movie_rag.config import ModelConfig
from movie_rag.core import EmbeddingFailure, Embedder, Timeout
from movie_rag.embeddings import (
    MockEmbeddings,
    OpenAIEmbeddings,
    get_embedding_provider,
)
from movie_rag.embeddings.openai_embeddings import create_openai_client
from movie_rag.retrieval.similarity import cosine_similarity


def embedding_response(*vectors, order=None):
    """Fake embeddings.create() response with indexed items."""
    items = [MagicMock(embedding=list(v), index=i) for i, v in enumerate(vectors)]
    if order is not None:
        items = [items[i] for i in order]
    return MagicMock(data=items)


@pytest.fixture
def client():
    mock = MagicMock()
    mock.with_options.return_value = mock
    return mock


# ---------------------------------------------------------------------------
# OPENAI EMBEDDINGS
# ---------------------------------------------------------------------------


class TestOpenAIEmbeddings:
    """Test OpenAIEmbeddings against a mocked client."""

    def test_embed_returns_float32_vector(self, client):
        client.embeddings.create.return_value = embedding_response([0.1, 0.2, 0.3])
        embeddings = OpenAIEmbeddings(model="text-embedding-3-small", client=client)

        vector = embeddings.embed("Star Wars")

        assert vector.dtype == np.float32
        np.testing.assert_allclose(vector, [0.1, 0.2, 0.3], rtol=1e-6)
        client.embeddings.create.assert_called_once_with(
            input="Star Wars", model="text-embedding-3-small"
        )

    def test_timeout_applied_per_request(self, client):
        client.embeddings.create.return_value = embedding_response([1.0])
        embeddings = OpenAIEmbeddings(client=client)

        embeddings.embed("q", timeout=2.5)

        client.with_options.assert_called_once_with(timeout=2.5, max_retries=0)

    def test_no_timeout_uses_client_as_is(self, client):
        client.embeddings.create.return_value = embedding_response([1.0])

        OpenAIEmbeddings(client=client).embed("q")

        client.with_options.assert_not_called()

    def test_api_timeout_becomes_timeout(self, client):
        request = httpx.Request("POST", "https://api.openai.com/v1/embeddings")
        client.embeddings.create.side_effect = APITimeoutError(request=request)

        with pytest.raises(Timeout):
            OpenAIEmbeddings(client=client).embed("q", timeout=1.0)

    def test_timed_call_makes_one_attempt(self):
        attempts = []

        def handler(request):
            attempts.append(request)
            raise httpx.ReadTimeout("read timed out", request=request)

        client = OpenAI(
            api_key="sk-test",
            http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        )

        with pytest.raises(Timeout):
            OpenAIEmbeddings(client=client).embed("hello", timeout=0.5)

        assert len(attempts) == 1

    def test_api_error_becomes_embedding_failure(self, client):
        client.embeddings.create.side_effect = OpenAIError("invalid api key")

        with pytest.raises(EmbeddingFailure) as exc_info:
            OpenAIEmbeddings(client=client).embed("q")

        assert "invalid api key" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OpenAIError)

    def test_empty_response_is_failure(self, client):
        client.embeddings.create.return_value = MagicMock(data=[])

        with pytest.raises(EmbeddingFailure):
            OpenAIEmbeddings(client=client).embed("q")

    def test_embed_batch_restores_input_order(self, client):
        client.embeddings.create.return_value = embedding_response(
            [1.0, 0.0], [0.0, 1.0], [0.5, 0.5], order=[2, 0, 1]
        )

        vectors = OpenAIEmbeddings(client=client).embed_batch(["a", "b", "c"])

        np.testing.assert_allclose(vectors[0], [1.0, 0.0])
        np.testing.assert_allclose(vectors[1], [0.0, 1.0])
        np.testing.assert_allclose(vectors[2], [0.5, 0.5])

    def test_embed_batch_count_mismatch(self, client):
        client.embeddings.create.return_value = embedding_response([1.0])

        with pytest.raises(EmbeddingFailure):
            OpenAIEmbeddings(client=client).embed_batch(["a", "b"])

    def test_embed_batch_empty_makes_no_request(self, client):
        assert OpenAIEmbeddings(client=client).embed_batch([]) == []
        client.embeddings.create.assert_not_called()

    @pytest.mark.parametrize(
        "model,expected",
        [
            ("text-embedding-3-large", 3072),
            ("text-embedding-ada-002", 1536),
            ("custom-deployment", 1536),
        ],
    )
    def test_dimensions(self, client, model, expected):
        assert OpenAIEmbeddings(model=model, client=client).dimensions == expected


# ---------------------------------------------------------------------------
# CLIENT FACTORY
# ---------------------------------------------------------------------------


class TestCreateOpenAIClient:
    """Test create_openai_client endpoint selection."""

    def test_azure_when_endpoint_set(self):
        config = ModelConfig(
            deployment="gpt-4o",
            api_key="k",
            endpoint="https://example.openai.azure.com",
            api_version="2024-06-01",
        )

        with patch("movie_rag.embeddings.openai_embeddings.AzureOpenAI") as azure:
            create_openai_client(config)

        azure.assert_called_once_with(
            api_key="k",
            azure_endpoint="https://example.openai.azure.com",
            api_version="2024-06-01",
        )

    def test_openai_without_endpoint(self):
        config = ModelConfig(deployment="gpt-4o", api_key="k")

        with patch("movie_rag.embeddings.openai_embeddings.OpenAI") as openai_cls:
            create_openai_client(config)

        openai_cls.assert_called_once_with(api_key="k")

    def test_from_config_uses_deployment(self):
        config = ModelConfig(deployment="my-embeddings", api_key="k")

        with patch("movie_rag.embeddings.openai_embeddings.OpenAI"):
            embeddings = OpenAIEmbeddings.from_config(config)

        assert embeddings.model == "my-embeddings"


# ---------------------------------------------------------------------------
# MOCK EMBEDDINGS
# ---------------------------------------------------------------------------


class TestMockEmbeddings:
    """Test the deterministic test double."""

    def test_satisfies_protocol(self):
        assert isinstance(MockEmbeddings(), Embedder)

    def test_deterministic(self):
        embeddings = MockEmbeddings(dimensions=128)

        np.testing.assert_array_equal(
            embeddings.embed("space adventure"), embeddings.embed("space adventure")
        )

    def test_dimensions(self):
        assert MockEmbeddings(dimensions=32).embed("x").shape == (32,)

    def test_shared_words_are_more_similar(self):
        embeddings = MockEmbeddings(dimensions=512)
        query = embeddings.embed("space adventure movie")

        related = cosine_similarity(query, embeddings.embed("a space adventure with rebels"))
        unrelated = cosine_similarity(query, embeddings.embed("toys come alive"))

        assert related > unrelated

    def test_empty_text_is_zero_vector(self):
        assert not MockEmbeddings(dimensions=16).embed("").any()

    def test_embed_batch(self):
        embeddings = MockEmbeddings(dimensions=16)

        vectors = embeddings.embed_batch(["a", "b"])

        assert len(vectors) == 2
        np.testing.assert_array_equal(vectors[1], embeddings.embed("b"))


# ---------------------------------------------------------------------------
# FACTORY
# ---------------------------------------------------------------------------


class TestGetEmbeddingProvider:
    """Test get_embedding_provider."""

    def test_mock(self):
        assert isinstance(get_embedding_provider(use_mock=True), MockEmbeddings)

    def test_from_config(self):
        config = ModelConfig(deployment="text-embedding-3-small", api_key="k")

        with patch("movie_rag.embeddings.openai_embeddings.OpenAI"):
            provider = get_embedding_provider(config=config)

        assert isinstance(provider, OpenAIEmbeddings)
        assert provider.model == "text-embedding-3-small"
