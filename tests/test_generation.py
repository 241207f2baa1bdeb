"""
Unit Tests for Answer Generators
"""

import httpx
import pytest
from unittest.mock import MagicMock, patch

from openai import APITimeoutError, OpenAI, OpenAIError

from movie_rag.config import ModelConfig
from movie_rag.core import GenerationFailure, Generator, Timeout
from movie_rag.generation import (
    FALLBACK_ANSWER,
    MockGenerator,
    OpenAIGenerator,
    get_generator,
)


def chat_response(content):
    message = MagicMock(content=content)
    return MagicMock(choices=[MagicMock(message=message)])


@pytest.fixture
def client():
    mock = MagicMock()
    mock.with_options.return_value = mock
    return mock


# ---------------------------------------------------------------------------
# OPENAI GENERATOR
# ---------------------------------------------------------------------------


class TestOpenAIGenerator:
    """Test OpenAIGenerator against a mocked client."""

    def test_sends_system_and_user_messages(self, client):
        client.chat.completions.create.return_value = chat_response("Star Wars.")
        generator = OpenAIGenerator(model="gpt-4o", client=client)

        answer = generator.complete("You answer movie questions.", "Best space movie?")

        assert answer == "Star Wars."
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["messages"] == [
            {"role": "system", "content": "You answer movie questions."},
            {"role": "user", "content": "Best space movie?"},
        ]
        assert "temperature" not in kwargs

    def test_temperature_forwarded(self, client):
        client.chat.completions.create.return_value = chat_response("ok")

        OpenAIGenerator(client=client, temperature=0.2).complete("s", "u")

        assert client.chat.completions.create.call_args.kwargs["temperature"] == 0.2

    def test_timeout_applied_per_request(self, client):
        client.chat.completions.create.return_value = chat_response("ok")

        OpenAIGenerator(client=client).complete("s", "u", timeout=15.0)

        client.with_options.assert_called_once_with(timeout=15.0, max_retries=0)

    def test_empty_content_falls_back(self, client):
        client.chat.completions.create.return_value = chat_response(None)

        assert OpenAIGenerator(client=client).complete("s", "u") == FALLBACK_ANSWER

    def test_no_choices_is_failure(self, client):
        client.chat.completions.create.return_value = MagicMock(choices=[])

        with pytest.raises(GenerationFailure):
            OpenAIGenerator(client=client).complete("s", "u")

    def test_api_timeout_becomes_timeout(self, client):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        client.chat.completions.create.side_effect = APITimeoutError(request=request)

        with pytest.raises(Timeout):
            OpenAIGenerator(client=client).complete("s", "u", timeout=1.0)

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
            OpenAIGenerator(client=client).complete("s", "u", timeout=0.5)

        assert len(attempts) == 1

    def test_api_error_becomes_generation_failure(self, client):
        client.chat.completions.create.side_effect = OpenAIError("rate limited")

        with pytest.raises(GenerationFailure) as exc_info:
            OpenAIGenerator(client=client).complete("s", "u")

        assert "rate limited" in str(exc_info.value)


# ---------------------------------------------------------------------------
# MOCK GENERATOR
# ---------------------------------------------------------------------------


class TestMockGenerator:
    """Test the test double."""

    def test_satisfies_protocol(self):
        assert isinstance(MockGenerator(), Generator)

    def test_lists_titles_from_context(self):
        prompt = "Movie Data:\nTitle: Star Wars (1977)\nGenre: Sci-Fi\n\nTitle: Alien (1979)\n"

        answer = MockGenerator().complete("s", prompt)

        assert answer == "Relevant movies: Star Wars (1977); Alien (1979)"

    def test_no_titles(self):
        answer = MockGenerator().complete("s", "Movie Data:\n(no relevant movies were found)")

        assert "could not find" in answer

    def test_records_calls(self):
        generator = MockGenerator()

        generator.complete("system", "user")

        assert generator.calls == [("system", "user")]


# ---------------------------------------------------------------------------
# FACTORY
# ---------------------------------------------------------------------------


class TestGetGenerator:
    """Test get_generator."""

    def test_mock(self):
        assert isinstance(get_generator(use_mock=True), MockGenerator)

    def test_from_config(self):
        config = ModelConfig(deployment="gpt-4o-mini", api_key="k")

        with patch("movie_rag.embeddings.openai_embeddings.OpenAI"):
            generator = get_generator(config=config)

        assert isinstance(generator, OpenAIGenerator)
        assert generator.model == "gpt-4o-mini"
