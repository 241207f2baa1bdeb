"""
Generation Module - Single Responsibility: produce answer text.

The generator receives a fully composed system prompt and user prompt and
returns the model's text. Prompt construction lives in pipeline.prompts so
it can be tested without any model call.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from openai import APITimeoutError, OpenAI, OpenAIError

from movie_rag.core import GenerationFailure, Generator, Timeout
from movie_rag.embeddings import create_openai_client

if TYPE_CHECKING:
    from movie_rag.config import ModelConfig

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "Sorry, I could not generate an answer."


class OpenAIGenerator:
    """
    Chat-completions based answer generator.

    Works against api.openai.com or an Azure OpenAI deployment,
    depending on the client it is given.
    """

    def __init__(
        self,
        model: str = "gpt-4o",
        api_key: str | None = None,
        client: OpenAI | None = None,
        temperature: float | None = None,
    ):
        self.model = model
        self.temperature = temperature
        self._client = client or OpenAI(api_key=api_key or os.environ.get("OPENAI_API_KEY"))

    @classmethod
    def from_config(cls, config: ModelConfig) -> OpenAIGenerator:
        return cls(model=config.deployment, client=create_openai_client(config))

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        timeout: float | None = None,
    ) -> str:
        """Send one chat completion request and return the answer text."""
        client = self._client
        if timeout is not None:
            # One attempt per call, so the timeout bounds the whole request
            client = client.with_options(timeout=timeout, max_retries=0)

        kwargs = {}
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature

        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                **kwargs,
            )
        except APITimeoutError as e:
            logger.warning(f"Generation request timed out after {timeout}s")
            raise Timeout(f"Generation request exceeded {timeout}s") from e
        except OpenAIError as e:
            logger.warning(f"Generation request failed: {e}")
            raise GenerationFailure(f"Chat model {self.model!r} failed: {e}") from e

        if not response.choices:
            raise GenerationFailure(f"Chat model {self.model!r} returned no choices")

        return response.choices[0].message.content or FALLBACK_ANSWER


class MockGenerator:
    """
    Generator test double that needs no API.

    Answers by listing the movie titles found in the context, which is
    enough to exercise the pipeline end to end in demos and tests.
    """

    def __init__(self):
        self.calls: list[tuple[str, str]] = []

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        timeout: float | None = None,
    ) -> str:
        self.calls.append((system_prompt, user_prompt))
        titles = [
            line.removeprefix("Title: ")
            for line in user_prompt.splitlines()
            if line.startswith("Title: ")
        ]
        if not titles:
            return "I could not find any movies matching your question."
        return "Relevant movies: " + "; ".join(titles)


def get_generator(
    use_mock: bool = False,
    config: ModelConfig | None = None,
) -> Generator:
    """
    Factory function to get the appropriate generator.

    Args:
        use_mock: If True, return MockGenerator (for testing)
        config: Model settings; OpenAI defaults from the environment if omitted
    """
    if use_mock:
        return MockGenerator()
    if config is not None:
        return OpenAIGenerator.from_config(config)
    return OpenAIGenerator()
