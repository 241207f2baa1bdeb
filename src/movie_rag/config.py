"""
Pipeline configuration.

Loads model endpoints, credentials and retrieval settings from environment
variables into explicit dataclasses. The config object is passed into the
pipeline factory; nothing reads it from module-level state, so pipelines
with different models can coexist in one process.

Environment Variables:
    OPENAI_LLM_ENDPOINT / OPENAI_EMBEDDING_ENDPOINT: Azure OpenAI endpoint
        (leave empty to use api.openai.com)
    OPENAI_LLM_KEY / OPENAI_EMBEDDING_KEY: API keys (fallback: OPENAI_API_KEY)
    OPENAI_LLM_DEPLOYMENT_NAME: Chat model / deployment (default: gpt-4o)
    OPENAI_EMBEDDING_DEPLOYMENT_NAME: Embedding model / deployment
        (default: text-embedding-ada-002)
    OPENAI_LLM_API_VERSION / OPENAI_EMBEDDING_API_VERSION: Azure API version
        (default: 2024-06-01)
    RAG_TOP_K: Documents placed in the context (default: 3)
    RAG_EMBED_TIMEOUT_S / RAG_GENERATE_TIMEOUT_S: Call budgets in seconds
    RAG_SCORING_STRATEGY: primary | max | weighted-sum (default: primary)
    RAG_PRIMARY_FIELD: Vector field used by "primary" (default: embedding)
    RAG_FIELD_WEIGHTS: "titleVector=0.3,descriptionVector=0.7"
    RAG_MAX_CONTEXT_ITEMS: Cap on excerpts in the context block
    RAG_MAX_FIELD_CHARS: Per-field character cap applied before context building
    RAG_SCORING_WORKERS: Threads used to score documents (default: 1)
    MOVIE_DATA_PATH: movies.json corpus file (default: built-in seed movies)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from movie_rag.core import InvalidArgument
from movie_rag.retrieval.similarity import DEFAULT_PRIMARY_FIELD, ScoringPolicy

DEFAULT_API_VERSION = "2024-06-01"
DEFAULT_LLM_MODEL = "gpt-4o"
DEFAULT_EMBEDDING_MODEL = "text-embedding-ada-002"


@dataclass
class ModelConfig:
    """Connection settings for one model deployment."""

    deployment: str
    api_key: str | None = None
    endpoint: str | None = None
    api_version: str = DEFAULT_API_VERSION

    @property
    def is_azure(self) -> bool:
        return bool(self.endpoint)

    def problems(self, label: str) -> list[str]:
        """Describe missing settings for this model."""
        issues = []
        if not self.deployment:
            issues.append(f"{label}: deployment/model name is required")
        if not self.api_key:
            issues.append(f"{label}: API key is required")
        return issues


@dataclass
class PipelineConfig:
    """Everything needed to build and run a RAG pipeline."""

    llm: ModelConfig = field(
        default_factory=lambda: ModelConfig(deployment=DEFAULT_LLM_MODEL)
    )
    embedding: ModelConfig = field(
        default_factory=lambda: ModelConfig(deployment=DEFAULT_EMBEDDING_MODEL)
    )
    top_k: int = 3
    embed_timeout_s: float | None = 30.0
    generate_timeout_s: float | None = 60.0
    scoring: ScoringPolicy = field(default_factory=ScoringPolicy)
    max_context_items: int | None = None
    max_field_chars: int | None = None
    scoring_workers: int = 1
    data_path: str | None = None

    def __post_init__(self) -> None:
        if self.top_k <= 0:
            raise InvalidArgument(f"top_k must be positive, got {self.top_k}")
        if self.scoring_workers <= 0:
            raise InvalidArgument(
                f"scoring_workers must be positive, got {self.scoring_workers}"
            )

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> PipelineConfig:
        """Load config from environment variables."""
        env = os.environ if env is None else env
        shared_key = env.get("OPENAI_API_KEY") or None

        llm = ModelConfig(
            deployment=env.get("OPENAI_LLM_DEPLOYMENT_NAME", DEFAULT_LLM_MODEL),
            api_key=env.get("OPENAI_LLM_KEY") or shared_key,
            endpoint=env.get("OPENAI_LLM_ENDPOINT") or None,
            api_version=env.get("OPENAI_LLM_API_VERSION", DEFAULT_API_VERSION),
        )
        embedding = ModelConfig(
            deployment=env.get(
                "OPENAI_EMBEDDING_DEPLOYMENT_NAME", DEFAULT_EMBEDDING_MODEL
            ),
            api_key=env.get("OPENAI_EMBEDDING_KEY") or shared_key,
            endpoint=env.get("OPENAI_EMBEDDING_ENDPOINT") or None,
            api_version=env.get("OPENAI_EMBEDDING_API_VERSION", DEFAULT_API_VERSION),
        )

        scoring = ScoringPolicy(
            strategy=env.get("RAG_SCORING_STRATEGY", "primary"),
            primary_field=env.get("RAG_PRIMARY_FIELD", DEFAULT_PRIMARY_FIELD),
            weights=parse_weights(env.get("RAG_FIELD_WEIGHTS", "")),
        )

        return cls(
            llm=llm,
            embedding=embedding,
            top_k=_int(env, "RAG_TOP_K", 3),
            embed_timeout_s=_float(env, "RAG_EMBED_TIMEOUT_S", 30.0),
            generate_timeout_s=_float(env, "RAG_GENERATE_TIMEOUT_S", 60.0),
            scoring=scoring,
            max_context_items=_int(env, "RAG_MAX_CONTEXT_ITEMS", None),
            max_field_chars=_int(env, "RAG_MAX_FIELD_CHARS", None),
            scoring_workers=_int(env, "RAG_SCORING_WORKERS", 1),
            data_path=env.get("MOVIE_DATA_PATH") or None,
        )

    def validate(self) -> list[str]:
        """
        Check that credentials are present for both models.

        Returns a list of problems; empty means the config is usable
        against real model endpoints.
        """
        return self.llm.problems("LLM") + self.embedding.problems("Embedding")


# ---------------------------------------------------------------------------
# PARSING HELPERS
# ---------------------------------------------------------------------------


def parse_weights(raw: str) -> dict[str, float]:
    """Parse "field=weight,field=weight" into a dict."""
    weights: dict[str, float] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise InvalidArgument(f"Bad field weight {item!r}; expected field=weight")
        try:
            weights[name.strip()] = float(value)
        except ValueError as e:
            raise InvalidArgument(f"Bad weight for {name.strip()!r}: {value!r}") from e
    return weights


def _int(env: Mapping[str, str], name: str, default: int | None) -> int | None:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise InvalidArgument(f"{name} must be an integer, got {raw!r}") from e


def _float(env: Mapping[str, str], name: str, default: float | None) -> float | None:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise InvalidArgument(f"{name} must be a number, got {raw!r}") from e
