"""
Tracing configuration.

Loads observability settings from environment variables.
Supports graceful degradation when Phoenix/OpenTelemetry is not installed.
"""

import os
from dataclasses import dataclass


def _flag(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


@dataclass
class TracingConfig:
    """Configuration for Phoenix/OpenTelemetry tracing.

    Environment Variables:
        PHOENIX_ENABLED: Enable tracing (default: false)
        PHOENIX_PROJECT_NAME: Project name in Phoenix UI (default: movie-rag)
        PHOENIX_COLLECTOR_ENDPOINT: Remote OTLP endpoint (optional, local if empty)
        PHOENIX_CAPTURE_LLM_CONTENT: Record questions/answers on spans (default: false)
    """

    enabled: bool = False
    project_name: str = "movie-rag"
    collector_endpoint: str | None = None
    capture_llm_content: bool = False

    @classmethod
    def from_env(cls) -> "TracingConfig":
        """Load config from environment variables."""
        return cls(
            enabled=_flag(os.environ.get("PHOENIX_ENABLED", "false")),
            project_name=os.environ.get("PHOENIX_PROJECT_NAME", "movie-rag"),
            collector_endpoint=os.environ.get("PHOENIX_COLLECTOR_ENDPOINT") or None,
            capture_llm_content=_flag(os.environ.get("PHOENIX_CAPTURE_LLM_CONTENT", "false")),
        )


# Process-wide tracing settings; tracing is a cross-cutting concern
_config: TracingConfig | None = None


def get_config() -> TracingConfig:
    """Get the tracing config (lazy-loaded from env)."""
    global _config
    if _config is None:
        _config = TracingConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset config (useful for testing)."""
    global _config
    _config = None
