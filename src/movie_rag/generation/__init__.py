"""
Generation module - answer generation from a composed prompt.

1. Protocol (Generator, in core.protocols) defines the interface
2. Production implementation (OpenAIGenerator)
3. Test double (MockGenerator)
4. Factory function (get_generator)
"""

from movie_rag.generation.openai_generator import (
    FALLBACK_ANSWER,
    OpenAIGenerator,
    MockGenerator,
    get_generator,
)

__all__ = [
    "FALLBACK_ANSWER",
    "OpenAIGenerator",
    "MockGenerator",
    "get_generator",
]
