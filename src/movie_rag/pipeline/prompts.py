"""
Prompt construction for the answer generator.

These are PURE FUNCTIONS - same inputs always produce same output,
testable without any model call.
"""

from __future__ import annotations

from movie_rag.core import ContextBlock

SYSTEM_PROMPT = (
    "You are a helpful assistant that answers questions about movies. "
    "Use the provided movie data to answer questions accurately and concisely. "
    "If the movie data is empty or does not contain the answer, say that no "
    "relevant movies were found instead of guessing."
)

NO_RESULTS_CONTEXT = "(no relevant movies were found)"


def build_user_prompt(question: str, context: ContextBlock) -> str:
    """Combine the user's question with the retrieved movie data."""
    movie_data = context.text if not context.is_empty else NO_RESULTS_CONTEXT
    return (
        f"Based on the following movie data, please answer this question: {question}\n"
        f"\n"
        f"Movie Data:\n"
        f"{movie_data}"
    )
