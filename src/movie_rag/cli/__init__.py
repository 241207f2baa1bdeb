"""
CLI module - unified command-line interface.

Provides entry points for:
- Asking one question or chatting interactively
- Inspecting retrieval results
- Vectorizing a corpus file
- Checking configuration
"""

from movie_rag.cli.commands import (
    main,
    run_ask_cli,
    run_chat_cli,
    run_search_cli,
    run_vectorize_cli,
    run_check_config_cli,
)

__all__ = [
    "main",
    "run_ask_cli",
    "run_chat_cli",
    "run_search_cli",
    "run_vectorize_cli",
    "run_check_config_cli",
]
