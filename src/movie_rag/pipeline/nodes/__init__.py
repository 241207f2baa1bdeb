"""
Pipeline nodes - isolated, testable functions.

Nodes with dependencies use the factory pattern: create_X_node(deps) -> node_fn.
This enables:
- Unit testing in isolation
- Dependency injection for mocking
- Clear separation of concerns
"""

from movie_rag.pipeline.nodes.embed import create_embed_node
from movie_rag.pipeline.nodes.rank import create_rank_node
from movie_rag.pipeline.nodes.context import create_context_node
from movie_rag.pipeline.nodes.generate import create_generate_node

__all__ = [
    "create_embed_node",
    "create_rank_node",
    "create_context_node",
    "create_generate_node",
]
