"""
Semantic Conventions for Span Attributes

Defines attribute keys following OpenTelemetry GenAI conventions
plus a custom namespace for the retrieval pipeline.

Reference: https://opentelemetry.io/docs/specs/semconv/gen-ai/
"""

# ---------------------------------------------------------------------------
# GENAI NAMESPACE (OTel standard)
# ---------------------------------------------------------------------------

# Request/Response (optional, controlled by PHOENIX_CAPTURE_LLM_CONTENT)
GEN_AI_PROMPT = "gen_ai.prompt"
GEN_AI_COMPLETION = "gen_ai.completion"


# ---------------------------------------------------------------------------
# RAG NAMESPACE (custom)
# ---------------------------------------------------------------------------

RAG_STAGE = "rag.stage"  # "embedding", "ranking", ...
RAG_TOP_K = "rag.top_k"
RAG_SCORING_STRATEGY = "rag.scoring.strategy"  # "primary", "max", "weighted-sum"
RAG_QUERY_DIMENSIONS = "rag.query.dimensions"
RAG_CORPUS_SIZE = "rag.corpus.size"
RAG_CANDIDATE_COUNT = "rag.candidate.count"
RAG_CANDIDATE_IDS = "rag.candidate.ids"
RAG_CONTEXT_ITEMS = "rag.context.items"
RAG_FAILURE_KIND = "rag.failure.kind"


# ---------------------------------------------------------------------------
# HELPER FUNCTIONS
# ---------------------------------------------------------------------------


def ranking_attributes(
    top_k: int,
    strategy: str,
    corpus_size: int,
    candidate_ids: list[str],
) -> dict:
    """Create attributes dict for a ranking span."""
    return {
        RAG_TOP_K: top_k,
        RAG_SCORING_STRATEGY: strategy,
        RAG_CORPUS_SIZE: corpus_size,
        RAG_CANDIDATE_COUNT: len(candidate_ids),
        RAG_CANDIDATE_IDS: candidate_ids,
    }


def failure_attributes(stage: str, kind: str) -> dict:
    """Create attributes dict for a failed stage."""
    return {
        RAG_STAGE: stage,
        RAG_FAILURE_KIND: kind,
    }
