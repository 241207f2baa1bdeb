"""
Error taxonomy for the RAG pipeline.

Two families:
- Contract violations (InvalidArgument, DimensionMismatch) are raised
  immediately and never retried.
- Transport failures (EmbeddingFailure, GenerationFailure, Timeout) come
  from the external model calls. The pipeline turns them into a
  PipelineFailure result instead of raising.

Each class carries a `kind` string so results can name the failure
without importing the class.
"""


class PipelineError(Exception):
    """Base class for all pipeline errors."""

    kind: str = "PipelineError"


class InvalidArgument(PipelineError, ValueError):
    """Malformed caller input (empty question, top_k <= 0, bad config)."""

    kind = "InvalidArgument"


class DimensionMismatch(PipelineError, ValueError):
    """Two vectors of different length were compared."""

    kind = "DimensionMismatch"

    def __init__(self, left: int, right: int):
        self.left = left
        self.right = right
        super().__init__(f"Vector dimensions differ: {left} != {right}")


class EmbeddingFailure(PipelineError):
    """The embedding model could not produce a vector."""

    kind = "EmbeddingFailure"


class GenerationFailure(PipelineError):
    """The generative model could not produce an answer."""

    kind = "GenerationFailure"


class Timeout(PipelineError, TimeoutError):
    """An external model call exceeded its time budget."""

    kind = "Timeout"


# Errors that end the pipeline as a typed failure rather than propagating
TRANSPORT_ERRORS = (EmbeddingFailure, GenerationFailure, Timeout)


def failure_kind(exc: BaseException, default: str) -> str:
    """
    Name the failure an external-call exception maps to.

    Any TimeoutError (ours or the standard library's) is a Timeout;
    everything else is the failing stage's own kind.
    """
    if isinstance(exc, TimeoutError):
        return Timeout.kind
    return default
