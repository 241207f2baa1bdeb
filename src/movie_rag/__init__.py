"""
movie-rag: retrieval-augmented question answering over a movie corpus.

USAGE:
------
from movie_rag import PipelineConfig, create_pipeline

pipeline = create_pipeline(PipelineConfig.from_env())
result = pipeline.answer("What are good space adventure movies?")
print(result)
"""

from movie_rag.config import ModelConfig, PipelineConfig
from movie_rag.pipeline import (
    PipelineAnswer,
    PipelineFailure,
    PipelineStage,
    RAGPipeline,
    create_pipeline,
)

__version__ = "0.1.0"

__all__ = [
    "ModelConfig",
    "PipelineConfig",
    "PipelineAnswer",
    "PipelineFailure",
    "PipelineStage",
    "RAGPipeline",
    "create_pipeline",
]
