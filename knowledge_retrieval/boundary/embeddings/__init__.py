"""
Embedding provider adapters.

Exports:
  - EmbeddingProvider: Protocol the retrieval engine depends on
  - GeminiEmbeddingProvider: Google Gemini adapter (network)
  - FakeEmbeddingProvider: Deterministic offline adapter for tests and local runs
  - TaskType, resolve_task_type: Task type hints and their Gemini names
  - create_embedding_provider: Build the provider from settings
"""

from knowledge_retrieval.boundary.embeddings.task_types import TaskType, resolve_task_type
from knowledge_retrieval.boundary.embeddings.provider import (
    EmbeddingProvider,
    GeminiEmbeddingProvider,
    create_embedding_provider,
)
from knowledge_retrieval.boundary.embeddings.fake_provider import FakeEmbeddingProvider

__all__ = [
    "EmbeddingProvider",
    "GeminiEmbeddingProvider",
    "FakeEmbeddingProvider",
    "TaskType",
    "resolve_task_type",
    "create_embedding_provider",
]
