"""
Application services.

Exports:
  - EmbeddingStorageService: Embedding generation and record lifecycle
  - KnowledgeIngestionService: Knowledge store writer
"""

from knowledge_retrieval.application.services.embedding_storage_service import EmbeddingStorageService
from knowledge_retrieval.application.services.knowledge_ingestion_service import KnowledgeIngestionService

__all__ = ["EmbeddingStorageService", "KnowledgeIngestionService"]
