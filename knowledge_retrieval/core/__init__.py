"""
Core business logic module.

Contains the retrieval engine, chunking, agent tools and the exception
hierarchy. Submodules are imported explicitly by callers.
"""

from knowledge_retrieval.core.exceptions import (
    KnowledgeRetrievalException,
    ValidationError,
    EmbeddingError,
    EmbeddingStorageError,
    StoreQueryError,
    StoreUnavailableError,
    DimensionMismatchError,
    DocumentProcessingError,
    RetrievalError,
)

__all__ = [
    "KnowledgeRetrievalException",
    "ValidationError",
    "EmbeddingError",
    "EmbeddingStorageError",
    "StoreQueryError",
    "StoreUnavailableError",
    "DimensionMismatchError",
    "DocumentProcessingError",
    "RetrievalError",
]
