"""API-specific dependencies."""

from .dependencies import (
    ServiceCache,
    get_embedding_service,
    get_ingestion_service,
    get_knowledge_retriever,
    get_service_cache,
)

__all__ = [
    "ServiceCache",
    "get_embedding_service",
    "get_ingestion_service",
    "get_knowledge_retriever",
    "get_service_cache",
]
