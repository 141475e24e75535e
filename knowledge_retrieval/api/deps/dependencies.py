"""
Dependency injection container.

Builds the retrieval engine and services once per process and hands them
to routes through FastAPI Depends factories. Tests override the factories
with app.dependency_overrides.

Dependencies: knowledge_retrieval.configs, knowledge_retrieval.application, knowledge_retrieval.boundary
System role: DI container for service injection
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from knowledge_retrieval.application.services import (
    EmbeddingStorageService,
    KnowledgeIngestionService,
)
from knowledge_retrieval.boundary.db import get_async_session_factory
from knowledge_retrieval.boundary.db.CRUD.knowledge_document_crud import KnowledgeDocumentCRUD
from knowledge_retrieval.boundary.embeddings import EmbeddingProvider, create_embedding_provider
from knowledge_retrieval.configs import Settings, get_settings
from knowledge_retrieval.core.agentic_system.tools import ToolRegistry
from knowledge_retrieval.core.retrieval import KnowledgeRetriever, LexicalSearch, VectorSearch


class ServiceCache:
    """Container for lazily built, process-wide service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._session_factory = None
        self._embedding_provider = None
        self._document_crud = None
        self._retriever = None
        self._embedding_service = None
        self._ingestion_service = None
        self._tool_registry = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get cached async session factory."""
        if self._session_factory is None:
            self._session_factory = get_async_session_factory()
        return self._session_factory

    @property
    def embedding_provider(self) -> EmbeddingProvider:
        """Get cached embedding provider."""
        if self._embedding_provider is None:
            self._embedding_provider = create_embedding_provider(self.settings.embedding)
        return self._embedding_provider

    @property
    def document_crud(self) -> KnowledgeDocumentCRUD:
        if self._document_crud is None:
            self._document_crud = KnowledgeDocumentCRUD(self.settings.database.text_search_config)
        return self._document_crud

    @property
    def retriever(self) -> KnowledgeRetriever:
        """Get cached retrieval engine."""
        if self._retriever is None:
            self._retriever = KnowledgeRetriever(
                lexical=LexicalSearch(self.session_factory, self.document_crud),
                vector=VectorSearch(self.session_factory, self.embedding_provider, self.document_crud),
                settings=self.settings.retrieval,
            )
        return self._retriever

    @property
    def embedding_service(self) -> EmbeddingStorageService:
        """Get cached embedding storage service."""
        if self._embedding_service is None:
            self._embedding_service = EmbeddingStorageService(
                self.session_factory, self.embedding_provider
            )
        return self._embedding_service

    @property
    def ingestion_service(self) -> KnowledgeIngestionService:
        """Get cached ingestion service."""
        if self._ingestion_service is None:
            retrieval = self.settings.retrieval
            self._ingestion_service = KnowledgeIngestionService(
                self.session_factory,
                self.embedding_provider,
                chunk_size=retrieval.chunk_size,
                chunk_overlap=retrieval.chunk_overlap,
                chunk_threshold=retrieval.chunk_threshold,
                crud=self.document_crud,
            )
        return self._ingestion_service

    @property
    def tool_registry(self) -> ToolRegistry:
        """Get cached tool registry."""
        if self._tool_registry is None:
            self._tool_registry = ToolRegistry.with_defaults(self.retriever, self.embedding_service)
        return self._tool_registry

    def clear(self) -> None:
        """Clear all cached instances."""
        self._session_factory = None
        self._embedding_provider = None
        self._document_crud = None
        self._retriever = None
        self._embedding_service = None
        self._ingestion_service = None
        self._tool_registry = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_knowledge_retriever() -> KnowledgeRetriever:
    """
    Get the retrieval engine.

    Returns:
        KnowledgeRetriever: Shared engine (stateless across requests)
    """
    return get_service_cache().retriever


def get_embedding_service() -> EmbeddingStorageService:
    """
    Get the embedding storage service.

    Returns:
        EmbeddingStorageService: Shared service instance
    """
    return get_service_cache().embedding_service


def get_ingestion_service() -> KnowledgeIngestionService:
    """
    Get the knowledge ingestion service.

    Returns:
        KnowledgeIngestionService: Shared service instance
    """
    return get_service_cache().ingestion_service
