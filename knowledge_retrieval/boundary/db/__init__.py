"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - KnowledgeDocumentModel, EmbeddingModel: Stored entities
  - knowledge_document_crud, embedding_crud: CRUD operation singletons

Dependencies: sqlalchemy, knowledge_retrieval.configs
System role: Database adapter for the knowledge store
"""

from knowledge_retrieval.boundary.db.base import Base, TimestampMixin, UUIDMixin
from knowledge_retrieval.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from knowledge_retrieval.boundary.db.models import EmbeddingModel, KnowledgeDocumentModel
from knowledge_retrieval.boundary.db.CRUD import (
    BaseCRUD,
    EmbeddingCRUD,
    KnowledgeDocumentCRUD,
    embedding_crud,
    knowledge_document_crud,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "KnowledgeDocumentModel",
    "EmbeddingModel",
    "BaseCRUD",
    "KnowledgeDocumentCRUD",
    "EmbeddingCRUD",
    "knowledge_document_crud",
    "embedding_crud",
]
