"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from knowledge_retrieval.boundary.db.CRUD import knowledge_document_crud

    rows = await knowledge_document_crud.full_text_search(db, "monetization")
"""

from knowledge_retrieval.boundary.db.CRUD.base_crud import BaseCRUD
from knowledge_retrieval.boundary.db.CRUD.knowledge_document_crud import (
    KnowledgeDocumentCRUD,
    knowledge_document_crud,
)
from knowledge_retrieval.boundary.db.CRUD.embedding_crud import EmbeddingCRUD, embedding_crud

__all__ = [
    "BaseCRUD",
    "KnowledgeDocumentCRUD",
    "knowledge_document_crud",
    "EmbeddingCRUD",
    "embedding_crud",
]
