"""
Database models package.

Exports:
  - KnowledgeDocumentModel: Documents and chunks searched by the retrieval engine
  - EmbeddingModel: Stand-alone embedding records

Dependencies: sqlalchemy, knowledge_retrieval.boundary.db.base
System role: Database model definitions for domain entities
"""

from knowledge_retrieval.boundary.db.models.knowledge_document_model import KnowledgeDocumentModel
from knowledge_retrieval.boundary.db.models.embedding_model import EmbeddingModel

__all__ = [
    "KnowledgeDocumentModel",
    "EmbeddingModel",
]
