"""
Knowledge document ORM model.

One row per stored document or chunk. Long documents are stored as a
parent row holding the full text plus chunk rows that reference it and
carry their own embeddings.

Dependencies: sqlalchemy, knowledge_retrieval.boundary.db.base
System role: Knowledge store persistence for lexical and vector search
"""

import uuid
from typing import Any

from sqlalchemy import ForeignKey, Integer, JSON, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from knowledge_retrieval.boundary.db.base import Base, UUIDMixin, TimestampMixin


class KnowledgeDocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Knowledge document ORM model.

    A row is either a parent (parent_id is NULL) or a chunk whose
    parent_id references a parent. Chunks never have children, and
    deleting a parent deletes its chunks (ON DELETE CASCADE).

    Attributes:
        title: Document title (chunks use "<title> (Part N)")
        content: Full text for parents, chunk text for chunks
        summary: Optional short summary
        url: Origin URL; identifies a parent for duplicate detection
        source: Origin domain or label
        source_type: Kind of source (blog, markdown, document, newsletter, web)
        embedding: Vector as a JSON array of floats, NULL when not embedded
        model: Embedding model ID, set whenever embedding is set
        dimensions: Length of embedding, set whenever embedding is set
        language: ISO language code
        doc_metadata: Open string-keyed metadata bag
        parent_id: Parent document for chunks
        chunk_index: 0-based chunk position
        chunk_size: Character length of the chunk
        total_chunks: Chunk count of the parent document
    """

    __tablename__ = "knowledge_documents"

    title: Mapped[str] = mapped_column(String(1024), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    url: Mapped[str | None] = mapped_column(String(2048), nullable=True, index=True)
    source: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    source_type: Mapped[str] = mapped_column(String(64), nullable=False, default="blog", index=True)

    embedding: Mapped[list[float] | None] = mapped_column(
        JSON(none_as_null=True),
        nullable=True,
        default=None,
    )
    model: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    dimensions: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None)

    language: Mapped[str] = mapped_column(String(16), nullable=False, default="en")
    doc_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSON,
        nullable=False,
        default=dict,
        doc="Open metadata bag (author, tags, publishedDate, isChunk, ...)",
    )

    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("knowledge_documents.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    chunk_index: Mapped[int | None] = mapped_column(Integer, nullable=True)
    chunk_size: Mapped[int | None] = mapped_column(Integer, nullable=True)
    total_chunks: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<KnowledgeDocumentModel id={self.id} title={self.title!r}>"
