"""
Embedding record ORM model.

Stand-alone embeddings created on demand through the embedding tool.
Independent of knowledge documents.

Dependencies: sqlalchemy, knowledge_retrieval.boundary.db.base
System role: Embedding record persistence
"""

from typing import Any

from sqlalchemy import Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from knowledge_retrieval.boundary.db.base import Base, UUIDMixin, TimestampMixin


class EmbeddingModel(Base, UUIDMixin, TimestampMixin):
    """
    Embedding record ORM model.

    Attributes:
        text: Source text that was embedded
        embedding: Vector as a JSON array of floats
        model: Embedding model ID
        task_type: Gemini task type used to generate the vector
        dimensions: Vector length
        record_metadata: Caller-supplied metadata
    """

    __tablename__ = "embeddings"

    text: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[list[float]] = mapped_column(JSON, nullable=False)
    model: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    task_type: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    dimensions: Mapped[int] = mapped_column(Integer, nullable=False)
    record_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSON,
        nullable=False,
        default=dict,
    )
