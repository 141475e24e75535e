"""
Embedding record domain models and schemas.

Dependencies: pydantic
System role: Embedding storage API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class EmbeddingRecord(BaseModel):
    """Stored embedding without its vector."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID
    text: str
    model: str
    task_type: str | None = None
    dimensions: int
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("record_metadata", "metadata"),
    )
    created_at: datetime
    updated_at: datetime | None = None


class EmbeddingRecordWithVector(EmbeddingRecord):
    """Stored embedding including its vector."""

    embedding: list[float]


class CreateEmbeddingRequest(BaseModel):
    """Request schema for POST /embeddings and the text_embedding tool."""

    text: str = Field(min_length=1, description="Text to embed")
    task_type: str | None = Field(
        default=None,
        description="Task type hint: document, search_query, similarity, clustering, "
        "classification, or a raw Gemini task type such as RETRIEVAL_QUERY",
    )
    return_vector: bool = Field(default=False, description="Include the vector in the response")
    metadata: dict[str, Any] = Field(default_factory=dict)


class EmbeddingResult(BaseModel):
    """Result of generating (and optionally storing) one embedding."""

    success: bool = True
    embedding_id: uuid.UUID | None = None
    stored: bool = False
    storage_error: str | None = None
    model: str
    dimensions: int
    task_type: str
    text: str
    created_at: datetime | None = None
    embedding: list[float] | None = None


class EmbeddingListResponse(BaseModel):
    embeddings: list[EmbeddingRecord]
    count: int
    limit: int
    offset: int
