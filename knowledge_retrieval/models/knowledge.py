"""
Knowledge document domain models and schemas.

Domain model for stored documents, search filters, and the request/response
contracts of the knowledge search tool and HTTP routes.

Dependencies: pydantic
System role: Knowledge retrieval API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class KnowledgeDocument(BaseModel):
    """
    Stored document or chunk, optionally annotated by a search.

    Built from KnowledgeDocumentModel rows via from_attributes. The ORM
    attribute doc_metadata is exposed here as metadata.
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID
    title: str
    content: str
    summary: str | None = None
    url: str | None = None
    source: str = "unknown"
    source_type: str = "blog"
    embedding: list[float] | None = None
    model: str | None = None
    dimensions: int | None = None
    language: str = "en"
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("doc_metadata", "metadata"),
    )
    parent_id: uuid.UUID | None = None
    chunk_index: int | None = None
    chunk_size: int | None = None
    total_chunks: int | None = None
    created_at: datetime
    updated_at: datetime | None = None

    similarity: float | None = Field(
        default=None,
        description="Cosine similarity from vector search, or fused score after re-ranking",
    )
    rank: float | None = Field(default=None, description="ts_rank from lexical search")


class SearchFilters(BaseModel):
    """Conjunctive filters applied before ranking."""

    source: str | None = Field(default=None, description="Exact source/domain match")
    source_type: str | None = Field(default=None, description="Exact source type match")
    date_from: datetime | None = Field(default=None, description="created_at lower bound (inclusive)")
    date_to: datetime | None = Field(default=None, description="created_at upper bound (inclusive)")

    def is_empty(self) -> bool:
        return not any((self.source, self.source_type, self.date_from, self.date_to))


class KnowledgeSearchRequest(BaseModel):
    """Arguments of the search_knowledge_base tool and POST /knowledge/search."""

    query: str = Field(description="The search query or question")
    limit: int | None = Field(
        default=None,
        description="Maximum number of results to return (default: 3, max: 5)",
    )
    threshold: float | None = Field(
        default=None,
        description="Minimum similarity threshold for vector search (0-1, default: 0.8)",
    )
    source: str | None = Field(
        default=None,
        description="Filter by specific source (e.g., 'blog.aloha-corp.com')",
    )
    source_type: str | None = Field(
        default=None,
        description="Filter by source type (e.g., 'blog', 'markdown', 'document', 'web')",
    )
    search_mode: str | None = Field(
        default=None,
        description="Search method to use: 'text', 'vector' or 'hybrid' (default: 'hybrid')",
    )
    date_from: str | None = Field(default=None, description="Filter results from this date (ISO string)")
    date_to: str | None = Field(default=None, description="Filter results to this date (ISO string)")


class KnowledgeSearchResult(BaseModel):
    """One search hit as returned to a tool caller."""

    title: str
    content: str = Field(description="Excerpt of the document body")
    url: str | None = None
    source: str
    source_type: str
    summary: str | None = None
    similarity: float | None = None
    created_at: datetime


class KnowledgeSearchResponse(BaseModel):
    """Successful knowledge search payload."""

    success: bool = True
    message: str
    query: str
    results: list[KnowledgeSearchResult] = Field(default_factory=list)
    context: str | None = None
    search_type: str
    db_results_count: int = 0


class KnowledgeSearchError(BaseModel):
    """Failed knowledge search payload."""

    success: bool = False
    error: str
    query: str


class RetrieveRequest(BaseModel):
    """Request schema for POST /knowledge/retrieve."""

    query: str = Field(description="Question to build context for")
    limit: int | None = Field(default=None, ge=1, le=20)
    threshold: float | None = Field(default=None, ge=0.0, le=1.0)


class RetrieveResponse(BaseModel):
    """Context block ready to splice into a language model prompt."""

    context: str


class FetchedContent(BaseModel):
    """Fetched and parsed page handed to the ingestion writer."""

    url: str
    title: str
    content: str
    summary: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class SourceCount(BaseModel):
    source: str
    count: int


class IngestionStats(BaseModel):
    """Knowledge store totals."""

    total_documents: int = Field(description="Parent documents")
    total_chunks: int
    documents_by_source: list[SourceCount] = Field(default_factory=list)
    documents_with_embeddings: int
    last_ingestion_date: datetime | None = None
