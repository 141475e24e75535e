"""
Knowledge ingestion service.

Writes fetched content into the knowledge store. Documents longer than the
chunk threshold are stored as a parent row holding the full text and a
chunkCount metadata entry, plus one embedded chunk row per window;
shorter documents are stored and embedded whole. A parent and its chunks
are written in one transaction.

Dependencies: sqlalchemy, knowledge_retrieval.boundary, knowledge_retrieval.core.document_processing
System role: Knowledge store writer
"""

import logging
from typing import Any
from urllib.parse import urlsplit
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from knowledge_retrieval.boundary.db.CRUD.knowledge_document_crud import (
    KnowledgeDocumentCRUD,
    knowledge_document_crud,
)
from knowledge_retrieval.boundary.embeddings import EmbeddingProvider, TaskType
from knowledge_retrieval.core.document_processing import (
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_CHUNK_SIZE,
    chunk_content,
)
from knowledge_retrieval.core.exceptions import DocumentProcessingError
from knowledge_retrieval.models.knowledge import FetchedContent, IngestionStats, SourceCount
from knowledge_retrieval.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_THRESHOLD = 3000
DEFAULT_SOURCE_TYPE = "blog"


def extract_domain(url: str) -> str:
    """Return the host of url, or "unknown" when it has none."""
    try:
        host = urlsplit(url).hostname
    except ValueError:
        return "unknown"
    return host or "unknown"


def resolve_language(metadata: dict[str, Any], source_type: str) -> str:
    """Metadata language wins; newsletters default to Korean, everything else to English."""
    language = metadata.get("language")
    if isinstance(language, str) and language:
        return language
    return "ko" if source_type == "newsletter" else "en"


class KnowledgeIngestionService:
    """Stores fetched documents, with chunking and embeddings."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        provider: EmbeddingProvider,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
        chunk_threshold: int = DEFAULT_CHUNK_THRESHOLD,
        crud: KnowledgeDocumentCRUD = knowledge_document_crud,
    ) -> None:
        """
        Args:
            session_factory: Session factory for the knowledge store
            provider: Embedding provider for document and chunk vectors
            chunk_size: Chunk window length
            chunk_overlap: Overlap between consecutive chunks
            chunk_threshold: Documents longer than this are chunked
            crud: Knowledge document CRUD operations
        """
        if chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        self._session_factory = session_factory
        self._provider = provider
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap
        self._chunk_threshold = chunk_threshold
        self._crud = crud

    async def _embed(self, text: str, generate: bool) -> list[float] | None:
        if not generate or not self._provider.is_enabled():
            return None
        try:
            return await self._provider.generate(text, TaskType.DOCUMENT)
        except Exception as e:
            # A raising provider leaves the row unembedded
            logger.error(f"{__name__}:_embed - Embedding failed: {type(e).__name__}: {e}")
            return None

    def _embedding_fields(self, embedding: list[float] | None) -> dict[str, Any]:
        if embedding is None:
            return {"embedding": None, "model": None, "dimensions": None}
        return {
            "embedding": embedding,
            "model": self._provider.model_name,
            "dimensions": len(embedding),
        }

    async def store_document(
        self,
        content: FetchedContent,
        generate_embeddings: bool = True,
        chunk_large_documents: bool = True,
        source_type: str | None = None,
        source_domain: str | None = None,
    ) -> list[UUID]:
        """
        Store one fetched document.

        Args:
            content: Fetched page
            generate_embeddings: Embed the document or its chunks
            chunk_large_documents: Split documents above the chunk threshold
            source_type: Overrides the default "blog"
            source_domain: Overrides the source derived from the URL host

        Returns:
            list[UUID]: The parent ID first, then chunk IDs in order

        Raises:
            DocumentProcessingError: If the write fails
        """
        source_type = source_type or DEFAULT_SOURCE_TYPE
        common = {
            "url": content.url,
            "source": source_domain or extract_domain(content.url),
            "source_type": source_type,
            "language": resolve_language(content.metadata, source_type),
        }

        should_chunk = chunk_large_documents and len(content.content) > self._chunk_threshold
        chunks = (
            chunk_content(content.content, self._chunk_size, self._chunk_overlap)
            if should_chunk
            else []
        )

        # Vectors are generated before the transaction opens
        if chunks:
            vectors = [await self._embed(chunk.content, generate_embeddings) for chunk in chunks]
            document_vector = None
        else:
            vectors = []
            document_vector = await self._embed(content.content, generate_embeddings)

        try:
            async with self._session_factory() as session:
                parent = await self._crud.create(
                    session,
                    title=content.title,
                    content=content.content,
                    summary=content.summary,
                    doc_metadata=(
                        {**content.metadata, "chunkCount": len(chunks)}
                        if chunks
                        else dict(content.metadata)
                    ),
                    **self._embedding_fields(document_vector),
                    **common,
                )
                document_ids = [parent.id]

                for chunk, vector in zip(chunks, vectors):
                    row = await self._crud.create(
                        session,
                        title=f"{content.title} (Part {chunk.chunk_index + 1})",
                        content=chunk.content,
                        parent_id=parent.id,
                        chunk_index=chunk.chunk_index,
                        chunk_size=chunk.chunk_size,
                        total_chunks=chunk.total_chunks,
                        doc_metadata={
                            **content.metadata,
                            "isChunk": True,
                            "parentTitle": content.title,
                        },
                        **self._embedding_fields(vector),
                        **common,
                    )
                    document_ids.append(row.id)

                await session.commit()
        except SQLAlchemyError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:store_document - Write failed",
                e,
                url=content.url,
                chunks=len(chunks),
            )
            raise DocumentProcessingError(
                f"Storage failed: {e}", document_id=content.url
            ) from e

        embedded = sum(v is not None for v in vectors) + (document_vector is not None)
        logger.info(
            f"{__name__}:store_document - Stored {content.url} as {len(document_ids)} row(s), "
            f"{embedded} embedded"
        )
        return document_ids

    async def filter_existing_urls(self, urls: list[str]) -> list[str]:
        """
        Drop URLs already stored as parent documents, keeping input order.

        Args:
            urls: Candidate URLs

        Returns:
            list[str]: URLs not yet ingested
        """
        async with self._session_factory() as session:
            existing = await self._crud.get_existing_parent_urls(session, urls)
        return [url for url in urls if url not in existing]

    async def get_ingestion_stats(self) -> IngestionStats:
        """Return document, chunk and embedding counts for the store."""
        async with self._session_factory() as session:
            total_documents = await self._crud.count_parents(session)
            total_chunks = await self._crud.count_chunks(session)
            by_source = await self._crud.count_parents_by_source(session)
            with_embeddings = await self._crud.count_with_embeddings(session)
            last_ingestion = await self._crud.latest_parent_created_at(session)

        return IngestionStats(
            total_documents=total_documents,
            total_chunks=total_chunks,
            documents_by_source=[SourceCount(source=s, count=n) for s, n in by_source],
            documents_with_embeddings=with_embeddings,
            last_ingestion_date=last_ingestion,
        )
