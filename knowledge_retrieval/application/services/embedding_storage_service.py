"""
Embedding storage service.

Generates embeddings through the configured provider and persists them as
stand-alone records that callers can fetch, list and delete by ID.

Dependencies: sqlalchemy, knowledge_retrieval.boundary
System role: Embedding generation and record lifecycle
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from knowledge_retrieval.boundary.db.CRUD.embedding_crud import EmbeddingCRUD, embedding_crud
from knowledge_retrieval.boundary.embeddings import EmbeddingProvider, TaskType, resolve_task_type
from knowledge_retrieval.core.exceptions import EmbeddingError, EmbeddingStorageError
from knowledge_retrieval.models.embedding import (
    EmbeddingRecord,
    EmbeddingRecordWithVector,
    EmbeddingResult,
)

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50


class EmbeddingStorageService:
    """
    Embedding generation plus record persistence.

    Each operation opens and commits its own session. Without a session
    factory the service still generates vectors but stores nothing.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None,
        provider: EmbeddingProvider,
        crud: EmbeddingCRUD = embedding_crud,
    ) -> None:
        """
        Args:
            session_factory: Session factory for the embeddings table, or None
            provider: Embedding provider
            crud: Embedding CRUD operations
        """
        self._session_factory = session_factory
        self._provider = provider
        self._crud = crud

    @property
    def model_name(self) -> str:
        return self._provider.model_name

    @property
    def storage_enabled(self) -> bool:
        return self._session_factory is not None

    def is_enabled(self) -> bool:
        """True when the provider can generate embeddings."""
        return self._provider.is_enabled()

    def _require_storage(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise EmbeddingStorageError("Embedding storage is not configured")
        return self._session_factory

    async def generate_embedding(
        self,
        text: str,
        task_type: TaskType | str | None = None,
    ) -> list[float] | None:
        """Return the embedding of text, or None when the provider is unavailable."""
        return await self._provider.generate(text, task_type)

    async def save_embedding(
        self,
        text: str,
        embedding: list[float],
        model: str,
        task_type: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> EmbeddingRecord:
        """
        Persist an embedding record.

        Args:
            text: Source text
            embedding: Vector
            model: Model that produced the vector
            task_type: Gemini task type used
            metadata: Caller metadata

        Returns:
            EmbeddingRecord: Stored record without its vector

        Raises:
            EmbeddingStorageError: If the insert fails
        """
        session_factory = self._require_storage()
        try:
            async with session_factory() as session:
                row = await self._crud.create(
                    session,
                    text=text,
                    embedding=list(embedding),
                    model=model,
                    task_type=task_type,
                    dimensions=len(embedding),
                    record_metadata=metadata or {},
                )
                record = EmbeddingRecord.model_validate(row)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:save_embedding - Insert failed: {type(e).__name__}: {e}")
            raise EmbeddingStorageError(f"Failed to save embedding: {e}") from e

        logger.info(f"{__name__}:save_embedding - Stored embedding id={record.id} dims={record.dimensions}")
        return record

    async def _load(self, embedding_id: UUID):
        session_factory = self._require_storage()
        try:
            async with session_factory() as session:
                return await self._crud.get_by_id(session, embedding_id)
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:_load - Query failed: {type(e).__name__}: {e}")
            raise EmbeddingStorageError(
                f"Failed to load embedding: {e}", embedding_id=str(embedding_id)
            ) from e

    async def get_embedding(self, embedding_id: UUID) -> EmbeddingRecord | None:
        """Return the record without its vector, or None if missing."""
        row = await self._load(embedding_id)
        return EmbeddingRecord.model_validate(row) if row else None

    async def get_embedding_vector(self, embedding_id: UUID) -> list[float] | None:
        """Return only the vector, or None if missing."""
        row = await self._load(embedding_id)
        return list(row.embedding) if row else None

    async def get_embedding_with_vector(self, embedding_id: UUID) -> EmbeddingRecordWithVector | None:
        """Return the record including its vector, or None if missing."""
        row = await self._load(embedding_id)
        return EmbeddingRecordWithVector.model_validate(row) if row else None

    async def delete_embedding(self, embedding_id: UUID) -> bool:
        """
        Delete a record.

        Returns:
            bool: True if a record was deleted; False if missing or the delete failed
        """
        if self._session_factory is None:
            return False
        try:
            async with self._session_factory() as session:
                deleted = await self._crud.delete_by_id(session, embedding_id)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(
                f"{__name__}:delete_embedding - Delete failed id={embedding_id}: {type(e).__name__}: {e}"
            )
            return False
        return deleted

    async def list_embeddings(
        self,
        model: str | None = None,
        task_type: str | None = None,
        limit: int = DEFAULT_LIST_LIMIT,
        offset: int = 0,
    ) -> list[EmbeddingRecord]:
        """
        List records newest first, optionally filtered by model and task type.

        Raises:
            EmbeddingStorageError: If the query fails
        """
        session_factory = self._require_storage()
        try:
            async with session_factory() as session:
                rows = await self._crud.list_filtered(session, model, task_type, limit, offset)
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:list_embeddings - Query failed: {type(e).__name__}: {e}")
            raise EmbeddingStorageError(f"Failed to list embeddings: {e}") from e
        return [EmbeddingRecord.model_validate(row) for row in rows]

    async def create_embedding(
        self,
        text: str,
        task_type: str | None = None,
        return_vector: bool = False,
        metadata: dict[str, Any] | None = None,
    ) -> EmbeddingResult:
        """
        Generate an embedding and store it when storage is available.

        A storage failure does not fail the call: the vector is returned
        with stored=False and the storage error message.

        Args:
            text: Text to embed
            task_type: Task type hint or raw Gemini task type
            return_vector: Include the vector in the result
            metadata: Stored with the record

        Returns:
            EmbeddingResult

        Raises:
            EmbeddingError: If no embedding could be generated
        """
        gemini_task_type = resolve_task_type(task_type)
        vector = await self._provider.generate(text, gemini_task_type)
        if vector is None:
            reason = "provider disabled" if not self.is_enabled() else "provider returned no embedding"
            raise EmbeddingError(f"Failed to generate embedding: {reason}")

        result = EmbeddingResult(
            model=self.model_name,
            dimensions=len(vector),
            task_type=gemini_task_type,
            text=text,
            embedding=vector,
        )
        if not self.storage_enabled:
            return result

        try:
            record = await self.save_embedding(
                text=text,
                embedding=vector,
                model=self.model_name,
                task_type=gemini_task_type,
                metadata=metadata,
            )
        except EmbeddingStorageError as e:
            return result.model_copy(
                update={
                    "storage_error": e.message,
                    "embedding": vector if return_vector else None,
                }
            )

        return result.model_copy(
            update={
                "embedding_id": record.id,
                "stored": True,
                "created_at": record.created_at,
                "embedding": vector if return_vector else None,
            }
        )
