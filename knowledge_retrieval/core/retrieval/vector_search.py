"""
Vector (embedding) search over the knowledge store.

Embeds the query with the RETRIEVAL_QUERY task type, scores every stored
embedding that passes the filters by cosine similarity, and keeps the
matches at or above the threshold.

Dependencies: sqlalchemy, numpy, knowledge_retrieval.boundary
System role: Semantic branch of hybrid retrieval
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from knowledge_retrieval.boundary.db.CRUD.knowledge_document_crud import (
    KnowledgeDocumentCRUD,
    knowledge_document_crud,
)
from knowledge_retrieval.boundary.embeddings import EmbeddingProvider, TaskType
from knowledge_retrieval.core.exceptions import StoreQueryError
from knowledge_retrieval.core.retrieval.search_options import DEFAULT_SEARCH_OPTIONS
from knowledge_retrieval.core.retrieval.similarity import cosine_similarity
from knowledge_retrieval.models.knowledge import KnowledgeDocument, SearchFilters

logger = logging.getLogger(__name__)


class VectorSearch:
    """Cosine similarity search; each call opens its own session."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        embedding_provider: EmbeddingProvider,
        crud: KnowledgeDocumentCRUD = knowledge_document_crud,
    ) -> None:
        self._session_factory = session_factory
        self._provider = embedding_provider
        self._crud = crud

    def is_enabled(self) -> bool:
        """True when the provider can embed queries, so the branch will touch the store."""
        return self._provider.is_enabled()

    async def search(
        self,
        query: str,
        filters: SearchFilters | None = None,
        limit: int = DEFAULT_SEARCH_OPTIONS.limit,
        threshold: float = DEFAULT_SEARCH_OPTIONS.threshold,
    ) -> list[KnowledgeDocument]:
        """
        Return documents whose embedding is close to the query embedding.

        Args:
            query: Free text
            filters: Conjunctive source/type/date filters
            limit: Maximum number of documents
            threshold: Minimum cosine similarity (inclusive)

        Returns:
            list[KnowledgeDocument]: Matches with similarity set, best first;
            [] when the query cannot be embedded

        Raises:
            StoreQueryError: If loading candidates fails
            DimensionMismatchError: If a stored vector differs in length from the query vector
        """
        if not query or not query.strip():
            return []

        query_vector = await self._provider.generate(query, TaskType.SEARCH_QUERY)
        if query_vector is None:
            logger.warning(
                f"{__name__}:search - Query embedding unavailable, vector branch returns no results"
            )
            return []

        try:
            async with self._session_factory() as session:
                candidates = await self._crud.get_embedded_candidates(session, filters)
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:search - Candidate load failed: {type(e).__name__}: {e}")
            raise StoreQueryError(f"Vector search failed: {e}", operation="vector_search") from e

        scored = []
        for candidate in candidates:
            if not isinstance(candidate.embedding, list) or not candidate.embedding:
                continue
            similarity = cosine_similarity(query_vector, candidate.embedding)
            if similarity >= threshold:
                scored.append((similarity, candidate))

        scored.sort(key=lambda item: item[0], reverse=True)
        logger.debug(
            f"{__name__}:search - {len(scored)}/{len(candidates)} candidates at or above {threshold}"
        )
        return [
            KnowledgeDocument.model_validate(row).model_copy(update={"similarity": similarity})
            for similarity, row in scored[:limit]
        ]
