"""
Lexical (full-text) search over the knowledge store.

Matches with PostgreSQL to_tsvector/plainto_tsquery over title and content
and ranks with ts_rank. Store errors are raised as StoreQueryError so the
retrieval engine can decide whether to degrade.

Dependencies: sqlalchemy, knowledge_retrieval.boundary.db
System role: Keyword branch of hybrid retrieval
"""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from knowledge_retrieval.boundary.db.CRUD.knowledge_document_crud import (
    KnowledgeDocumentCRUD,
    knowledge_document_crud,
)
from knowledge_retrieval.boundary.db.models.knowledge_document_model import KnowledgeDocumentModel
from knowledge_retrieval.core.exceptions import StoreQueryError
from knowledge_retrieval.core.retrieval.search_options import DEFAULT_SEARCH_OPTIONS
from knowledge_retrieval.models.knowledge import KnowledgeDocument, SearchFilters

logger = logging.getLogger(__name__)


def _to_document(row: KnowledgeDocumentModel, rank: float) -> KnowledgeDocument:
    return KnowledgeDocument.model_validate(row).model_copy(update={"rank": rank})


class LexicalSearch:
    """Full-text search; each call opens its own session."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        crud: KnowledgeDocumentCRUD = knowledge_document_crud,
    ) -> None:
        self._session_factory = session_factory
        self._crud = crud

    async def search(
        self,
        query: str,
        filters: SearchFilters | None = None,
        limit: int = DEFAULT_SEARCH_OPTIONS.limit,
    ) -> list[KnowledgeDocument]:
        """
        Rank documents matching query, best first.

        Args:
            query: Free text; blank queries return [] without a store call
            filters: Conjunctive source/type/date filters
            limit: Maximum number of documents

        Returns:
            list[KnowledgeDocument]: Matches annotated with rank

        Raises:
            StoreQueryError: If the store query fails
        """
        if not query or not query.strip():
            return []

        try:
            async with self._session_factory() as session:
                rows = await self._crud.full_text_search(session, query, filters, limit)
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:search - Full-text query failed: {type(e).__name__}: {e}")
            raise StoreQueryError(f"Lexical search failed: {e}", operation="lexical_search") from e

        logger.debug(f"{__name__}:search - {len(rows)} matches for query_len={len(query)}")
        return [_to_document(row, rank) for row, rank in rows]

    async def recent(
        self,
        query: str,
        filters: SearchFilters | None = None,
        limit: int = DEFAULT_SEARCH_OPTIONS.limit,
        default_days: int = DEFAULT_SEARCH_OPTIONS.default_date_range_days,
        now: datetime | None = None,
    ) -> list[KnowledgeDocument]:
        """
        Full-text matches from a recent window, newest first.

        Without filters.date_from the window starts default_days before now.

        Args:
            query: Free text
            filters: date_from/date_to bound the window
            limit: Maximum number of documents
            default_days: Window length when no date_from is given
            now: Reference time (defaults to current UTC time)

        Returns:
            list[KnowledgeDocument]: Matches ordered by created_at desc, then rank

        Raises:
            StoreQueryError: If the store query fails
        """
        if not query or not query.strip():
            return []

        filters = filters or SearchFilters()
        date_from = filters.date_from
        if date_from is None:
            date_from = (now or datetime.now(timezone.utc)) - timedelta(days=default_days)

        try:
            async with self._session_factory() as session:
                rows = await self._crud.recent_text_search(
                    session, query, date_from, filters.date_to, limit
                )
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:recent - Full-text query failed: {type(e).__name__}: {e}")
            raise StoreQueryError(f"Recent search failed: {e}", operation="recent_search") from e

        return [_to_document(row, rank) for row, rank in rows]
