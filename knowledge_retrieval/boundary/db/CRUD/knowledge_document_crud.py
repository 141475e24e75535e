"""
Knowledge document CRUD operations.

Extends BaseCRUD with the queries behind lexical search (PostgreSQL
full-text ranking), vector search candidate loading, duplicate URL
detection and ingestion statistics.

Dependencies: sqlalchemy, knowledge_retrieval.boundary.db.models
System role: Knowledge store persistence operations
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, cast, func, select
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_retrieval.boundary.db.CRUD.base_crud import BaseCRUD
from knowledge_retrieval.boundary.db.models.knowledge_document_model import KnowledgeDocumentModel
from knowledge_retrieval.models.knowledge import SearchFilters


class KnowledgeDocumentCRUD(BaseCRUD[KnowledgeDocumentModel]):
    """
    CRUD operations for KnowledgeDocumentModel.

    Parents and chunks are searched alike; duplicate detection and
    document counts consider parents only.
    """

    def __init__(self, text_search_config: str = "english") -> None:
        super().__init__(KnowledgeDocumentModel)
        self.text_search_config = text_search_config

    @staticmethod
    def apply_filters(stmt: Select, filters: SearchFilters | None) -> Select:
        """
        Add conjunctive source/type/date predicates to a statement.

        Args:
            stmt: Select over KnowledgeDocumentModel
            filters: Filters to apply; None or empty leaves stmt unchanged

        Returns:
            Select: Filtered statement
        """
        if filters is None:
            return stmt
        if filters.source:
            stmt = stmt.where(KnowledgeDocumentModel.source == filters.source)
        if filters.source_type:
            stmt = stmt.where(KnowledgeDocumentModel.source_type == filters.source_type)
        if filters.date_from:
            stmt = stmt.where(KnowledgeDocumentModel.created_at >= filters.date_from)
        if filters.date_to:
            stmt = stmt.where(KnowledgeDocumentModel.created_at <= filters.date_to)
        return stmt

    def _text_match(self, query: str):
        config = cast(self.text_search_config, REGCONFIG)
        document = func.to_tsvector(
            config,
            KnowledgeDocumentModel.title + " " + KnowledgeDocumentModel.content,
        )
        ts_query = func.plainto_tsquery(config, query)
        return document.op("@@")(ts_query), func.ts_rank(document, ts_query).label("rank")

    async def full_text_search(
        self,
        session: AsyncSession,
        query: str,
        filters: SearchFilters | None = None,
        limit: int = 10,
    ) -> list[tuple[KnowledgeDocumentModel, float]]:
        """
        Rank documents matching a plain-text query by ts_rank.

        Args:
            session: Async database session
            query: Free text, parsed with plainto_tsquery
            filters: Optional conjunctive filters
            limit: Maximum number of rows

        Returns:
            List of (document, rank) pairs, best first
        """
        match, rank = self._text_match(query)
        stmt = select(KnowledgeDocumentModel, rank).where(match)
        stmt = self.apply_filters(stmt, filters)
        stmt = stmt.order_by(rank.desc()).limit(limit)
        result = await session.execute(stmt)
        return [(row[0], float(row[1] or 0.0)) for row in result.all()]

    async def recent_text_search(
        self,
        session: AsyncSession,
        query: str,
        date_from: datetime,
        date_to: datetime | None = None,
        limit: int = 10,
    ) -> list[tuple[KnowledgeDocumentModel, float]]:
        """
        Full-text match restricted to a creation window, newest first.

        Args:
            session: Async database session
            query: Free text, parsed with plainto_tsquery
            date_from: created_at lower bound (inclusive)
            date_to: Optional created_at upper bound (inclusive)
            limit: Maximum number of rows

        Returns:
            List of (document, rank) pairs ordered by created_at desc, then rank
        """
        match, rank = self._text_match(query)
        stmt = select(KnowledgeDocumentModel, rank).where(
            match,
            KnowledgeDocumentModel.created_at >= date_from,
        )
        if date_to is not None:
            stmt = stmt.where(KnowledgeDocumentModel.created_at <= date_to)
        stmt = stmt.order_by(KnowledgeDocumentModel.created_at.desc(), rank.desc()).limit(limit)
        result = await session.execute(stmt)
        return [(row[0], float(row[1] or 0.0)) for row in result.all()]

    async def get_embedded_candidates(
        self,
        session: AsyncSession,
        filters: SearchFilters | None = None,
    ) -> Sequence[KnowledgeDocumentModel]:
        """
        Load every document that has an embedding and passes the filters.

        Args:
            session: Async database session
            filters: Optional conjunctive filters

        Returns:
            Sequence of KnowledgeDocumentModels with non-null embedding
        """
        stmt = select(KnowledgeDocumentModel).where(KnowledgeDocumentModel.embedding.is_not(None))
        stmt = self.apply_filters(stmt, filters)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_existing_parent_urls(
        self,
        session: AsyncSession,
        urls: list[str],
    ) -> set[str]:
        """Return the subset of urls already stored as parent documents."""
        if not urls:
            return set()
        stmt = select(KnowledgeDocumentModel.url).where(
            KnowledgeDocumentModel.url.in_(urls),
            KnowledgeDocumentModel.parent_id.is_(None),
        )
        result = await session.execute(stmt)
        return {url for url in result.scalars().all() if url}

    async def get_chunks(
        self,
        session: AsyncSession,
        parent_id: UUID,
    ) -> Sequence[KnowledgeDocumentModel]:
        """Return the chunks of a parent document in chunk order."""
        stmt = (
            select(KnowledgeDocumentModel)
            .where(KnowledgeDocumentModel.parent_id == parent_id)
            .order_by(KnowledgeDocumentModel.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_parents(self, session: AsyncSession) -> int:
        stmt = select(func.count(KnowledgeDocumentModel.id)).where(KnowledgeDocumentModel.parent_id.is_(None))
        return int((await session.execute(stmt)).scalar_one())

    async def count_chunks(self, session: AsyncSession) -> int:
        stmt = select(func.count(KnowledgeDocumentModel.id)).where(KnowledgeDocumentModel.parent_id.is_not(None))
        return int((await session.execute(stmt)).scalar_one())

    async def count_with_embeddings(self, session: AsyncSession) -> int:
        stmt = select(func.count(KnowledgeDocumentModel.id)).where(KnowledgeDocumentModel.embedding.is_not(None))
        return int((await session.execute(stmt)).scalar_one())

    async def count_parents_by_source(self, session: AsyncSession) -> list[tuple[str, int]]:
        """Return (source, parent count) pairs, largest first."""
        count = func.count(KnowledgeDocumentModel.id)
        stmt = (
            select(KnowledgeDocumentModel.source, count)
            .where(KnowledgeDocumentModel.parent_id.is_(None))
            .group_by(KnowledgeDocumentModel.source)
            .order_by(count.desc(), KnowledgeDocumentModel.source)
        )
        result = await session.execute(stmt)
        return [(source, int(n)) for source, n in result.all()]

    async def latest_parent_created_at(self, session: AsyncSession) -> datetime | None:
        stmt = select(func.max(KnowledgeDocumentModel.created_at)).where(
            KnowledgeDocumentModel.parent_id.is_(None)
        )
        return (await session.execute(stmt)).scalar_one_or_none()


knowledge_document_crud = KnowledgeDocumentCRUD()
