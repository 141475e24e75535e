"""
Embedding record CRUD operations.

Dependencies: sqlalchemy, knowledge_retrieval.boundary.db.models
System role: Embedding record persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_retrieval.boundary.db.CRUD.base_crud import BaseCRUD
from knowledge_retrieval.boundary.db.models.embedding_model import EmbeddingModel


class EmbeddingCRUD(BaseCRUD[EmbeddingModel]):
    """CRUD operations for EmbeddingModel with model/task-type listing."""

    def __init__(self) -> None:
        super().__init__(EmbeddingModel)

    async def list_filtered(
        self,
        session: AsyncSession,
        model: str | None = None,
        task_type: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[EmbeddingModel]:
        """
        List embedding records, newest first.

        Args:
            session: Async database session
            model: Only records generated by this model
            task_type: Only records generated with this task type
            limit: Page size
            offset: Rows to skip

        Returns:
            Sequence of EmbeddingModels
        """
        stmt = select(EmbeddingModel)
        if model:
            stmt = stmt.where(EmbeddingModel.model == model)
        if task_type:
            stmt = stmt.where(EmbeddingModel.task_type == task_type)
        stmt = stmt.order_by(EmbeddingModel.created_at.desc()).offset(offset).limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


embedding_crud = EmbeddingCRUD()
