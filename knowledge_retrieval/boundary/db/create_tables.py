"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, knowledge_retrieval.configs
System role: Database schema initialization

Usage:
    python -m knowledge_retrieval.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from knowledge_retrieval.boundary.db.base import Base
from knowledge_retrieval.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from knowledge_retrieval.boundary.db.models import EmbeddingModel, KnowledgeDocumentModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create knowledge_documents and embeddings tables.

    Idempotent: existing tables are left unchanged.

    Args:
        engine: Engine to use; defaults to the configured PostgreSQL engine

    Raises:
        SQLAlchemyError: If the connection or DDL fails
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - Tables created: {sorted(Base.metadata.tables)}")


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.

    Args:
        engine: Engine to use; defaults to the configured PostgreSQL engine
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info(f"{__name__}:drop_all_tables - All tables dropped")


if __name__ == "__main__":
    from knowledge_retrieval.observability import configure_logging

    configure_logging()
    asyncio.run(create_all_tables())
