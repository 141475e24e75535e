"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory async database, document builders, offline embedding provider
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    """Reference time used for recency scoring in tests."""
    return FIXED_NOW


@pytest.fixture
async def async_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine shared by every session in the test (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from knowledge_retrieval.boundary.db.base import Base
    import knowledge_retrieval.boundary.db.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine):
    """Session factory bound to the in-memory engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_async_db(session_factory):
    """
    Create a session on the in-memory database.

    Yields:
        AsyncSession: Test database session, rolled back afterwards
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_document() -> Callable[..., Any]:
    """
    Build KnowledgeDocument instances with sensible defaults.

    Returns:
        Callable: factory(**overrides) -> KnowledgeDocument
    """
    from knowledge_retrieval.models.knowledge import KnowledgeDocument

    def _make(**overrides: Any) -> KnowledgeDocument:
        fields = {
            "id": uuid.uuid4(),
            "title": "Untitled",
            "content": "Body text.",
            "source": "blog.aloha-corp.com",
            "source_type": "blog",
            "created_at": FIXED_NOW - timedelta(days=365),
        }
        fields.update(overrides)
        return KnowledgeDocument(**fields)

    return _make


@pytest.fixture
def fake_provider():
    """Offline embedding provider with 8-dimensional projections."""
    from knowledge_retrieval.boundary.embeddings import FakeEmbeddingProvider

    return FakeEmbeddingProvider(dimensions=8)


@pytest.fixture
def add_rows(session_factory):
    """
    Insert KnowledgeDocumentModel rows and commit.

    Returns:
        Callable: await add_rows(dict, ...) -> list of model instances
    """
    from knowledge_retrieval.boundary.db.models import KnowledgeDocumentModel

    async def _add(*rows: dict[str, Any]) -> list[Any]:
        defaults = {
            "content": "Body text.",
            "source": "blog.aloha-corp.com",
            "source_type": "blog",
        }
        instances = [KnowledgeDocumentModel(**{**defaults, **row}) for row in rows]
        async with session_factory() as session:
            session.add_all(instances)
            await session.commit()
        return instances

    return _add
