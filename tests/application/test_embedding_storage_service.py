"""
Test suite for EmbeddingStorageService.

Runs against in-memory SQLite with the offline embedding provider.

System role: Verification of embedding generation and record lifecycle
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from knowledge_retrieval.application.services import EmbeddingStorageService
from knowledge_retrieval.boundary.db.CRUD.embedding_crud import EmbeddingCRUD
from knowledge_retrieval.boundary.embeddings import FakeEmbeddingProvider
from knowledge_retrieval.core.exceptions import EmbeddingError, EmbeddingStorageError


@pytest.fixture
def service(session_factory, fake_provider) -> EmbeddingStorageService:
    return EmbeddingStorageService(session_factory, fake_provider)


class TestCreateEmbedding:
    """Test suite for EmbeddingStorageService.create_embedding()."""

    @pytest.mark.asyncio
    async def test_should_store_and_return_id(self, service, fake_provider) -> None:
        # Act
        result = await service.create_embedding("battle pass pricing", task_type="similarity")

        # Assert
        assert result.success is True
        assert result.stored is True
        assert result.embedding_id is not None
        assert result.created_at is not None
        assert result.embedding is None
        assert result.dimensions == 8
        assert result.task_type == "SEMANTIC_SIMILARITY"
        assert result.model == "fake-embedding"
        assert fake_provider.calls == [("battle pass pricing", "SEMANTIC_SIMILARITY")]

    @pytest.mark.asyncio
    async def test_return_vector_should_include_embedding(self, service) -> None:
        result = await service.create_embedding("hello", return_vector=True)

        assert result.embedding is not None
        assert len(result.embedding) == 8
        assert result.task_type == "RETRIEVAL_DOCUMENT"

    @pytest.mark.asyncio
    async def test_disabled_provider_should_raise(self, session_factory) -> None:
        service = EmbeddingStorageService(session_factory, FakeEmbeddingProvider(enabled=False))

        with pytest.raises(EmbeddingError) as exc_info:
            await service.create_embedding("hello")

        assert exc_info.value.message == "Failed to generate embedding: provider disabled"

    @pytest.mark.asyncio
    async def test_without_storage_should_return_vector(self, fake_provider) -> None:
        service = EmbeddingStorageService(None, fake_provider)

        result = await service.create_embedding("hello")

        assert result.stored is False
        assert result.embedding_id is None
        assert len(result.embedding) == 8
        assert service.storage_enabled is False

    @pytest.mark.asyncio
    async def test_storage_failure_should_not_fail_call(self, session_factory, fake_provider) -> None:
        crud = MagicMock(spec=EmbeddingCRUD)
        crud.create = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("disk full")))
        service = EmbeddingStorageService(session_factory, fake_provider, crud=crud)

        result = await service.create_embedding("hello")

        assert result.success is True
        assert result.stored is False
        assert result.storage_error.startswith("Failed to save embedding:")
        assert result.embedding is None


class TestEmbeddingRecords:
    """Test suite for reading, listing and deleting records."""

    @pytest.mark.asyncio
    async def test_get_with_and_without_vector(self, service) -> None:
        # Arrange
        record = await service.save_embedding(
            "text", [0.1, 0.2, 0.3], "model-a", "RETRIEVAL_QUERY", {"tag": "x"}
        )

        # Act
        plain = await service.get_embedding(record.id)
        full = await service.get_embedding_with_vector(record.id)
        vector = await service.get_embedding_vector(record.id)

        # Assert
        assert plain.text == "text"
        assert plain.metadata == {"tag": "x"}
        assert plain.dimensions == 3
        assert not hasattr(plain, "embedding")
        assert full.embedding == [0.1, 0.2, 0.3]
        assert vector == [0.1, 0.2, 0.3]

    @pytest.mark.asyncio
    async def test_missing_record_should_return_none(self, service) -> None:
        missing = uuid.uuid4()

        assert await service.get_embedding(missing) is None
        assert await service.get_embedding_with_vector(missing) is None
        assert await service.get_embedding_vector(missing) is None

    @pytest.mark.asyncio
    async def test_list_should_filter_and_page(self, service) -> None:
        await service.save_embedding("a", [1.0], "model-a", "RETRIEVAL_QUERY")
        await service.save_embedding("b", [1.0], "model-a", "CLUSTERING")
        await service.save_embedding("c", [1.0], "model-b", "RETRIEVAL_QUERY")

        by_model = await service.list_embeddings(model="model-a")
        by_task = await service.list_embeddings(task_type="RETRIEVAL_QUERY")
        first_page = await service.list_embeddings(limit=2)
        second_page = await service.list_embeddings(limit=2, offset=2)

        assert {r.text for r in by_model} == {"a", "b"}
        assert {r.text for r in by_task} == {"a", "c"}
        assert len(first_page) == 2
        assert len(second_page) == 1

    @pytest.mark.asyncio
    async def test_delete(self, service) -> None:
        record = await service.save_embedding("gone", [1.0], "model-a")

        assert await service.delete_embedding(record.id) is True
        assert await service.get_embedding(record.id) is None
        assert await service.delete_embedding(record.id) is False

    @pytest.mark.asyncio
    async def test_operations_without_storage(self, fake_provider) -> None:
        service = EmbeddingStorageService(None, fake_provider)

        assert await service.delete_embedding(uuid.uuid4()) is False
        with pytest.raises(EmbeddingStorageError):
            await service.get_embedding(uuid.uuid4())
