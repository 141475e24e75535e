"""
Test suite for KnowledgeIngestionService.

System role: Verification of the knowledge store writer
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from knowledge_retrieval.application.services import KnowledgeIngestionService
from knowledge_retrieval.application.services.knowledge_ingestion_service import (
    extract_domain,
    resolve_language,
)
from knowledge_retrieval.boundary.db.CRUD.knowledge_document_crud import (
    KnowledgeDocumentCRUD,
    knowledge_document_crud,
)
from knowledge_retrieval.boundary.embeddings import FakeEmbeddingProvider
from knowledge_retrieval.core.exceptions import DocumentProcessingError
from knowledge_retrieval.models.knowledge import FetchedContent


def _page(content: str, **overrides) -> FetchedContent:
    fields = {
        "url": "https://blog.aloha-corp.com/post",
        "title": "Live Ops Playbook",
        "content": content,
        "summary": "How to run live events.",
    }
    fields.update(overrides)
    return FetchedContent(**fields)


@pytest.fixture
def service(session_factory, fake_provider) -> KnowledgeIngestionService:
    return KnowledgeIngestionService(
        session_factory,
        fake_provider,
        chunk_size=200,
        chunk_overlap=20,
        chunk_threshold=300,
    )


class TestHelpers:
    """Test suite for module-level helpers."""

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://blog.aloha-corp.com/x", "blog.aloha-corp.com"),
            ("http://Docs.Example.io:8080/a", "docs.example.io"),
            ("not a url", "unknown"),
        ],
    )
    def test_extract_domain(self, url: str, expected: str) -> None:
        assert extract_domain(url) == expected

    def test_resolve_language(self) -> None:
        assert resolve_language({"language": "ja"}, "blog") == "ja"
        assert resolve_language({}, "newsletter") == "ko"
        assert resolve_language({}, "blog") == "en"


class TestStoreDocument:
    """Test suite for KnowledgeIngestionService.store_document()."""

    @pytest.mark.asyncio
    async def test_short_document_should_be_stored_whole_with_embedding(
        self, service, session_factory
    ) -> None:
        # Act
        ids = await service.store_document(_page("Short body about live events."))

        # Assert
        assert len(ids) == 1
        async with session_factory() as session:
            row = await knowledge_document_crud.get_by_id(session, ids[0])
        assert row.source == "blog.aloha-corp.com"
        assert row.source_type == "blog"
        assert row.language == "en"
        assert row.parent_id is None
        assert row.total_chunks is None
        assert row.dimensions == len(row.embedding) == 8
        assert row.model == "fake-embedding"

    @pytest.mark.asyncio
    async def test_long_document_should_be_stored_as_parent_and_chunks(
        self, service, session_factory
    ) -> None:
        # Arrange
        body = " ".join(f"Event number {i} drives engagement." for i in range(40))

        # Act
        ids = await service.store_document(_page(body, metadata={"author": "ops"}))

        # Assert
        parent_id, chunk_ids = ids[0], ids[1:]
        assert len(chunk_ids) > 1
        async with session_factory() as session:
            parent = await knowledge_document_crud.get_by_id(session, parent_id)
            chunks = await knowledge_document_crud.get_chunks(session, parent_id)

        assert parent.content == body
        assert parent.embedding is None
        assert parent.model is None
        assert parent.total_chunks is None
        assert parent.chunk_index is None
        assert parent.doc_metadata == {"author": "ops", "chunkCount": len(chunk_ids)}
        assert [c.id for c in chunks] == chunk_ids
        assert [c.chunk_index for c in chunks] == list(range(len(chunk_ids)))
        assert {c.total_chunks for c in chunks} == {len(chunk_ids)}
        assert chunks[0].title == "Live Ops Playbook (Part 1)"
        assert chunks[0].doc_metadata == {"author": "ops", "isChunk": True, "parentTitle": "Live Ops Playbook"}
        assert all(c.dimensions == len(c.embedding) for c in chunks)
        assert all(c.url == parent.url for c in chunks)

    @pytest.mark.asyncio
    async def test_chunking_can_be_disabled(self, service, session_factory) -> None:
        body = "word " * 200

        ids = await service.store_document(_page(body), chunk_large_documents=False)

        assert len(ids) == 1

    @pytest.mark.asyncio
    async def test_without_embeddings(self, service, session_factory) -> None:
        ids = await service.store_document(_page("Short body."), generate_embeddings=False)

        async with session_factory() as session:
            row = await knowledge_document_crud.get_by_id(session, ids[0])
        assert row.embedding is None
        assert row.dimensions is None

    @pytest.mark.asyncio
    async def test_disabled_provider_should_store_without_vectors(self, session_factory) -> None:
        service = KnowledgeIngestionService(session_factory, FakeEmbeddingProvider(enabled=False))

        ids = await service.store_document(_page("Short body."))

        async with session_factory() as session:
            row = await knowledge_document_crud.get_by_id(session, ids[0])
        assert row.embedding is None

    @pytest.mark.asyncio
    async def test_overrides_and_newsletter_language(self, service, session_factory) -> None:
        ids = await service.store_document(
            _page("Weekly digest."),
            source_type="newsletter",
            source_domain="digest",
        )

        async with session_factory() as session:
            row = await knowledge_document_crud.get_by_id(session, ids[0])
        assert row.source == "digest"
        assert row.source_type == "newsletter"
        assert row.language == "ko"

    @pytest.mark.asyncio
    async def test_write_failure_should_raise(self, session_factory, fake_provider) -> None:
        crud = MagicMock(spec=KnowledgeDocumentCRUD)
        crud.create = AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception("duplicate")))
        service = KnowledgeIngestionService(session_factory, fake_provider, crud=crud)

        with pytest.raises(DocumentProcessingError) as exc_info:
            await service.store_document(_page("Body."))

        assert exc_info.value.message.startswith("Storage failed:")

    def test_overlap_must_be_smaller_than_size(self, session_factory, fake_provider) -> None:
        with pytest.raises(ValueError):
            KnowledgeIngestionService(session_factory, fake_provider, chunk_size=100, chunk_overlap=100)


class TestIngestionQueries:
    """Test suite for duplicate detection and statistics."""

    @pytest.mark.asyncio
    async def test_filter_existing_urls(self, service) -> None:
        await service.store_document(_page("Body.", url="https://blog.aloha-corp.com/old"))

        fresh = await service.filter_existing_urls(
            ["https://blog.aloha-corp.com/new", "https://blog.aloha-corp.com/old", "https://other.io/a"]
        )

        assert fresh == ["https://blog.aloha-corp.com/new", "https://other.io/a"]

    @pytest.mark.asyncio
    async def test_stats(self, service) -> None:
        # Arrange
        body = " ".join(f"Event number {i} drives engagement." for i in range(40))
        chunk_ids = (await service.store_document(_page(body, url="https://blog.aloha-corp.com/long")))[1:]
        await service.store_document(_page("Short.", url="https://other.io/short"))

        # Act
        stats = await service.get_ingestion_stats()

        # Assert
        assert stats.total_documents == 2
        assert stats.total_chunks == len(chunk_ids)
        assert stats.documents_with_embeddings == len(chunk_ids) + 1
        assert {s.source: s.count for s in stats.documents_by_source} == {
            "blog.aloha-corp.com": 1,
            "other.io": 1,
        }
        assert stats.last_ingestion_date is not None
