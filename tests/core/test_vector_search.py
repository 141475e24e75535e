"""
Test suite for the vector search branch against in-memory SQLite.

System role: Verification of semantic search scoring and thresholds
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from knowledge_retrieval.boundary.db.CRUD.knowledge_document_crud import KnowledgeDocumentCRUD
from knowledge_retrieval.boundary.embeddings import FakeEmbeddingProvider
from knowledge_retrieval.core.exceptions import DimensionMismatchError, StoreQueryError
from knowledge_retrieval.core.retrieval import VectorSearch
from knowledge_retrieval.models.knowledge import SearchFilters

QUERY = "game monetization"


def _vector(values: list[float]) -> dict:
    return {"embedding": values, "model": "fake-embedding", "dimensions": len(values)}


@pytest.fixture
def provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider(dimensions=2, vectors={QUERY: [1.0, 0.0]})


class TestVectorSearch:
    """Test suite for VectorSearch."""

    @pytest.mark.asyncio
    async def test_should_keep_matches_at_or_above_threshold(
        self, add_rows, session_factory, provider
    ) -> None:
        # Arrange
        await add_rows(
            {"title": "exact", **_vector([2.0, 0.0])},
            {"title": "close", **_vector([0.9, 0.1])},
            {"title": "orthogonal", **_vector([0.0, 1.0])},
            {"title": "no vector"},
        )
        search = VectorSearch(session_factory, provider)

        # Act
        results = await search.search(QUERY, limit=5, threshold=0.8)

        # Assert
        assert [d.title for d in results] == ["exact", "close"]
        assert results[0].similarity == pytest.approx(1.0)
        assert all(d.similarity >= 0.8 for d in results)
        assert provider.calls == [(QUERY, "RETRIEVAL_QUERY")]

    @pytest.mark.asyncio
    async def test_threshold_zero_should_admit_everything_non_negative(
        self, add_rows, session_factory, provider
    ) -> None:
        await add_rows({"title": "a", **_vector([1.0, 0.0])}, {"title": "b", **_vector([0.0, 1.0])})
        search = VectorSearch(session_factory, provider)

        results = await search.search(QUERY, limit=5, threshold=0.0)

        assert [d.title for d in results] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_should_truncate_to_limit(self, add_rows, session_factory, provider) -> None:
        await add_rows(*[{"title": f"doc {i}", **_vector([1.0, i * 0.01])} for i in range(5)])
        search = VectorSearch(session_factory, provider)

        results = await search.search(QUERY, limit=2, threshold=0.5)

        assert [d.title for d in results] == ["doc 0", "doc 1"]

    @pytest.mark.asyncio
    async def test_filters_should_restrict_candidates(self, add_rows, session_factory, provider) -> None:
        await add_rows(
            {"title": "blog", "source_type": "blog", **_vector([1.0, 0.0])},
            {"title": "doc", "source_type": "document", **_vector([1.0, 0.0])},
        )
        search = VectorSearch(session_factory, provider)

        results = await search.search(QUERY, SearchFilters(source_type="document"), limit=5, threshold=0.8)

        assert [d.title for d in results] == ["doc"]

    @pytest.mark.asyncio
    async def test_unavailable_embedding_should_return_empty(self, add_rows, session_factory) -> None:
        await add_rows({"title": "a", **_vector([1.0, 0.0])})
        search = VectorSearch(session_factory, FakeEmbeddingProvider(dimensions=2, enabled=False))

        assert await search.search(QUERY) == []

    @pytest.mark.asyncio
    async def test_dimension_mismatch_should_raise(self, add_rows, session_factory, provider) -> None:
        await add_rows({"title": "three dims", **_vector([1.0, 0.0, 0.0])})
        search = VectorSearch(session_factory, provider)

        with pytest.raises(DimensionMismatchError):
            await search.search(QUERY, threshold=0.0)

    @pytest.mark.asyncio
    async def test_store_error_should_raise_store_query_error(self, session_factory, provider) -> None:
        crud = MagicMock(spec=KnowledgeDocumentCRUD)
        crud.get_embedded_candidates = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down")))
        search = VectorSearch(session_factory, provider, crud=crud)

        with pytest.raises(StoreQueryError) as exc_info:
            await search.search(QUERY)

        assert exc_info.value.operation == "vector_search"
