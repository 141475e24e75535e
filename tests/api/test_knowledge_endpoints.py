"""
Test suite for knowledge retrieval endpoints.

System role: Verification of the knowledge HTTP API
"""

from datetime import datetime, timezone

from knowledge_retrieval.models.knowledge import (
    IngestionStats,
    KnowledgeSearchError,
    KnowledgeSearchResponse,
    KnowledgeSearchResult,
    SourceCount,
)

CREATED = datetime(2025, 6, 1, tzinfo=timezone.utc)


class TestSearchEndpoint:
    """Test suite for POST /knowledge/search."""

    def test_should_return_results(self, client, mock_retriever) -> None:
        # Arrange
        mock_retriever.search_tool.return_value = KnowledgeSearchResponse(
            message="Found 1 relevant document(s) from knowledge base",
            query="game monetization",
            results=[
                KnowledgeSearchResult(
                    title="F2P Monetization Guide",
                    content="Battle passes...",
                    url="https://blog.aloha-corp.com/f2p",
                    source="blog.aloha-corp.com",
                    source_type="blog",
                    similarity=0.93,
                    created_at=CREATED,
                )
            ],
            context="[Document 1 (relevance: 93.0%)] ...",
            search_type="hybrid",
            db_results_count=1,
        )

        # Act
        response = client.post(
            "/api/v1/knowledge/search",
            json={"query": "game monetization", "limit": 3, "search_mode": "hybrid"},
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["results"][0]["title"] == "F2P Monetization Guide"
        assert body["db_results_count"] == 1
        request = mock_retriever.search_tool.call_args.args[0]
        assert request.limit == 3

    def test_errors_should_be_reported_in_body(self, client, mock_retriever) -> None:
        mock_retriever.search_tool.return_value = KnowledgeSearchError(
            error="Invalid search mode: fuzzy", query="q"
        )

        response = client.post("/api/v1/knowledge/search", json={"query": "q", "search_mode": "fuzzy"})

        assert response.status_code == 200
        assert response.json() == {"success": False, "error": "Invalid search mode: fuzzy", "query": "q"}

    def test_missing_query_should_be_rejected(self, client) -> None:
        response = client.post("/api/v1/knowledge/search", json={})

        assert response.status_code == 422


class TestRetrieveEndpoint:
    """Test suite for POST /knowledge/retrieve."""

    def test_should_return_context(self, client, mock_retriever) -> None:
        mock_retriever.retrieve.return_value = "[Document 1] ..."

        response = client.post("/api/v1/knowledge/retrieve", json={"query": "retention", "limit": 2})

        assert response.status_code == 200
        assert response.json() == {"context": "[Document 1] ..."}
        mock_retriever.retrieve.assert_awaited_once_with("retention", limit=2, threshold=None)

    def test_out_of_range_threshold_should_be_rejected(self, client) -> None:
        response = client.post("/api/v1/knowledge/retrieve", json={"query": "q", "threshold": 2})

        assert response.status_code == 422


class TestStatsEndpoint:
    """Test suite for GET /knowledge/stats."""

    def test_should_return_stats(self, client, mock_ingestion_service) -> None:
        mock_ingestion_service.get_ingestion_stats.return_value = IngestionStats(
            total_documents=2,
            total_chunks=5,
            documents_by_source=[SourceCount(source="blog.aloha-corp.com", count=2)],
            documents_with_embeddings=6,
            last_ingestion_date=CREATED,
        )

        response = client.get("/api/v1/knowledge/stats")

        assert response.status_code == 200
        body = response.json()
        assert body["total_documents"] == 2
        assert body["documents_by_source"] == [{"source": "blog.aloha-corp.com", "count": 2}]

    def test_store_failure_should_return_500(self, client, mock_ingestion_service) -> None:
        mock_ingestion_service.get_ingestion_stats.side_effect = RuntimeError("down")

        response = client.get("/api/v1/knowledge/stats")

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to load statistics: down"
