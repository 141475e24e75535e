"""
Test suite for embedding task types and providers.

Covers task type resolution, the Gemini adapter's failure-to-None contract
(with the SDK client mocked) and the deterministic offline provider.

System role: Verification of the embedding provider boundary
"""

from unittest.mock import MagicMock, patch

import pytest

from knowledge_retrieval.boundary.embeddings import (
    EmbeddingProvider,
    FakeEmbeddingProvider,
    GeminiEmbeddingProvider,
    TaskType,
    create_embedding_provider,
    resolve_task_type,
)
from knowledge_retrieval.configs.embedding import EmbeddingSettings
from knowledge_retrieval.core.retrieval.similarity import cosine_similarity

CLIENT_PATH = "knowledge_retrieval.boundary.embeddings.provider.GoogleGenerativeAIEmbeddings"


class TestResolveTaskType:
    """Test suite for resolve_task_type()."""

    @pytest.mark.parametrize(
        "hint, expected",
        [
            (None, "RETRIEVAL_DOCUMENT"),
            (TaskType.DOCUMENT, "RETRIEVAL_DOCUMENT"),
            (TaskType.SEARCH_QUERY, "RETRIEVAL_QUERY"),
            ("similarity", "SEMANTIC_SIMILARITY"),
            ("Clustering", "CLUSTERING"),
            ("classification", "CLASSIFICATION"),
            ("RETRIEVAL_QUERY", "RETRIEVAL_QUERY"),
            ("question_answering", "QUESTION_ANSWERING"),
            ("nonsense", "RETRIEVAL_DOCUMENT"),
        ],
    )
    def test_mapping(self, hint, expected: str) -> None:
        assert resolve_task_type(hint) == expected


class TestGeminiEmbeddingProvider:
    """Test suite for GeminiEmbeddingProvider with the SDK mocked."""

    @pytest.mark.asyncio
    async def test_generate_should_return_vector_and_pass_task_type(self) -> None:
        # Arrange
        with patch(CLIENT_PATH) as client_cls:
            client = MagicMock()
            client.embed_query.return_value = [0.1, 0.2, 0.3]
            client_cls.return_value = client
            provider = GeminiEmbeddingProvider(api_key="key", dimensions=3, max_retries=1)

            # Act
            vector = await provider.generate("hello", TaskType.SEARCH_QUERY)

        # Assert
        assert vector == [0.1, 0.2, 0.3]
        client.embed_query.assert_called_once_with(
            "hello", task_type="RETRIEVAL_QUERY", output_dimensionality=3
        )
        client_cls.assert_called_once_with(model="models/gemini-embedding-001", google_api_key="key")

    @pytest.mark.asyncio
    async def test_missing_key_should_return_none_without_client(self) -> None:
        with patch(CLIENT_PATH) as client_cls:
            provider = GeminiEmbeddingProvider(api_key=None)

            vector = await provider.generate("hello")

        assert vector is None
        assert provider.is_enabled() is False
        client_cls.assert_not_called()

    @pytest.mark.asyncio
    async def test_sdk_failure_should_return_none(self) -> None:
        with patch(CLIENT_PATH) as client_cls:
            client_cls.return_value.embed_query.side_effect = RuntimeError("quota exceeded")
            provider = GeminiEmbeddingProvider(api_key="key", max_retries=1)

            vector = await provider.generate("hello")

        assert vector is None

    @pytest.mark.asyncio
    async def test_empty_vector_should_return_none(self) -> None:
        with patch(CLIENT_PATH) as client_cls:
            client_cls.return_value.embed_query.return_value = []
            provider = GeminiEmbeddingProvider(api_key="key", max_retries=1)

            vector = await provider.generate("hello")

        assert vector is None

    @pytest.mark.asyncio
    async def test_wrong_length_vector_should_return_none(self) -> None:
        with patch(CLIENT_PATH) as client_cls:
            client_cls.return_value.embed_query.return_value = [0.1, 0.2]
            provider = GeminiEmbeddingProvider(api_key="key", dimensions=3, max_retries=1)

            vector = await provider.generate("hello")

        assert vector is None
        assert client_cls.return_value.embed_query.call_count == 1

    @pytest.mark.asyncio
    async def test_blank_text_should_return_none(self) -> None:
        with patch(CLIENT_PATH) as client_cls:
            provider = GeminiEmbeddingProvider(api_key="key")

            assert await provider.generate("   ") is None

        client_cls.assert_not_called()

    def test_factory_should_build_from_settings(self) -> None:
        settings = EmbeddingSettings(api_key="key", model="models/test", dimensions=256)

        provider = create_embedding_provider(settings)

        assert isinstance(provider, EmbeddingProvider)
        assert provider.model_name == "models/test"
        assert provider.dimensions == 256
        assert provider.is_enabled() is True


class TestFakeEmbeddingProvider:
    """Test suite for FakeEmbeddingProvider."""

    @pytest.mark.asyncio
    async def test_vectors_should_be_deterministic_and_normalized(self) -> None:
        provider = FakeEmbeddingProvider(dimensions=16)

        first = await provider.generate("game monetization")
        second = await provider.generate("game monetization")

        assert first == second
        assert len(first) == 16
        assert cosine_similarity(first, first) == pytest.approx(1.0)
        assert sum(v * v for v in first) == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_shared_words_should_score_higher_than_unrelated(self) -> None:
        provider = FakeEmbeddingProvider(dimensions=64)

        query = await provider.generate("game monetization")
        related = await provider.generate("game monetization strategies")
        unrelated = await provider.generate("sourdough baking schedule")

        assert cosine_similarity(query, related) > cosine_similarity(query, unrelated)

    @pytest.mark.asyncio
    async def test_overrides_and_call_log(self) -> None:
        provider = FakeEmbeddingProvider(dimensions=2, vectors={"pinned": [1.0, 0.0]})

        vector = await provider.generate("pinned", "search_query")

        assert vector == [1.0, 0.0]
        assert provider.calls == [("pinned", "RETRIEVAL_QUERY")]

    @pytest.mark.asyncio
    async def test_disabled_provider_should_return_none(self) -> None:
        provider = FakeEmbeddingProvider(enabled=False)

        assert await provider.generate("anything") is None
        assert provider.is_enabled() is False
