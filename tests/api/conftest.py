"""
Shared fixtures for API tests.

Provides: FastAPI app without lifespan, TestClient factory, mocked services
Dependencies: fastapi, knowledge_retrieval.api
System role: API test infrastructure
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from knowledge_retrieval.api.deps import (
    get_embedding_service,
    get_ingestion_service,
    get_knowledge_retriever,
)
from knowledge_retrieval.api.main import create_app
from knowledge_retrieval.application.services import (
    EmbeddingStorageService,
    KnowledgeIngestionService,
)
from knowledge_retrieval.core.retrieval import KnowledgeRetriever


@pytest.fixture
def app() -> FastAPI:
    app = create_app(use_lifespan=False)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def mock_retriever() -> MagicMock:
    retriever = MagicMock(spec=KnowledgeRetriever)
    retriever.search_tool = AsyncMock()
    retriever.retrieve = AsyncMock()
    return retriever


@pytest.fixture
def mock_embedding_service() -> MagicMock:
    service = MagicMock(spec=EmbeddingStorageService)
    for name in (
        "create_embedding",
        "list_embeddings",
        "get_embedding",
        "get_embedding_with_vector",
        "delete_embedding",
    ):
        setattr(service, name, AsyncMock())
    return service


@pytest.fixture
def mock_ingestion_service() -> MagicMock:
    service = MagicMock(spec=KnowledgeIngestionService)
    service.get_ingestion_stats = AsyncMock()
    return service


@pytest.fixture
def client(app, mock_retriever, mock_embedding_service, mock_ingestion_service) -> TestClient:
    app.dependency_overrides[get_knowledge_retriever] = lambda: mock_retriever
    app.dependency_overrides[get_embedding_service] = lambda: mock_embedding_service
    app.dependency_overrides[get_ingestion_service] = lambda: mock_ingestion_service
    return TestClient(app)
