"""
Embedding tools.

text_embedding generates (and stores) an embedding; get_embedding reads a
stored record back by ID.

Dependencies: langchain_core.tools, knowledge_retrieval.application.services
System role: Embedding access for LLM orchestration
"""

import logging
from typing import TYPE_CHECKING, Any
from uuid import UUID

from langchain_core.tools import tool

from knowledge_retrieval.core.exceptions import EmbeddingError, KnowledgeRetrievalException

if TYPE_CHECKING:
    from knowledge_retrieval.application.services.embedding_storage_service import (
        EmbeddingStorageService,
    )

logger = logging.getLogger(__name__)


def create_text_embedding_tool(service: "EmbeddingStorageService"):
    """
    Create the text_embedding tool bound to an EmbeddingStorageService.

    Args:
        service: Embedding storage service

    Returns:
        BaseTool: Async tool named text_embedding
    """

    @tool
    async def text_embedding(
        text: str,
        task_type: str | None = None,
        return_vector: bool = False,
    ) -> dict[str, Any]:
        """Generate a text embedding for semantic similarity, clustering, and other AI tasks.

        The embedding is stored when storage is available and its ID returned.

        Args:
            text: The text to generate embedding for
            task_type: SEMANTIC_SIMILARITY, CLASSIFICATION, CLUSTERING, RETRIEVAL_DOCUMENT,
                RETRIEVAL_QUERY, QUESTION_ANSWERING, FACT_VERIFICATION or CODE_RETRIEVAL_QUERY
            return_vector: Whether to return the full embedding vector (default: false, returns only ID)
        """
        try:
            result = await service.create_embedding(text, task_type, return_vector)
        except EmbeddingError:
            raise
        except Exception as e:
            logger.error(f"{__name__}:text_embedding - {type(e).__name__}: {e}")
            raise EmbeddingError(f"Failed to generate embedding: {e}") from e
        return result.model_dump(mode="json", exclude_none=True)

    return text_embedding


def create_get_embedding_tool(service: "EmbeddingStorageService"):
    """
    Create the get_embedding tool bound to an EmbeddingStorageService.

    Args:
        service: Embedding storage service

    Returns:
        BaseTool: Async tool named get_embedding
    """

    @tool
    async def get_embedding(embedding_id: str, include_vector: bool = False) -> dict[str, Any]:
        """Retrieve stored embedding data by ID, with optional vector data.

        Args:
            embedding_id: The ID of the stored embedding to retrieve
            include_vector: Whether to include the embedding vector in the response (default: false)
        """
        try:
            record_id = UUID(embedding_id)
        except ValueError:
            return {
                "success": False,
                "error": "Failed to retrieve embedding: invalid embedding ID",
                "embedding_id": embedding_id,
            }

        try:
            if include_vector:
                record = await service.get_embedding_with_vector(record_id)
            else:
                record = await service.get_embedding(record_id)
        except KnowledgeRetrievalException as e:
            return {
                "success": False,
                "error": f"Failed to retrieve embedding: {e.message}",
                "embedding_id": embedding_id,
            }

        if record is None:
            return {"success": False, "error": "Embedding not found", "embedding_id": embedding_id}

        payload = record.model_dump(mode="json")
        payload["embedding_id"] = payload.pop("id")
        return {"success": True, **payload}

    return get_embedding
