"""
Embedding API endpoints.

Routes:
- POST /embeddings - Generate and store an embedding
- GET /embeddings - List stored embeddings
- GET /embeddings/{id} - Get one embedding, optionally with its vector
- DELETE /embeddings/{id} - Delete an embedding

Dependencies: knowledge_retrieval.application.services, knowledge_retrieval.models
System role: Embedding storage HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from knowledge_retrieval.api.deps import get_embedding_service
from knowledge_retrieval.application.services import EmbeddingStorageService
from knowledge_retrieval.core.exceptions import EmbeddingError, EmbeddingStorageError
from knowledge_retrieval.models.embedding import (
    CreateEmbeddingRequest,
    EmbeddingListResponse,
    EmbeddingRecord,
    EmbeddingRecordWithVector,
    EmbeddingResult,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/embeddings", tags=["embeddings"])


@router.post("", response_model=EmbeddingResult, status_code=201)
async def create_embedding(
    request: CreateEmbeddingRequest,
    service: EmbeddingStorageService = Depends(get_embedding_service),
) -> EmbeddingResult:
    """
    Generate an embedding and store it.

    Raises:
        HTTPException(503): Provider unavailable or generation failed
    """
    try:
        return await service.create_embedding(
            request.text,
            task_type=request.task_type,
            return_vector=request.return_vector,
            metadata=request.metadata,
        )
    except EmbeddingError as e:
        raise HTTPException(status_code=503, detail=e.message)


@router.get("", response_model=EmbeddingListResponse)
async def list_embeddings(
    model: str | None = None,
    task_type: str | None = None,
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    service: EmbeddingStorageService = Depends(get_embedding_service),
) -> EmbeddingListResponse:
    """
    List stored embeddings, newest first.

    Raises:
        HTTPException(500): Store query failed
    """
    try:
        records = await service.list_embeddings(model, task_type, limit, offset)
    except EmbeddingStorageError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return EmbeddingListResponse(embeddings=records, count=len(records), limit=limit, offset=offset)


@router.get("/{embedding_id}", response_model=EmbeddingRecordWithVector | EmbeddingRecord)
async def get_embedding(
    embedding_id: UUID,
    include_vector: bool = False,
    service: EmbeddingStorageService = Depends(get_embedding_service),
) -> EmbeddingRecordWithVector | EmbeddingRecord:
    """
    Get one stored embedding.

    Raises:
        HTTPException(404): Embedding not found
        HTTPException(500): Store query failed
    """
    try:
        if include_vector:
            record = await service.get_embedding_with_vector(embedding_id)
        else:
            record = await service.get_embedding(embedding_id)
    except EmbeddingStorageError as e:
        raise HTTPException(status_code=500, detail=e.message)
    if record is None:
        raise HTTPException(status_code=404, detail="Embedding not found")
    return record


@router.delete("/{embedding_id}", status_code=204)
async def delete_embedding(
    embedding_id: UUID,
    service: EmbeddingStorageService = Depends(get_embedding_service),
) -> None:
    """
    Delete a stored embedding.

    Raises:
        HTTPException(404): Embedding not found
    """
    if not await service.delete_embedding(embedding_id):
        raise HTTPException(status_code=404, detail="Embedding not found")
