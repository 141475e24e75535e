"""
Knowledge retrieval API endpoints.

Routes:
- POST /knowledge/search - Hybrid search with the tool payload contract
- POST /knowledge/retrieve - Context block for a query
- GET /knowledge/stats - Knowledge store statistics

Dependencies: knowledge_retrieval.core.retrieval, knowledge_retrieval.application.services
System role: Knowledge retrieval HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from knowledge_retrieval.api.deps import get_ingestion_service, get_knowledge_retriever
from knowledge_retrieval.application.services import KnowledgeIngestionService
from knowledge_retrieval.core.retrieval import KnowledgeRetriever
from knowledge_retrieval.models.knowledge import (
    IngestionStats,
    KnowledgeSearchError,
    KnowledgeSearchRequest,
    KnowledgeSearchResponse,
    RetrieveRequest,
    RetrieveResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/knowledge", tags=["knowledge"])


@router.post("/search", response_model=KnowledgeSearchResponse | KnowledgeSearchError)
async def search_knowledge(
    request: KnowledgeSearchRequest,
    retriever: KnowledgeRetriever = Depends(get_knowledge_retriever),
) -> KnowledgeSearchResponse | KnowledgeSearchError:
    """
    Search the knowledge base.

    Failures are reported in the body (success=false), never as HTTP errors,
    so agents and HTTP clients see the same contract.

    Args:
        request: Query, limit, threshold, filters and search mode
        retriever: Injected KnowledgeRetriever

    Returns:
        KnowledgeSearchResponse | KnowledgeSearchError
    """
    return await retriever.search_tool(request)


@router.post("/retrieve", response_model=RetrieveResponse)
async def retrieve_context(
    request: RetrieveRequest,
    retriever: KnowledgeRetriever = Depends(get_knowledge_retriever),
) -> RetrieveResponse:
    """
    Build a context block for a language model prompt.

    Args:
        request: Query plus optional limit and threshold
        retriever: Injected KnowledgeRetriever

    Returns:
        RetrieveResponse: Rendered context or sentinel message
    """
    context = await retriever.retrieve(request.query, limit=request.limit, threshold=request.threshold)
    return RetrieveResponse(context=context)


@router.get("/stats", response_model=IngestionStats)
async def knowledge_stats(
    ingestion_service: KnowledgeIngestionService = Depends(get_ingestion_service),
) -> IngestionStats:
    """
    Knowledge store statistics.

    Raises:
        HTTPException(500): Store query failed
    """
    try:
        return await ingestion_service.get_ingestion_stats()
    except Exception as e:
        logger.error(f"{__name__}:knowledge_stats - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to load statistics: {str(e)}")
