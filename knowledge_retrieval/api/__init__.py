"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import embeddings_router, health_router, knowledge_router

api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(knowledge_router)
api_router.include_router(embeddings_router)

__all__ = ["api_router"]
