"""API routers."""

from .embeddings import router as embeddings_router
from .health import router as health_router
from .knowledge import router as knowledge_router

__all__ = [
    "embeddings_router",
    "health_router",
    "knowledge_router",
]
