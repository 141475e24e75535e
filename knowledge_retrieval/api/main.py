"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, knowledge_retrieval.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from knowledge_retrieval.api.deps.dependencies import get_service_cache
from knowledge_retrieval.configs import get_settings
from knowledge_retrieval.observability import configure_logging

from .routers import embeddings_router, health_router, knowledge_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Builds the retrieval engine on startup and drops cached services on shutdown.
    """
    logger = logging.getLogger("uvicorn")

    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    _ = cache.retriever
    _ = cache.embedding_service
    _ = cache.ingestion_service
    logger.info(
        f"Service cache pre-warmed (embeddings enabled: {cache.embedding_provider.is_enabled()})"
    )

    yield

    cache.clear()
    logger.info("Service cache cleared")


def create_app(use_lifespan: bool = True) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        use_lifespan: Pre-warm services on startup (disabled in tests)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    configure_logging(get_settings().log_level)

    app = FastAPI(
        title="Knowledge Retrieval API",
        description="Hybrid lexical and vector retrieval over a PostgreSQL knowledge store",
        version="0.1.0",
        lifespan=lifespan if use_lifespan else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(knowledge_router, prefix="/api/v1")
    app.include_router(embeddings_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "knowledge_retrieval.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
