"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, cvportal.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cvportal.api.deps.dependencies import get_service_cache
from cvportal.boundary.db import init_models
from cvportal.configs import get_settings
from cvportal.observability import configure_logging, get_logger
from cvportal.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import chat_router, embeddings_router, health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging, creates tables and pre-warms the service cache.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = get_logger("uvicorn")

    await init_models()

    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    _ = cache.retriever
    _ = cache.ingestion_service
    _ = cache.llm_provider
    logger.info("Service cache pre-warmed")

    yield

    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="CV Portal Chat API",
        description="Retrieval-augmented chat over parsed CVs",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(embeddings_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "cvportal.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
