"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store

Dependencies: cvportal.core.vector_store
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from cvportal.api.deps import get_vector_store
from cvportal.boundary.vdb import IndexStats
from cvportal.core.exceptions import VectorStoreUnavailable
from cvportal.core.vector_store import VectorStore


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


class VectorStoreHealthResponse(HealthResponse):
    stats: IndexStats


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/vector-store", response_model=VectorStoreHealthResponse)
async def health_check_vector_store(
    vector_store: VectorStore = Depends(get_vector_store),
) -> VectorStoreHealthResponse:
    """Vector store health check with index statistics."""
    try:
        stats = await vector_store.stats()
    except VectorStoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)
    return VectorStoreHealthResponse(
        status="healthy",
        message="Vector store accessible",
        stats=stats,
    )
