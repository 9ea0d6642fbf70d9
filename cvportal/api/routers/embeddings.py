"""CV embedding endpoints.

Routes:
- POST /cvs/{owner_id}/embeddings - Index a parsed CV
- GET /cvs/{owner_id}/embeddings - Whether a CV is indexed
- DELETE /cvs/{owner_id}/embeddings - Remove a CV's vectors

Dependencies: cvportal.application.services.ingestion_service
System role: CV ingestion HTTP API
"""

import logging
from typing import Any

import pydantic
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from cvportal.api.deps import get_ingestion_service
from cvportal.application.services import IngestionService
from cvportal.core.exceptions import (
    EmbeddingGenerationFailed,
    ValidationError,
    VectorStoreUnavailable,
)
from cvportal.models.cv import ParsedCV
from cvportal.models.ingestion import EmbeddingStatus, IngestionResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cvs", tags=["embeddings"])


def parse_cv(owner_id: str, payload: dict[str, Any]) -> ParsedCV:
    """
    Validate a parser payload for ``owner_id``.

    Raises:
        HTTPException(422): Invalid payload or mismatched CV id
    """
    cv_id = payload.get("id", owner_id)
    if cv_id != owner_id:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"CV id {cv_id!r} does not match path owner {owner_id!r}",
        )
    try:
        return ParsedCV.from_raw({**payload, "id": owner_id})
    except pydantic.ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )


@router.post("/{owner_id}/embeddings", response_model=IngestionResult)
async def create_embeddings(
    owner_id: str,
    payload: dict[str, Any] = Body(...),
    force: bool = Query(default=False),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestionResult:
    """
    Chunk, embed and store a parsed CV.

    Raises:
        HTTPException(422): Invalid CV or no embeddings could be produced
        HTTPException(503): Vector store unavailable
    """
    cv = parse_cv(owner_id, payload)
    try:
        return await ingestion_service.ingest(cv, force=force)
    except (ValidationError, EmbeddingGenerationFailed) as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)
    except VectorStoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)


@router.get("/{owner_id}/embeddings", response_model=EmbeddingStatus)
async def embedding_status(
    owner_id: str,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> EmbeddingStatus:
    try:
        return await ingestion_service.status(owner_id)
    except VectorStoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)


@router.delete("/{owner_id}/embeddings", status_code=status.HTTP_204_NO_CONTENT)
async def delete_embeddings(
    owner_id: str,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> Response:
    try:
        await ingestion_service.delete(owner_id)
    except VectorStoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
