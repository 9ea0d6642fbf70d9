"""Chat API endpoints.

Routes:
- POST /chat - Answer a question about a CV
- POST /chat/session - Start a chat session
- GET /chat/analytics/{owner_id} - Chat analytics for a CV

Processing failures never produce an error status: the chat service
returns an apology response instead.

Dependencies: cvportal.application.services
System role: Chat messaging HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from cvportal.api.deps import get_analytics_service, get_chat_service
from cvportal.application.services import AnalyticsService, ChatService
from cvportal.models.chat import (
    ChatAnalytics,
    ChatRequest,
    ChatResponse,
    SessionInitRequest,
    SessionInitResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Answer a question about a CV.

    Args:
        request: ownerId, message and optional sessionId
        chat_service: Injected ChatService

    Returns:
        ChatResponse: Answer, confidence, citations and suggestions
    """
    return await chat_service.process_message(
        owner_id=request.owner_id,
        message=request.message,
        session_id=request.session_id,
    )


@router.post("/session", response_model=SessionInitResponse)
async def start_session(
    request: SessionInitRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> SessionInitResponse:
    session_id = await chat_service.initialize_session(request.owner_id)
    return SessionInitResponse(session_id=session_id)


@router.get("/analytics/{owner_id}", response_model=ChatAnalytics)
async def chat_analytics(
    owner_id: str,
    time_range: str = Query(default="last_7_days", alias="timeRange"),
    analytics_service: AnalyticsService = Depends(get_analytics_service),
) -> ChatAnalytics:
    """Interaction totals, averages and top questions for a CV."""
    return await analytics_service.get_chat_analytics(owner_id, time_range)
