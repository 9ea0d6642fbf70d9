"""
Test suite for chat API endpoints.

Tests POST /chat, POST /chat/session and GET /chat/analytics/{owner_id}
with FastAPI TestClient and overridden services. JSON is camelCase.

System role: Verification of chat HTTP API
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from cvportal.api.deps import get_analytics_service, get_chat_service
from cvportal.api.routers.chat import router
from cvportal.models.chat import ChatAnalytics, ChatResponse, SourceCitation, TopQuestion


@pytest.fixture
def mock_chat_service() -> AsyncMock:
    """Provide mock ChatService."""
    service = AsyncMock()
    service.process_message.return_value = ChatResponse(
        response="Based on the CV, here are the key skills: Python",
        confidence=0.6,
        sources=[SourceCitation(section="skills", content="Python", confidence=0.9)],
        response_time=12,
        session_id="chat-1-abcdef",
        suggested_questions=["What are the key technical skills?"],
    )
    service.initialize_session.return_value = "chat-2-ghijkl"
    return service


@pytest.fixture
def mock_analytics_service() -> AsyncMock:
    service = AsyncMock()
    service.get_chat_analytics.return_value = ChatAnalytics(
        total_interactions=2,
        average_confidence=0.5,
        average_response_time=100.0,
        top_questions=[TopQuestion(question="What skills?", count=2)],
        session_count=1,
        time_range="last_24_hours",
    )
    return service


@pytest.fixture
def client(mock_chat_service: AsyncMock, mock_analytics_service: AsyncMock) -> TestClient:
    """Provide TestClient with chat router and overridden services."""
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_chat_service] = lambda: mock_chat_service
    app.dependency_overrides[get_analytics_service] = lambda: mock_analytics_service
    return TestClient(app)


class TestChatEndpoint:
    def test_chat_should_return_camel_case_response(
        self, client: TestClient, mock_chat_service: AsyncMock
    ) -> None:
        # Act
        response = client.post("/chat", json={"ownerId": "cv-1", "message": "What skills?"})

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["sessionId"] == "chat-1-abcdef"
        assert body["responseTime"] == 12
        assert body["suggestedQuestions"] == ["What are the key technical skills?"]
        assert body["sources"] == [{"section": "skills", "content": "Python", "confidence": 0.9}]
        mock_chat_service.process_message.assert_awaited_once_with(
            owner_id="cv-1", message="What skills?", session_id=None
        )

    def test_chat_should_forward_session_id(
        self, client: TestClient, mock_chat_service: AsyncMock
    ) -> None:
        client.post("/chat", json={"ownerId": "cv-1", "message": "Hi", "sessionId": "s-1"})

        assert mock_chat_service.process_message.call_args.kwargs["session_id"] == "s-1"

    @pytest.mark.parametrize(
        "payload",
        [
            {"ownerId": "cv-1", "message": "   "},
            {"ownerId": "", "message": "Hi"},
            {"message": "Hi"},
        ],
    )
    def test_chat_should_reject_invalid_requests(
        self, payload: dict, client: TestClient, mock_chat_service: AsyncMock
    ) -> None:
        response = client.post("/chat", json=payload)

        assert response.status_code == 422
        mock_chat_service.process_message.assert_not_awaited()


class TestSessionEndpoint:
    def test_start_session_should_return_session_id(self, client: TestClient) -> None:
        response = client.post("/chat/session", json={"ownerId": "cv-1"})

        assert response.status_code == 200
        assert response.json() == {"sessionId": "chat-2-ghijkl"}


class TestAnalyticsEndpoint:
    def test_analytics_should_pass_time_range(
        self, client: TestClient, mock_analytics_service: AsyncMock
    ) -> None:
        response = client.get("/chat/analytics/cv-1", params={"timeRange": "last_24_hours"})

        assert response.status_code == 200
        assert response.json()["topQuestions"] == [{"question": "What skills?", "count": 2}]
        mock_analytics_service.get_chat_analytics.assert_awaited_once_with("cv-1", "last_24_hours")

    def test_analytics_should_default_to_week(
        self, client: TestClient, mock_analytics_service: AsyncMock
    ) -> None:
        client.get("/chat/analytics/cv-1")

        mock_analytics_service.get_chat_analytics.assert_awaited_once_with("cv-1", "last_7_days")
