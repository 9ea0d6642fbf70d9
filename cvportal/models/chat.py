"""
Chat domain models and schemas.

Request/response schemas for chat operations. JSON uses camelCase
field names; Python code uses snake_case.

Dependencies: pydantic
System role: Chat API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API models serialized with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class SourceCitation(CamelModel):
    """Citation pointing back at the CV section an answer drew on."""

    section: str = Field(description="Section label")
    content: str = Field(description="Truncated excerpt")
    confidence: float = Field(ge=-1.0, le=1.0, description="Similarity of the cited passage")


class ChatRequest(CamelModel):
    """Request schema for chat messages."""

    owner_id: str = Field(min_length=1, description="CV identifier")
    message: str = Field(description="User question or message")
    session_id: str | None = Field(default=None, description="Existing session ID")

    @field_validator("message")
    @classmethod
    def _message_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("message must not be empty")
        return value


class ChatResponse(CamelModel):
    """Response schema for chat messages."""

    response: str
    confidence: float = Field(ge=0.0, le=1.0)
    sources: list[SourceCitation] = Field(default_factory=list)
    response_time: int = Field(default=0, ge=0, description="Milliseconds")
    session_id: str
    suggested_questions: list[str] = Field(default_factory=list)


class SessionInitRequest(CamelModel):
    """Request schema for creating a chat session."""

    owner_id: str = Field(min_length=1)


class SessionInitResponse(CamelModel):
    """Response schema for session creation."""

    session_id: str


class ChatSession(CamelModel):
    """Persisted chat session state."""

    session_id: str
    owner_id: str
    created_at: datetime
    last_activity: datetime
    message_count: int = 0


class ChatInteraction(CamelModel):
    """Analytics record written for every answered message."""

    owner_id: str
    session_id: str
    message: str
    response: str
    confidence: float
    response_time: int
    timestamp: datetime | None = None


class TopQuestion(CamelModel):
    question: str
    count: int


class ChatAnalytics(CamelModel):
    """Aggregated chat analytics for one CV."""

    total_interactions: int = 0
    average_confidence: float = 0.0
    average_response_time: float = 0.0
    top_questions: list[TopQuestion] = Field(default_factory=list)
    session_count: int = 0
    time_range: str = "last_7_days"
    error: str | None = None
