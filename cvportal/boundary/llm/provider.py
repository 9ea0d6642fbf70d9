"""
Language-model provider protocol and wire shapes.

Dependencies: pydantic, langchain_core
System role: Contract between the chat orchestrator and its completion backend
"""

from typing import Protocol, runtime_checkable

from langchain_core.messages import BaseMessage
from pydantic import BaseModel, Field


class LLMRequest(BaseModel):
    """Single completion request."""

    system_prompt: str
    conversation_history: list[BaseMessage] = Field(default_factory=list)
    user_message: str


class LLMResponse(BaseModel):
    text: str
    usage: dict[str, int] = Field(default_factory=dict)


@runtime_checkable
class LLMProvider(Protocol):
    """Completion backend. Failures raise LLMError."""

    async def complete(self, request: LLMRequest) -> LLMResponse: ...
