"""
Collaborator protocols used by the chat orchestrator.

Dependencies: langchain_core
System role: Seams between chat orchestration and persistence
"""

from typing import Protocol

from langchain_core.messages import BaseMessage

from cvportal.models.chat import ChatInteraction


class SessionStore(Protocol):
    """Persisted chat session records."""

    async def create(self, session_id: str, owner_id: str) -> None: ...

    async def touch(self, session_id: str, owner_id: str) -> None: ...


class InteractionSink(Protocol):
    """Analytics sink for answered messages."""

    async def record(self, interaction: ChatInteraction) -> None: ...


class HistoryProvider(Protocol):
    """Recent conversation turns of a session."""

    async def get_history(self, session_id: str, limit: int) -> list[BaseMessage]: ...
