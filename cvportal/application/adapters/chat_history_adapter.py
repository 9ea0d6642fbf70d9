"""
Chat history adapter.

Rebuilds recent conversation turns of a session from recorded
interactions, as LangChain messages ready for a chat model.

Dependencies: langchain_core, cvportal.boundary.db.CRUD
System role: Conversation history for LLM prompts
"""

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from sqlalchemy.ext.asyncio import AsyncSession

from cvportal.boundary.db.CRUD.chat_interaction_crud import chat_interaction_crud


class ChatHistoryAdapter:
    """
    HistoryProvider over the chat_interactions table.

    Each recorded interaction becomes a HumanMessage followed by an
    AIMessage.
    """

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize chat history adapter.

        Args:
            db: AsyncSession for database operations
        """
        self.db = db

    async def get_history(self, session_id: str, limit: int) -> list[BaseMessage]:
        """
        Get the latest exchanges of a session.

        Args:
            session_id: Chat session identifier
            limit: Maximum number of exchanges (each yields two messages)

        Returns:
            List of HumanMessage/AIMessage pairs, oldest first
        """
        if limit <= 0:
            return []

        interactions = await chat_interaction_crud.recent_for_session(self.db, session_id, limit)
        messages: list[BaseMessage] = []
        for interaction in interactions:
            messages.append(HumanMessage(content=interaction.message))
            messages.append(AIMessage(content=interaction.response))
        return messages

