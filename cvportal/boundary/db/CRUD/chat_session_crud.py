"""
Chat session CRUD operations.

Dependencies: sqlalchemy, cvportal.boundary.db.models
System role: Chat session persistence operations
"""

from sqlalchemy.ext.asyncio import AsyncSession

from cvportal.boundary.db.base import utc_now
from cvportal.boundary.db.CRUD.base_crud import BaseCRUD
from cvportal.boundary.db.models.chat_session_model import ChatSessionModel


class ChatSessionCRUD(BaseCRUD[ChatSessionModel]):
    """CRUD operations for ChatSessionModel."""

    def __init__(self) -> None:
        super().__init__(ChatSessionModel)

    async def touch(
        self,
        session: AsyncSession,
        session_id: str,
        owner_id: str,
    ) -> ChatSessionModel:
        """
        Record activity on a session, creating the row if it is missing.

        Increments ``message_count`` and refreshes ``last_activity``.
        Concurrent touches are not serialized (last write wins).

        Args:
            session: Async database session
            session_id: Chat session identifier
            owner_id: CV identifier, used when the row is created

        Returns:
            ChatSessionModel: The updated or created row
        """
        existing = await self.get_by_id(session, session_id)
        if existing is None:
            return await self.create(
                session,
                session_id=session_id,
                owner_id=owner_id,
                message_count=1,
            )

        updated = await self.update_by_id(
            session,
            session_id,
            last_activity=utc_now(),
            message_count=existing.message_count + 1,
        )
        return updated or existing


chat_session_crud = ChatSessionCRUD()
