"""
SQL-backed interaction sink.

Dependencies: sqlalchemy, cvportal.boundary.db.CRUD
System role: Chat analytics persistence adapter
"""

from sqlalchemy.ext.asyncio import AsyncSession

from cvportal.boundary.db.base import utc_now
from cvportal.boundary.db.CRUD.chat_interaction_crud import chat_interaction_crud
from cvportal.models.chat import ChatInteraction


class SQLInteractionSink:
    """InteractionSink over the chat_interactions table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def record(self, interaction: ChatInteraction) -> None:
        try:
            await chat_interaction_crud.create(
                self.db,
                owner_id=interaction.owner_id,
                session_id=interaction.session_id,
                message=interaction.message,
                response=interaction.response,
                confidence=interaction.confidence,
                response_time_ms=interaction.response_time,
                timestamp=interaction.timestamp or utc_now(),
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
