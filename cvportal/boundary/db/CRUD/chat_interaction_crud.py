"""
Chat interaction CRUD operations.

Provides time-windowed reads for analytics and recent-exchange reads
for conversation history.

Dependencies: sqlalchemy, cvportal.boundary.db.models
System role: Interaction persistence operations
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cvportal.boundary.db.CRUD.base_crud import BaseCRUD
from cvportal.boundary.db.models.chat_interaction_model import ChatInteractionModel


class ChatInteractionCRUD(BaseCRUD[ChatInteractionModel]):
    """CRUD operations for ChatInteractionModel."""

    def __init__(self) -> None:
        super().__init__(ChatInteractionModel)

    async def list_for_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        since: datetime,
        until: datetime,
    ) -> Sequence[ChatInteractionModel]:
        """
        Interactions for one CV inside a time window, oldest first.

        Args:
            session: Async database session
            owner_id: CV identifier
            since: Inclusive window start (UTC)
            until: Inclusive window end (UTC)
        """
        stmt = (
            select(ChatInteractionModel)
            .where(
                ChatInteractionModel.owner_id == owner_id,
                ChatInteractionModel.timestamp >= since,
                ChatInteractionModel.timestamp <= until,
            )
            .order_by(ChatInteractionModel.timestamp)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def recent_for_session(
        self,
        session: AsyncSession,
        session_id: str,
        limit: int,
    ) -> list[ChatInteractionModel]:
        """
        Latest ``limit`` interactions of a session, oldest first.
        """
        stmt = (
            select(ChatInteractionModel)
            .where(ChatInteractionModel.session_id == session_id)
            .order_by(ChatInteractionModel.timestamp.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(reversed(result.scalars().all()))


chat_interaction_crud = ChatInteractionCRUD()
