"""
SQL-backed chat session store.

Dependencies: sqlalchemy, cvportal.boundary.db.CRUD
System role: Chat session persistence adapter
"""

from sqlalchemy.ext.asyncio import AsyncSession

from cvportal.boundary.db.CRUD.chat_session_crud import chat_session_crud


class SQLSessionStore:
    """SessionStore over the chat_sessions table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, session_id: str, owner_id: str) -> None:
        """
        Insert a new session row.

        Raises:
            SQLAlchemyError: Propagated after rollback
        """
        try:
            await chat_session_crud.create(self.db, session_id=session_id, owner_id=owner_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def touch(self, session_id: str, owner_id: str) -> None:
        """Bump activity on a session, creating it when unknown."""
        try:
            await chat_session_crud.touch(self.db, session_id, owner_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
