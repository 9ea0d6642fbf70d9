"""
Integration tests for chat session and interaction CRUD over SQLite.

System role: Verification of chat persistence
"""

from datetime import timedelta

from langchain_core.messages import AIMessage, HumanMessage
from sqlalchemy.ext.asyncio import AsyncSession

from cvportal.application.adapters import ChatHistoryAdapter, SQLInteractionSink, SQLSessionStore
from cvportal.boundary.db.base import utc_now
from cvportal.boundary.db.CRUD import chat_interaction_crud, chat_session_crud
from cvportal.boundary.db.models import ChatSessionModel
from cvportal.models.chat import ChatInteraction


def interaction(message: str, session_id: str = "s-1", **kwargs) -> ChatInteraction:
    return ChatInteraction(
        owner_id="cv-1",
        session_id=session_id,
        message=message,
        response=f"re: {message}",
        confidence=0.7,
        response_time=120,
        **kwargs,
    )


class TestChatSessionCRUD:
    async def test_touch_should_create_missing_session(self, test_async_db: AsyncSession) -> None:
        # Act
        row = await chat_session_crud.touch(test_async_db, "s-1", "cv-1")

        # Assert
        assert row.session_id == "s-1"
        assert row.owner_id == "cv-1"
        assert row.message_count == 1
        assert row.active is True

    async def test_touch_should_increment_existing_session(self, test_async_db: AsyncSession) -> None:
        await chat_session_crud.create(test_async_db, session_id="s-1", owner_id="cv-1")

        await chat_session_crud.touch(test_async_db, "s-1", "cv-1")
        row = await chat_session_crud.touch(test_async_db, "s-1", "cv-1")

        assert row.message_count == 2

    async def test_get_by_id_should_look_up_string_key(self, test_async_db: AsyncSession) -> None:
        await chat_session_crud.create(test_async_db, session_id="s-1", owner_id="cv-1")

        row = await chat_session_crud.get_by_id(test_async_db, "s-1")

        assert row.owner_id == "cv-1"
        assert await chat_session_crud.get_by_id(test_async_db, "s-2") is None


class TestChatInteractionCRUD:
    async def test_recent_for_session_should_return_latest_oldest_first(
        self, test_async_db: AsyncSession
    ) -> None:
        # Arrange
        start = utc_now() - timedelta(minutes=10)
        for i in range(4):
            await chat_interaction_crud.create(
                test_async_db,
                owner_id="cv-1",
                session_id="s-1",
                message=f"q{i}",
                response=f"a{i}",
                timestamp=start + timedelta(minutes=i),
            )

        # Act
        rows = await chat_interaction_crud.recent_for_session(test_async_db, "s-1", 2)

        # Assert
        assert [r.message for r in rows] == ["q2", "q3"]


class TestAdapters:
    async def test_session_store_should_create_and_touch(self, test_async_db: AsyncSession) -> None:
        store = SQLSessionStore(test_async_db)

        await store.create("s-1", "cv-1")
        await store.touch("s-1", "cv-1")

        row = await chat_session_crud.get_by_id(test_async_db, "s-1")
        assert isinstance(row, ChatSessionModel)
        assert row.message_count == 1

    async def test_sink_and_history_should_round_trip_exchanges(
        self, test_async_db: AsyncSession
    ) -> None:
        # Arrange
        sink = SQLInteractionSink(test_async_db)
        start = utc_now() - timedelta(minutes=5)
        await sink.record(interaction("first", timestamp=start))
        await sink.record(interaction("second", timestamp=start + timedelta(minutes=1)))
        await sink.record(interaction("elsewhere", session_id="s-2"))

        # Act
        messages = await ChatHistoryAdapter(test_async_db).get_history("s-1", 5)

        # Assert
        assert [type(m) for m in messages] == [HumanMessage, AIMessage, HumanMessage, AIMessage]
        assert [m.content for m in messages] == ["first", "re: first", "second", "re: second"]

    async def test_history_should_be_empty_for_zero_limit(self, test_async_db: AsyncSession) -> None:
        assert await ChatHistoryAdapter(test_async_db).get_history("s-1", 0) == []
