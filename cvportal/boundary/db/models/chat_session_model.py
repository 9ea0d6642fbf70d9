"""
Chat session ORM model.

One row per visitor conversation with a CV. Rows are shared state:
concurrent messages in the same session are not serialized and the last
write wins on ``last_activity`` and ``message_count``.

Dependencies: sqlalchemy, cvportal.boundary.db.base
System role: Session persistence for chat analytics
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cvportal.boundary.db.base import Base, utc_now


class ChatSessionModel(Base):
    """
    Chat session row.

    Attributes:
        session_id: "chat-{epoch_ms}-{suffix}" identifier (primary key)
        owner_id: CV identifier the conversation is about
        created_at: Session creation timestamp (UTC)
        last_activity: Timestamp of the latest message (UTC)
        message_count: Messages processed in this session
        active: False once the session is retired
    """

    __tablename__ = "chat_sessions"

    session_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    last_activity: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    message_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
