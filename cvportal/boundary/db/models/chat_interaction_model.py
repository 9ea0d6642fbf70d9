"""
Chat interaction ORM model.

Append-only analytics record written for every answered chat message.

Dependencies: sqlalchemy, cvportal.boundary.db.base
System role: Interaction persistence for chat analytics
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cvportal.boundary.db.base import Base, UUIDMixin, utc_now


class ChatInteractionModel(Base, UUIDMixin):
    """Single question/answer exchange with its confidence and latency."""

    __tablename__ = "chat_interactions"

    owner_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    session_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=False)
    confidence: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    response_time_ms: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        index=True,
        nullable=False,
    )
