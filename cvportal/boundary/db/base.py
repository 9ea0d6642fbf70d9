"""
SQLAlchemy declarative base and common mixins.

Provides base class for all ORM models, a UUID primary key mixin and
the UTC clock used for timestamp defaults.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class so they are registered
    with the metadata and included in table creation.
    """

    pass


class UUIDMixin:
    """
    Mixin providing a UUID v4 primary key.

    Uses the generic ``Uuid`` type: native UUID on PostgreSQL, CHAR(32)
    on SQLite.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )

