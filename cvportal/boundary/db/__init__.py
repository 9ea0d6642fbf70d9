"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(), init_models()
  - ChatSessionModel, ChatInteractionModel: Persisted chat state and analytics
  - chat_session_crud, chat_interaction_crud: CRUD operation singletons

Dependencies: sqlalchemy, cvportal.configs
System role: Database adapter for chat sessions and interaction analytics
"""

from cvportal.boundary.db.base import Base, UUIDMixin
from cvportal.boundary.db.connection import (
    create_engine_for,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
    init_models,
)
from cvportal.boundary.db.models import ChatInteractionModel, ChatSessionModel
from cvportal.boundary.db.CRUD import (
    BaseCRUD,
    ChatInteractionCRUD,
    ChatSessionCRUD,
    chat_interaction_crud,
    chat_session_crud,
)

__all__ = [
    "Base",
    "UUIDMixin",
    "create_engine_for",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "init_models",
    "ChatSessionModel",
    "ChatInteractionModel",
    "BaseCRUD",
    "ChatSessionCRUD",
    "ChatInteractionCRUD",
    "chat_session_crud",
    "chat_interaction_crud",
]
