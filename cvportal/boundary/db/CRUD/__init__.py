"""
CRUD operations for database models.

Exports CRUD classes and singleton instances for each model.
"""

from cvportal.boundary.db.CRUD.base_crud import BaseCRUD
from cvportal.boundary.db.CRUD.chat_session_crud import ChatSessionCRUD, chat_session_crud
from cvportal.boundary.db.CRUD.chat_interaction_crud import (
    ChatInteractionCRUD,
    chat_interaction_crud,
)

__all__ = [
    "BaseCRUD",
    "ChatSessionCRUD",
    "ChatInteractionCRUD",
    "chat_session_crud",
    "chat_interaction_crud",
]
