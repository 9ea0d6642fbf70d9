"""
ORM models for chat sessions and interaction analytics.
"""

from cvportal.boundary.db.models.chat_session_model import ChatSessionModel
from cvportal.boundary.db.models.chat_interaction_model import ChatInteractionModel

__all__ = ["ChatSessionModel", "ChatInteractionModel"]
