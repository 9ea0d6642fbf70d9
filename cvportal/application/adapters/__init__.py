"""
Persistence adapters for the chat orchestrator.
"""

from cvportal.application.adapters.chat_history_adapter import ChatHistoryAdapter
from cvportal.application.adapters.interaction_sink import SQLInteractionSink
from cvportal.application.adapters.session_store import SQLSessionStore

__all__ = ["ChatHistoryAdapter", "SQLInteractionSink", "SQLSessionStore"]
