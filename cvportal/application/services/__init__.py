"""
Application services.
"""

from cvportal.application.services.analytics_service import AnalyticsService
from cvportal.application.services.chat_service import ChatService
from cvportal.application.services.ingestion_service import IngestionService

__all__ = ["AnalyticsService", "ChatService", "IngestionService"]
