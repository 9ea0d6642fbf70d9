"""
Chat analytics service.

Aggregates recorded interactions for one CV over a time window.

Dependencies: sqlalchemy, cvportal.boundary.db.CRUD
System role: Analytics read model for chat dashboards
"""

import logging
from collections import Counter
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from cvportal.boundary.db.base import utc_now
from cvportal.boundary.db.CRUD.chat_interaction_crud import chat_interaction_crud
from cvportal.models.chat import ChatAnalytics, TopQuestion

logger = logging.getLogger(__name__)

TIME_RANGES: dict[str, timedelta] = {
    "last_24_hours": timedelta(hours=24),
    "last_7_days": timedelta(days=7),
    "last_30_days": timedelta(days=30),
}
DEFAULT_TIME_RANGE = "last_7_days"
TOP_QUESTION_LIMIT = 5
QUESTION_PREFIX_LENGTH = 100


class AnalyticsService:
    """Chat analytics over the chat_interactions table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_chat_analytics(
        self,
        owner_id: str,
        time_range: str = DEFAULT_TIME_RANGE,
    ) -> ChatAnalytics:
        """
        Summarize interactions for a CV.

        Unknown ranges fall back to seven days. Failures return an empty
        summary flagged with ``error`` instead of raising.

        Args:
            owner_id: CV identifier
            time_range: last_24_hours | last_7_days | last_30_days

        Returns:
            ChatAnalytics: Totals, averages, top questions, session count
        """
        try:
            until = utc_now()
            since = until - TIME_RANGES.get(time_range, TIME_RANGES[DEFAULT_TIME_RANGE])
            interactions = await chat_interaction_crud.list_for_owner(
                self.db, owner_id, since, until
            )
        except Exception as e:
            logger.error(f"{__name__}:get_chat_analytics - {type(e).__name__}: {e}")
            return ChatAnalytics(time_range=time_range, error="Analytics unavailable")

        total = len(interactions)
        if total == 0:
            return ChatAnalytics(time_range=time_range)

        questions = Counter(
            row.message[:QUESTION_PREFIX_LENGTH] for row in interactions if row.message
        )
        return ChatAnalytics(
            total_interactions=total,
            average_confidence=sum(row.confidence for row in interactions) / total,
            average_response_time=sum(row.response_time_ms for row in interactions) / total,
            top_questions=[
                TopQuestion(question=question, count=count)
                for question, count in questions.most_common(TOP_QUESTION_LIMIT)
            ],
            session_count=len({row.session_id for row in interactions}),
            time_range=time_range,
        )
