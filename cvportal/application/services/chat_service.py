"""
Chat service for question answering over one CV.

Orchestrates a chat turn: retrieval, intent-routed answer construction
(language model when configured, grounded template otherwise),
confidence scoring, citations, follow-up suggestions, session activity
and analytics recording.

The chat endpoint never propagates an error: any failure while
processing becomes an apology response with confidence 0.

Dependencies: cvportal.core, cvportal.boundary.llm, cvportal.application.ports
System role: Chat orchestration layer
"""

import logging
import secrets
import string
import time

from cvportal.application.ports import HistoryProvider, InteractionSink, SessionStore
from cvportal.boundary.llm.provider import LLMProvider, LLMRequest
from cvportal.configs.chat import ChatSettings
from cvportal.core.chat_prompt import build_system_prompt, build_user_message
from cvportal.core.citation_builder import CitationBuilder
from cvportal.core.confidence_scorer import ConfidenceScorer
from cvportal.core.exceptions import ChatProcessingError, LLMError, ValidationError
from cvportal.core.response_builder import (
    APOLOGY_RESPONSE,
    NOT_AVAILABLE_RESPONSE,
    ResponseBuilder,
    ResponsePlan,
)
from cvportal.core.retriever import SemanticRetriever
from cvportal.core.suggestions import generic_suggestions, suggest_questions
from cvportal.models.chat import ChatInteraction, ChatResponse
from cvportal.models.retrieval import RAGContextResult
from cvportal.observability.log_utils import log_exception_with_context, preview_text

logger = logging.getLogger(__name__)

NOT_AVAILABLE_CONFIDENCE = 0.1

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def generate_session_id() -> str:
    """``chat-{epoch_ms}-{6 random chars}``."""
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(6))
    return f"chat-{int(time.time() * 1000)}-{suffix}"


class ChatService:
    """
    Chat orchestrator.

    Session states: CREATED on initialization or first message, ACTIVE on
    every later turn. Idle sessions age out externally.
    """

    def __init__(
        self,
        retriever: SemanticRetriever,
        scorer: ConfidenceScorer,
        session_store: SessionStore,
        interaction_sink: InteractionSink,
        llm_provider: LLMProvider | None = None,
        history_provider: HistoryProvider | None = None,
        settings: ChatSettings | None = None,
    ) -> None:
        """
        Initialize chat service.

        Args:
            retriever: Semantic retriever for the CV namespace
            scorer: Confidence scorer
            session_store: Session persistence
            interaction_sink: Analytics sink
            llm_provider: Completion backend, None for template answers
            history_provider: Conversation history for LLM prompts
            settings: Chat settings (limits, prompt style)
        """
        self.settings = settings or ChatSettings()
        self._retriever = retriever
        self._scorer = scorer
        self._session_store = session_store
        self._interaction_sink = interaction_sink
        self._llm = llm_provider
        self._history = history_provider
        self._response_builder = ResponseBuilder()
        self._citation_builder = CitationBuilder(
            max_citations=self.settings.max_citations,
            excerpt_length=self.settings.citation_excerpt_length,
        )

    async def initialize_session(self, owner_id: str) -> str:
        """
        Create a chat session.

        Persistence failure is logged and the generated id is still
        returned; the session is then untracked for analytics.
        """
        session_id = generate_session_id()
        try:
            await self._session_store.create(session_id, owner_id)
            logger.info(f"{__name__}:initialize_session - Created {session_id} for {owner_id}")
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:initialize_session - Failed to persist session",
                e,
                session_id=session_id,
                owner_id=owner_id,
            )
        return session_id

    async def process_message(
        self,
        owner_id: str,
        message: str,
        session_id: str | None = None,
    ) -> ChatResponse:
        """
        Answer one question about a CV.

        Flow:
        1. Retrieve context above the similarity threshold
        2. No context: canned "not available" answer, no LLM call
        3. Route by intent and build the answer (LLM or template)
        4. Score confidence, attach citations and suggestions
        5. Touch the session and record the interaction (best effort)

        Args:
            owner_id: CV identifier
            message: Visitor question
            session_id: Existing session id, generated when absent

        Returns:
            ChatResponse: Always well-formed, never raises
        """
        start = time.perf_counter()
        session_id = session_id or generate_session_id()

        try:
            if not message or not message.strip():
                raise ValidationError("Message must not be empty", field="message")

            logger.info(
                f"{__name__}:process_message - owner={owner_id} session={session_id} "
                f"'{preview_text(message, 60)}'"
            )
            rag = await self._retriever.retrieve(owner_id, message)

            if rag.is_empty:
                response_text = NOT_AVAILABLE_RESPONSE
                confidence = NOT_AVAILABLE_CONFIDENCE
                sources = []
                suggestions = generic_suggestions(self.settings.max_suggestions)
            else:
                plan = self._response_builder.plan(message, rag.results)
                response_text = await self._answer(session_id, message, rag, plan)
                score = self._scorer.score(rag.results, message, response_text)
                confidence = score.overall
                sources = self._citation_builder.build_citations(rag.results)
                suggestions = suggest_questions(
                    rag.sources,
                    question=message,
                    limit=self.settings.max_suggestions,
                )
        except Exception as e:
            error = e if isinstance(e, ChatProcessingError) else ChatProcessingError(
                "Failed to process chat message",
                session_id=session_id,
                details={"error": str(e), "error_type": type(e).__name__},
            )
            log_exception_with_context(
                logger,
                f"{__name__}:process_message - {error.message}",
                e,
                owner_id=owner_id,
                session_id=session_id,
            )
            return ChatResponse(
                response=APOLOGY_RESPONSE,
                confidence=0.0,
                sources=[],
                response_time=self._elapsed_ms(start),
                session_id=session_id,
                suggested_questions=generic_suggestions(self.settings.max_suggestions),
            )

        response_time = self._elapsed_ms(start)
        await self._touch_session(session_id, owner_id)
        await self._record_interaction(
            ChatInteraction(
                owner_id=owner_id,
                session_id=session_id,
                message=message,
                response=response_text,
                confidence=confidence,
                response_time=response_time,
            )
        )

        logger.info(
            f"{__name__}:process_message - Responded in {response_time}ms "
            f"with confidence {confidence}"
        )
        return ChatResponse(
            response=response_text,
            confidence=confidence,
            sources=sources,
            response_time=response_time,
            session_id=session_id,
            suggested_questions=suggestions,
        )

    async def _answer(
        self,
        session_id: str,
        message: str,
        rag: RAGContextResult,
        plan: ResponsePlan,
    ) -> str:
        """LLM answer when configured; the grounded template otherwise or on LLM failure."""
        if self._llm is None:
            return plan.answer

        history = []
        if self._history is not None and self.settings.history_window > 0:
            try:
                history = await self._history.get_history(session_id, self.settings.history_window)
            except Exception as e:
                logger.warning(f"{__name__}:_answer - History unavailable: {type(e).__name__}: {e}")

        request = LLMRequest(
            system_prompt=build_system_prompt(
                response_style=self.settings.response_style,
                available_sections=rag.sources,
            ),
            conversation_history=history,
            user_message=build_user_message(
                question=message,
                context=rag.context,
                focus_sections=plan.focus_sections,
                max_context_length=self.settings.max_context_length,
            ),
        )
        try:
            completion = await self._llm.complete(request)
        except LLMError as e:
            logger.warning(f"{__name__}:_answer - LLM failed, using template answer: {e}")
            return plan.answer
        return completion.text

    async def _touch_session(self, session_id: str, owner_id: str) -> None:
        try:
            await self._session_store.touch(session_id, owner_id)
        except Exception as e:
            logger.error(f"{__name__}:_touch_session - {type(e).__name__}: {e}")

    async def _record_interaction(self, interaction: ChatInteraction) -> None:
        try:
            await self._interaction_sink.record(interaction)
        except Exception as e:
            logger.error(f"{__name__}:_record_interaction - {type(e).__name__}: {e}")

    @staticmethod
    def _elapsed_ms(start: float) -> int:
        return int((time.perf_counter() - start) * 1000)
