"""
Dependency injection container.

Composition root: the only place that reads application settings and
wires providers, core components and services together.

Dependencies: fastapi, cvportal.configs, cvportal.application, cvportal.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cvportal.application.adapters import ChatHistoryAdapter, SQLInteractionSink, SQLSessionStore
from cvportal.application.services import AnalyticsService, ChatService, IngestionService
from cvportal.boundary.db import get_async_db
from cvportal.configs import Settings, get_settings
from cvportal.core.chunker import CVChunker
from cvportal.core.confidence_scorer import ConfidenceScorer, ConfidenceWeights
from cvportal.core.embedding_generator import EmbeddingGenerator
from cvportal.core.retriever import SemanticRetriever
from cvportal.core.retry_policy import Pacer, RetryPolicy
from cvportal.core.vector_store import VectorStore


class ServiceCache:
    """Container for cached, request-independent service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._embedding_generator = None
        self._vector_store = None
        self._retriever = None
        self._scorer = None
        self._chunker = None
        self._ingestion_service = None
        self._llm_provider = None
        self._llm_loaded = False

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def embedding_generator(self) -> EmbeddingGenerator:
        """Get cached embedding generator."""
        if self._embedding_generator is None:
            from cvportal.boundary.embeddings import get_embedding_provider

            config = self.settings.embedding
            self._embedding_generator = EmbeddingGenerator(
                provider=get_embedding_provider(config),
                model_name=config.model,
                batch_size=config.batch_size,
                retry_policy=RetryPolicy(
                    max_attempts=config.max_retries,
                    initial_backoff=config.backoff_initial_seconds,
                    max_backoff=config.backoff_max_seconds,
                    timeout_seconds=config.request_timeout_seconds,
                ),
                pacer=Pacer(config.pacing_delay_seconds),
                dimension=config.dimension,
            )
        return self._embedding_generator

    @property
    def vector_store(self) -> VectorStore:
        """Get cached vector store."""
        if self._vector_store is None:
            from cvportal.boundary.vdb import get_vector_provider

            config = self.settings.vector_store
            self._vector_store = VectorStore(
                provider=get_vector_provider(config),
                namespace_prefix=config.namespace_prefix,
                max_content_length=config.max_content_length,
                upsert_batch_size=config.upsert_batch_size,
                timeout_seconds=config.request_timeout_seconds,
                pacer=Pacer(config.upsert_delay_seconds),
            )
        return self._vector_store

    @property
    def retriever(self) -> SemanticRetriever:
        if self._retriever is None:
            config = self.settings.vector_store
            self._retriever = SemanticRetriever(
                embedding_generator=self.embedding_generator,
                vector_store=self.vector_store,
                top_k=config.top_k,
                min_similarity=config.similarity_threshold,
            )
        return self._retriever

    @property
    def scorer(self) -> ConfidenceScorer:
        if self._scorer is None:
            config = self.settings.chat
            self._scorer = ConfidenceScorer(
                weights=ConfidenceWeights(
                    semantic=config.semantic_weight,
                    factual=config.factual_weight,
                    completeness=config.completeness_weight,
                ),
                semantic_saturation=config.semantic_saturation,
                factual_threshold=config.factual_threshold,
                completeness_saturation=config.completeness_saturation,
            )
        return self._scorer

    @property
    def chunker(self) -> CVChunker:
        if self._chunker is None:
            config = self.settings.chat
            self._chunker = CVChunker(
                max_chunk_tokens=config.max_chunk_tokens,
                overlap_tokens=config.overlap_tokens,
                words_per_token=config.words_per_token,
                max_chunks_per_item=config.max_chunks_per_item,
            )
        return self._chunker

    @property
    def llm_provider(self):
        """Get cached completion backend (None when CHAT_LLM_PROVIDER=none)."""
        if not self._llm_loaded:
            from cvportal.boundary.llm import get_llm_provider

            self._llm_provider = get_llm_provider(self.settings.chat)
            self._llm_loaded = True
        return self._llm_provider

    @property
    def ingestion_service(self) -> IngestionService:
        if self._ingestion_service is None:
            self._ingestion_service = IngestionService(
                chunker=self.chunker,
                embedding_generator=self.embedding_generator,
                vector_store=self.vector_store,
            )
        return self._ingestion_service

    def clear(self) -> None:
        """Clear all cached instances."""
        self._embedding_generator = None
        self._vector_store = None
        self._retriever = None
        self._scorer = None
        self._chunker = None
        self._ingestion_service = None
        self._llm_provider = None
        self._llm_loaded = False


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_chat_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> ChatService:
    """
    Get chat service instance.

    Args:
        db: Async database session (injected via Depends)
        cache: Service cache (injected via Depends)

    Returns:
        ChatService: Chat orchestrator bound to the request's session
    """
    return ChatService(
        retriever=cache.retriever,
        scorer=cache.scorer,
        session_store=SQLSessionStore(db),
        interaction_sink=SQLInteractionSink(db),
        llm_provider=cache.llm_provider,
        history_provider=ChatHistoryAdapter(db),
        settings=cache.settings.chat,
    )


def get_ingestion_service(cache: ServiceCache = Depends(get_service_cache)) -> IngestionService:
    return cache.ingestion_service


def get_analytics_service(db: AsyncSession = Depends(get_async_db)) -> AnalyticsService:
    return AnalyticsService(db=db)


def get_vector_store(cache: ServiceCache = Depends(get_service_cache)) -> VectorStore:
    return cache.vector_store
