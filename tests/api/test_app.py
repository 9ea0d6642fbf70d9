"""
Test suite for the assembled application: health routes, middleware,
the service cache, and a full ingest-then-chat round trip over HTTP.

System role: Verification of API assembly and dependency wiring
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from cvportal.api.deps import ServiceCache, get_chat_service, get_ingestion_service, get_vector_store
from cvportal.api.deps.dependencies import get_service_cache
from cvportal.api.main import create_app
from cvportal.application.services import ChatService, IngestionService
from cvportal.boundary.vdb.memory_provider import InMemoryVectorProvider
from cvportal.configs import Settings
from cvportal.configs.chat import ChatSettings
from cvportal.configs.vector_store import VectorStoreSettings
from cvportal.core.chunker import CVChunker
from cvportal.core.confidence_scorer import ConfidenceScorer
from cvportal.core.exceptions import VectorStoreUnavailable
from cvportal.core.retriever import SemanticRetriever
from cvportal.core.vector_store import VectorStore


@pytest.fixture
def app():
    return create_app()


class TestHealth:
    def test_health_check_should_echo_correlation_id(self, app) -> None:
        client = TestClient(app)

        response = client.get("/api/v1/health", headers={"X-Correlation-ID": "abc-123"})

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Server Healthy"}
        assert response.headers["X-Correlation-ID"] == "abc-123"

    def test_health_check_should_generate_correlation_id(self, app) -> None:
        response = TestClient(app).get("/api/v1/health")

        assert response.headers["X-Correlation-ID"]

    def test_vector_store_health_should_report_stats(self, app) -> None:
        app.dependency_overrides[get_vector_store] = lambda: VectorStore(InMemoryVectorProvider())

        response = TestClient(app).get("/api/v1/health/vector-store")

        assert response.status_code == 200
        assert response.json()["stats"] == {"dimension": None, "totalVectorCount": 0, "namespaces": {}}

    def test_vector_store_health_should_report_outage(self, app) -> None:
        store = MagicMock()
        store.stats = AsyncMock(side_effect=VectorStoreUnavailable("down"))
        app.dependency_overrides[get_vector_store] = lambda: store

        response = TestClient(app).get("/api/v1/health/vector-store")

        assert response.status_code == 503


class TestServiceCache:
    @pytest.fixture
    def cache(self, topic_provider) -> ServiceCache:
        settings = Settings(
            vector_store=VectorStoreSettings(store_type="memory"),
            chat=ChatSettings(llm_provider="none", max_chunk_tokens=300),
        )
        with patch("cvportal.boundary.embeddings.get_embedding_provider", return_value=topic_provider):
            cache = ServiceCache(settings)
            _ = cache.retriever
            _ = cache.ingestion_service
        return cache

    def test_cache_should_share_components(self, cache: ServiceCache) -> None:
        assert cache.retriever is cache.retriever
        assert cache.ingestion_service._vector_store is cache.vector_store
        assert cache.ingestion_service._embedding_generator is cache.embedding_generator
        assert cache.chunker.max_chunk_tokens == 300
        assert cache.llm_provider is None

    def test_clear_should_drop_cached_components(self, cache: ServiceCache) -> None:
        store = cache.vector_store

        cache.clear()

        assert cache._vector_store is None
        assert cache.vector_store is not store

    def test_get_chat_service_should_bind_request_session(self, cache: ServiceCache) -> None:
        db = AsyncMock()

        service = get_chat_service(db=db, cache=cache)

        assert isinstance(service, ChatService)
        assert service._session_store.db is db
        assert service._history.db is db

    def test_get_service_cache_should_return_singleton(self) -> None:
        assert get_service_cache() is get_service_cache()


class TestRoundTrip:
    def test_ingest_then_chat_should_answer_from_cv(
        self, app, topic_provider, generator_factory
    ) -> None:
        # Arrange
        generator = generator_factory(topic_provider)
        store = VectorStore(InMemoryVectorProvider())
        chat_service = ChatService(
            retriever=SemanticRetriever(generator, store),
            scorer=ConfidenceScorer(),
            session_store=AsyncMock(),
            interaction_sink=AsyncMock(),
            settings=ChatSettings(llm_provider="none"),
        )
        app.dependency_overrides[get_ingestion_service] = lambda: IngestionService(
            CVChunker(), generator, store
        )
        app.dependency_overrides[get_chat_service] = lambda: chat_service
        client = TestClient(app)

        # Act
        ingested = client.post(
            "/api/v1/cvs/cv-7/embeddings",
            json={"skills": ["Python", "FastAPI"], "experience": [{"company": "Acme", "position": "Engineer"}]},
        )
        answer = client.post(
            "/api/v1/chat",
            json={"ownerId": "cv-7", "message": "What skills does this person have?"},
        )

        # Assert
        assert ingested.json()["status"] == "stored"
        assert ingested.json()["embeddingCount"] == 3
        body = answer.json()
        assert body["response"] == "Based on the CV, here are the key skills: Python FastAPI"
        assert [s["section"] for s in body["sources"]] == ["skills", "skills"]
