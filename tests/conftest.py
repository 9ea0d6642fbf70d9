"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite sessions, deterministic embedding and LLM
fakes, vector store fixtures, sample CVs and retrieval results
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from collections.abc import Callable

import pytest

from cvportal.boundary.embeddings.provider import EmbeddingRequest, EmbeddingResponse
from cvportal.boundary.llm.provider import LLMRequest, LLMResponse
from cvportal.boundary.vdb.memory_provider import InMemoryVectorProvider
from cvportal.core.embedding_generator import EmbeddingGenerator
from cvportal.core.exceptions import EmbeddingAuthError, EmbeddingInputError, LLMError
from cvportal.core.retriever import build_context, unique_sections
from cvportal.core.retry_policy import Pacer, RetryPolicy
from cvportal.core.vector_store import VectorStore
from cvportal.models.chunk import ChunkSection
from cvportal.models.cv import ParsedCV
from cvportal.models.embedding import Embedding, EmbeddingMetadata
from cvportal.models.retrieval import RAGContextResult, RetrievalResult

# Three orthogonal topic axes; text matching none lands on the third.
TOPICS: tuple[tuple[tuple[str, ...], list[float]], ...] = (
    (("skill", "python", "fastapi", "postgres"), [1.0, 0.0, 0.0]),
    (("experience", "work", "engineer", "acme"), [0.0, 1.0, 0.0]),
)
DEFAULT_TOPIC = [0.0, 0.0, 1.0]


class TopicEmbeddingProvider:
    """
    Deterministic EmbeddingProvider: the first topic whose keyword occurs
    in the text decides the vector.

    Inputs containing any ``fail_on`` marker raise EmbeddingInputError;
    ``auth_fail`` rejects every call.
    """

    def __init__(self, fail_on: tuple[str, ...] = (), auth_fail: bool = False) -> None:
        self.fail_on = fail_on
        self.auth_fail = auth_fail
        self.inputs: list[str] = []
        self.input_types: list[str] = []

    async def embed(self, request: EmbeddingRequest) -> EmbeddingResponse:
        self.inputs.append(request.input)
        self.input_types.append(request.input_type)
        if self.auth_fail:
            raise EmbeddingAuthError("401 invalid api key")
        if any(marker in request.input for marker in self.fail_on):
            raise EmbeddingInputError("400 invalid input")
        lowered = request.input.lower()
        for keywords, vector in TOPICS:
            if any(keyword in lowered for keyword in keywords):
                return EmbeddingResponse(vector=list(vector))
        return EmbeddingResponse(vector=list(DEFAULT_TOPIC))


class FakeLLMProvider:
    """LLMProvider that records requests and returns a fixed answer (or fails)."""

    def __init__(self, text: str = "Generated answer.", fail: bool = False) -> None:
        self.text = text
        self.fail = fail
        self.requests: list[LLMRequest] = []

    async def complete(self, request: LLMRequest) -> LLMResponse:
        self.requests.append(request)
        if self.fail:
            raise LLMError("Completion failed")
        return LLMResponse(text=self.text)


def make_result(
    section: ChunkSection,
    content: str,
    similarity: float,
    owner_id: str = "cv-1",
    chunk_id: str | None = None,
) -> RetrievalResult:
    return RetrievalResult(
        embedding=Embedding(
            id=chunk_id or f"{section.value}_chunk_0",
            owner_id=owner_id,
            vector=[],
            content=content,
            metadata=EmbeddingMetadata(section=section, section_key=section.value),
        ),
        similarity=similarity,
    )


def make_rag(query: str, results: list[RetrievalResult]) -> RAGContextResult:
    return RAGContextResult(
        query=query,
        results=results,
        context=build_context(results),
        sources=unique_sections(results),
        confidence=sum(r.similarity for r in results) / len(results) if results else 0.0,
    )


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from cvportal.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def topic_provider() -> TopicEmbeddingProvider:
    """Provide deterministic topic embedding provider."""
    return TopicEmbeddingProvider()


@pytest.fixture
def provider_factory() -> Callable[..., TopicEmbeddingProvider]:
    """Provide factory for failing/auth-failing embedding providers."""
    return TopicEmbeddingProvider


@pytest.fixture
def llm_factory() -> Callable[..., FakeLLMProvider]:
    """Provide factory for fake LLM providers."""
    return FakeLLMProvider


@pytest.fixture
def fast_retry_policy() -> RetryPolicy:
    """Retry policy with zero backoff."""
    return RetryPolicy(max_attempts=3, initial_backoff=0, max_backoff=0, jitter=0)


@pytest.fixture
def generator_factory(fast_retry_policy: RetryPolicy) -> Callable[..., EmbeddingGenerator]:
    """Build EmbeddingGenerator instances around a given provider, without pacing."""

    def build(provider, **kwargs) -> EmbeddingGenerator:
        kwargs.setdefault("retry_policy", fast_retry_policy)
        kwargs.setdefault("pacer", Pacer(0.0))
        return EmbeddingGenerator(provider=provider, model_name="test-embedding", **kwargs)

    return build


@pytest.fixture
def memory_provider() -> InMemoryVectorProvider:
    return InMemoryVectorProvider()


@pytest.fixture
def vector_store(memory_provider: InMemoryVectorProvider) -> VectorStore:
    """VectorStore over an in-memory provider."""
    return VectorStore(provider=memory_provider, timeout_seconds=1.0)


@pytest.fixture
def result_factory() -> Callable[..., RetrievalResult]:
    return make_result


@pytest.fixture
def rag_factory() -> Callable[..., RAGContextResult]:
    return make_rag


@pytest.fixture
def skills_only_cv() -> ParsedCV:
    """CV whose only content is a free-text skills section."""
    return ParsedCV.from_raw({"id": "cv-skills", "skills": "Skills: Python, FastAPI, PostgreSQL"})


@pytest.fixture
def full_cv() -> ParsedCV:
    """CV with every section populated, in the parser's camelCase shape."""
    return ParsedCV.from_raw(
        {
            "id": "cv-1",
            "summary": "Backend engineer focused on data platforms.",
            "personalInfo": {"name": "Jane Doe", "title": "Senior Engineer", "email": "jane@example.com"},
            "experience": [
                {
                    "company": "Acme",
                    "position": "Senior Engineer",
                    "duration": "2019 - 2024",
                    "achievements": ["Cut API latency by 40%"],
                    "technologies": ["Python", "Kafka"],
                },
                {"company": "Globex", "position": "Engineer", "description": "Built billing services"},
            ],
            "education": [{"institution": "MIT", "degree": "BSc", "field": "Computer Science"}],
            "skills": {"languages": ["Python", "Go"], "databases": ["PostgreSQL"]},
            "projects": [{"name": "cvportal", "description": "RAG chat over CVs"}],
            "certifications": [{"name": "AWS Solutions Architect", "issuer": "Amazon"}],
        }
    )
