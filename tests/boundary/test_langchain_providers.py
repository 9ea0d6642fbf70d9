"""
Test suite for the LangChain embedding and chat model adapters.

System role: Verification of provider error mapping
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from botocore.exceptions import ClientError
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage, HumanMessage

from cvportal.boundary.embeddings.langchain_provider import (
    LangChainEmbeddingProvider,
    classify_error,
)
from cvportal.boundary.embeddings.provider import EmbeddingRequest
from cvportal.boundary.llm.langchain_provider import LangChainLLMProvider, _content_text
from cvportal.boundary.llm.provider import LLMRequest
from cvportal.core.exceptions import (
    EmbeddingAuthError,
    EmbeddingError,
    EmbeddingInputError,
    EmbeddingRateLimitError,
    LLMError,
)


def client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "InvokeModel")


class StatusError(Exception):
    def __init__(self, status_code: int, message: str = "request failed") -> None:
        super().__init__(message)
        self.status_code = status_code


class TestClassifyError:
    @pytest.mark.parametrize(
        "error, expected",
        [
            (client_error("ThrottlingException"), EmbeddingRateLimitError),
            (client_error("AccessDeniedException"), EmbeddingAuthError),
            (client_error("ValidationException"), EmbeddingInputError),
            (client_error("InternalServerException"), EmbeddingError),
            (RuntimeError("429 Resource exhausted"), EmbeddingRateLimitError),
            (RuntimeError("API key not valid"), EmbeddingAuthError),
            (RuntimeError("400 Invalid argument"), EmbeddingInputError),
            (RuntimeError("socket closed"), EmbeddingError),
            (RuntimeError("timeout after 4000ms"), EmbeddingError),
            (RuntimeError("request id 14031 failed"), EmbeddingError),
            (RuntimeError("HTTP 403: caller lacks access"), EmbeddingAuthError),
            (StatusError(429), EmbeddingRateLimitError),
            (StatusError(401), EmbeddingAuthError),
            (StatusError(400), EmbeddingInputError),
            (StatusError(503, "upstream took 4000ms"), EmbeddingError),
        ],
    )
    def test_classify_error_should_map_provider_failures(self, error, expected) -> None:
        assert type(classify_error(error)) is expected

    def test_classify_error_should_pass_through_taxonomy(self) -> None:
        error = EmbeddingInputError("bad")

        assert classify_error(error) is error


class TestLangChainEmbeddingProvider:
    async def test_embed_should_return_float_vector(self) -> None:
        embeddings = MagicMock()
        embeddings.aembed_query = AsyncMock(return_value=[1, 2, 3])
        provider = LangChainEmbeddingProvider(embeddings, "model")

        response = await provider.embed(EmbeddingRequest(model="model", input="text"))

        assert response.vector == [1.0, 2.0, 3.0]
        embeddings.aembed_query.assert_awaited_once_with("text")

    async def test_embed_should_use_document_call_for_cv_chunks(self) -> None:
        # Arrange
        embeddings = MagicMock()
        embeddings.aembed_documents = AsyncMock(return_value=[[0.5, 0.5]])
        embeddings.aembed_query = AsyncMock()
        provider = LangChainEmbeddingProvider(embeddings, "model")

        # Act
        response = await provider.embed(
            EmbeddingRequest(model="model", input="chunk text", input_type="document")
        )

        # Assert
        assert response.vector == [0.5, 0.5]
        embeddings.aembed_documents.assert_awaited_once_with(["chunk text"])
        embeddings.aembed_query.assert_not_awaited()

    async def test_embed_should_raise_classified_error(self) -> None:
        embeddings = MagicMock()
        embeddings.aembed_query = AsyncMock(side_effect=client_error("ThrottlingException"))
        provider = LangChainEmbeddingProvider(embeddings, "model")

        with pytest.raises(EmbeddingRateLimitError):
            await provider.embed(EmbeddingRequest(model="model", input="text"))


class TestLangChainLLMProvider:
    @pytest.fixture
    def request_with_history(self) -> LLMRequest:
        return LLMRequest(
            system_prompt="system",
            conversation_history=[HumanMessage(content="hi"), AIMessage(content="hello")],
            user_message="question",
        )

    async def test_complete_should_return_model_text(self, request_with_history) -> None:
        provider = LangChainLLMProvider(FakeListChatModel(responses=["  answer  "]))

        response = await provider.complete(request_with_history)

        assert response.text == "answer"

    async def test_complete_should_send_system_history_and_question(
        self, request_with_history
    ) -> None:
        # Arrange
        model = MagicMock()
        model.ainvoke = AsyncMock(return_value=AIMessage(content="ok"))

        # Act
        await LangChainLLMProvider(model).complete(request_with_history)

        # Assert
        messages = model.ainvoke.call_args.args[0]
        assert [m.type for m in messages] == ["system", "human", "ai", "human"]
        assert messages[-1].content == "question"

    async def test_complete_should_wrap_model_errors(self, request_with_history) -> None:
        model = MagicMock()
        model.ainvoke = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(LLMError):
            await LangChainLLMProvider(model).complete(request_with_history)

    async def test_complete_should_time_out(self, request_with_history) -> None:
        async def slow(messages):
            await asyncio.sleep(1)

        model = MagicMock()
        model.ainvoke = slow

        with pytest.raises(LLMError, match="timed out"):
            await LangChainLLMProvider(model, timeout_seconds=0.01).complete(request_with_history)

    async def test_complete_should_reject_empty_text(self, request_with_history) -> None:
        model = MagicMock()
        model.ainvoke = AsyncMock(return_value=AIMessage(content="   "))

        with pytest.raises(LLMError):
            await LangChainLLMProvider(model).complete(request_with_history)

    def test_content_text_should_flatten_blocks(self) -> None:
        content = ["a", {"type": "text", "text": "b"}, {"type": "image_url", "image_url": "x"}]

        assert _content_text(content) == "ab"
