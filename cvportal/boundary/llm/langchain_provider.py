"""
LangChain chat model adapter.

Dependencies: langchain_core
System role: Completion backend adapter
"""

import asyncio
import logging

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from cvportal.boundary.llm.provider import LLMRequest, LLMResponse
from cvportal.core.exceptions import LLMError
from cvportal.core.retry_policy import with_timeout

logger = logging.getLogger(__name__)


def _content_text(content: str | list) -> str:
    """Flatten message content (plain string or content blocks) to text."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type", "text") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class LangChainLLMProvider:
    """LLMProvider backed by any LangChain chat model (``ainvoke``)."""

    def __init__(self, chat_model: BaseChatModel, timeout_seconds: float | None = 30.0) -> None:
        self._model = chat_model
        self.timeout_seconds = timeout_seconds

    async def complete(self, request: LLMRequest) -> LLMResponse:
        """
        Run one completion.

        Raises:
            LLMError: Provider failure, timeout or empty answer
        """
        messages = [
            SystemMessage(content=request.system_prompt),
            *request.conversation_history,
            HumanMessage(content=request.user_message),
        ]

        try:
            result = await with_timeout(self._model.ainvoke(messages), self.timeout_seconds)
        except asyncio.TimeoutError as e:
            raise LLMError(
                "Completion timed out",
                details={"timeout_seconds": self.timeout_seconds},
            ) from e
        except Exception as e:
            raise LLMError(
                "Completion failed",
                details={"error": str(e), "error_type": type(e).__name__},
            ) from e

        text = _content_text(result.content)
        if not text.strip():
            raise LLMError("Completion returned no text")

        usage = dict(getattr(result, "usage_metadata", None) or {})
        logger.info(f"{__name__}:complete - {len(text)} chars, usage={usage}")
        return LLMResponse(
            text=text.strip(),
            usage={key: int(value) for key, value in usage.items() if isinstance(value, int)},
        )
