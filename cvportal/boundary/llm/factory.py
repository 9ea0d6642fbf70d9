"""
Language-model provider factory.

Dependencies: langchain_aws, langchain_google_genai, cvportal.configs
System role: Completion backend selection
"""

import logging

from langchain_aws import ChatBedrockConverse
from langchain_google_genai import ChatGoogleGenerativeAI

from cvportal.boundary.llm.langchain_provider import LangChainLLMProvider
from cvportal.configs.chat import ChatSettings

logger = logging.getLogger(__name__)


def get_llm_provider(settings: ChatSettings) -> LangChainLLMProvider | None:
    """
    Build the completion backend named by ``settings.llm_provider``.

    Returns None for ``none``; the chat service then answers from templates.

    Raises:
        ValueError: If the provider name is unknown
    """
    provider = settings.llm_provider.lower()

    if provider == "none":
        logger.info(f"{__name__}:get_llm_provider - No LLM configured, using template answers")
        return None

    if provider == "google":
        logger.info(f"{__name__}:get_llm_provider - Google chat model ({settings.llm_model})")
        model = ChatGoogleGenerativeAI(
            model=settings.llm_model,
            temperature=settings.llm_temperature,
            max_output_tokens=settings.llm_max_tokens,
        )
    elif provider == "bedrock":
        logger.info(f"{__name__}:get_llm_provider - Bedrock chat model ({settings.llm_model})")
        model = ChatBedrockConverse(
            model=settings.llm_model,
            region_name=settings.llm_region,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
        )
    else:
        raise ValueError(
            f"Invalid CHAT_LLM_PROVIDER: {provider}. Must be 'google', 'bedrock' or 'none'."
        )

    return LangChainLLMProvider(chat_model=model, timeout_seconds=settings.llm_timeout_seconds)
