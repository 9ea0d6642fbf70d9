"""
Language-model provider boundary.

- LLMProvider: completion protocol used by the chat orchestrator
- LangChainLLMProvider: adapter over a LangChain chat model
- get_llm_provider(): settings-driven factory (Google, Bedrock or none)

Dependencies: langchain_core, langchain_google_genai, langchain_aws
System role: Completion backend adapter
"""

from cvportal.boundary.llm.provider import LLMProvider, LLMRequest, LLMResponse
from cvportal.boundary.llm.langchain_provider import LangChainLLMProvider
from cvportal.boundary.llm.factory import get_llm_provider

__all__ = [
    "LLMProvider",
    "LLMRequest",
    "LLMResponse",
    "LangChainLLMProvider",
    "get_llm_provider",
]
