"""
Embedding provider boundary.

- EmbeddingProvider: protocol every backend satisfies
- LangChainEmbeddingProvider: adapter over any LangChain Embeddings model
- get_embedding_provider(): settings-driven factory (Google or Bedrock)

Dependencies: langchain_core, langchain_google_genai, langchain_aws
System role: Embedding backend adapter
"""

from cvportal.boundary.embeddings.provider import (
    EmbeddingProvider,
    EmbeddingRequest,
    EmbeddingResponse,
)
from cvportal.boundary.embeddings.langchain_provider import LangChainEmbeddingProvider
from cvportal.boundary.embeddings.factory import get_embedding_provider

__all__ = [
    "EmbeddingProvider",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "LangChainEmbeddingProvider",
    "get_embedding_provider",
]
