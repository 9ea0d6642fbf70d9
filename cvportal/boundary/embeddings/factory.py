"""
Embedding provider factory.

Dependencies: langchain_aws, langchain_google_genai, cvportal.configs
System role: Embedding backend selection
"""

import logging

from langchain_aws import BedrockEmbeddings

from cvportal.boundary.embeddings.embeddings_wrapper import FixedDimensionEmbeddings
from cvportal.boundary.embeddings.langchain_provider import LangChainEmbeddingProvider
from cvportal.configs.embedding import EmbeddingSettings

logger = logging.getLogger(__name__)


def get_embedding_provider(settings: EmbeddingSettings) -> LangChainEmbeddingProvider:
    """
    Build the embedding provider named by ``settings.provider``.

    Raises:
        ValueError: If the provider name is unknown
    """
    provider = settings.provider.lower()

    if provider == "google":
        logger.info(f"{__name__}:get_embedding_provider - Google embeddings ({settings.model})")
        embeddings = FixedDimensionEmbeddings(
            model=settings.model,
            output_dimensionality=settings.dimension,
        )
    elif provider == "bedrock":
        logger.info(f"{__name__}:get_embedding_provider - Bedrock embeddings ({settings.model})")
        embeddings = BedrockEmbeddings(
            model_id=settings.model,
            region_name=settings.region,
        )
    else:
        raise ValueError(
            f"Invalid EMBEDDING_PROVIDER: {provider}. Must be 'google' or 'bedrock'."
        )

    return LangChainEmbeddingProvider(embeddings=embeddings, model_name=settings.model)
