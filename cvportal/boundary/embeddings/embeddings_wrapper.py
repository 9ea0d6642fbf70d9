"""
Google Generative AI Embeddings wrapper with fixed output dimensionality.

The base GoogleGenerativeAIEmbeddings class does not apply
output_dimensionality from the constructor, so every embed call here
passes the configured dimension explicitly. Documents (CV chunks) and
queries (visitor questions) keep their separate Gemini task types.

Dependencies: langchain_google_genai, python-dotenv (GOOGLE_API_KEY from .env)
System role: Embedding dimension consistency with the vector index
"""

import logging

from dotenv import load_dotenv
from langchain_google_genai import GoogleGenerativeAIEmbeddings

load_dotenv()

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """Gemini embeddings that always request the configured dimension."""

    _output_dimensionality: int = 1536

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1536,
        **kwargs,
    ) -> None:
        """
        Args:
            model: Google embedding model ID
            output_dimensionality: Dimension requested on every call
            **kwargs: Passed through to GoogleGenerativeAIEmbeddings
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> list[float]:
        return super().embed_query(
            text,
            task_type=task_type,
            title=title,
            output_dimensionality=output_dimensionality or self._output_dimensionality,
        )

    async def aembed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> list[float]:
        return await super().aembed_query(
            text,
            task_type=task_type,
            title=title,
            output_dimensionality=output_dimensionality or self._output_dimensionality,
        )

    def embed_documents(
        self,
        texts: list[str],
        *,
        batch_size: int = 100,
        task_type: str | None = None,
        titles: list[str] | None = None,
        output_dimensionality: int | None = None,
    ) -> list[list[float]]:
        return super().embed_documents(
            texts,
            batch_size=batch_size,
            task_type=task_type,
            titles=titles,
            output_dimensionality=output_dimensionality or self._output_dimensionality,
        )

    async def aembed_documents(
        self,
        texts: list[str],
        *,
        batch_size: int = 100,
        task_type: str | None = None,
        titles: list[str] | None = None,
        output_dimensionality: int | None = None,
    ) -> list[list[float]]:
        return await super().aembed_documents(
            texts,
            batch_size=batch_size,
            task_type=task_type,
            titles=titles,
            output_dimensionality=output_dimensionality or self._output_dimensionality,
        )
