"""
LangChain embedding provider adapter.

Wraps any LangChain ``Embeddings`` implementation and maps provider
failures onto the embedding error taxonomy.

Dependencies: langchain_core, botocore
System role: Embedding backend adapter
"""

import logging
import re

from botocore.exceptions import ClientError
from langchain_core.embeddings import Embeddings

from cvportal.boundary.embeddings.provider import EmbeddingRequest, EmbeddingResponse
from cvportal.core.exceptions import (
    EmbeddingAuthError,
    EmbeddingError,
    EmbeddingInputError,
    EmbeddingRateLimitError,
)

logger = logging.getLogger(__name__)

_THROTTLE_CODES = {
    "ThrottlingException",
    "TooManyRequestsException",
    "ServiceQuotaExceededException",
    "ModelNotReadyException",
}
_AUTH_CODES = {
    "AccessDeniedException",
    "UnrecognizedClientException",
    "ExpiredTokenException",
    "InvalidSignatureException",
}
_INPUT_CODES = {"ValidationException"}

_THROTTLE_STATUS = {429}
_AUTH_STATUS = {401, 403}
_INPUT_STATUS = {400}

_THROTTLE_PATTERN = re.compile(r"\b429\b|rate.?limit|quota|resource.?exhausted|throttl", re.IGNORECASE)
_AUTH_PATTERN = re.compile(
    r"\b40[13]\b|api key|permission|unauthenticated|unauthorized|credential", re.IGNORECASE
)
_INPUT_PATTERN = re.compile(r"\b400\b|invalid.?argument|invalid input", re.IGNORECASE)


def classify_error(exc: Exception) -> EmbeddingError:
    """
    Map a provider exception to the embedding error taxonomy.

    Bedrock failures are classified by ``ClientError`` code, other
    providers by their HTTP status (``status_code`` or ``code``), then by
    whole-word status codes and phrases in the message. Unrecognized
    failures become a plain EmbeddingError (the chunk is skipped).
    """
    if isinstance(exc, EmbeddingError):
        return exc

    message = str(exc)
    details = {"provider_error": type(exc).__name__}

    if isinstance(exc, ClientError):
        code = exc.response.get("Error", {}).get("Code", "")
        details["code"] = code
        if code in _THROTTLE_CODES:
            return EmbeddingRateLimitError(message, details=details)
        if code in _AUTH_CODES:
            return EmbeddingAuthError(message, details=details)
        if code in _INPUT_CODES:
            return EmbeddingInputError(message, details=details)
        return EmbeddingError(message, details=details)

    status = _status_code(exc)
    if status is not None:
        details["status"] = status
    if status in _THROTTLE_STATUS or _THROTTLE_PATTERN.search(message):
        return EmbeddingRateLimitError(message, details=details)
    if status in _AUTH_STATUS or _AUTH_PATTERN.search(message):
        return EmbeddingAuthError(message, details=details)
    if status in _INPUT_STATUS or _INPUT_PATTERN.search(message):
        return EmbeddingInputError(message, details=details)
    return EmbeddingError(message, details=details)


def _status_code(exc: Exception) -> int | None:
    for attribute in ("status_code", "code"):
        value = getattr(exc, attribute, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


class LangChainEmbeddingProvider:
    """EmbeddingProvider backed by a LangChain Embeddings model."""

    def __init__(self, embeddings: Embeddings, model_name: str) -> None:
        self._embeddings = embeddings
        self.model_name = model_name

    async def embed(self, request: EmbeddingRequest) -> EmbeddingResponse:
        """
        Embed one text: ``aembed_documents`` for CV chunks, ``aembed_query``
        for visitor questions.

        Raises:
            EmbeddingError: Classified provider failure
        """
        try:
            if request.input_type == "document":
                vector = (await self._embeddings.aembed_documents([request.input]))[0]
            else:
                vector = await self._embeddings.aembed_query(request.input)
        except Exception as e:
            error = classify_error(e)
            logger.debug(
                f"{__name__}:embed - {type(error).__name__} from {self.model_name}: {e}"
            )
            raise error from e

        return EmbeddingResponse(
            vector=[float(value) for value in vector],
            usage={"input_characters": len(request.input)},
        )
