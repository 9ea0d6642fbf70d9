"""
S3 Vectors provider for production retrieval.

Stores every CV namespace in one S3 Vectors index. Keys are
``"{namespace}#{id}"`` so the namespace is part of the storage key, and
metadata carries ``namespace`` so queries filter server-side.

Index requirements: cosine distance metric; ``content`` declared as a
non-filterable metadata key (it exceeds the filterable size limit).

Dependencies: boto3, botocore, tenacity, python-dotenv
System role: Production vector store backend
"""

import asyncio
import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError
from dotenv import load_dotenv
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from cvportal.boundary.vdb.vector_schemas import IndexStats, VectorMatch, VectorRecord
from cvportal.core.exceptions import VectorStoreUnavailable

load_dotenv()

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "#"
DELETE_BATCH_SIZE = 500
LIST_PAGE_SIZE = 1000

_THROTTLE_CODES = {"ThrottlingException", "TooManyRequestsException", "ServiceUnavailableException"}


def _is_throttled(error: BaseException) -> bool:
    return (
        isinstance(error, ClientError)
        and error.response.get("Error", {}).get("Code") in _THROTTLE_CODES
    )


def make_key(namespace: str, record_id: str) -> str:
    return f"{namespace}{KEY_SEPARATOR}{record_id}"


def split_key(key: str) -> tuple[str, str]:
    namespace, _, record_id = key.partition(KEY_SEPARATOR)
    return namespace, record_id


class S3VectorsProvider:
    """
    VectorStoreProvider over the boto3 ``s3vectors`` client.

    boto3 is synchronous; each call runs in a worker thread.
    Throttling is retried with exponential backoff, other ClientErrors
    surface as VectorStoreUnavailable.
    """

    def __init__(
        self,
        vectors_bucket: str = "cvportal-vectors",
        index_name: str = "cv-embeddings",
        region: str = "us-east-1",
        client: Any = None,
    ) -> None:
        """
        Initialize S3 Vectors provider.

        Args:
            vectors_bucket: S3 Vectors bucket name
            index_name: Index name within the bucket
            region: AWS region for S3 Vectors
            client: Preconfigured boto3 client (tests)
        """
        self._vectors_bucket = vectors_bucket
        self._index_name = index_name
        self._client = client or boto3.client("s3vectors", region_name=region)
        self._dimension: int | None = None
        logger.info(
            f"{__name__}:__init__ - bucket={vectors_bucket}, index={index_name}, region={region}"
        )

    @retry(
        retry=retry_if_exception(_is_throttled),
        stop=stop_after_attempt(5),
        wait=wait_exponential_jitter(initial=1, max=30, jitter=2),
        before_sleep=lambda retry_state: logger.warning(
            f"{__name__}:_call - Retry {retry_state.attempt_number}/5 after throttling"
        ),
        reraise=True,
    )
    def _call_with_retry(self, method: str, **kwargs: Any) -> dict[str, Any]:
        return getattr(self._client, method)(
            vectorBucketName=self._vectors_bucket,
            indexName=self._index_name,
            **kwargs,
        )

    async def _call(self, method: str, namespace: str | None = None, **kwargs: Any) -> dict[str, Any]:
        try:
            return await asyncio.to_thread(self._call_with_retry, method, **kwargs)
        except ClientError as e:
            logger.error(f"{__name__}:{method} - ClientError after retries: {e}")
            raise VectorStoreUnavailable(
                f"S3 Vectors {method} failed",
                operation=method,
                namespace=namespace,
                details={"error": str(e)},
            ) from e

    async def upsert(self, namespace: str, records: list[VectorRecord]) -> None:
        if not records:
            return
        vectors = [
            {
                "key": make_key(namespace, record.id),
                "data": {"float32": [float(value) for value in record.values]},
                "metadata": {**record.metadata, "namespace": namespace, "record_id": record.id},
            }
            for record in records
        ]
        await self._call("put_vectors", namespace=namespace, vectors=vectors)
        logger.info(f"{__name__}:upsert - Stored {len(vectors)} vectors in {namespace}")

    async def query(
        self,
        namespace: str,
        vector: list[float],
        top_k: int,
        include_metadata: bool = True,
    ) -> list[VectorMatch]:
        response = await self._call(
            "query_vectors",
            namespace=namespace,
            queryVector={"float32": [float(value) for value in vector]},
            topK=top_k,
            filter={"namespace": {"$eq": namespace}},
            returnMetadata=include_metadata,
            returnDistance=True,
        )

        matches: list[VectorMatch] = []
        for item in response.get("vectors", []):
            key_namespace, record_id = split_key(item["key"])
            if key_namespace != namespace:
                continue
            metadata = dict(item.get("metadata") or {})
            metadata.pop("namespace", None)
            metadata.pop("record_id", None)
            # Cosine distance is 1 - similarity.
            score = 1.0 - float(item.get("distance", 1.0))
            matches.append(
                VectorMatch(
                    id=record_id,
                    score=max(-1.0, min(1.0, score)),
                    metadata=metadata,
                )
            )
        return matches

    async def _list_keys(self) -> list[str]:
        keys: list[str] = []
        next_token: str | None = None
        while True:
            kwargs: dict[str, Any] = {"maxResults": LIST_PAGE_SIZE}
            if next_token:
                kwargs["nextToken"] = next_token
            response = await self._call("list_vectors", **kwargs)
            keys.extend(item["key"] for item in response.get("vectors", []))
            next_token = response.get("nextToken")
            if not next_token:
                return keys

    async def delete_all(self, namespace: str) -> None:
        prefix = make_key(namespace, "")
        keys = [key for key in await self._list_keys() if key.startswith(prefix)]
        for start in range(0, len(keys), DELETE_BATCH_SIZE):
            await self._call(
                "delete_vectors",
                namespace=namespace,
                keys=keys[start:start + DELETE_BATCH_SIZE],
            )
        logger.info(f"{__name__}:delete_all - Deleted {len(keys)} vectors from {namespace}")

    async def _index_dimension(self) -> int | None:
        if self._dimension is None:
            index = await self._call("get_index")
            self._dimension = index.get("index", {}).get("dimension")
        return self._dimension

    async def has_vectors(self, namespace: str) -> bool:
        dimension = await self._index_dimension()
        if not dimension:
            return False
        # Any unit vector works; the namespace filter decides the hit.
        unit = [1.0] + [0.0] * (dimension - 1)
        response = await self._call(
            "query_vectors",
            namespace=namespace,
            queryVector={"float32": unit},
            topK=1,
            filter={"namespace": {"$eq": namespace}},
            returnMetadata=False,
            returnDistance=False,
        )
        return any(
            split_key(item["key"])[0] == namespace for item in response.get("vectors", [])
        )

    async def describe_index_stats(self) -> IndexStats:
        dimension = await self._index_dimension()

        namespaces: dict[str, int] = {}
        for key in await self._list_keys():
            namespace, _ = split_key(key)
            namespaces[namespace] = namespaces.get(namespace, 0) + 1

        return IndexStats(
            dimension=dimension,
            total_vector_count=sum(namespaces.values()),
            namespaces=namespaces,
        )
