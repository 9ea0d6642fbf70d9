"""
In-memory vector provider for local development and tests.

Vectors are kept per namespace in insertion order; search is exhaustive
cosine similarity computed with numpy, ranked with a stable sort so ties
keep insertion order.

Dependencies: numpy
System role: Development vector store backend
"""

import logging

import numpy as np

from cvportal.boundary.vdb.vector_schemas import IndexStats, VectorMatch, VectorRecord

logger = logging.getLogger(__name__)


def cosine_similarities(matrix: np.ndarray, query: np.ndarray) -> np.ndarray:
    """Cosine similarity of each row of ``matrix`` with ``query`` (0 for zero vectors)."""
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    with np.errstate(divide="ignore", invalid="ignore"):
        scores = np.where(norms > 0, dots / norms, 0.0)
    return np.clip(scores, -1.0, 1.0)


class InMemoryVectorProvider:
    """Dict-backed provider keyed by (namespace, id)."""

    def __init__(self) -> None:
        self._namespaces: dict[str, dict[str, VectorRecord]] = {}

    async def upsert(self, namespace: str, records: list[VectorRecord]) -> None:
        bucket = self._namespaces.setdefault(namespace, {})
        for record in records:
            bucket[record.id] = record
        logger.debug(f"{__name__}:upsert - {len(records)} records into {namespace}")

    async def query(
        self,
        namespace: str,
        vector: list[float],
        top_k: int,
        include_metadata: bool = True,
    ) -> list[VectorMatch]:
        bucket = self._namespaces.get(namespace)
        if not bucket or top_k <= 0:
            return []

        records = list(bucket.values())
        query = np.asarray(vector, dtype=float)
        matrix = np.asarray([record.values for record in records], dtype=float)
        if matrix.shape[1] != query.shape[0]:
            raise ValueError(
                f"Query dimension {query.shape[0]} does not match index dimension {matrix.shape[1]}"
            )

        scores = cosine_similarities(matrix, query)
        order = np.argsort(-scores, kind="stable")[:top_k]

        return [
            VectorMatch(
                id=records[i].id,
                score=float(scores[i]),
                metadata=dict(records[i].metadata) if include_metadata else {},
            )
            for i in order
        ]

    async def delete_all(self, namespace: str) -> None:
        removed = self._namespaces.pop(namespace, {})
        logger.debug(f"{__name__}:delete_all - Removed {len(removed)} records from {namespace}")

    async def has_vectors(self, namespace: str) -> bool:
        return bool(self._namespaces.get(namespace))

    async def describe_index_stats(self) -> IndexStats:
        dimension = None
        for bucket in self._namespaces.values():
            for record in bucket.values():
                dimension = len(record.values)
                break
            if dimension is not None:
                break
        namespaces = {name: len(bucket) for name, bucket in self._namespaces.items() if bucket}
        return IndexStats(
            dimension=dimension,
            total_vector_count=sum(namespaces.values()),
            namespaces=namespaces,
        )
