"""
Vector store provider protocol.

Every read and write is scoped to a namespace; implementations make the
namespace part of the storage key.

Dependencies: cvportal.boundary.vdb.vector_schemas
System role: Contract between the vector store and its backend
"""

from typing import Protocol, runtime_checkable

from cvportal.boundary.vdb.vector_schemas import IndexStats, VectorMatch, VectorRecord


@runtime_checkable
class VectorStoreProvider(Protocol):
    """Namespace-partitioned vector backend."""

    async def upsert(self, namespace: str, records: list[VectorRecord]) -> None: ...

    async def query(
        self,
        namespace: str,
        vector: list[float],
        top_k: int,
        include_metadata: bool = True,
    ) -> list[VectorMatch]: ...

    async def delete_all(self, namespace: str) -> None: ...

    async def has_vectors(self, namespace: str) -> bool: ...

    async def describe_index_stats(self) -> IndexStats: ...
