"""
Test suite for InMemoryVectorProvider.

System role: Verification of the development vector backend
"""

import numpy as np
import pytest

from cvportal.boundary.vdb.memory_provider import InMemoryVectorProvider, cosine_similarities
from cvportal.boundary.vdb.vector_schemas import VectorRecord


def record(record_id: str, values: list[float]) -> VectorRecord:
    return VectorRecord(id=record_id, values=values, metadata={"owner_id": "1"})


class TestCosineSimilarities:
    def test_cosine_similarities_should_handle_zero_vectors(self) -> None:
        matrix = np.array([[1.0, 0.0], [0.0, 0.0], [-1.0, 0.0]])

        scores = cosine_similarities(matrix, np.array([2.0, 0.0]))

        assert scores.tolist() == [1.0, 0.0, -1.0]


class TestInMemoryVectorProvider:
    async def test_query_should_rank_and_keep_ties_in_insertion_order(self) -> None:
        # Arrange
        provider = InMemoryVectorProvider()
        await provider.upsert(
            "ns",
            [record("tie-1", [1.0, 0.0]), record("low", [0.0, 1.0]), record("tie-2", [2.0, 0.0])],
        )

        # Act
        matches = await provider.query("ns", [1.0, 0.0], top_k=3)

        # Assert
        assert [m.id for m in matches] == ["tie-1", "tie-2", "low"]
        assert matches[0].metadata == {"owner_id": "1"}

    async def test_query_should_omit_metadata_on_request(self) -> None:
        provider = InMemoryVectorProvider()
        await provider.upsert("ns", [record("a", [1.0])])

        matches = await provider.query("ns", [1.0], top_k=1, include_metadata=False)

        assert matches[0].metadata == {}

    async def test_query_should_reject_dimension_mismatch(self) -> None:
        provider = InMemoryVectorProvider()
        await provider.upsert("ns", [record("a", [1.0, 0.0])])

        with pytest.raises(ValueError):
            await provider.query("ns", [1.0, 0.0, 0.0], top_k=1)

    async def test_describe_index_stats_should_count_per_namespace(self) -> None:
        provider = InMemoryVectorProvider()
        await provider.upsert("a", [record("1", [1.0, 0.0]), record("2", [0.0, 1.0])])
        await provider.upsert("b", [record("1", [1.0, 0.0])])
        await provider.delete_all("b")

        stats = await provider.describe_index_stats()

        assert stats.dimension == 2
        assert stats.total_vector_count == 2
        assert stats.namespaces == {"a": 2}

    async def test_has_vectors_should_track_namespace_contents(self) -> None:
        provider = InMemoryVectorProvider()
        await provider.upsert("a", [record("1", [1.0, 0.0])])
        await provider.upsert("b", [record("1", [1.0, 0.0])])
        await provider.delete_all("b")

        assert await provider.has_vectors("a") is True
        assert await provider.has_vectors("b") is False
        assert await provider.has_vectors("missing") is False
