"""
Test suite for S3VectorsProvider with a mocked boto3 client.

System role: Verification of the production vector backend wire format
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from cvportal.boundary.vdb.s3_vectors_provider import S3VectorsProvider, make_key, split_key
from cvportal.boundary.vdb.vector_schemas import VectorRecord
from cvportal.core.exceptions import VectorStoreUnavailable


@pytest.fixture
def mock_client() -> MagicMock:
    """Provide mock s3vectors client."""
    return MagicMock()


@pytest.fixture
def provider(mock_client: MagicMock) -> S3VectorsProvider:
    return S3VectorsProvider(vectors_bucket="bucket", index_name="index", client=mock_client)


class TestKeys:
    def test_make_and_split_key_should_round_trip(self) -> None:
        assert make_key("cv_1", "summary_chunk_0") == "cv_1#summary_chunk_0"
        assert split_key("cv_1#summary_chunk_0") == ("cv_1", "summary_chunk_0")


class TestUpsert:
    async def test_upsert_should_namespace_keys_and_metadata(
        self, provider: S3VectorsProvider, mock_client: MagicMock
    ) -> None:
        # Act
        await provider.upsert(
            "cv_1", [VectorRecord(id="a", values=[1, 2], metadata={"owner_id": "1"})]
        )

        # Assert
        kwargs = mock_client.put_vectors.call_args.kwargs
        assert kwargs["vectorBucketName"] == "bucket"
        assert kwargs["indexName"] == "index"
        assert kwargs["vectors"] == [
            {
                "key": "cv_1#a",
                "data": {"float32": [1.0, 2.0]},
                "metadata": {"owner_id": "1", "namespace": "cv_1", "record_id": "a"},
            }
        ]

    async def test_upsert_should_skip_empty_batches(
        self, provider: S3VectorsProvider, mock_client: MagicMock
    ) -> None:
        await provider.upsert("cv_1", [])

        mock_client.put_vectors.assert_not_called()


class TestQuery:
    async def test_query_should_filter_namespace_and_convert_distance(
        self, provider: S3VectorsProvider, mock_client: MagicMock
    ) -> None:
        # Arrange
        mock_client.query_vectors.return_value = {
            "vectors": [
                {
                    "key": "cv_1#a",
                    "distance": 0.1,
                    "metadata": {"namespace": "cv_1", "record_id": "a", "owner_id": "1"},
                },
                {"key": "cv_2#b", "distance": 0.0, "metadata": {"namespace": "cv_2"}},
            ]
        }

        # Act
        matches = await provider.query("cv_1", [1.0, 0.0], top_k=2)

        # Assert
        kwargs = mock_client.query_vectors.call_args.kwargs
        assert kwargs["filter"] == {"namespace": {"$eq": "cv_1"}}
        assert kwargs["topK"] == 2
        assert len(matches) == 1
        assert matches[0].id == "a"
        assert matches[0].score == pytest.approx(0.9)
        assert matches[0].metadata == {"owner_id": "1"}

    async def test_query_should_raise_unavailable_on_client_error(
        self, provider: S3VectorsProvider, mock_client: MagicMock
    ) -> None:
        mock_client.query_vectors.side_effect = ClientError(
            {"Error": {"Code": "AccessDeniedException", "Message": "denied"}}, "QueryVectors"
        )

        with pytest.raises(VectorStoreUnavailable):
            await provider.query("cv_1", [1.0], top_k=1)


class TestDeleteAndStats:
    async def test_delete_all_should_page_and_delete_namespace_keys(
        self, provider: S3VectorsProvider, mock_client: MagicMock
    ) -> None:
        # Arrange
        mock_client.list_vectors.side_effect = [
            {"vectors": [{"key": "cv_1#a"}, {"key": "cv_2#b"}], "nextToken": "t"},
            {"vectors": [{"key": "cv_1#c"}]},
        ]

        # Act
        await provider.delete_all("cv_1")

        # Assert
        assert mock_client.list_vectors.call_args_list[1].kwargs["nextToken"] == "t"
        mock_client.delete_vectors.assert_called_once()
        assert mock_client.delete_vectors.call_args.kwargs["keys"] == ["cv_1#a", "cv_1#c"]

    async def test_describe_index_stats_should_group_keys_by_namespace(
        self, provider: S3VectorsProvider, mock_client: MagicMock
    ) -> None:
        mock_client.get_index.return_value = {"index": {"dimension": 1536}}
        mock_client.list_vectors.return_value = {
            "vectors": [{"key": "cv_1#a"}, {"key": "cv_1#b"}, {"key": "cv_2#a"}]
        }

        stats = await provider.describe_index_stats()

        assert stats.dimension == 1536
        assert stats.total_vector_count == 3
        assert stats.namespaces == {"cv_1": 2, "cv_2": 1}


class TestHasVectors:
    async def test_has_vectors_should_query_one_vector_in_namespace(
        self, provider: S3VectorsProvider, mock_client: MagicMock
    ) -> None:
        # Arrange
        mock_client.get_index.return_value = {"index": {"dimension": 3}}
        mock_client.query_vectors.return_value = {"vectors": [{"key": "cv_1#a"}]}

        # Act
        found = await provider.has_vectors("cv_1")

        # Assert
        kwargs = mock_client.query_vectors.call_args.kwargs
        assert found is True
        assert kwargs["topK"] == 1
        assert kwargs["filter"] == {"namespace": {"$eq": "cv_1"}}
        assert kwargs["queryVector"] == {"float32": [1.0, 0.0, 0.0]}
        assert kwargs["returnMetadata"] is False
        mock_client.list_vectors.assert_not_called()

    async def test_has_vectors_should_report_empty_namespace(
        self, provider: S3VectorsProvider, mock_client: MagicMock
    ) -> None:
        mock_client.get_index.return_value = {"index": {"dimension": 2}}
        mock_client.query_vectors.return_value = {"vectors": []}

        assert await provider.has_vectors("cv_1") is False

    async def test_has_vectors_should_fetch_dimension_once(
        self, provider: S3VectorsProvider, mock_client: MagicMock
    ) -> None:
        mock_client.get_index.return_value = {"index": {"dimension": 2}}
        mock_client.query_vectors.return_value = {"vectors": []}

        await provider.has_vectors("cv_1")
        await provider.has_vectors("cv_2")

        mock_client.get_index.assert_called_once()
