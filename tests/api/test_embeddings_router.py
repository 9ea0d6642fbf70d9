"""
Test suite for CV embedding endpoints.

System role: Verification of ingestion HTTP API and error mapping
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from cvportal.api.deps import get_ingestion_service
from cvportal.api.routers.embeddings import router
from cvportal.core.exceptions import EmbeddingGenerationFailed, VectorStoreUnavailable
from cvportal.models.ingestion import EmbeddingStatus, IngestionResult


@pytest.fixture
def mock_ingestion_service() -> AsyncMock:
    """Provide mock IngestionService."""
    service = AsyncMock()
    service.ingest.return_value = IngestionResult(
        owner_id="cv-1",
        namespace="cv_cv-1",
        status="stored",
        chunk_count=3,
        embedding_count=2,
        skipped_chunk_ids=["skills_chunk_0"],
    )
    service.status.return_value = EmbeddingStatus(owner_id="cv-1", has_data=True)
    return service


@pytest.fixture
def client(mock_ingestion_service: AsyncMock) -> TestClient:
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_ingestion_service] = lambda: mock_ingestion_service
    return TestClient(app)


class TestCreateEmbeddings:
    def test_create_should_ingest_parsed_cv(
        self, client: TestClient, mock_ingestion_service: AsyncMock
    ) -> None:
        # Act
        response = client.post(
            "/cvs/cv-1/embeddings",
            json={"summary": "Engineer", "personalInfo": {"name": "Jane"}},
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["embeddingCount"] == 2
        assert response.json()["skippedChunkIds"] == ["skills_chunk_0"]
        cv = mock_ingestion_service.ingest.call_args.args[0]
        assert cv.id == "cv-1"
        assert cv.personal_info.name == "Jane"
        assert mock_ingestion_service.ingest.call_args.kwargs["force"] is False

    def test_create_should_pass_force_flag(
        self, client: TestClient, mock_ingestion_service: AsyncMock
    ) -> None:
        client.post("/cvs/cv-1/embeddings?force=true", json={"id": "cv-1", "summary": "x"})

        assert mock_ingestion_service.ingest.call_args.kwargs["force"] is True

    @pytest.mark.parametrize(
        "payload",
        [
            {"id": "cv-2", "summary": "x"},
            {"experience": "not a list"},
        ],
    )
    def test_create_should_reject_invalid_cv(
        self, payload: dict, client: TestClient, mock_ingestion_service: AsyncMock
    ) -> None:
        response = client.post("/cvs/cv-1/embeddings", json=payload)

        assert response.status_code == 422
        mock_ingestion_service.ingest.assert_not_awaited()

    @pytest.mark.parametrize(
        "error, status_code",
        [
            (EmbeddingGenerationFailed("no embeddings"), 422),
            (VectorStoreUnavailable("down"), 503),
        ],
    )
    def test_create_should_map_service_errors(
        self, error, status_code: int, client: TestClient, mock_ingestion_service: AsyncMock
    ) -> None:
        mock_ingestion_service.ingest.side_effect = error

        response = client.post("/cvs/cv-1/embeddings", json={"summary": "x"})

        assert response.status_code == status_code
        assert response.json()["detail"] == error.message


class TestStatusAndDelete:
    def test_status_should_report_has_data(self, client: TestClient) -> None:
        response = client.get("/cvs/cv-1/embeddings")

        assert response.status_code == 200
        assert response.json() == {"ownerId": "cv-1", "hasData": True}

    def test_delete_should_return_no_content(
        self, client: TestClient, mock_ingestion_service: AsyncMock
    ) -> None:
        response = client.delete("/cvs/cv-1/embeddings")

        assert response.status_code == 204
        mock_ingestion_service.delete.assert_awaited_once_with("cv-1")

    def test_delete_should_map_unavailable_store(
        self, client: TestClient, mock_ingestion_service: AsyncMock
    ) -> None:
        mock_ingestion_service.delete.side_effect = VectorStoreUnavailable("down")

        assert client.delete("/cvs/cv-1/embeddings").status_code == 503
