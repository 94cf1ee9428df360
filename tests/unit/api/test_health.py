"""Unit tests for health endpoints."""

from fastapi.testclient import TestClient

from search_service.dependencies import get_search_service
from search_service.services import SearchService, SignalStore
from tests.conftest import FailingCatalog


def test_health_check(client: TestClient) -> None:
    """Test basic health check returns healthy status."""
    response = client.get("/api/v1/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert "environment" in data
    assert "timestamp" in data


def test_liveness_check(client: TestClient) -> None:
    response = client.get("/api/v1/health/live")
    assert response.status_code == 200
    assert response.json()["status"] == "alive"


def test_readiness_check(client: TestClient) -> None:
    response = client.get("/api/v1/health/ready")
    assert response.status_code == 200

    data = response.json()
    assert data["ready"] is True
    assert data["checks"] == {"catalog": True, "cache": False}


def test_readiness_reports_catalog_failure(app, client: TestClient) -> None:
    app.dependency_overrides[get_search_service] = lambda: SearchService(FailingCatalog(), SignalStore())

    data = client.get("/api/v1/health/ready").json()

    assert data["ready"] is False
    assert data["checks"]["catalog"] is False
