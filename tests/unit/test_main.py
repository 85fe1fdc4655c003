"""Unit tests for the main FastAPI application."""

import pytest
from fastapi.testclient import TestClient


@pytest.mark.unit
def test_app_creation():
    """The app is built from configuration."""
    from ticket_system.main import app

    assert app is not None
    assert app.title == "Ticket System"
    assert app.version == "1.0.0"


@pytest.mark.unit
def test_routes_are_registered():
    from ticket_system.main import app

    paths = app.openapi()["paths"]
    assert "/v1/issues/{issue_id}/assignee" in paths
    assert "/v1/teams/{team_id}/members/{user_id}" in paths
    assert "/v1/users/by-email" in paths


@pytest.mark.unit
def test_health_endpoint(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "service": "ticket-system",
        "version": "1.0.0",
    }


@pytest.mark.unit
def test_ready_endpoint(client: TestClient):
    response = client.get("/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["service"] == "ticket-system"
    assert data["checks"] == {"database": True, "config": True}
    assert data["response_time_ms"] >= 0


@pytest.mark.unit
def test_root_endpoint(client: TestClient):
    """The root redirects to the interactive docs."""
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "/docs"
