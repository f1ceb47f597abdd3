"""
Tests for the root and health endpoints.
"""

from fastapi.testclient import TestClient

from energisense import __version__
from energisense.main import app


class TestRoot:

    def test_root_lists_endpoints(self, client):
        response = client.get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "EnergiSense API"
        assert body["version"] == __version__
        assert "latest" in body["endpoints"]


class TestHealth:

    def test_healthy_when_database_answers(self, client, monkeypatch):
        monkeypatch.setattr("energisense.main.ping", lambda db: True)

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "connected"}

    def test_degraded_when_database_is_down(self, client, monkeypatch):
        monkeypatch.setattr("energisense.main.ping", lambda db: False)

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"

    def test_degraded_before_startup(self, client):
        # Without the lifespan there is no database handle at all
        assert client.get("/health").status_code == 503


class TestServicesNotStarted:

    def test_routes_answer_500_until_started(self):
        response = TestClient(app).post("/api/data/inject", json={"value": 1.0})

        assert response.status_code == 500
        assert response.json()["detail"] == "Server not fully started yet"
