import pytest

from modules.core.container import build_container, set_container

pytestmark = pytest.mark.integration


class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert "services" in data

    def test_health_check_reports_store_status(self, client, kitchen):
        data = client.get("/health").json()
        assert data["services"]["store"]["status"] == "up"
        assert data["services"]["store"]["collections"]["users"] == 1
        assert "response_time_ms" in data["services"]["store"]

    def test_snapshot_disabled_by_default(self, client):
        data = client.get("/health").json()
        assert data["services"]["snapshot"] == {"status": "disabled"}

    def test_snapshot_path_reported(self, client, tmp_path):
        set_container(build_container(snapshot_path=tmp_path / "snapshot.json"))
        data = client.get("/health").json()
        assert data["services"]["snapshot"]["status"] == "up"
        assert data["services"]["snapshot"]["exists"] is False

    def test_snapshot_path_pointing_at_directory_is_unhealthy(self, client, tmp_path):
        set_container(build_container(snapshot_path=tmp_path))
        response = client.get("/health")
        assert response.status_code == 503
        assert response.json()["services"]["snapshot"]["status"] == "down"

    def test_no_authentication_required(self, client):
        response = client.get("/health", HTTP_AUTHORIZATION="Bearer not-a-session")
        assert response.status_code == 200

