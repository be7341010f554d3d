from unittest.mock import patch

import pytest
from django.db import OperationalError

from catalog.core import urls as core_urls


class TestHealthCheck:
    @pytest.mark.parametrize("path", ["/health", "/api/health"])
    def test_health_check_returns_200(self, client, path):
        response = client.get(path)
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == "1.0.0"
        assert "timestamp" in data
        assert "uptime" in data

    def test_health_check_reports_services(self, client):
        data = client.get("/health").json()
        assert data["services"] == {"database": "healthy", "api": "healthy"}

    def test_health_check_reports_memory(self, client):
        data = client.get("/health").json()
        assert set(data["memory_usage"]) == {"current", "peak", "limit"}

    def test_health_check_is_never_cached(self, client):
        response = client.get("/health")
        assert "no-cache" in response["Cache-Control"]
        assert "no-store" in response["Cache-Control"]
        assert "must-revalidate" in response["Cache-Control"]
        assert response["Pragma"] == "no-cache"
        assert "Expires" in response

    def test_database_down_is_degraded(self, client):
        with patch.object(core_urls.checker, "check_database", return_value=False):
            response = client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["services"]["database"] == "unhealthy"

    def test_database_error_is_degraded(self, client):
        class BrokenConnections(dict):
            def __getitem__(self, alias):
                raise OperationalError("connection refused")

        with patch.object(core_urls.checker, "connections", BrokenConnections()):
            response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["services"]["database"] == "unhealthy"

    def test_unexpected_failure_returns_error_body(self, client):
        with patch.object(core_urls.checker, "memory", side_effect=RuntimeError("no /proc")):
            response = client.get("/api/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "error"
        assert data["error"] == "Health check failed"
        assert data["message"] == "no /proc"
        assert "timestamp" in data
        assert response["Pragma"] == "no-cache"
