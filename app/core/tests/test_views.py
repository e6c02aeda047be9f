"""
Tests for core views (health check).
"""

from unittest.mock import patch

import pytest

URL = "/health/"


@pytest.fixture
def healthy_settings(settings):
    settings.SUPABASE_URL = "https://project.supabase.co"
    settings.SUPABASE_SERVICE_ROLE_KEY = "service-role"
    settings.STRIPE_SECRET_KEY = "sk_test_123"
    settings.ZAPIER_WEBHOOK_SECRET = "zap"
    settings.ZAPIER_WEBHOOK_URL = "https://hooks.zapier.com/hooks/catch/1/abc/"
    settings.SITE_URL = "https://app.example.com"
    settings.APP_VERSION = "2.3.4"
    settings.ENVIRONMENT = "test"
    return settings


class TestHealthCheck:
    """Tests for the health check endpoint."""

    def test_healthy(self, client, healthy_settings):
        response = client.get(URL)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == "2.3.4"
        assert body["environment"] == "test"
        assert body["integrations"] == {
            "supabase": True,
            "stripe": True,
            "zapier": True,
        }
        assert body["uptime"] >= 0
        assert "timestamp" in body
        assert "errors" not in body

    def test_unhealthy(self, client, healthy_settings):
        healthy_settings.STRIPE_SECRET_KEY = ""
        healthy_settings.SITE_URL = "ftp://app.example.com"

        response = client.get(URL)

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["message"] == "Environment configuration invalid"
        assert body["errors"] == [
            "Missing required environment variable: STRIPE_SECRET_KEY",
            "SITE_URL must be a valid HTTP/HTTPS URL",
        ]
        assert body["integrations"]["stripe"] is False

    def test_check_failure(self, client, healthy_settings):
        with patch(
            "core.views.IntegrationConfig.from_settings",
            side_effect=RuntimeError("settings unavailable"),
        ):
            response = client.get(URL)

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["message"] == "Health check failed"

    def test_only_get_allowed(self, client):
        assert client.post(URL).status_code == 405
