"""
Pytest fixtures for webhooks tests.

Sections:
    - Settings Fixtures
    - Request Helpers
"""

import json

import pytest

from webhooks.handlers import PAYLOAD_HANDLERS

SECRET = "zap-secret-123"


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def zapier_settings(settings):
    """Django settings with both Zapier options set."""
    settings.ZAPIER_WEBHOOK_SECRET = SECRET
    settings.ZAPIER_WEBHOOK_URL = "https://hooks.zapier.com/hooks/catch/1/abc/"
    settings.ZAPIER_TIMEOUT_SECONDS = 3
    return settings


@pytest.fixture
def clean_registry():
    """Restore the payload handler registry after the test."""
    saved = dict(PAYLOAD_HANDLERS)
    PAYLOAD_HANDLERS.clear()
    yield PAYLOAD_HANDLERS
    PAYLOAD_HANDLERS.clear()
    PAYLOAD_HANDLERS.update(saved)


# =============================================================================
# Request Helpers
# =============================================================================


@pytest.fixture
def post_webhook(client):
    """POST a body to the Zapier receiver, optionally with the secret header."""

    def _post(body, secret: str | None = SECRET, path="/api/v1/webhooks/zapier/"):
        headers = {"HTTP_X_ZAPIER_SECRET": secret} if secret is not None else {}
        data = body if isinstance(body, (str, bytes)) else json.dumps(body)
        return client.post(
            path,
            data=data,
            content_type="application/json",
            **headers,
        )

    return _post
