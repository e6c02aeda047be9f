"""
Pytest fixtures for Stripe webhook tests.

Provides signed webhook payloads (real Stripe-Signature headers computed
with the test signing secret), event builders and mocks for the store and
Stripe adapters used by the handlers.
"""

import hashlib
import hmac
import json
import time
from unittest.mock import MagicMock, patch

import pytest

WEBHOOK_SECRET = "whsec_test_secret"
URL = "/api/v1/payments/webhooks/stripe/"


def sign_payload(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp=None) -> str:
    """Build a Stripe-Signature header the way Stripe does."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.".encode() + payload
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def make_event(event_type: str, obj: dict, event_id: str = "evt_test_123") -> dict:
    """Build a Stripe event envelope."""
    return {
        "id": event_id,
        "object": "event",
        "type": event_type,
        "data": {"object": obj},
    }


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def webhook_settings(settings):
    """Settings with a Stripe key and webhook signing secret."""
    settings.STRIPE_SECRET_KEY = "sk_test_123"
    settings.STRIPE_WEBHOOK_SECRET = WEBHOOK_SECRET
    return settings


# =============================================================================
# Request Fixtures
# =============================================================================


@pytest.fixture
def post_event(client):
    """POST an event to the receiver, signed unless a signature is given."""

    def _post(event, signature=None, **headers):
        payload = json.dumps(event).encode()
        if signature is None:
            signature = sign_payload(payload)
        if signature:
            headers["HTTP_STRIPE_SIGNATURE"] = signature
        return client.post(
            URL,
            data=payload,
            content_type="application/json",
            **headers,
        )

    return _post


# =============================================================================
# Adapter Fixtures
# =============================================================================


@pytest.fixture
def mock_supabase():
    """Mock Supabase adapter used by the handlers."""
    adapter = MagicMock()
    with patch(
        "payments.webhooks.handlers.get_supabase_adapter", return_value=adapter
    ):
        yield adapter


@pytest.fixture
def mock_stripe():
    """Mock Stripe adapter whose customers map to user-1."""
    adapter = MagicMock()
    adapter.retrieve_customer.return_value = {
        "id": "cus_abc",
        "object": "customer",
        "metadata": {"supabase_user_id": "user-1"},
    }
    with patch("payments.webhooks.handlers.get_stripe_adapter", return_value=adapter):
        yield adapter
