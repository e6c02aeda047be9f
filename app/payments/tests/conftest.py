"""
Pytest fixtures for payments tests.

Stripe is never contacted: stripe.StripeClient is patched, so every adapter
built during a test talks to a mock whose services return objects shaped
like Stripe's responses.
"""

from unittest.mock import MagicMock, patch

import pytest

from core.integrations import (
    IntegrationConfig,
    StripeConfig,
    SupabaseConfig,
    ZapierConfig,
)


def make_stripe_object(**fields):
    """Build a Stripe-like response object with attribute access and to_dict()."""
    obj = MagicMock(**fields)
    obj.to_dict.return_value = dict(fields)
    return obj


@pytest.fixture
def integration_config():
    """Integration configuration with Stripe and the site URL set."""
    return IntegrationConfig(
        supabase=SupabaseConfig(),
        stripe=StripeConfig(secret_key="sk_test_123"),
        zapier=ZapierConfig(),
        site_url="https://app.example.com",
    )


@pytest.fixture
def stripe_settings(settings):
    """Django settings with a Stripe key and site URL."""
    settings.STRIPE_SECRET_KEY = "sk_test_123"
    settings.SITE_URL = "https://app.example.com/"
    return settings


@pytest.fixture
def mock_stripe_client_class():
    """Patch stripe.StripeClient."""
    with patch("stripe.StripeClient") as mock:
        yield mock


@pytest.fixture
def mock_stripe_client(mock_stripe_client_class):
    """The StripeClient instance adapters will use."""
    return mock_stripe_client_class.return_value


@pytest.fixture
def mock_billing_portal(mock_stripe_client):
    """Mock client.billing_portal.sessions returning a portal session."""
    service = mock_stripe_client.billing_portal.sessions
    service.create.return_value = make_stripe_object(
        id="bps_123",
        url="https://billing.stripe.com/p/session/test_123",
    )
    return service


@pytest.fixture
def mock_checkout(mock_stripe_client):
    """Mock client.checkout.sessions returning a checkout session."""
    service = mock_stripe_client.checkout.sessions
    service.create.return_value = make_stripe_object(
        id="cs_123",
        url="https://checkout.stripe.com/c/pay/cs_123",
    )
    return service


@pytest.fixture
def mock_product_list(mock_stripe_client):
    """Mock client.products returning an empty product list."""
    service = mock_stripe_client.products
    service.list.return_value = MagicMock(data=[])
    return service


@pytest.fixture
def mock_webhook_endpoints(mock_stripe_client):
    """Mock client.webhook_endpoints returning one registered endpoint."""
    service = mock_stripe_client.webhook_endpoints
    service.list.return_value = MagicMock(
        data=[make_stripe_object(id="we_123", url="https://app.example.com/hook")]
    )
    return service
