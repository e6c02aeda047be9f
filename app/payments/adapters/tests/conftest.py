"""
Pytest fixtures for Stripe adapter tests.

This module provides fixtures for testing the Stripe adapter, including
mock Stripe API responses, error conditions, and test data.

Sections:
    - Test Data Fixtures
    - Mock Stripe Response Fixtures
    - Error Response Fixtures
    - Mock Stripe Client Fixtures
"""

from dataclasses import dataclass
from typing import Any
from unittest.mock import patch

import pytest
import stripe

from core.integrations import StripeConfig
from payments.adapters import StripeAdapter


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def stripe_config():
    """Stripe configuration with a test key."""
    return StripeConfig(secret_key="sk_test_123", timeout_seconds=5)


@pytest.fixture
def adapter(stripe_config):
    """StripeAdapter built from the test configuration."""
    return StripeAdapter(stripe_config)


# =============================================================================
# Mock Stripe Response Fixtures
# =============================================================================


@dataclass
class MockStripeObject:
    """Mock Stripe API object with to_dict support."""

    data: dict[str, Any]

    def __getattr__(self, name: str) -> Any:
        if name == "data":
            return self.__dict__["data"]
        return self.data.get(name)

    def to_dict(self) -> dict[str, Any]:
        return self.data


@dataclass
class MockStripeList:
    """Mock Stripe list response with data attribute."""

    items: list[MockStripeObject]
    has_more: bool = False

    @property
    def data(self) -> list[MockStripeObject]:
        return self.items


@pytest.fixture
def mock_checkout_session():
    """Create a mock checkout Session response."""

    def _create(
        id: str = "cs_test123456",
        url: str = "https://checkout.stripe.com/c/pay/cs_test123456",
        customer: str = "cus_abc",
    ) -> MockStripeObject:
        return MockStripeObject(
            {
                "id": id,
                "object": "checkout.session",
                "mode": "subscription",
                "url": url,
                "customer": customer,
            }
        )

    return _create


@pytest.fixture
def mock_portal_session():
    """Create a mock billing portal Session response."""

    def _create(
        id: str = "bps_test123456",
        url: str = "https://billing.stripe.com/p/session/test_123",
        customer: str = "cus_abc",
        return_url: str = "https://app.example.com/dashboard/settings/billing",
    ) -> MockStripeObject:
        return MockStripeObject(
            {
                "id": id,
                "object": "billing_portal.session",
                "url": url,
                "customer": customer,
                "return_url": return_url,
            }
        )

    return _create


@pytest.fixture
def mock_product():
    """Create a mock Product response."""

    def _create(id: str = "prod_test123", name: str = "Pro") -> MockStripeObject:
        return MockStripeObject({"id": id, "object": "product", "name": name})

    return _create


# =============================================================================
# Mock Stripe Error Fixtures
# =============================================================================


@pytest.fixture
def invalid_request_error():
    """Create a Stripe InvalidRequestError."""

    def _create(
        message: str = "No such customer: 'cus_missing'",
        param: str | None = "customer",
        code: str = "resource_missing",
    ) -> stripe.InvalidRequestError:
        return stripe.InvalidRequestError(
            message=message,
            param=param,
            code=code,
        )

    return _create


@pytest.fixture
def rate_limit_error():
    """Create a Stripe RateLimitError."""
    return stripe.RateLimitError(
        message="Too many requests hit the API too quickly.",
    )


@pytest.fixture
def api_connection_error():
    """Create a Stripe APIConnectionError."""
    return stripe.APIConnectionError(
        message="Could not connect to Stripe.",
    )


@pytest.fixture
def api_error():
    """Create a Stripe APIError."""
    return stripe.APIError(
        message="Something went wrong on Stripe's end.",
    )


@pytest.fixture
def authentication_error():
    """Create a Stripe AuthenticationError."""
    return stripe.AuthenticationError(
        message="Invalid API Key provided.",
    )


# =============================================================================
# Mock Stripe Client Fixtures
# =============================================================================


@pytest.fixture
def mock_stripe_client_class():
    """Patch stripe.StripeClient; adapters built inside get its return_value."""
    with patch("stripe.StripeClient") as mock:
        yield mock


@pytest.fixture
def mock_stripe_client(mock_stripe_client_class):
    """The StripeClient instance adapters use."""
    return mock_stripe_client_class.return_value


@pytest.fixture
def mock_stripe_checkout(mock_stripe_client, mock_checkout_session):
    """Mock client.checkout.sessions API."""
    service = mock_stripe_client.checkout.sessions
    service.create.return_value = mock_checkout_session()
    return service


@pytest.fixture
def mock_stripe_billing_portal(mock_stripe_client, mock_portal_session):
    """Mock client.billing_portal.sessions API."""
    service = mock_stripe_client.billing_portal.sessions
    service.create.return_value = mock_portal_session()
    return service


@pytest.fixture
def mock_stripe_product(mock_stripe_client, mock_product):
    """Mock client.products API."""
    service = mock_stripe_client.products
    service.list.return_value = MockStripeList(items=[mock_product()])
    return service


@pytest.fixture
def mock_stripe_customers(mock_stripe_client):
    """Mock client.customers API."""
    service = mock_stripe_client.customers
    service.retrieve.return_value = MockStripeObject(
        {
            "id": "cus_abc",
            "object": "customer",
            "metadata": {"supabase_user_id": "user-1"},
        }
    )
    return service


@pytest.fixture
def mock_stripe_webhook_endpoints(mock_stripe_client):
    """Mock client.webhook_endpoints API (no endpoints registered)."""
    service = mock_stripe_client.webhook_endpoints
    service.list.return_value = MockStripeList(items=[])
    return service
