"""
Tests for billing session helpers.

Tests cover:
- Billing portal: one provider call, return URL, redirect URL
- Checkout: one subscription-mode provider call, redirect URL
- Validation and configuration failures before any provider call
- Provider failures propagating as domain exceptions
"""

from dataclasses import replace
from unittest.mock import MagicMock

import pytest
import stripe

from core.exceptions import ConfigurationError
from core.integrations import StripeConfig
from payments.adapters import SessionResult, StripeAdapter
from payments.exceptions import (
    PaymentValidationError,
    StripeAPIUnavailableError,
    StripeInvalidRequestError,
)
from payments.services import (
    billing_portal_return_url,
    open_billing_portal_session,
    open_checkout_session,
)


# =============================================================================
# Billing Portal Tests
# =============================================================================


class TestBillingPortalReturnUrl:
    """Tests for billing_portal_return_url."""

    def test_appends_billing_path(self):
        assert (
            billing_portal_return_url("https://app.example.com")
            == "https://app.example.com/dashboard/settings/billing"
        )

    def test_strips_trailing_slash(self):
        assert (
            billing_portal_return_url("https://app.example.com/")
            == "https://app.example.com/dashboard/settings/billing"
        )

    def test_missing_site_url(self):
        with pytest.raises(ConfigurationError, match="SITE_URL is not set."):
            billing_portal_return_url("")


class TestOpenBillingPortalSession:
    """Tests for open_billing_portal_session."""

    def test_single_provider_call_with_return_url(
        self, integration_config, mock_billing_portal
    ):
        """Should call Stripe once with the customer and billing return URL."""
        url = open_billing_portal_session("cus_abc", config=integration_config)

        mock_billing_portal.create.assert_called_once()
        params = mock_billing_portal.create.call_args.kwargs["params"]
        assert params["customer"] == "cus_abc"
        assert params["return_url"] == (
            "https://app.example.com/dashboard/settings/billing"
        )
        assert url == "https://billing.stripe.com/p/session/test_123"

    def test_reads_settings_by_default(
        self, stripe_settings, mock_stripe_client_class, mock_billing_portal
    ):
        """Should build the config from Django settings when none is given."""
        url = open_billing_portal_session("cus_abc")

        assert mock_stripe_client_class.call_args.args == ("sk_test_123",)
        params = mock_billing_portal.create.call_args.kwargs["params"]
        assert params["return_url"] == (
            "https://app.example.com/dashboard/settings/billing"
        )
        assert url == "https://billing.stripe.com/p/session/test_123"

    def test_empty_customer_id(self, integration_config, mock_billing_portal):
        """Should reject an empty customer id without calling Stripe."""
        with pytest.raises(PaymentValidationError, match="customer_id is required"):
            open_billing_portal_session("", config=integration_config)

        mock_billing_portal.create.assert_not_called()

    def test_missing_site_url(self, integration_config, mock_billing_portal):
        """Should fail on missing SITE_URL without calling Stripe."""
        config = replace(integration_config, site_url="")

        with pytest.raises(ConfigurationError):
            open_billing_portal_session("cus_abc", config=config)

        mock_billing_portal.create.assert_not_called()

    def test_provider_error_propagates(self, integration_config, mock_billing_portal):
        """Should surface Stripe's rejection as a domain exception."""
        error = stripe.InvalidRequestError(
            message="No such customer: 'cus_missing'",
            param="customer",
            code="resource_missing",
        )
        mock_billing_portal.create.side_effect = error

        with pytest.raises(StripeInvalidRequestError) as exc_info:
            open_billing_portal_session("cus_missing", config=integration_config)

        assert exc_info.value.__cause__ is error

    def test_uses_injected_adapter(self, integration_config):
        """Should delegate to the given adapter."""
        adapter = MagicMock()
        adapter.create_billing_portal_session.return_value = SessionResult(
            id="bps_1", url="https://billing.stripe.com/p/session/1"
        )

        url = open_billing_portal_session(
            "cus_abc", config=integration_config, adapter=adapter
        )

        adapter.create_billing_portal_session.assert_called_once_with(
            customer_id="cus_abc",
            return_url="https://app.example.com/dashboard/settings/billing",
        )
        assert url == "https://billing.stripe.com/p/session/1"


# =============================================================================
# Checkout Tests
# =============================================================================


class TestOpenCheckoutSession:
    """Tests for open_checkout_session."""

    def test_single_subscription_call(self, integration_config, mock_checkout):
        """Should call Stripe once with the subscription parameters."""
        url = open_checkout_session(
            "price_123",
            "cus_abc",
            "https://x/success",
            "https://x/cancel",
            config=integration_config,
        )

        mock_checkout.create.assert_called_once()
        params = mock_checkout.create.call_args.kwargs["params"]
        assert params["mode"] == "subscription"
        assert params["line_items"] == [{"price": "price_123", "quantity": 1}]
        assert params["allow_promotion_codes"] is True
        assert params["customer"] == "cus_abc"
        assert params["success_url"] == "https://x/success"
        assert params["cancel_url"] == "https://x/cancel"
        assert "options" not in mock_checkout.create.call_args.kwargs
        assert url == "https://checkout.stripe.com/c/pay/cs_123"

    def test_each_call_creates_a_session(self, integration_config, mock_checkout):
        """No idempotency key: two calls mean two provider calls."""
        for _ in range(2):
            open_checkout_session(
                "price_123",
                "cus_abc",
                "https://x/success",
                "https://x/cancel",
                config=integration_config,
            )

        assert mock_checkout.create.call_count == 2

    def test_empty_price_id(self, integration_config, mock_checkout):
        with pytest.raises(PaymentValidationError, match="price_id is required"):
            open_checkout_session(
                "",
                "cus_abc",
                "https://x/success",
                "https://x/cancel",
                config=integration_config,
            )

        mock_checkout.create.assert_not_called()

    def test_missing_secret_key(self, mock_checkout):
        """Should raise ConfigurationError when the key is unset."""
        adapter = StripeAdapter(StripeConfig(secret_key=""))

        with pytest.raises(ConfigurationError, match="STRIPE_SECRET_KEY is not set."):
            open_checkout_session(
                "price_123",
                "cus_abc",
                "https://x/success",
                "https://x/cancel",
                adapter=adapter,
            )

        mock_checkout.create.assert_not_called()

    def test_provider_outage_propagates(self, integration_config, mock_checkout):
        mock_checkout.create.side_effect = stripe.APIConnectionError(
            message="Could not connect to Stripe."
        )

        with pytest.raises(StripeAPIUnavailableError):
            open_checkout_session(
                "price_123",
                "cus_abc",
                "https://x/success",
                "https://x/cancel",
                config=integration_config,
            )
