"""
Billing session helpers.

This module opens hosted Stripe sessions on behalf of the web application
and hands back the redirect URL:

- open_billing_portal_session: customer self-service billing portal
- open_checkout_session: subscription checkout for a single price

Both helpers are stateless. Failures propagate to the caller as domain
exceptions (ConfigurationError, PaymentValidationError, StripeError); there
is no local recovery and no retry.

Related files:
    - adapters/stripe_adapter.py: Stripe API calls and error translation
    - core/integrations.py: STRIPE_* and SITE_URL configuration

Usage:
    from payments.services import open_billing_portal_session, open_checkout_session

    portal_url = open_billing_portal_session("cus_123")

    checkout_url = open_checkout_session(
        price_id="price_123",
        customer_id="cus_123",
        success_url="https://example.com/success",
        cancel_url="https://example.com/cancel",
    )
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.exceptions import ConfigurationError
from core.integrations import IntegrationConfig

from .adapters import CreateCheckoutSessionParams, get_stripe_adapter
from .exceptions import PaymentValidationError

if TYPE_CHECKING:
    from .adapters import StripeAdapter

logger = logging.getLogger(__name__)

BILLING_PORTAL_RETURN_PATH = "/dashboard/settings/billing"


def billing_portal_return_url(site_url: str) -> str:
    """
    Build the URL the billing portal returns the customer to.

    Raises:
        ConfigurationError: SITE_URL not set
    """
    if not site_url:
        raise ConfigurationError(
            "SITE_URL is not set.",
            details={"setting": "SITE_URL"},
        )
    return f"{site_url.rstrip('/')}{BILLING_PORTAL_RETURN_PATH}"


def open_billing_portal_session(
    customer_id: str,
    config: IntegrationConfig | None = None,
    adapter: StripeAdapter | None = None,
) -> str:
    """
    Open a Stripe billing portal session for a customer.

    Args:
        customer_id: Stripe Customer ID (must be non-empty)
        config: Integration configuration (defaults to Django settings)
        adapter: Stripe adapter to use (defaults to the shared adapter)

    Returns:
        The portal session's redirect URL

    Raises:
        PaymentValidationError: Empty customer_id
        ConfigurationError: STRIPE_SECRET_KEY or SITE_URL not set
        StripeError: Provider rejected or failed the request
    """
    if not customer_id:
        raise PaymentValidationError(
            "customer_id is required",
            details={"field": "customer_id"},
        )

    config = config or IntegrationConfig.from_settings()
    return_url = billing_portal_return_url(config.site_url)
    adapter = adapter or get_stripe_adapter(config.stripe)

    result = adapter.create_billing_portal_session(
        customer_id=customer_id,
        return_url=return_url,
    )
    logger.info(
        "Billing portal session opened",
        extra={"customer_id": customer_id, "session_id": result.id},
    )
    return result.url


def open_checkout_session(
    price_id: str,
    customer_id: str,
    success_url: str,
    cancel_url: str,
    config: IntegrationConfig | None = None,
    adapter: StripeAdapter | None = None,
) -> str:
    """
    Open a subscription-mode Stripe Checkout Session.

    The session has one line item (the given price, quantity 1) and allows
    promotion codes. No idempotency key is sent, so calling this twice
    creates two sessions.

    Args:
        price_id: Stripe Price ID
        customer_id: Stripe Customer ID
        success_url: Redirect target after payment
        cancel_url: Redirect target when the customer backs out
        config: Integration configuration (defaults to Django settings)
        adapter: Stripe adapter to use (defaults to the shared adapter)

    Returns:
        The checkout session's redirect URL

    Raises:
        PaymentValidationError: Any argument empty
        ConfigurationError: STRIPE_SECRET_KEY not set
        StripeError: Provider rejected or failed the request
    """
    params = CreateCheckoutSessionParams(
        price_id=price_id,
        customer_id=customer_id,
        success_url=success_url,
        cancel_url=cancel_url,
    )

    if adapter is None:
        config = config or IntegrationConfig.from_settings()
        adapter = get_stripe_adapter(config.stripe)

    result = adapter.create_checkout_session(params)
    logger.info(
        "Checkout session opened",
        extra={
            "customer_id": customer_id,
            "price_id": price_id,
            "session_id": result.id,
        },
    )
    return result.url
