"""
Payment adapters for external services.

This module provides adapters for external payment services like Stripe.
All external payment API calls should go through these adapters to ensure
consistent error handling, timeouts and observability.

Usage:
    from payments.adapters import CreateCheckoutSessionParams, get_stripe_adapter

    result = get_stripe_adapter().create_checkout_session(
        CreateCheckoutSessionParams(
            price_id="price_123",
            customer_id="cus_123",
            success_url="https://example.com/success",
            cancel_url="https://example.com/cancel",
        )
    )
"""

from payments.adapters.stripe_adapter import (
    CreateCheckoutSessionParams,
    SessionResult,
    StripeAdapter,
    get_stripe_adapter,
)

__all__ = [
    "CreateCheckoutSessionParams",
    "SessionResult",
    "StripeAdapter",
    "get_stripe_adapter",
]
