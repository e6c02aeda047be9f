"""
Stripe API adapter for hosted session operations.

This module provides the StripeAdapter class which encapsulates all
Stripe API interactions. All Stripe calls should go through this
adapter to ensure consistent error handling, timeouts and observability.

Features:
- Explicit configuration (API key, pinned API version, timeout) passed in
  as a StripeConfig instead of read from the environment per call
- One stripe.StripeClient per adapter, so adapters with different keys or
  timeouts never share HTTP settings
- Webhook signature verification against STRIPE_WEBHOOK_SECRET
- Process-wide lazily-initialized adapter via get_stripe_adapter()
- Automatic error translation to domain exceptions
- Structured logging with timing metrics

Configuration (via settings, see core.integrations):
- STRIPE_SECRET_KEY: Stripe API secret key
- STRIPE_API_VERSION: Pinned API version (default: 2024-04-10)
- STRIPE_API_TIMEOUT_SECONDS: API call timeout (default: 10)
- STRIPE_WEBHOOK_SECRET: Webhook endpoint signing secret

Usage:
    from payments.adapters import CreateCheckoutSessionParams, get_stripe_adapter

    adapter = get_stripe_adapter()

    # Hosted billing portal
    result = adapter.create_billing_portal_session(
        customer_id="cus_123",
        return_url="https://example.com/dashboard/settings/billing",
    )

    # Hosted subscription checkout
    result = adapter.create_checkout_session(
        CreateCheckoutSessionParams(
            price_id="price_123",
            customer_id="cus_123",
            success_url="https://example.com/success",
            cancel_url="https://example.com/cancel",
        )
    )
    redirect_to(result.url)
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

import stripe

from core.exceptions import ConfigurationError
from core.integrations import IntegrationConfig, StripeConfig

from payments.exceptions import (
    PaymentValidationError,
    StripeAPIUnavailableError,
    StripeInvalidRequestError,
    StripeRateLimitError,
)

# =============================================================================
# Data Types
# =============================================================================


@dataclass
class CreateCheckoutSessionParams:
    """
    Parameters for creating a subscription-mode Checkout Session.

    Attributes:
        price_id: Stripe Price ID for the single line item
        customer_id: Stripe Customer ID the subscription belongs to
        success_url: Redirect target after successful checkout
        cancel_url: Redirect target when the customer cancels
        quantity: Line item quantity (always 1 for seat-less plans)
        allow_promotion_codes: Show the promotion code field on checkout
    """

    price_id: str
    customer_id: str
    success_url: str
    cancel_url: str
    quantity: int = 1
    allow_promotion_codes: bool = True

    def __post_init__(self) -> None:
        """Validate parameters."""
        for name in ("price_id", "customer_id", "success_url", "cancel_url"):
            if not getattr(self, name):
                raise PaymentValidationError(
                    f"{name} is required",
                    details={"field": name},
                )
        if self.quantity <= 0:
            raise PaymentValidationError(
                "quantity must be positive",
                details={"field": "quantity", "quantity": self.quantity},
            )


@dataclass
class SessionResult:
    """
    Result of a hosted session creation (checkout or billing portal).

    Attributes:
        id: Stripe session ID (cs_xxx or bps_xxx)
        url: Short-lived redirect URL owned by Stripe
        raw_response: Full Stripe response for debugging
    """

    id: str
    url: str
    raw_response: dict[str, Any] = field(default_factory=dict)


# =============================================================================
# Stripe Adapter
# =============================================================================


class StripeAdapter:
    """
    Adapter for Stripe API operations.

    Each adapter owns one ``stripe.StripeClient`` carrying its API key,
    pinned API version and HTTP timeout, so one instance is safe to share
    between concurrent requests and nothing is written to module-level
    ``stripe`` settings.

    Features:
    - Configurable timeouts on all API calls
    - Automatic error translation to domain exceptions
    - Structured logging with timing metrics

    Usage:
        adapter = StripeAdapter(StripeConfig(secret_key="sk_test_..."))
        result = adapter.create_billing_portal_session("cus_123", return_url)
    """

    def __init__(self, config: StripeConfig):
        self.config = config
        self._client: stripe.StripeClient | None = None

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def client(self) -> stripe.StripeClient:
        """
        Stripe client bound to this adapter's configuration.

        Raises:
            ConfigurationError: STRIPE_SECRET_KEY not set
        """
        if not self.config.secret_key:
            raise ConfigurationError(
                "STRIPE_SECRET_KEY is not set.",
                details={"setting": "STRIPE_SECRET_KEY"},
            )
        if self._client is None:
            self._client = stripe.StripeClient(
                self.config.secret_key,
                stripe_version=self.config.api_version,
                http_client=stripe.RequestsClient(
                    timeout=self.config.timeout_seconds
                ),
            )
        return self._client

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this adapter."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    # =========================================================================
    # Hosted Sessions
    # =========================================================================

    def create_billing_portal_session(
        self,
        customer_id: str,
        return_url: str,
    ) -> SessionResult:
        """
        Create a Stripe billing portal session.

        Args:
            customer_id: Stripe Customer ID
            return_url: Where the portal sends the customer back to

        Returns:
            SessionResult with the portal redirect URL

        Raises:
            ConfigurationError: STRIPE_SECRET_KEY not set
            StripeInvalidRequestError: Unknown customer or portal not configured
            StripeAPIUnavailableError: Stripe service unavailable
        """
        client = self.client
        logger = self.get_logger()

        log_context = {
            "operation": "create_billing_portal_session",
            "customer_id": customer_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            session = client.billing_portal.sessions.create(
                params={
                    "customer": customer_id,
                    "return_url": return_url,
                }
            )

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "session_id": session.id,
                    "duration_ms": duration_ms,
                },
            )

            return SessionResult(
                id=session.id,
                url=session.url,
                raw_response=session.to_dict(),
            )

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise  # Never reached, but satisfies type checker

    def create_checkout_session(
        self,
        params: CreateCheckoutSessionParams,
    ) -> SessionResult:
        """
        Create a subscription-mode Stripe Checkout Session.

        No idempotency key is attached: a retried call creates a second
        session.

        Args:
            params: Parameters for the Checkout Session

        Returns:
            SessionResult with the checkout redirect URL

        Raises:
            ConfigurationError: STRIPE_SECRET_KEY not set
            StripeInvalidRequestError: Unknown price/customer
            StripeAPIUnavailableError: Stripe service unavailable
        """
        client = self.client
        logger = self.get_logger()

        log_context = {
            "operation": "create_checkout_session",
            "customer_id": params.customer_id,
            "price_id": params.price_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            session = client.checkout.sessions.create(
                params={
                    "mode": "subscription",
                    "customer": params.customer_id,
                    "line_items": [
                        {
                            "price": params.price_id,
                            "quantity": params.quantity,
                        }
                    ],
                    "allow_promotion_codes": params.allow_promotion_codes,
                    "success_url": params.success_url,
                    "cancel_url": params.cancel_url,
                }
            )

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "session_id": session.id,
                    "duration_ms": duration_ms,
                },
            )

            return SessionResult(
                id=session.id,
                url=session.url,
                raw_response=session.to_dict(),
            )

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise

    # =========================================================================
    # Customers
    # =========================================================================

    def retrieve_customer(self, customer_id: str) -> dict[str, Any]:
        """
        Retrieve a customer, used to map Stripe customers to app users.

        Args:
            customer_id: Stripe Customer ID

        Returns:
            Customer dict (includes ``metadata``)

        Raises:
            ConfigurationError: STRIPE_SECRET_KEY not set
            StripeInvalidRequestError: Unknown customer
            StripeAPIUnavailableError: Stripe service unavailable
        """
        client = self.client
        log_context = {"operation": "retrieve_customer", "customer_id": customer_id}
        start_time = time.time()

        try:
            customer = client.customers.retrieve(customer_id)
            return customer.to_dict()

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise

    # =========================================================================
    # Connectivity
    # =========================================================================

    def list_products(self, limit: int = 1) -> list[dict[str, Any]]:
        """
        List products, used as a cheap API-key round trip.

        Args:
            limit: Maximum number of products to fetch

        Returns:
            List of product dicts (may be empty)

        Raises:
            ConfigurationError: STRIPE_SECRET_KEY not set
            StripeInvalidRequestError: Invalid API key
            StripeAPIUnavailableError: Stripe service unavailable
        """
        client = self.client
        log_context = {"operation": "list_products", "limit": limit}
        start_time = time.time()

        try:
            products = client.products.list(params={"limit": limit})
            return [product.to_dict() for product in products.data]

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise

    def list_webhook_endpoints(self, limit: int = 1) -> list[dict[str, Any]]:
        """
        List webhook endpoints registered on the account.

        Args:
            limit: Maximum number of endpoints to fetch

        Returns:
            List of webhook endpoint dicts (may be empty)

        Raises:
            ConfigurationError: STRIPE_SECRET_KEY not set
            StripeInvalidRequestError: Invalid API key
            StripeAPIUnavailableError: Stripe service unavailable
        """
        client = self.client
        log_context = {"operation": "list_webhook_endpoints", "limit": limit}
        start_time = time.time()

        try:
            endpoints = client.webhook_endpoints.list(params={"limit": limit})
            return [endpoint.to_dict() for endpoint in endpoints.data]

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self._handle_stripe_error(e, log_context, duration_ms)
            raise

    # =========================================================================
    # Webhooks
    # =========================================================================

    def construct_webhook_event(
        self,
        payload: bytes,
        signature: str,
    ) -> dict[str, Any]:
        """
        Verify and parse a Stripe webhook event.

        Only the signing secret is needed; no API call is made.

        Args:
            payload: Raw webhook payload bytes
            signature: Stripe-Signature header value

        Returns:
            Parsed event data dict

        Raises:
            ConfigurationError: STRIPE_WEBHOOK_SECRET not set
            StripeInvalidRequestError: Invalid signature or payload
        """
        if not self.config.webhook_secret:
            raise ConfigurationError(
                "STRIPE_WEBHOOK_SECRET is not set.",
                details={"setting": "STRIPE_WEBHOOK_SECRET"},
            )

        try:
            body = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                body,
                signature,
                self.config.webhook_secret,
                tolerance=stripe.Webhook.DEFAULT_TOLERANCE,
            )
        except stripe.SignatureVerificationError as e:
            raise StripeInvalidRequestError(
                _provider_message(e),
                stripe_code="signature_verification_failed",
            ) from e
        except UnicodeDecodeError as e:
            raise StripeInvalidRequestError(
                "Webhook payload is not valid UTF-8",
                stripe_code="invalid_payload",
            ) from e

        try:
            event = json.loads(body)
        except ValueError as e:
            raise StripeInvalidRequestError(
                "Webhook payload is not valid JSON",
                stripe_code="invalid_payload",
            ) from e

        if not isinstance(event, dict):
            raise StripeInvalidRequestError(
                "Webhook payload is not an event object",
                stripe_code="invalid_payload",
            )
        return event

    # =========================================================================
    # Error Handling
    # =========================================================================

    @classmethod
    def _handle_stripe_error(
        cls,
        error: Exception,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate Stripe exceptions to domain exceptions.

        Maps Stripe SDK errors to appropriate domain exceptions. The original
        error is chained so the full cause stays in the operational log, and
        Stripe's own message is kept in ``details["provider_message"]``.

        Args:
            error: The Stripe exception
            log_context: Logging context dict
            duration_ms: Operation duration for logging

        Raises:
            StripeInvalidRequestError: Invalid request parameters or API key
            StripeRateLimitError: Rate limited
            StripeAPIUnavailableError: API unavailable or unexpected error
        """
        logger = cls.get_logger()

        # Add timing to context
        log_context = {**log_context, "duration_ms": duration_ms}
        details = {"provider_message": _provider_message(error)}

        if isinstance(error, stripe.InvalidRequestError):
            # Invalid parameters or resource not found
            logger.error(
                "Invalid request to Stripe",
                extra={**log_context, "stripe_code": error.code},
            )
            raise StripeInvalidRequestError(
                details["provider_message"],
                stripe_code=error.code,
                details=details,
            ) from error

        elif isinstance(error, stripe.AuthenticationError):
            # Invalid API key - permanent, operational issue
            logger.critical(
                "Stripe authentication failed - check API key",
                extra=log_context,
            )
            raise StripeInvalidRequestError(
                "Stripe authentication failed",
                stripe_code="authentication_error",
                details=details,
            ) from error

        elif isinstance(error, stripe.RateLimitError):
            logger.warning(
                "Rate limited by Stripe",
                extra=log_context,
            )
            raise StripeRateLimitError(
                "Stripe rate limit exceeded. Please retry.",
                stripe_code="rate_limit",
                details=details,
            ) from error

        elif isinstance(error, stripe.APIConnectionError):
            # Network error
            logger.error(
                "Connection error to Stripe",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                "Could not connect to Stripe. Please retry.",
                stripe_code="api_connection_error",
                details=details,
            ) from error

        elif isinstance(error, stripe.APIError):
            # Stripe server error
            logger.error(
                "Stripe API error",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                "Stripe service error. Please retry.",
                stripe_code="api_error",
                details=details,
            ) from error

        else:
            # Unknown error - log and wrap
            logger.error(
                f"Unexpected error from Stripe: {type(error).__name__}",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                f"Unexpected Stripe error: {error}",
                stripe_code="unknown_error",
                details=details,
            ) from error


def _provider_message(error: Exception) -> str:
    """Stripe's own message for an SDK error (str() for anything else)."""
    return str(getattr(error, "user_message", None) or error)


# =============================================================================
# Process-wide Adapter
# =============================================================================


@lru_cache(maxsize=8)
def _adapter_for(config: StripeConfig) -> StripeAdapter:
    return StripeAdapter(config)


def get_stripe_adapter(config: StripeConfig | None = None) -> StripeAdapter:
    """
    Return the shared StripeAdapter for a configuration.

    Adapters are created lazily on first use and reused for the lifetime of
    the process. A changed configuration (e.g. rotated key) gets its own
    adapter.

    Args:
        config: Explicit Stripe configuration (defaults to Django settings)
    """
    if config is None:
        config = IntegrationConfig.from_settings().stripe
    return _adapter_for(config)

