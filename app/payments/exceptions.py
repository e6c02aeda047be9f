"""
Payment-specific exceptions for Stripe session operations.

This module provides the exception hierarchy raised by the Stripe adapter
and the billing session helpers. Stripe SDK errors never escape the adapter;
they are translated into these domain exceptions with the original error
chained as ``__cause__``.

Exception Hierarchy:
    PaymentError (base for payment domain)
    ├── PaymentValidationError - Invalid helper arguments (empty customer id)
    └── PaymentProcessingError - Payment provider failures
        └── StripeError - Base for all Stripe errors
            ├── StripeInvalidRequestError - Invalid request / auth (permanent)
            ├── StripeRateLimitError - Rate limited (transient)
            └── StripeAPIUnavailableError - API unavailable (transient)

Usage:
    from payments.exceptions import PaymentValidationError, StripeError

    try:
        url = open_billing_portal_session(customer_id)
    except StripeError as e:
        logger.error(f"Billing portal failed: {e.stripe_code}")
        raise
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import BaseApplicationError

if TYPE_CHECKING:
    from typing import Any


# =============================================================================
# Payment Domain Exceptions
# =============================================================================


class PaymentError(BaseApplicationError):
    """
    Base exception for all payment operations.

    All payment-specific exceptions inherit from this class,
    which itself inherits from BaseApplicationError for
    consistent API error responses.
    """

    default_error_code: str = "PAYMENT_ERROR"


class PaymentValidationError(PaymentError):
    """
    Raised when helper arguments are invalid.

    Use for:
    - Empty customer identifier
    - Empty price identifier or redirect URLs

    Example:
        if not customer_id:
            raise PaymentValidationError(
                "customer_id is required",
                details={"field": "customer_id"},
            )
    """

    default_error_code: str = "PAYMENT_VALIDATION_ERROR"


class PaymentProcessingError(PaymentError):
    """
    Raised when the payment provider call fails.

    Use for:
    - Stripe API errors
    - Payment gateway failures
    - Processing timeouts
    """

    default_error_code: str = "PAYMENT_PROCESSING_ERROR"


# =============================================================================
# Stripe-Specific Exceptions
# =============================================================================


class StripeError(PaymentProcessingError):
    """
    Base exception for all Stripe-related errors.

    Provides common attributes for Stripe error handling:
    - stripe_code: Stripe's internal error code
    - is_retryable: Whether a caller-driven retry could succeed

    Nothing in this service retries; is_retryable is informational for
    callers of the session helpers.
    """

    default_error_code: str = "STRIPE_ERROR"
    is_retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        stripe_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if stripe_code:
            details["stripe_code"] = stripe_code
        super().__init__(message, error_code=error_code, details=details)
        self.stripe_code = stripe_code


class StripeInvalidRequestError(StripeError):
    """
    Invalid request sent to Stripe.

    This is a permanent error - the request itself is malformed
    and will never succeed with the same parameters.

    Possible causes:
    - Unknown customer or price ID
    - Billing portal not configured in the Stripe dashboard
    - Invalid API key (authentication_error)

    Check the stripe_code and details for specific information
    about what was invalid.
    """

    default_error_code: str = "INVALID_STRIPE_REQUEST"
    is_retryable: bool = False


class StripeRateLimitError(StripeError):
    """
    Rate limited by Stripe API.

    Stripe allows 100 requests/second in live mode, 25/second in test mode.
    This error indicates we've exceeded those limits.
    """

    default_error_code: str = "STRIPE_RATE_LIMITED"
    is_retryable: bool = True


class StripeAPIUnavailableError(StripeError):
    """
    Stripe API is temporarily unavailable.

    This covers:
    - Network connectivity issues
    - Stripe server errors (5xx)
    - DNS resolution failures
    - SSL/TLS errors
    """

    default_error_code: str = "STRIPE_UNAVAILABLE"
    is_retryable: bool = True
