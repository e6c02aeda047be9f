"""
Base exception classes for application-wide error handling.

This module provides the closed error taxonomy shared by every integration
endpoint. Each failure a handler can meet falls into one of three kinds:

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ConfigurationError - A required integration setting is missing
    ├── PermissionDeniedError - Shared-secret / authorization failures
    └── ExternalServiceError - Third-party service failures (Supabase, Zapier)

Stripe failures have their own subtree in payments.exceptions, rooted at
PaymentError, which also inherits from BaseApplicationError.

Usage:
    from core.exceptions import ConfigurationError, ExternalServiceError

    # Raise with message only
    raise ConfigurationError("STRIPE_SECRET_KEY is not set.")

    # Raise with additional details
    raise ExternalServiceError(
        "Zapier webhook delivery failed",
        details={"service": "zapier", "status_code": 502},
    )

    # Convert to dict for API response
    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=400)

Note:
    These exceptions are for domain/integration errors.
    DRF handles API-layer exceptions (serialization, authentication, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Provides a consistent interface for error handling across the application.
    All custom exceptions should inherit from this class.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (setting names, upstream status, etc.)

    Example:
        try:
            adapter.check_connection()
        except BaseApplicationError as e:
            logger.warning(f"Probe failed: {e.error_code}")
            return JsonResponse(e.to_dict(), status=500)
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "ZAPIER_WEBHOOK_URL is not set.",
                "error_code": "CONFIGURATION_ERROR",
                "details": {"setting": "ZAPIER_WEBHOOK_URL"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ConfigurationError(BaseApplicationError):
    """
    Raised when a required integration setting is absent.

    Use for:
    - Missing API keys (Stripe secret key, Supabase service-role key)
    - Missing shared secrets (Zapier webhook secret)
    - Missing URLs (site URL, Zapier catch-hook URL)

    Checked proactively, before the dependent external call is attempted.

    Example:
        if not config.secret_key:
            raise ConfigurationError(
                "STRIPE_SECRET_KEY is not set.",
                details={"setting": "STRIPE_SECRET_KEY"},
            )
    """

    default_error_code: str = "CONFIGURATION_ERROR"


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when a caller fails the shared-secret check.

    Use for:
    - Missing or mismatched X-Zapier-Secret header

    Note:
        Callers receive no detail beyond "Unauthorized".
    """

    default_error_code: str = "PERMISSION_DENIED"


class ExternalServiceError(BaseApplicationError):
    """
    Raised when an external service call fails.

    Use for:
    - Supabase query errors
    - Zapier catch-hook delivery failures
    - Network timeouts
    - Unexpected external service responses

    Example:
        try:
            response = requests.post(url, json=body, timeout=10)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ExternalServiceError(
                "Zapier webhook delivery failed",
                details={"service": "zapier", "original_error": str(e)},
            ) from e

    Note:
        Log the original error for debugging but don't expose
        internal details to clients in production.
        HTTP 502 Bad Gateway or 503 Service Unavailable are appropriate.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
