"""
Core Application - Shared Integration Infrastructure

This app contains the infrastructure every integration app builds on:

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ConfigurationError: A required integration setting is missing
    - PermissionDeniedError: Shared-secret failures
    - ExternalServiceError: Third-party service failures

Integration configuration (import from core.integrations):
    - IntegrationConfig: All recognized options, built from Django settings
    - SupabaseConfig, StripeConfig, ZapierConfig: Per-integration options

Views (import from core.views):
    - health_check: Configuration health report

Usage:
    from core.exceptions import ConfigurationError
    from core.integrations import IntegrationConfig

    config = IntegrationConfig.from_settings()
    if not config.stripe.secret_key:
        raise ConfigurationError("STRIPE_SECRET_KEY is not set.")

Note:
    - Business logic should NOT go here. Each integration lives in its own app.
    - core.integrations reads django.conf.settings lazily, so it is safe to
      import before the app registry is ready.
"""

# Exceptions (no Django dependencies)
from .exceptions import (
    BaseApplicationError,
    ConfigurationError,
    ExternalServiceError,
    PermissionDeniedError,
)

__all__ = [
    # Exceptions
    "BaseApplicationError",
    "ConfigurationError",
    "PermissionDeniedError",
    "ExternalServiceError",
]
