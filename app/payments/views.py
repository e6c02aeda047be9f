"""
Views for the payments app.

Endpoints:
    GET /api/v1/payments/connection-test/ - Verify the Stripe API key
    GET /api/v1/payments/webhook-test/    - Verify the webhook signing setup

The Stripe event receiver lives in payments/webhooks/views.py. The billing
portal and checkout helpers live in services.py and are called by the web
application directly; they have no HTTP endpoint here.
"""

from __future__ import annotations

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET

from core.exceptions import ConfigurationError
from core.integrations import IntegrationConfig

from .adapters import get_stripe_adapter
from .exceptions import StripeError

logger = logging.getLogger(__name__)


def _error_response(message: str) -> JsonResponse:
    return JsonResponse({"status": "error", "message": message}, status=500)


def _provider_failure(e: Exception, probe: str) -> JsonResponse:
    """Log a failed probe and report Stripe's own message."""
    if isinstance(e, (ConfigurationError, StripeError)):
        logger.error(
            f"{probe} failed",
            extra={"error_code": e.error_code},
            exc_info=True,
        )
        return _error_response(e.details.get("provider_message") or e.message)

    logger.error(f"{probe} failed (unexpected)", exc_info=True)
    return _error_response(str(e))


@require_GET
def stripe_connection_test(request: HttpRequest) -> JsonResponse:
    """
    Check that the configured Stripe key can reach the API.

    Lists at most one product; an empty catalog still counts as success.

    Returns:
        JsonResponse with status:
        - 200: {"status": "success", "message": "Stripe API connection successful!"}
        - 500: {"status": "error", "message": <reason>}
    """
    try:
        config = IntegrationConfig.from_settings()

        if not config.stripe.secret_key:
            return _error_response("STRIPE_SECRET_KEY is not set.")

        get_stripe_adapter(config.stripe).list_products(limit=1)
    except Exception as e:
        return _provider_failure(e, "Stripe API test")

    return JsonResponse(
        {"status": "success", "message": "Stripe API connection successful!"}
    )


@require_GET
def stripe_webhook_test(request: HttpRequest) -> JsonResponse:
    """
    Check that webhook signing is configured and the API key is accepted.

    Returns:
        JsonResponse with status:
        - 200: {"status": "success", "message": "Stripe Webhook API key is valid."}
          (message notes when no webhook endpoint is registered)
        - 500: {"status": "error", "message": <reason>}
    """
    try:
        config = IntegrationConfig.from_settings()

        if not config.stripe.webhook_secret:
            return _error_response("STRIPE_WEBHOOK_SECRET is not set.")

        endpoints = get_stripe_adapter(config.stripe).list_webhook_endpoints(limit=1)
    except Exception as e:
        return _provider_failure(e, "Stripe webhook test")

    if endpoints:
        message = "Stripe Webhook API key is valid."
    else:
        message = "Stripe Webhook API key is valid, but no webhooks found."
    return JsonResponse({"status": "success", "message": message})
