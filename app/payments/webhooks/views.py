"""
Webhook endpoint view for Stripe.

This module provides the HTTP endpoint for receiving Stripe webhooks.
The view:
1. Verifies the webhook signature
2. Dispatches the event to its handler (users / payment_logs sync)
3. Acknowledges with {"received": true}

A GET request reports that the endpoint is active.

Usage:
    # In urls.py
    from payments.webhooks.views import stripe_webhook

    urlpatterns = [
        path("webhooks/stripe/", stripe_webhook, name="stripe_webhook"),
    ]
"""

from __future__ import annotations

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from core.exceptions import ConfigurationError
from core.integrations import IntegrationConfig

from payments.adapters import get_stripe_adapter
from payments.exceptions import StripeInvalidRequestError

from .handlers import dispatch_event

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "Stripe-Signature"


@csrf_exempt
@require_http_methods(["GET", "POST"])
def stripe_webhook(request: HttpRequest) -> JsonResponse:
    """
    Receive and process Stripe webhook events.

    Security:
    - Signature verification against STRIPE_WEBHOOK_SECRET prevents
      spoofed webhooks
    - CSRF exemption required for external webhooks

    Returns:
        JsonResponse with status:
        - 200: {"received": true} (handled or ignored event type)
        - 200 (GET): {"message": "Stripe webhook endpoint is active. ..."}
        - 400: {"message": "No Stripe signature header"} or
          {"message": "Webhook Error: <reason>"}
        - 500: {"message": "Internal Server Error"} (handler failure)

    Example Stripe-Signature header:
        t=1614556800,v1=xxx,v0=yyy
    """
    if request.method == "GET":
        return JsonResponse(
            {
                "message": "Stripe webhook endpoint is active. "
                "Send POST requests with Stripe webhook payloads."
            }
        )

    signature = request.headers.get(SIGNATURE_HEADER, "")

    if not signature:
        logger.warning("Webhook received without Stripe-Signature header")
        return JsonResponse({"message": "No Stripe signature header"}, status=400)

    # Step 1: Verify signature
    try:
        config = IntegrationConfig.from_settings()
        event = get_stripe_adapter(config.stripe).construct_webhook_event(
            request.body, signature
        )
    except ConfigurationError as e:
        logger.error(
            "Stripe webhook rejected: signing secret not configured",
            extra={"error_code": e.error_code},
        )
        return JsonResponse({"message": f"Webhook Error: {e.message}"}, status=400)
    except StripeInvalidRequestError as e:
        logger.warning(
            "Webhook signature verification failed",
            extra={"error": e.message},
        )
        return JsonResponse({"message": f"Webhook Error: {e.message}"}, status=400)
    except Exception as e:
        logger.error(
            f"Unexpected error verifying webhook: {type(e).__name__}",
            exc_info=True,
        )
        return JsonResponse({"message": f"Webhook Error: {e}"}, status=400)

    stripe_event_id = event.get("id")
    event_type = event.get("type")

    if not stripe_event_id or not event_type:
        logger.warning("Webhook missing required fields")
        return JsonResponse(
            {"message": "Webhook Error: event id or type missing"}, status=400
        )

    logger.info(
        f"Received Stripe webhook: {event_type}",
        extra={
            "stripe_event_id": stripe_event_id,
            "event_type": event_type,
        },
    )

    # Step 2: Process
    try:
        dispatch_event(event)
    except Exception as e:
        logger.error(
            f"Error processing Stripe webhook: {type(e).__name__}",
            extra={"stripe_event_id": stripe_event_id},
            exc_info=True,
        )
        return JsonResponse({"message": "Internal Server Error"}, status=500)

    return JsonResponse({"received": True})
