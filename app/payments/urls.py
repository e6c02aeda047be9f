"""
URL configuration for the payments app.

Routes:
    - GET /connection-test/ - Stripe API key check
    - GET /webhook-test/ - Stripe webhook signing secret check
    - POST /webhooks/stripe/ - Stripe event receiver (GET reports status)

All routes are prefixed with /api/v1/payments/ when included in the main URLconf.

Usage:
    # In config/urls.py
    api_v1_patterns = [
        path("payments/", include("payments.urls")),
    ]
"""

from django.urls import path

from payments.views import stripe_connection_test, stripe_webhook_test
from payments.webhooks.views import stripe_webhook

app_name = "payments"

urlpatterns = [
    path("connection-test/", stripe_connection_test, name="stripe_connection_test"),
    path("webhook-test/", stripe_webhook_test, name="stripe_webhook_test"),
    path("webhooks/stripe/", stripe_webhook, name="stripe_webhook"),
]
