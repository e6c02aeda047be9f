"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /health/                       - Health check endpoint (for load balancers, Docker)
    /api/v1/datastore/             - Supabase endpoints
        connection-test/           - Connectivity probe (GET)
    /api/v1/payments/              - Stripe endpoints
        connection-test/           - API key check (GET)
        webhook-test/              - Webhook signing secret check (GET)
        webhooks/stripe/           - Stripe event receiver (POST, GET status)
    /api/v1/webhooks/              - Zapier endpoints
        zapier/                    - Payload receiver (POST)
        zapier/config-test/        - Receiver configuration probe (GET)
        zapier/send/               - Forward an event to Zapier (POST)

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.urls import include, path

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Supabase
    path("datastore/", include("datastore.urls")),
    # Stripe
    path("payments/", include("payments.urls")),
    # Zapier
    path("webhooks/", include("webhooks.urls")),
]

urlpatterns = [
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]
