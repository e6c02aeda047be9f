"""
Payments app configuration.

This app provides the Stripe integration:
- Hosted checkout and billing portal sessions
- Stripe API connectivity check
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Configuration for the payments application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"
