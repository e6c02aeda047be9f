"""
Webhooks app configuration.

This app provides the Zapier webhook receiver, sender and configuration probe.
"""

from django.apps import AppConfig


class WebhooksConfig(AppConfig):
    """Configuration for the webhooks application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "webhooks"
    verbose_name = "Webhooks"
