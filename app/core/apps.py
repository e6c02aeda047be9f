"""
Core app configuration.

This app provides the shared infrastructure used by every integration:
- Error taxonomy (core.exceptions)
- Integration configuration objects (core.integrations)
- Health check endpoint (core.views)
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the core application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
    verbose_name = "Core"
