"""
Datastore app configuration.

This app provides the Supabase integration used as the backing data store.
"""

from django.apps import AppConfig


class DatastoreConfig(AppConfig):
    """Configuration for the datastore application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "datastore"
    verbose_name = "Datastore"
