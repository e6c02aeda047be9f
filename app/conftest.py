"""
Root pytest configuration for the Django project.

This module configures pytest-django and provides project-wide fixtures.
App-specific fixtures are defined in each app's tests/conftest.py.
"""

import os

import django
import pytest

# Ensure Django settings are configured before any tests run
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")


def pytest_configure():
    """Configure Django settings before tests run."""
    django.setup()

    from django.conf import settings

    # The test client speaks plain HTTP; production settings redirect to HTTPS
    settings.SECURE_SSL_REDIRECT = False


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_views.py, test_services.py, test_handlers.py → integration
    - test_integrations.py, test_*_adapter.py, test_client.py → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    integration_patterns = [
        "test_views.py",
        "test_services.py",
        "test_handlers.py",
    ]

    unit_patterns = [
        "test_integrations.py",
        "_adapter.py",
        "test_client.py",
    ]

    for item in items:
        # Skip if test already has unit/integration/e2e marker
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = item.path.name

        if any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def _clear_adapter_caches():
    """Give every test fresh provider adapters."""
    from datastore.adapters.supabase_adapter import _adapter_for as supabase_adapter_for
    from payments.adapters.stripe_adapter import _adapter_for as stripe_adapter_for

    supabase_adapter_for.cache_clear()
    stripe_adapter_for.cache_clear()
    yield
    supabase_adapter_for.cache_clear()
    stripe_adapter_for.cache_clear()
