"""
Pytest fixtures for datastore tests.

The Supabase client is replaced by a MagicMock whose query builder chain
(table().select().limit().execute()) can be steered per test.
"""

from unittest.mock import MagicMock

import pytest

from core.integrations import SupabaseConfig
from datastore.adapters import SupabaseAdapter


@pytest.fixture
def supabase_config():
    """Supabase configuration with test credentials."""
    return SupabaseConfig(
        url="https://project.supabase.co",
        service_role_key="service-role-test-key",
    )


@pytest.fixture
def supabase_client():
    """Mock Supabase client returning one row by default."""
    client = MagicMock()
    query = client.table.return_value.select.return_value.limit.return_value
    query.execute.return_value = MagicMock(data=[{"id": 1}])
    return client


@pytest.fixture
def client_factory(supabase_client):
    """Factory standing in for supabase.create_client."""
    return MagicMock(return_value=supabase_client)


@pytest.fixture
def supabase_adapter(supabase_config, client_factory):
    """SupabaseAdapter wired to the mock client."""
    return SupabaseAdapter(supabase_config, client_factory=client_factory)


@pytest.fixture
def probe_query(supabase_client):
    """Terminal query mock of the probe chain (its execute() is the round trip)."""
    return supabase_client.table.return_value.select.return_value.limit.return_value
