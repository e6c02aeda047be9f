"""
Adapters for the backing data store.

All Supabase calls should go through these adapters so that configuration
checks, error translation and logging stay consistent.

Usage:
    from datastore.adapters import get_supabase_adapter

    get_supabase_adapter().check_connection()
"""

from datastore.adapters.supabase_adapter import SupabaseAdapter, get_supabase_adapter

__all__ = [
    "SupabaseAdapter",
    "get_supabase_adapter",
]
