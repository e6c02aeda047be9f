"""
Datastore app for the Supabase integration.

This app handles:
- Supabase admin client construction (service-role key)
- Connectivity probe against the backing store

Usage:
    from datastore.adapters import get_supabase_adapter

    get_supabase_adapter().check_connection()
"""
