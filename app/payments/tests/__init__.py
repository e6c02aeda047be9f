"""
Tests for payments app.

This package contains test modules for:
- test_services.py: Billing portal and checkout helper tests
- test_views.py: Stripe connectivity probe tests

Usage:
    pytest payments/tests/
    pytest payments/tests/test_services.py
"""
