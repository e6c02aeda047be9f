"""
Payments app for Stripe integration.

This app handles:
- Billing portal sessions for existing customers
- Subscription checkout sessions
- Stripe connectivity checks

Related apps:
    - core: configuration objects and error taxonomy

Usage:
    from payments.services import open_billing_portal_session

    url = open_billing_portal_session("cus_123")
"""
