"""
Stripe webhook handling.

Modules:
    - views.py: Signature-checked event receiver
    - handlers.py: Event type -> handler registry and the handlers
"""
