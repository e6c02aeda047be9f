"""
Webhooks app for the Zapier integration.

This app handles:
- Inbound Zapier webhooks authenticated by a shared secret header
- Outbound events posted to the configured Zapier catch hook
- A configuration probe for the inbound endpoint

Usage:
    # Extend inbound processing
    from webhooks.handlers import register_handler

    @register_handler("lead.created")
    def handle_lead_created(payload: dict) -> None:
        ...

    # Forward an event to Zapier
    from webhooks.client import get_zapier_client

    get_zapier_client().send("sms_reply", {"from": "+15550100", "message": "hi"})
"""
