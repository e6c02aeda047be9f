"""
Handler registry for inbound Zapier payloads.

The receiver view validates the shared secret, logs the payload and hands
it to dispatch_payload(). Nothing is registered by default, so inbound
payloads are acknowledged without downstream processing until a handler is
added for their ``action``.

Usage:
    from webhooks.handlers import dispatch_payload, register_handler

    # Register a handler
    @register_handler("lead.created")
    def handle_lead_created(payload: dict) -> None:
        ...

    # Dispatch a payload to its handler
    handled = dispatch_payload({"action": "lead.created", "data": {...}})
"""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


# Maps action strings to handler functions
PAYLOAD_HANDLERS: dict[str, Callable[[Any], None]] = {}


def register_handler(action: str) -> Callable:
    """
    Decorator to register a payload handler.

    Usage:
        @register_handler("lead.created")
        def handle_lead_created(payload: dict) -> None:
            ...

    Args:
        action: Value of the payload's "action" field

    Returns:
        Decorator function that registers the handler
    """

    def decorator(func: Callable[[Any], None]) -> Callable:
        PAYLOAD_HANDLERS[action] = func
        logger.debug(f"Registered Zapier payload handler for {action}")
        return func

    return decorator


def get_action(payload: Any) -> str | None:
    """Return the payload's "action" field, or None for other shapes."""
    if isinstance(payload, dict):
        action = payload.get("action")
        if isinstance(action, str):
            return action
    return None


def dispatch_payload(payload: Any) -> bool:
    """
    Dispatch an inbound payload to the handler for its action.

    Payloads without an action, or with an action nobody handles, are a
    no-op. Handler exceptions propagate to the caller.

    Args:
        payload: Parsed JSON body of the webhook

    Returns:
        True if a handler ran, False otherwise
    """
    action = get_action(payload)
    handler = PAYLOAD_HANDLERS.get(action) if action else None

    if not handler:
        logger.info(
            "No handler registered for Zapier payload",
            extra={"action": action},
        )
        return False

    logger.info(
        f"Dispatching Zapier payload {action} to handler",
        extra={"action": action},
    )
    handler(payload)
    return True
