"""
Webhook event handlers for Stripe events.

This module provides a handler registry and implementations for
processing the Stripe events the subscription flow depends on.

Every handled event is recorded in the ``payment_logs`` table. Subscription
and checkout events also sync the subscriber's ``users`` row; the user is
found through the customer's ``supabase_user_id`` metadata (subscriptions)
or the session's ``userId`` metadata (checkout).

Store failures while syncing are logged and do not fail the event. Stripe
failures (customer lookup) propagate so the receiver answers 500 and Stripe
redelivers.

Usage:
    from payments.webhooks.handlers import dispatch_event, register_handler

    # Register a custom handler
    @register_handler("customer.created")
    def handle_customer_created(event: dict) -> None:
        ...

    # Dispatch an event to its handler
    dispatch_event(event)
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from core.exceptions import ExternalServiceError
from datastore.adapters import get_supabase_adapter

from payments.adapters import get_stripe_adapter

logger = logging.getLogger(__name__)

Event = dict[str, Any]


# =============================================================================
# Handler Registry
# =============================================================================


# Maps event type strings to handler functions
WEBHOOK_HANDLERS: dict[str, Callable[[Event], None]] = {}


def register_handler(event_type: str) -> Callable:
    """
    Decorator to register a webhook event handler.

    Usage:
        @register_handler("invoice.paid")
        def handle_invoice_paid(event: dict) -> None:
            ...

    Args:
        event_type: The Stripe event type (e.g., "invoice.paid")

    Returns:
        Decorator function that registers the handler
    """

    def decorator(func: Callable[[Event], None]) -> Callable:
        WEBHOOK_HANDLERS[event_type] = func
        logger.debug(f"Registered webhook handler for {event_type}")
        return func

    return decorator


def dispatch_event(event: Event) -> bool:
    """
    Dispatch a verified event to the handler for its type.

    Unknown event types are logged and ignored.

    Returns:
        True when a handler ran, False when the type is unhandled
    """
    event_type = event.get("type")
    handler = WEBHOOK_HANDLERS.get(event_type)

    if not handler:
        logger.info(
            f"Unhandled event type {event_type}",
            extra={"stripe_event_id": event.get("id")},
        )
        return False

    logger.info(
        f"Dispatching {event_type} to handler",
        extra={"stripe_event_id": event.get("id")},
    )
    handler(event)
    return True


# =============================================================================
# Helpers
# =============================================================================


def _event_object(event: Event) -> dict[str, Any]:
    return event.get("data", {}).get("object", {})


def _major_units(amount: int | None) -> float | None:
    """Stripe amounts are in the smallest currency unit."""
    return amount / 100 if amount else None


def _user_id_for_customer(customer_id: str | None) -> str | None:
    """Look up the app user id stored on the Stripe customer."""
    if not customer_id:
        return None
    customer = get_stripe_adapter().retrieve_customer(customer_id)
    return (customer.get("metadata") or {}).get("supabase_user_id")


def _update_user(user_id: str | None, fields: dict[str, Any], event: Event) -> None:
    if not user_id:
        logger.warning(
            "No user linked to event, users row not updated",
            extra={"stripe_event_id": event.get("id"), "event_type": event.get("type")},
        )
        return

    try:
        get_supabase_adapter().update_user(user_id, fields)
    except ExternalServiceError as e:
        logger.error(
            "Error updating user from Stripe event",
            extra={
                "stripe_event_id": event.get("id"),
                "user_id": user_id,
                "error": e.message,
            },
        )


def _log_payment_event(
    event: Event,
    event_type: str,
    user_id: str | None = None,
    status: str = "success",
    amount: float | None = None,
    currency: str | None = None,
) -> None:
    row = {
        "user_id": user_id,
        "event_type": event_type,
        "stripe_event_id": event.get("id"),
        "payload": _event_object(event),
        "status": status,
    }
    if amount is not None or currency is not None:
        row["amount"] = amount
        row["currency"] = currency

    try:
        get_supabase_adapter().insert_payment_log(row)
    except ExternalServiceError as e:
        logger.error(
            "Error recording payment log",
            extra={
                "stripe_event_id": event.get("id"),
                "event_type": event_type,
                "error": e.message,
            },
        )


# =============================================================================
# Subscription Handlers
# =============================================================================


@register_handler("customer.subscription.created")
def handle_subscription_created(event: Event) -> None:
    """Mark the subscriber active and store the Stripe ids."""
    subscription = _event_object(event)
    customer_id = subscription.get("customer")
    user_id = _user_id_for_customer(customer_id)

    logger.info(
        f"Subscription created: {subscription.get('id')}",
        extra={"stripe_event_id": event.get("id"), "user_id": user_id},
    )

    _update_user(
        user_id,
        {
            "subscription_status": "active",
            "stripe_customer_id": customer_id,
            "stripe_subscription_id": subscription.get("id"),
        },
        event,
    )
    _log_payment_event(event, "subscription_created", user_id=user_id)


@register_handler("customer.subscription.updated")
def handle_subscription_updated(event: Event) -> None:
    """Copy the subscription's status onto the subscriber."""
    subscription = _event_object(event)
    user_id = _user_id_for_customer(subscription.get("customer"))

    logger.info(
        f"Subscription updated: {subscription.get('id')}, "
        f"Status: {subscription.get('status')}",
        extra={"stripe_event_id": event.get("id"), "user_id": user_id},
    )

    _update_user(
        user_id,
        {"subscription_status": subscription.get("status")},
        event,
    )
    _log_payment_event(event, "subscription_updated", user_id=user_id)


@register_handler("customer.subscription.deleted")
def handle_subscription_deleted(event: Event) -> None:
    """Mark the subscriber canceled and clear the subscription id."""
    subscription = _event_object(event)
    user_id = _user_id_for_customer(subscription.get("customer"))

    logger.info(
        f"Subscription deleted: {subscription.get('id')}",
        extra={"stripe_event_id": event.get("id"), "user_id": user_id},
    )

    _update_user(
        user_id,
        {"subscription_status": "canceled", "stripe_subscription_id": None},
        event,
    )
    _log_payment_event(event, "subscription_deleted", user_id=user_id)


# =============================================================================
# Checkout Handlers
# =============================================================================


@register_handler("checkout.session.completed")
def handle_checkout_session_completed(event: Event) -> None:
    """Link the checkout's customer and subscription to the app user."""
    session = _event_object(event)
    user_id = (session.get("metadata") or {}).get("userId")

    logger.info(
        f"Checkout session completed: {session.get('id')}",
        extra={"stripe_event_id": event.get("id"), "user_id": user_id},
    )

    _update_user(
        user_id,
        {
            "stripe_customer_id": session.get("customer"),
            "stripe_subscription_id": session.get("subscription"),
        },
        event,
    )
    _log_payment_event(
        event,
        "checkout_session_completed",
        user_id=user_id,
        amount=_major_units(session.get("amount_total")),
        currency=session.get("currency"),
    )


# =============================================================================
# Invoice Handlers
# =============================================================================


@register_handler("invoice.payment_succeeded")
def handle_invoice_payment_succeeded(event: Event) -> None:
    invoice = _event_object(event)
    logger.info(
        f"Invoice payment succeeded: {invoice.get('id')}",
        extra={"stripe_event_id": event.get("id")},
    )

    _log_payment_event(
        event,
        "invoice_payment_succeeded",
        amount=_major_units(invoice.get("amount_paid")),
        currency=invoice.get("currency"),
    )


@register_handler("invoice.payment_failed")
def handle_invoice_payment_failed(event: Event) -> None:
    invoice = _event_object(event)
    logger.warning(
        f"Invoice payment failed: {invoice.get('id')}",
        extra={"stripe_event_id": event.get("id")},
    )

    _log_payment_event(
        event,
        "invoice_payment_failed",
        status="failed",
        amount=_major_units(invoice.get("amount_due")),
        currency=invoice.get("currency"),
    )
