"""
Outbound Zapier client.

Posts events to the Zapier "Catch Hook" URL configured in
ZAPIER_WEBHOOK_URL. Each event is a JSON object:

    {"action": "sms_reply", "data": {...}, "timestamp": "2024-05-01T12:00:00+00:00"}

Usage:
    from webhooks.client import get_zapier_client

    get_zapier_client().send("sms_reply", {"from": "+15550100", "message": "hi"})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests
from django.utils import timezone

from core.exceptions import ConfigurationError, ExternalServiceError
from core.integrations import IntegrationConfig, ZapierConfig

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)


class ZapierClient:
    """
    Client for Zapier catch hooks.

    Args:
        config: Zapier settings (webhook URL and timeout)
    """

    def __init__(self, config: ZapierConfig):
        self.config = config

    def send(self, action: str, data: dict[str, Any] | None = None) -> None:
        """
        Post one event to the Zapier catch hook.

        Single attempt; Zapier owns delivery from there on.

        Args:
            action: Event name Zapier routes on
            data: Event body

        Raises:
            ConfigurationError: ZAPIER_WEBHOOK_URL not set
            ExternalServiceError: Transport error or non-2xx response
        """
        if not self.config.webhook_url:
            raise ConfigurationError(
                "ZAPIER_WEBHOOK_URL is not set.",
                details={"setting": "ZAPIER_WEBHOOK_URL"},
            )

        body = {
            "action": action,
            "data": data or {},
            "timestamp": timezone.now().isoformat(),
        }

        try:
            response = requests.post(
                self.config.webhook_url,
                json=body,
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            status_code = getattr(e.response, "status_code", None)
            logger.error(
                "Zapier webhook delivery failed",
                extra={"action": action, "status_code": status_code},
                exc_info=True,
            )
            raise ExternalServiceError(
                "Zapier webhook delivery failed",
                details={"service": "zapier", "status_code": status_code},
            ) from e

        logger.info(
            "Event forwarded to Zapier",
            extra={"action": action, "status_code": response.status_code},
        )


def get_zapier_client(config: ZapierConfig | None = None) -> ZapierClient:
    """Return a ZapierClient for the given (or configured) settings."""
    if config is None:
        config = IntegrationConfig.from_settings().zapier
    return ZapierClient(config)
