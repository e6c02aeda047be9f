"""
Shared-secret checks for Zapier endpoints.

Zapier authenticates itself with a static secret sent in the
``X-Zapier-Secret`` header. The secret is compared in constant time, and an
unset secret never matches anything (including a missing header).
"""

from __future__ import annotations

import hmac
from typing import TYPE_CHECKING

from rest_framework import permissions

from core.exceptions import ConfigurationError, PermissionDeniedError
from core.integrations import IntegrationConfig

if TYPE_CHECKING:
    from rest_framework.request import Request
    from rest_framework.views import APIView

SECRET_HEADER = "X-Zapier-Secret"


def secret_matches(provided: str | None, expected: str | None) -> bool:
    """
    Compare a provided secret against the configured one.

    Returns False when either side is empty.
    """
    if not provided or not expected:
        return False
    return hmac.compare_digest(provided.encode(), expected.encode())


def verify_secret(provided: str | None, expected: str | None) -> None:
    """
    Check an inbound secret, raising on failure.

    Raises:
        ConfigurationError: ZAPIER_WEBHOOK_SECRET not set
        PermissionDeniedError: Header missing or different from the secret
    """
    if not expected:
        raise ConfigurationError(
            "ZAPIER_WEBHOOK_SECRET is not set.",
            details={"setting": "ZAPIER_WEBHOOK_SECRET"},
        )
    if not secret_matches(provided, expected):
        raise PermissionDeniedError(
            "Unauthorized",
            details={"header_present": bool(provided)},
        )


class HasZapierSecret(permissions.BasePermission):
    """
    Allows access only to requests carrying the configured Zapier secret.

    Denies every request while ZAPIER_WEBHOOK_SECRET is unset.
    """

    message = "Invalid or missing Zapier secret."

    def has_permission(self, request: Request, view: APIView) -> bool:
        expected = IntegrationConfig.from_settings().zapier.webhook_secret
        return secret_matches(request.headers.get(SECRET_HEADER), expected)
