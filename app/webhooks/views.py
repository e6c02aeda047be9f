"""
Zapier webhook endpoints.

Endpoints:
    GET  /api/v1/webhooks/zapier/config-test/ - Is the receiver configured?
    POST /api/v1/webhooks/zapier/             - Receive a Zapier payload
    POST /api/v1/webhooks/zapier/send/        - Forward an event to Zapier

The receiver:
1. Rejects the request unless X-Zapier-Secret equals ZAPIER_WEBHOOK_SECRET
2. Parses the JSON body
3. Logs the payload once and hands it to the handler registry
4. Acknowledges with 200

Security:
- Constant-time secret comparison; an unset secret rejects everything
- CSRF exemption required for external webhooks
- Failures return stable messages; the cause only goes to the log

Usage:
    # In urls.py
    from webhooks.views import zapier_webhook

    urlpatterns = [
        path("zapier/", zapier_webhook, name="zapier_webhook"),
    ]
"""

from __future__ import annotations

import json
import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    PermissionDeniedError,
)
from core.integrations import IntegrationConfig

from .client import get_zapier_client
from .handlers import dispatch_payload, get_action
from .permissions import SECRET_HEADER, HasZapierSecret, verify_secret
from .serializers import ZapierEventSerializer

logger = logging.getLogger(__name__)


@require_GET
def zapier_config_test(request: HttpRequest) -> JsonResponse:
    """
    Report whether the receiver's shared secret is configured.

    Does not exercise the receiver itself.

    Returns:
        JsonResponse with status:
        - 200: {"status": "success", "message": "Zapier webhook endpoint is configured."}
        - 500: {"status": "error", "message": <reason>}
    """
    try:
        config = IntegrationConfig.from_settings()
    except Exception as e:
        logger.error("Zapier webhook config test failed", exc_info=True)
        return JsonResponse({"status": "error", "message": str(e)}, status=500)

    if not config.zapier.webhook_secret:
        logger.warning("ZAPIER_WEBHOOK_SECRET is not set")
        return JsonResponse(
            {"status": "error", "message": "ZAPIER_WEBHOOK_SECRET is not set."},
            status=500,
        )

    return JsonResponse(
        {"status": "success", "message": "Zapier webhook endpoint is configured."}
    )


@csrf_exempt
@require_POST
def zapier_webhook(request: HttpRequest) -> JsonResponse:
    """
    Receive a Zapier webhook payload.

    While ZAPIER_WEBHOOK_SECRET is unset every request is unauthorized (a
    missing header never matches a missing secret) and the configuration
    error is logged.

    Returns:
        JsonResponse with status:
        - 200: {"message": "Webhook received successfully!"}
        - 401: {"message": "Unauthorized"} (missing or wrong secret, or no
          secret configured)
        - 500: {"message": "Internal Server Error"} (unreadable settings,
          bad JSON, handler failure)
    """
    try:
        expected = IntegrationConfig.from_settings().zapier.webhook_secret
    except Exception as e:
        logger.error(
            f"Zapier webhook settings unreadable: {type(e).__name__}",
            exc_info=True,
        )
        return JsonResponse({"message": "Internal Server Error"}, status=500)

    try:
        verify_secret(request.headers.get(SECRET_HEADER), expected)
    except ConfigurationError as e:
        logger.error(
            "Zapier webhook rejected: secret not configured",
            extra={"error_code": e.error_code},
        )
        return JsonResponse({"message": "Unauthorized"}, status=401)
    except PermissionDeniedError as e:
        logger.warning(
            "Zapier webhook rejected: invalid secret",
            extra={"error_code": e.error_code, **e.details},
        )
        return JsonResponse({"message": "Unauthorized"}, status=401)

    try:
        payload = json.loads(request.body)

        logger.info(
            "Zapier webhook received",
            extra={"action": get_action(payload), "payload": payload},
        )

        dispatch_payload(payload)
    except Exception as e:
        logger.error(
            f"Error processing Zapier webhook: {type(e).__name__}",
            exc_info=True,
        )
        return JsonResponse({"message": "Internal Server Error"}, status=500)

    return JsonResponse({"message": "Webhook received successfully!"})


class ZapierSendView(APIView):
    """
    Forward an event to the Zapier catch hook.

    POST /api/v1/webhooks/zapier/send/

    Request body:
        {
            "action": "sms_reply",
            "data": {"from": "+15550100", "message": "hi"}
        }

    Returns:
        - 200: {"status": "success", "message": "Event forwarded to Zapier."}
        - 400: Field errors
        - 403: Missing or wrong X-Zapier-Secret
        - 500: ZAPIER_WEBHOOK_URL not set
        - 502: Zapier rejected the event or was unreachable
    """

    authentication_classes = []
    permission_classes = [HasZapierSecret]

    def post(self, request):
        """Validate and forward the event."""
        serializer = ZapierEventSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            get_zapier_client().send(**serializer.validated_data)
        except ConfigurationError as e:
            logger.error("Zapier forward not configured", extra={"error": e.message})
            return Response(
                {"status": "error", "message": e.message},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except ExternalServiceError:
            return Response(
                {"status": "error", "message": "Failed to forward event to Zapier."},
                status=status.HTTP_502_BAD_GATEWAY,
            )

        return Response(
            {"status": "success", "message": "Event forwarded to Zapier."}
        )
