"""
Core views providing infrastructure endpoints.

This module contains views that are not part of the integration domain but
are essential for application infrastructure, such as health checks.
"""

import logging
import os
import time

from django.conf import settings
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

from core.integrations import IntegrationConfig

logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()


@require_GET
def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    This endpoint is used by:
    - Docker health checks
    - Kubernetes liveness/readiness probes
    - Load balancers (AWS ALB, nginx)

    Validates the integration configuration without calling any third party.

    Returns:
        JsonResponse with status and integration availability:
        - status: "healthy" or "unhealthy"
        - integrations: {"supabase": bool, "stripe": bool, "zapier": bool}
        - errors: configuration problems (only when unhealthy)

    HTTP Status Codes:
        200: Configuration valid
        503: Configuration invalid or the check itself failed

    Example Response:
        {
            "status": "healthy",
            "timestamp": "2024-05-01T12:00:00+00:00",
            "version": "1.0.0",
            "uptime": 1234.5,
            "environment": "production",
            "integrations": {"supabase": true, "stripe": true, "zapier": true},
            "pid": 12
        }
    """
    timestamp = timezone.now().isoformat()

    try:
        config = IntegrationConfig.from_settings()
        errors = config.validate()

        if errors:
            logger.warning(
                "Health check failed: environment configuration invalid",
                extra={"errors": errors},
            )
            return JsonResponse(
                {
                    "status": "unhealthy",
                    "timestamp": timestamp,
                    "errors": errors,
                    "integrations": config.availability(),
                    "message": "Environment configuration invalid",
                },
                status=503,
            )

        return JsonResponse(
            {
                "status": "healthy",
                "timestamp": timestamp,
                "version": settings.APP_VERSION,
                "uptime": round(time.monotonic() - _STARTED_AT, 3),
                "environment": settings.ENVIRONMENT,
                "integrations": config.availability(),
                "pid": os.getpid(),
            }
        )
    except Exception as e:
        logger.error("Health check failed", exc_info=True)
        return JsonResponse(
            {
                "status": "unhealthy",
                "timestamp": timestamp,
                "error": str(e),
                "message": "Health check failed",
            },
            status=503,
        )
