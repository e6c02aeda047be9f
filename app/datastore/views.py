"""
Views for the datastore app.

Endpoints:
    GET /api/v1/datastore/connection-test/ - Supabase connectivity probe
"""

from __future__ import annotations

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET

from core.exceptions import ConfigurationError, ExternalServiceError

from .adapters import get_supabase_adapter

logger = logging.getLogger(__name__)


@require_GET
def supabase_connection_test(request: HttpRequest) -> JsonResponse:
    """
    Check that the backing store answers a bounded read.

    Issues a single ``select id ... limit 1`` with the service-role client.
    No retry; repeated calls have no side effects.

    Returns:
        JsonResponse with status:
        - 200: {"status": "success", "message": "Supabase connection successful!"}
        - 500: {"status": "error", "message": <store or exception message>}
    """
    try:
        get_supabase_adapter().check_connection()
    except (ConfigurationError, ExternalServiceError) as e:
        logger.error(
            "Supabase connection test failed",
            extra={"error_code": e.error_code},
        )
        return JsonResponse({"status": "error", "message": e.message}, status=500)
    except Exception as e:
        logger.error("Supabase connection test failed (unexpected)", exc_info=True)
        return JsonResponse({"status": "error", "message": str(e)}, status=500)

    return JsonResponse(
        {"status": "success", "message": "Supabase connection successful!"}
    )
