"""
Core views providing infrastructure endpoints.

This module contains views that are not part of the business domain but are
essential for application infrastructure, such as health checks, plus the
shared translation of domain exceptions into API responses.
"""

from django.conf import settings
from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response

from core.exceptions import (
    BaseApplicationError,
    ExternalServiceError,
    NotFoundError,
    SessionExpiredError,
    ValidationError,
)


def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    The dashboard keeps no local database; it depends on three external
    services. This endpoint reports whether each of them is configured.
    It never calls them, so an outage at a provider does not fail the probe.

    Returns:
        JsonResponse with status and component configuration:
        - status: "healthy" or "unhealthy"
        - identity_provider: "configured" or "missing"
        - document_store: "configured" or "missing"
        - media_host: "configured" or "missing"

    HTTP Status Codes:
        200: All services configured
        503: One or more services missing configuration

    Example Response:
        {
            "status": "healthy",
            "identity_provider": "configured",
            "document_store": "configured",
            "media_host": "configured"
        }
    """
    components = {
        "identity_provider": bool(settings.FIREBASE_API_KEY),
        "document_store": bool(settings.FIREBASE_PROJECT_ID),
        "media_host": bool(
            settings.CLOUDINARY_CLOUD_NAME and settings.CLOUDINARY_UPLOAD_PRESET
        ),
    }

    health_status = {
        name: "configured" if ok else "missing" for name, ok in components.items()
    }
    is_healthy = all(components.values())
    health_status["status"] = "healthy" if is_healthy else "unhealthy"

    status_code = 200 if is_healthy else 503

    return JsonResponse(health_status, status=status_code)


def error_response(exc: BaseApplicationError, request=None) -> Response:
    """
    Translate a domain exception into a DRF response.

    Client-side rule violations are 400, missing items 404, an expired
    identity 401, and every external service failure 502. The body is the
    exception's to_dict().

    When the identity has expired and a request is given, its session is
    flushed so later requests are anonymous.
    """
    if isinstance(exc, SessionExpiredError):
        if request is not None:
            request.session.flush()
        return Response(exc.to_dict(), status=status.HTTP_401_UNAUTHORIZED)

    if isinstance(exc, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ExternalServiceError):
        status_code = status.HTTP_502_BAD_GATEWAY
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return Response(exc.to_dict(), status=status_code)
