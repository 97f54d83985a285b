"""DRF exception handler: short, non-technical error bodies."""
import logging

from django.conf import settings
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from apps.matching.exceptions import MatchingError

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """Render errors as ``{"error", "code", "retryable"}``.

    Internal messages are only exposed (as ``detail``) when DEBUG is on.
    """
    if isinstance(exc, MatchingError):
        if exc.status_code >= 500:
            logger.error("%s: %s %s", exc.code, exc, exc.context)
        body = {"error": exc.user_message, "code": exc.code, "retryable": exc.retryable}
        if getattr(exc, "missing", None):
            body["missing"] = exc.missing
        if settings.DEBUG:
            body["detail"] = str(exc)
        return Response(body, status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        logger.error("Unhandled API error: %s", exc, exc_info=exc)
        body = {"error": "Something went wrong. Please try again later.", "code": "server_error", "retryable": False}
        if settings.DEBUG:
            body["detail"] = str(exc)
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, exceptions.ValidationError):
        body = {"error": "Invalid request.", "code": "invalid", "retryable": False, "fields": response.data}
    else:
        detail = response.data.get("detail", "") if isinstance(response.data, dict) else ""
        body = {
            "error": str(detail) or "Request failed.",
            "code": getattr(detail, "code", None) or "error",
            "retryable": response.status_code == status.HTTP_429_TOO_MANY_REQUESTS,
        }
    response.data = body
    return response
