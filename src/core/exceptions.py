"""DRF exception handler rendering :class:`core.errors.ApiError`."""
import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.errors import ApiError

logger = logging.getLogger("investdesk")


def api_exception_handler(exc, context):
    """Render ``ApiError`` as ``{"detail", "code", "details"}``; defer the rest to DRF."""
    if isinstance(exc, ApiError):
        if exc.status_code >= 500:
            logger.error("API error on %s: %r", context.get("view").__class__.__name__, exc)
        return Response(exc.as_dict(), status=exc.status_code)
    return exception_handler(exc, context)
