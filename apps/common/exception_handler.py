"""
Exception handler for Django REST Framework.

This module provides a custom exception handler that converts our custom
exceptions to consistent API responses, and turns anything unexpected into
the generic 500 body instead of Django's HTML error page.
"""

import structlog
from django.conf import settings
from rest_framework.views import exception_handler
from rest_framework.response import Response
from .exceptions import BaseAPIException, ServerError

logger = structlog.get_logger(__name__)


def custom_exception_handler(exc, context):
    """
    Custom exception handler for DRF that handles our custom exceptions.

    Args:
        exc: The exception instance
        context: The context dictionary

    Returns:
        Response object with error details
    """
    if isinstance(exc, BaseAPIException):
        return Response(exc.to_dict(), status=exc.status_code)

    # Let DRF handle its own exceptions (parse errors, throttling, ...)
    response = exception_handler(exc, context)

    if response is not None:
        custom_response_data = {
            'success': False,
            'error': str(exc),
            'message': response.data.get('detail', str(exc)) if isinstance(response.data, dict) else str(response.data),
        }

        # Add field errors if present
        if isinstance(response.data, dict) and 'detail' not in response.data:
            custom_response_data['errors'] = response.data

        response.data = custom_response_data
        return response

    view = context.get('view')
    logger.exception(
        "Unhandled exception",
        view=view.__class__.__name__ if view else None,
        error=str(exc),
    )
    error = ServerError()
    body = error.to_dict()
    if settings.DEBUG:
        body['details'] = str(exc)
    return Response(body, status=error.status_code)
