"""
Exception handler for Django REST Framework.

This module provides a custom exception handler that converts our custom
exceptions to consistent API responses.
"""

import structlog
from django.db import DatabaseError
from rest_framework.views import exception_handler
from rest_framework.response import Response
from .exceptions import BaseAPIException, InternalServerError

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

    # Storage failures are not retried here; the client only sees an opaque error
    if isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.error(
            "Storage failure while handling request",
            view=view.__class__.__name__ if view else None,
            error_type=exc.__class__.__name__,
            exc_info=exc,
        )
        error = InternalServerError()
        return Response(error.to_dict(), status=error.status_code)

    # Let DRF handle other exceptions
    response = exception_handler(exc, context)

    # Customize DRF's default error response format
    if response is not None:
        custom_response_data = {
            'error': str(exc),
            'detail': response.data.get('detail', str(exc)) if isinstance(response.data, dict) else str(response.data),
        }

        # Add field errors if present
        if isinstance(response.data, dict) and 'detail' not in response.data:
            # This might be a validation error with field details
            if any(key != 'detail' for key in response.data.keys()):
                custom_response_data['errors'] = response.data

        response.data = custom_response_data

    return response
