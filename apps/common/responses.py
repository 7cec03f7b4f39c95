"""
Standardized response helpers for consistent API responses.
"""
from typing import Dict, Any, List, Optional
from rest_framework.response import Response
from rest_framework import status


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
    warnings: Optional[List[str]] = None
) -> Response:
    """
    Create a standardized success response.

    Args:
        data: Response data
        message: Optional success message
        status_code: HTTP status code
        warnings: Non-fatal problems to report alongside a successful result

    Returns:
        Response object
    """
    response_data: Dict[str, Any] = {}

    if data is not None:
        response_data['data'] = data

    if message:
        response_data['message'] = message

    if warnings:
        response_data['warnings'] = warnings

    return Response(response_data, status=status_code)


def created_response(data: Any = None, message: Optional[str] = None) -> Response:
    """Shortcut for a 201 success response."""
    return success_response(data, message, status.HTTP_201_CREATED)
