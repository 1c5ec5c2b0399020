"""
Standardized response helpers for consistent API responses.
"""
from typing import Dict, Any, Optional
from rest_framework.response import Response
from rest_framework import status


def success_response(
    message: str,
    status_code: int = status.HTTP_200_OK,
    **payload: Any
) -> Response:
    """
    Create a standardized success response.

    Args:
        message: Success message shown to the submitter
        status_code: HTTP status code
        **payload: Extra top-level keys (ids, timings)

    Returns:
        Response object
    """
    response_data: Dict[str, Any] = {'success': True, 'message': message}
    response_data.update(payload)
    return Response(response_data, status=status_code)


def error_response(
    message: str,
    details: Optional[str] = None,
    status_code: int = status.HTTP_400_BAD_REQUEST
) -> Response:
    """
    Create a standardized error response.

    Args:
        message: Error message
        details: Optional error detail
        status_code: HTTP status code

    Returns:
        Response object
    """
    response_data: Dict[str, Any] = {
        'success': False,
        'error': message,
    }

    if details:
        response_data['details'] = details

    return Response(response_data, status=status_code)
