"""
Common exceptions for the application.

This module defines custom exception classes for consistent error handling
across the intake endpoints. All API exceptions serialize to the same
``{success, error, message, error_code, ...}`` shape.
"""

from typing import Optional, Dict, Any, List


class BaseAPIException(Exception):
    """
    Base exception class for all API-related errors.
    Provides consistent error response format.
    """

    def __init__(
        self,
        message: str,
        detail: Optional[str] = None,
        status_code: int = 500,
        error_code: Optional[str] = None,
        extra_data: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the exception.

        Args:
            message: Short error summary, returned as ``error``
            detail: Human-readable hint for the client, returned as ``message``
            status_code: HTTP status code
            error_code: Application-specific error code
            extra_data: Additional keys merged into the response body
        """
        self.message = message
        self.detail = detail
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__
        self.extra_data = extra_data or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error information
        """
        result = {
            'success': False,
            'error': self.message,
            'error_code': self.error_code,
        }
        if self.detail:
            result['message'] = self.detail
        if self.extra_data:
            result.update(self.extra_data)
        return result


class ValidationError(BaseAPIException):
    """Client-correctable input problem (400 Bad Request)."""

    def __init__(
        self,
        message: str,
        detail: Optional[str] = None,
        field: Optional[str] = None,
        errors: Optional[List[str]] = None,
        extra_data: Optional[Dict[str, Any]] = None,
    ):
        extra = dict(extra_data or {})
        if field:
            extra['field'] = field
        if errors:
            extra['errors'] = errors
        super().__init__(message, detail, 400, self.__class__.__name__, extra)
        self.field = field
        self.errors = errors or []


class SchemaViolation(ValidationError):
    """Stored data failed the model's own shape or enumeration checks."""

    def __init__(self, details: List[str]):
        super().__init__(
            'Validation error',
            'Please check your input data',
            extra_data={'details': details},
        )
        self.details = details


class StorageError(BaseAPIException):
    """
    Persistence failure.

    ``transient`` separates outages the client should retry (503) from
    permanent failures (500).
    """

    def __init__(
        self,
        message: str = 'Internal server error',
        detail: Optional[str] = 'Something went wrong on our end. Please try again later.',
        transient: bool = False,
    ):
        super().__init__(message, detail, 503 if transient else 500)
        self.transient = transient


class StorageUnavailable(StorageError):
    """Database unreachable or timed out (503 Service Unavailable)."""

    def __init__(self):
        super().__init__(
            'Database temporarily unavailable',
            'Please try again in a few moments',
            transient=True,
        )


class NotFoundError(BaseAPIException):
    """Exception for resource not found errors (404 Not Found)."""

    def __init__(
        self,
        message: str,
        detail: Optional[str] = None,
        resource_type: Optional[str] = None,
        extra_data: Optional[Dict[str, Any]] = None,
    ):
        extra = dict(extra_data or {})
        if resource_type:
            extra['resource_type'] = resource_type
        super().__init__(message, detail, 404, 'NotFoundError', extra)


class ServerError(BaseAPIException):
    """Exception for internal server errors (500 Internal Server Error)."""

    def __init__(
        self,
        message: str = 'Server error occurred while processing your request',
        detail: Optional[str] = 'Please try again later',
        extra_data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, detail, 500, 'ServerError', extra_data)


class NotificationFailure(Exception):
    """
    An email dispatch did not fully succeed.

    Never reaches a client; raised inside background jobs so the queue can
    retry, and otherwise only recorded through ``email_status`` and logs.
    """

    def __init__(self, submission_id: str, errors: List[str]):
        self.submission_id = submission_id
        self.errors = errors
        super().__init__(f'Notification dispatch failed for {submission_id}: {"; ".join(errors)}')
