"""
Common exceptions for the application.

This module defines custom exception classes for consistent error handling
across the application. All exceptions follow a standard format and are
rendered by apps.common.exception_handler.
"""

from typing import Optional, Dict, Any


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
            message: Human-readable error message
            detail: Detailed error information
            status_code: HTTP status code
            error_code: Application-specific error code
            extra_data: Additional error data
        """
        self.message = message
        self.detail = detail or message
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
            'error': self.message,
            'detail': self.detail,
            'error_code': self.error_code,
        }
        if self.extra_data:
            result.update(self.extra_data)
        return result


class ValidationError(BaseAPIException):
    """Exception for validation errors (400 Bad Request)."""

    def __init__(self, message: str, detail: Optional[str] = None, extra_data: Optional[Dict[str, Any]] = None):
        super().__init__(message, detail, 400, 'ValidationError', extra_data)


class NotFoundError(BaseAPIException):
    """Exception for resource not found errors (404 Not Found)."""

    def __init__(self, message: str, detail: Optional[str] = None, resource_type: Optional[str] = None):
        extra_data = {'resource_type': resource_type} if resource_type else {}
        super().__init__(message, detail, 404, 'NotFoundError', extra_data)


class InvalidReferenceError(BaseAPIException):
    """A referenced record exists but does not belong where the request claims (400)."""

    def __init__(self, message: str, detail: Optional[str] = None, extra_data: Optional[Dict[str, Any]] = None):
        super().__init__(message, detail, 400, 'InvalidReferenceError', extra_data)


class ConflictError(BaseAPIException):
    """Duplicate data, or an operation blocked by existing dependent records (409)."""

    def __init__(self, message: str, detail: Optional[str] = None, extra_data: Optional[Dict[str, Any]] = None):
        super().__init__(message, detail, 409, 'ConflictError', extra_data)


class CircularReferenceError(BaseAPIException):
    """A parent assignment would turn the sub-domain tree into a cycle (400)."""

    def __init__(self, sub_domain_id, parent_id):
        super().__init__(
            'Cannot set parent: would create circular reference',
            f'Sub-domain "{parent_id}" is "{sub_domain_id}" itself or one of its descendants',
            400,
            'CircularReferenceError',
            {'sub_domain_id': str(sub_domain_id), 'parent_id': str(parent_id)},
        )
        self.sub_domain_id = sub_domain_id
        self.parent_id = parent_id


class DepthExceededError(BaseAPIException):
    """The sub-domain tree would grow deeper than the configured maximum (400)."""

    def __init__(self, level: int, max_depth: int):
        super().__init__(
            'Maximum nesting level exceeded',
            f'Resulting depth {level} is deeper than the allowed {max_depth} levels',
            400,
            'DepthExceededError',
            {'level': level, 'max_depth': max_depth},
        )
        self.level = level
        self.max_depth = max_depth


class InternalServerError(BaseAPIException):
    """Exception for internal server errors (500 Internal Server Error)."""

    def __init__(self, message: str = 'An internal error occurred', detail: Optional[str] = None):
        super().__init__(message, detail, 500, 'InternalServerError')


class DomainNotFoundError(NotFoundError):
    """Exception for domain not found errors."""

    def __init__(self, domain_id):
        super().__init__(
            f'Domain not found: {domain_id}',
            f'The domain with ID "{domain_id}" does not exist or is inactive',
            resource_type='Domain'
        )
        self.domain_id = domain_id


class SubDomainNotFoundError(NotFoundError):
    """Exception for sub-domain not found errors."""

    def __init__(self, sub_domain_id):
        super().__init__(
            f'SubDomain not found: {sub_domain_id}',
            f'The sub-domain with ID "{sub_domain_id}" does not exist',
            resource_type='SubDomain'
        )
        self.sub_domain_id = sub_domain_id
