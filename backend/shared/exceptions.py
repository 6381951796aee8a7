"""
Base exception classes for the Users API backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to an HTTP status code, so new
exceptions only need to pick the right parent.
"""

from typing import Optional, Any


class ServiceError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(ServiceError):
    """Resource not found."""

    pass


class ValidationError(ServiceError):
    """Input validation failed."""

    pass


class ConflictError(ServiceError):
    """Request conflicts with the current state of the resource."""

    pass


class ExternalServiceError(ServiceError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
