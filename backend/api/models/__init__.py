"""API models package."""

from .errors import ErrorResponse, INTERNAL_ERROR

__all__ = [
    "ErrorResponse",
    "INTERNAL_ERROR",
]
