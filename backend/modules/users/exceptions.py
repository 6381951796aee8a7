"""
Users module exceptions.

These exceptions are raised by the users module and caught by the API
error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import (
    NotFoundError,
    ValidationError,
    ConflictError,
)


class InvalidUserDataError(ValidationError):
    """Raised when name or email fails validation."""

    def __init__(self, reason: str, field: Optional[str] = None):
        details = {"reason": reason}
        if field:
            details["field"] = field
        super().__init__(
            f"Invalid user data: {reason}",
            code="INVALID_USER_DATA",
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """Raised when no user matches the given ID."""

    def __init__(self, user_id: int):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class SubscriptionAlreadyActiveError(ConflictError):
    """
    Raised when a checkout session is requested for a user whose
    subscription is already active.
    """

    def __init__(self, user_id: int):
        super().__init__(
            f"User already has an active subscription: {user_id}",
            code="SUBSCRIPTION_ALREADY_ACTIVE",
            details={"user_id": user_id},
        )
