"""
Users module.

Handles user CRUD, validation and the subscription workflows.

Public API:
- IUserService: Interface for user operations
- User: Persisted user record
- UserInput / UserResponse: API request and response shapes
- User exceptions: UserNotFoundError, etc.
"""

from .interfaces import IUserService
from .models import (
    User,
    UserInput,
    UserResponse,
    SubscriptionStatus,
    CheckoutSessionResponse,
)
from .exceptions import (
    InvalidUserDataError,
    UserNotFoundError,
    SubscriptionAlreadyActiveError,
)

__all__ = [
    # Interface
    "IUserService",
    # Models
    "User",
    "UserInput",
    "UserResponse",
    "SubscriptionStatus",
    "CheckoutSessionResponse",
    # Exceptions
    "InvalidUserDataError",
    "UserNotFoundError",
    "SubscriptionAlreadyActiveError",
]
