"""
Users module interface.

The API layer depends on IUserService for all user and subscription
operations.
"""

from typing import Protocol, runtime_checkable

from .models import User, UserInput


@runtime_checkable
class IUserService(Protocol):
    """
    Interface for user operations.

    This protocol defines the contract that the users module exposes
    to the API layer.
    """

    async def create_user(self, user: UserInput) -> int:
        """
        Create a user with default subscription fields.

        Returns:
            The new user's ID

        Raises:
            InvalidUserDataError: If name or email is empty, or email has no '@'
        """
        ...

    async def get_user_by_id(self, user_id: int) -> User:
        """
        Get a user by ID.

        Raises:
            UserNotFoundError: If no user has this ID
        """
        ...

    async def get_all_users(self) -> list[User]:
        """List all users ordered by ID."""
        ...

    async def update_user(self, user_id: int, user: UserInput) -> None:
        """
        Replace a user's name and email. Subscription fields are untouched.

        Raises:
            InvalidUserDataError: If the new values fail validation
            UserNotFoundError: If no user has this ID
        """
        ...

    async def delete_user(self, user_id: int) -> None:
        """
        Delete a user.

        Raises:
            UserNotFoundError: If no user has this ID
        """
        ...

    async def create_checkout_session(self, user_id: int) -> str:
        """
        Start a subscription checkout for a user.

        Creates the provider customer first if the user doesn't have one.

        Returns:
            The provider-hosted checkout URL

        Raises:
            UserNotFoundError: If no user has this ID
            SubscriptionAlreadyActiveError: If the subscription is already active
            PaymentProviderError: If a provider call fails
        """
        ...

    async def handle_provider_webhook(self, payload: bytes, signature: str) -> None:
        """
        Verify and apply a provider webhook event.

        Events for unknown customers and unhandled event types are ignored.

        Raises:
            WebhookVerificationError: If the signature is invalid
        """
        ...
