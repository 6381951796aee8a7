"""
Users service implementation.

Validates input, normalizes lookup misses into UserNotFoundError and
orchestrates the subscription workflows with the payment provider.

Repository and provider clients are blocking; every call to them runs
in a worker thread so the event loop keeps serving other requests.
"""

import asyncio
import logging

from modules.billing.interfaces import IPaymentProvider
from modules.billing.models import (
    CheckoutCompletedEvent,
    SubscriptionDeletedEvent,
    SubscriptionDetails,
    SubscriptionUpdatedEvent,
    UnrecognizedEvent,
)

from .interfaces import IUserService
from .repository import UserRepository
from .models import SubscriptionStatus, User, UserInput
from .exceptions import (
    InvalidUserDataError,
    SubscriptionAlreadyActiveError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """
    User service backed by a UserRepository and a payment provider.

    Implements IUserService protocol.
    """

    def __init__(
        self,
        repository: UserRepository,
        payments: IPaymentProvider,
        webhook_secret: str,
        checkout_success_url: str,
        checkout_cancel_url: str,
    ):
        self._repo = repository
        self._payments = payments
        self._webhook_secret = webhook_secret
        self._success_url = checkout_success_url
        self._cancel_url = checkout_cancel_url

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    async def create_user(self, user: UserInput) -> int:
        """Validate and insert a new user."""
        self._validate(user)
        user_id = await asyncio.to_thread(self._repo.create, user)
        logger.info("Created user %s", user_id)
        return user_id

    async def get_user_by_id(self, user_id: int) -> User:
        """Get a user, raising UserNotFoundError on a miss."""
        user = await asyncio.to_thread(self._repo.get_by_id, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def get_all_users(self) -> list[User]:
        """List all users."""
        return await asyncio.to_thread(self._repo.get_all)

    async def update_user(self, user_id: int, user: UserInput) -> None:
        """Validate, confirm existence, then update name and email."""
        self._validate(user)
        await self.get_user_by_id(user_id)
        await asyncio.to_thread(self._repo.update, user_id, user)

    async def delete_user(self, user_id: int) -> None:
        """Confirm existence, then delete."""
        await self.get_user_by_id(user_id)
        await asyncio.to_thread(self._repo.delete, user_id)
        logger.info("Deleted user %s", user_id)

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    async def create_checkout_session(self, user_id: int) -> str:
        """Ensure a provider customer exists, then open a checkout session."""
        user = await self.get_user_by_id(user_id)

        if user.subscription_status == SubscriptionStatus.ACTIVE.value:
            raise SubscriptionAlreadyActiveError(user_id)

        customer_id = user.stripe_customer_id
        if not customer_id:
            # Keyed on the user ID: a repeated call returns the first customer
            customer_id = await asyncio.to_thread(
                self._payments.create_customer,
                user.name,
                user.email,
                idempotency_key=f"user-{user.id}-customer",
            )
            user = user.model_copy(update={"stripe_customer_id": customer_id})
            await asyncio.to_thread(self._repo.update_subscription, user.id, user)
            logger.info("Linked user %s to provider customer %s", user.id, customer_id)

        return await asyncio.to_thread(
            self._payments.create_checkout_session,
            customer_id,
            success_url=self._success_url,
            cancel_url=self._cancel_url,
        )

    async def handle_provider_webhook(self, payload: bytes, signature: str) -> None:
        """Verify a webhook and mirror the reported subscription state locally."""
        event = await asyncio.to_thread(
            self._payments.verify_webhook,
            payload,
            signature,
            self._webhook_secret,
        )

        if isinstance(event, CheckoutCompletedEvent):
            await self._on_checkout_completed(event)
        elif isinstance(event, (SubscriptionUpdatedEvent, SubscriptionDeletedEvent)):
            await self._on_subscription_changed(event.subscription)
        elif isinstance(event, UnrecognizedEvent):
            logger.info("Ignoring unhandled webhook event type: %s", event.event_type)

    async def _on_checkout_completed(self, event: CheckoutCompletedEvent) -> None:
        if not event.subscription_id or not event.customer_id:
            logger.warning(
                "Checkout event %s has no subscription or customer, ignoring",
                event.event_id,
            )
            return

        subscription = await asyncio.to_thread(
            self._payments.fetch_subscription,
            event.subscription_id,
        )

        user = await asyncio.to_thread(self._repo.get_by_customer_id, event.customer_id)
        if user is None:
            logger.info("No local user for customer %s, ignoring", event.customer_id)
            return

        await self._apply_subscription(user, subscription, link_subscription=True)

    async def _on_subscription_changed(self, subscription: SubscriptionDetails) -> None:
        if not subscription.customer_id:
            return

        user = await asyncio.to_thread(self._repo.get_by_customer_id, subscription.customer_id)
        if user is None:
            logger.info("No local user for customer %s, ignoring", subscription.customer_id)
            return

        await self._apply_subscription(user, subscription)

    async def _apply_subscription(
        self,
        user: User,
        subscription: SubscriptionDetails,
        link_subscription: bool = False,
    ) -> None:
        """Persist provider-reported state through the subscription-only update."""
        changes = {
            "subscription_status": subscription.status,
            "subscription_current_period_end": subscription.current_period_end,
        }
        if link_subscription:
            changes["stripe_subscription_id"] = subscription.id

        updated = user.model_copy(update=changes)
        await asyncio.to_thread(self._repo.update_subscription, user.id, updated)
        logger.info(
            "User %s subscription is now %s",
            user.id,
            subscription.status,
        )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def _validate(user: UserInput) -> None:
        if not user.name:
            raise InvalidUserDataError("name is required", field="name")
        if not user.email:
            raise InvalidUserDataError("email is required", field="email")
        if "@" not in user.email:
            raise InvalidUserDataError("email must contain '@'", field="email")
