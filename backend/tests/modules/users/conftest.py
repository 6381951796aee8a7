"""
Pytest fixtures for users module tests.

Provides an in-memory stand-in for UserRepository with the same
field-isolation behavior as the SQL statements.
"""

from typing import Optional
from unittest.mock import MagicMock

import pytest

from modules.billing.interfaces import IPaymentProvider
from modules.users.models import User, UserInput
from modules.users.service import UserService
from tests.conftest import TEST_WEBHOOK_SECRET


class InMemoryUserRepository:
    """Dict-backed repository with auto-incrementing IDs."""

    def __init__(self) -> None:
        self.rows: dict[int, User] = {}
        self._next_id = 1
        self.writes = 0

    def create(self, user: UserInput) -> int:
        user_id = self._next_id
        self._next_id += 1
        self.rows[user_id] = User(id=user_id, name=user.name, email=user.email)
        self.writes += 1
        return user_id

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.rows.get(user_id)

    def get_by_customer_id(self, customer_id: str) -> Optional[User]:
        for user in self.rows.values():
            if user.stripe_customer_id == customer_id:
                return user
        return None

    def get_all(self) -> list[User]:
        return [self.rows[k] for k in sorted(self.rows)]

    def update(self, user_id: int, user: UserInput) -> None:
        current = self.rows[user_id]
        self.rows[user_id] = current.model_copy(update={"name": user.name, "email": user.email})
        self.writes += 1

    def update_subscription(self, user_id: int, user: User) -> None:
        current = self.rows[user_id]
        self.rows[user_id] = current.model_copy(
            update={
                "stripe_customer_id": user.stripe_customer_id,
                "stripe_subscription_id": user.stripe_subscription_id,
                "subscription_status": user.subscription_status,
                "subscription_current_period_end": user.subscription_current_period_end,
            }
        )
        self.writes += 1

    def delete(self, user_id: int) -> None:
        self.rows.pop(user_id, None)
        self.writes += 1


@pytest.fixture
def repository() -> InMemoryUserRepository:
    """Fresh in-memory repository."""
    return InMemoryUserRepository()


@pytest.fixture
def payments() -> MagicMock:
    """Mock payment provider."""
    provider = MagicMock(spec=IPaymentProvider)
    provider.create_customer.return_value = "cus_new"
    provider.create_checkout_session.return_value = "https://checkout.stripe.com/c/pay/cs_test"
    return provider


@pytest.fixture
def service(repository, payments) -> UserService:
    """UserService wired to the in-memory repository and mock provider."""
    return UserService(
        repository=repository,
        payments=payments,
        webhook_secret=TEST_WEBHOOK_SECRET,
        checkout_success_url="https://app.test/success",
        checkout_cancel_url="https://app.test/cancel",
    )
