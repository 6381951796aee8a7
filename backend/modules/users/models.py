"""
Users module data models.

These models define the User entity as stored in the database and the
request/response shapes exposed by the API.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class SubscriptionStatus(str, Enum):
    """Well-known subscription states mirrored from the payment provider."""

    INACTIVE = "inactive"    # No subscription yet (default)
    ACTIVE = "active"
    CANCELED = "canceled"
    PAST_DUE = "past_due"


class User(BaseModel):
    """
    A user record as persisted.

    Subscription fields are owned by the payment provider: they are only
    written through the subscription-only update path.
    """

    id: int = Field(..., description="Store-assigned identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")

    stripe_customer_id: Optional[str] = Field(
        None,
        description="Stripe customer ID (cus_...), set once the customer exists",
    )
    stripe_subscription_id: Optional[str] = Field(
        None,
        description="Stripe subscription ID (sub_...)",
    )
    # Plain str: the provider may report states not listed in SubscriptionStatus
    subscription_status: str = Field(
        default=SubscriptionStatus.INACTIVE.value,
        description="Subscription status as last reported by the provider",
    )
    subscription_current_period_end: Optional[datetime] = Field(
        None,
        description="End of the current billing period",
    )


class UserInput(BaseModel):
    """
    Request body for creating or updating a user.

    Both fields default to empty so that missing values reach the
    service and are rejected there with a consistent error.
    """

    name: str = Field(default="", description="Display name")
    email: str = Field(default="", description="Email address")


class UserResponse(BaseModel):
    """Public view of a user. External provider references are never exposed."""

    id: int
    name: str
    email: str
    subscription_status: str
    subscription_current_period_end: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            subscription_status=user.subscription_status,
            subscription_current_period_end=user.subscription_current_period_end,
        )


class CheckoutSessionResponse(BaseModel):
    """Response for a newly created checkout session."""

    checkout_url: str = Field(..., description="Provider-hosted payment page URL")
