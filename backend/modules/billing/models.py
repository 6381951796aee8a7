"""
Billing module data models.

Provider webhook events are decoded into a closed set of typed events.
Event types the service does not act on are kept as UnrecognizedEvent
instead of failing.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class StripeEventType(str, Enum):
    """Stripe event types the service reacts to."""

    CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
    SUBSCRIPTION_UPDATED = "customer.subscription.updated"
    SUBSCRIPTION_DELETED = "customer.subscription.deleted"


class SubscriptionDetails(BaseModel):
    """Subscription state as reported by the provider."""

    id: str = Field(..., description="Subscription ID (sub_...)")
    customer_id: Optional[str] = Field(None, description="Customer ID (cus_...)")
    status: str = Field(..., description="Provider status, e.g. 'active'")
    current_period_end: Optional[datetime] = Field(
        None,
        description="End of the current billing period (UTC)",
    )


class CheckoutCompletedEvent(BaseModel):
    """A checkout session finished and a subscription was created."""

    kind: Literal["checkout_completed"] = "checkout_completed"
    event_id: str
    customer_id: Optional[str] = None
    subscription_id: Optional[str] = None


class SubscriptionUpdatedEvent(BaseModel):
    """The provider changed a subscription (renewal, payment failure, ...)."""

    kind: Literal["subscription_updated"] = "subscription_updated"
    event_id: str
    subscription: SubscriptionDetails


class SubscriptionDeletedEvent(BaseModel):
    """The provider ended a subscription."""

    kind: Literal["subscription_deleted"] = "subscription_deleted"
    event_id: str
    subscription: SubscriptionDetails


class UnrecognizedEvent(BaseModel):
    """Any event type without a handler."""

    kind: Literal["unrecognized"] = "unrecognized"
    event_id: str
    event_type: str


ProviderEvent = Annotated[
    Union[
        CheckoutCompletedEvent,
        SubscriptionUpdatedEvent,
        SubscriptionDeletedEvent,
        UnrecognizedEvent,
    ],
    Field(discriminator="kind"),
]
