"""
Billing module.

Handles the Stripe integration: customers, checkout sessions, webhook
verification and subscription lookup.

Public API:
- IPaymentProvider: Interface for the remote subscription provider
- StripePaymentProvider: Stripe implementation
- ProviderEvent: Typed webhook events
- Billing exceptions: WebhookVerificationError, etc.
"""

from .interfaces import IPaymentProvider
from .provider import StripePaymentProvider
from .models import (
    StripeEventType,
    SubscriptionDetails,
    CheckoutCompletedEvent,
    SubscriptionUpdatedEvent,
    SubscriptionDeletedEvent,
    UnrecognizedEvent,
    ProviderEvent,
)
from .exceptions import (
    BillingError,
    WebhookVerificationError,
    WebhookPayloadTooLargeError,
    PaymentProviderError,
)

__all__ = [
    # Interface
    "IPaymentProvider",
    "StripePaymentProvider",
    # Models
    "StripeEventType",
    "SubscriptionDetails",
    "CheckoutCompletedEvent",
    "SubscriptionUpdatedEvent",
    "SubscriptionDeletedEvent",
    "UnrecognizedEvent",
    "ProviderEvent",
    # Exceptions
    "BillingError",
    "WebhookVerificationError",
    "WebhookPayloadTooLargeError",
    "PaymentProviderError",
]
