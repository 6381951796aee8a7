"""
Stripe implementation of the payment provider.

Wraps the Stripe SDK calls used by the service: customer creation,
subscription checkout sessions, webhook verification and subscription
lookup. Stripe payloads are turned into the typed models from
.models before they leave this module.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import stripe

from .interfaces import IPaymentProvider
from .models import (
    CheckoutCompletedEvent,
    ProviderEvent,
    StripeEventType,
    SubscriptionDeletedEvent,
    SubscriptionDetails,
    SubscriptionUpdatedEvent,
    UnrecognizedEvent,
)
from .exceptions import PaymentProviderError, WebhookVerificationError

logger = logging.getLogger(__name__)


class StripePaymentProvider(IPaymentProvider):
    """
    Payment provider backed by the Stripe API.

    The API key is passed on every request; the global stripe module
    is never configured.
    """

    def __init__(self, api_key: str, price_id: str):
        self._api_key = api_key
        self._price_id = price_id

    def create_customer(
        self,
        name: str,
        email: str,
        idempotency_key: Optional[str] = None,
    ) -> str:
        """Create a Stripe customer and return its ID."""
        options: dict[str, Any] = {"api_key": self._api_key}
        if idempotency_key:
            options["idempotency_key"] = idempotency_key

        try:
            customer = stripe.Customer.create(name=name, email=email, **options)
        except stripe.StripeError as e:
            logger.error("Failed to create Stripe customer: %s", e)
            raise PaymentProviderError(
                "Failed to create customer",
                stripe_error=str(e),
            ) from e

        return customer.id

    def create_checkout_session(
        self,
        customer_id: str,
        success_url: str,
        cancel_url: str,
    ) -> str:
        """Create a subscription-mode checkout session for the configured price."""
        try:
            session = stripe.checkout.Session.create(
                api_key=self._api_key,
                customer=customer_id,
                mode="subscription",
                line_items=[{"price": self._price_id, "quantity": 1}],
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as e:
            logger.error("Failed to create Stripe checkout session: %s", e)
            raise PaymentProviderError(
                "Failed to create checkout session",
                stripe_error=str(e),
            ) from e

        return session.url

    def verify_webhook(
        self,
        payload: bytes,
        signature: str,
        secret: str,
    ) -> ProviderEvent:
        """Verify the Stripe-Signature header and decode the event."""
        try:
            stripe.Webhook.construct_event(payload, signature, secret)
        except (ValueError, stripe.SignatureVerificationError) as e:
            logger.warning("Webhook signature verification failed: %s", e)
            raise WebhookVerificationError() from e

        # Signature is valid, so the body is Stripe's JSON
        return parse_event(json.loads(payload))

    def fetch_subscription(self, subscription_id: str) -> SubscriptionDetails:
        """Retrieve a subscription from Stripe."""
        try:
            subscription = stripe.Subscription.retrieve(
                subscription_id,
                api_key=self._api_key,
            )
        except stripe.StripeError as e:
            logger.error("Failed to retrieve Stripe subscription %s: %s", subscription_id, e)
            raise PaymentProviderError(
                "Failed to retrieve subscription",
                stripe_error=str(e),
            ) from e

        return parse_subscription(subscription.to_dict())


# -----------------------------------------------------------------------------
# Payload parsing
# -----------------------------------------------------------------------------


def parse_event(data: dict[str, Any]) -> ProviderEvent:
    """
    Map a Stripe event payload to a typed provider event.

    Unknown event types become UnrecognizedEvent.
    """
    event_id = data.get("id", "")
    event_type = data.get("type", "")
    obj = (data.get("data") or {}).get("object") or {}

    if event_type == StripeEventType.CHECKOUT_SESSION_COMPLETED.value:
        return CheckoutCompletedEvent(
            event_id=event_id,
            customer_id=_object_id(obj.get("customer")),
            subscription_id=_object_id(obj.get("subscription")),
        )
    if event_type == StripeEventType.SUBSCRIPTION_UPDATED.value:
        return SubscriptionUpdatedEvent(
            event_id=event_id,
            subscription=parse_subscription(obj),
        )
    if event_type == StripeEventType.SUBSCRIPTION_DELETED.value:
        return SubscriptionDeletedEvent(
            event_id=event_id,
            subscription=parse_subscription(obj),
        )

    return UnrecognizedEvent(event_id=event_id, event_type=event_type)


def parse_subscription(obj: dict[str, Any]) -> SubscriptionDetails:
    """Map a Stripe subscription object to SubscriptionDetails."""
    return SubscriptionDetails(
        id=obj.get("id", ""),
        customer_id=_object_id(obj.get("customer")),
        status=obj.get("status", ""),
        current_period_end=_period_end(obj),
    )


def _object_id(value: Any) -> Optional[str]:
    """Stripe references are either an ID string or an expanded object."""
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    return value.get("id")


def _period_end(obj: dict[str, Any]) -> Optional[datetime]:
    """
    Read the current period end as a UTC datetime.

    Newer Stripe API versions moved current_period_end from the
    subscription to its items.
    """
    timestamp = obj.get("current_period_end")
    if timestamp is None:
        items = (obj.get("items") or {}).get("data") or []
        if items:
            timestamp = items[0].get("current_period_end")

    if not timestamp:
        return None
    return datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
