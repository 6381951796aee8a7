"""
Billing module interface.

The users module depends on IPaymentProvider, not on Stripe. Tests swap
in a mock, and a different provider only needs a new implementation.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import ProviderEvent, SubscriptionDetails


@runtime_checkable
class IPaymentProvider(Protocol):
    """
    Interface for the remote subscription provider.

    Every method is a remote call. Network and API failures are raised as
    PaymentProviderError; a bad webhook signature is the one expected
    rejection and has its own exception.
    """

    def create_customer(
        self,
        name: str,
        email: str,
        idempotency_key: Optional[str] = None,
    ) -> str:
        """
        Create a customer at the provider.

        Args:
            name: Customer display name
            email: Customer email
            idempotency_key: Repeating a call with the same key returns
                the customer created by the first call

        Returns:
            The provider's customer ID

        Raises:
            PaymentProviderError: If the provider call fails
        """
        ...

    def create_checkout_session(
        self,
        customer_id: str,
        success_url: str,
        cancel_url: str,
    ) -> str:
        """
        Create a subscription checkout session for a customer.

        Args:
            customer_id: Provider customer ID
            success_url: Redirect target after payment
            cancel_url: Redirect target if the user abandons checkout

        Returns:
            URL of the provider-hosted checkout page

        Raises:
            PaymentProviderError: If the provider call fails
        """
        ...

    def verify_webhook(
        self,
        payload: bytes,
        signature: str,
        secret: str,
    ) -> ProviderEvent:
        """
        Verify a webhook signature and decode the event.

        Args:
            payload: Raw request body, exactly as received
            signature: Value of the provider's signature header
            secret: Webhook signing secret

        Returns:
            The decoded event

        Raises:
            WebhookVerificationError: If the signature or payload is invalid
        """
        ...

    def fetch_subscription(self, subscription_id: str) -> SubscriptionDetails:
        """
        Fetch current subscription state.

        Raises:
            PaymentProviderError: If the provider call fails
        """
        ...
