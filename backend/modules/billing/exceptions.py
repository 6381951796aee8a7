"""
Billing module exceptions.

These exceptions are raised by the billing module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import ServiceError, ExternalServiceError


class BillingError(ServiceError):
    """Base exception for billing-related errors."""

    pass


class WebhookVerificationError(BillingError):
    """Raised when Stripe webhook signature verification fails."""

    def __init__(self):
        super().__init__(
            "Webhook signature verification failed",
            code="WEBHOOK_VERIFICATION_FAILED",
        )


class WebhookPayloadTooLargeError(BillingError):
    """Raised when a webhook body exceeds the accepted size."""

    def __init__(self, max_bytes: int):
        super().__init__(
            f"Webhook payload exceeds {max_bytes} bytes",
            code="WEBHOOK_PAYLOAD_TOO_LARGE",
            details={"max_bytes": max_bytes},
        )


class PaymentProviderError(ExternalServiceError):
    """Raised when a call to Stripe fails."""

    def __init__(self, message: str, stripe_error: Optional[str] = None):
        super().__init__(
            message,
            service="stripe",
            code="PAYMENT_PROVIDER_ERROR",
            details={"stripe_error": stripe_error} if stripe_error else {},
        )
