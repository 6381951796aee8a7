"""
Payment provider webhook endpoint.

Receives Stripe events. The raw body is read with a size cap before it
is handed to the service for signature verification.
"""

from fastapi import APIRouter, Depends, Header, Request
from pydantic import BaseModel

from api.dependencies import get_user_service
from modules.users.interfaces import IUserService
from shared.config import get_settings

from .exceptions import WebhookPayloadTooLargeError

router = APIRouter()


class WebhookAck(BaseModel):
    """Acknowledgement returned to the provider."""

    received: bool = True


async def read_bounded_body(request: Request, max_bytes: int) -> bytes:
    """
    Read the request body, refusing anything over max_bytes.

    Raises:
        WebhookPayloadTooLargeError: If the body is larger than max_bytes
    """
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise WebhookPayloadTooLargeError(max_bytes)

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise WebhookPayloadTooLargeError(max_bytes)
    return bytes(body)


@router.post("/provider", response_model=WebhookAck)
async def provider_webhook(
    request: Request,
    stripe_signature: str = Header(default="", alias="Stripe-Signature"),
    service: IUserService = Depends(get_user_service),
) -> WebhookAck:
    """
    Handle a Stripe webhook event.

    Returns 400 if the signature cannot be verified. Unhandled event
    types are acknowledged with 200 so Stripe doesn't retry them.
    """
    payload = await read_bounded_body(request, get_settings().webhook_max_body_bytes)
    await service.handle_provider_webhook(payload, stripe_signature)
    return WebhookAck()
