"""
User API endpoints.

Provides REST endpoints for user CRUD operations and subscription checkout.
Service exceptions are translated to HTTP responses by the handlers
registered in api.errors.
"""

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_user_service

from .interfaces import IUserService
from .models import (
    CheckoutSessionResponse,
    SubscriptionStatus,
    UserInput,
    UserResponse,
)

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    request: UserInput,
    service: IUserService = Depends(get_user_service),
) -> UserResponse:
    """
    Create a new user.

    Subscription fields start as 'inactive' with no provider references.
    """
    user_id = await service.create_user(request)
    return UserResponse(
        id=user_id,
        name=request.name,
        email=request.email,
        subscription_status=SubscriptionStatus.INACTIVE.value,
    )


@router.get("", response_model=list[UserResponse])
async def list_users(
    service: IUserService = Depends(get_user_service),
) -> list[UserResponse]:
    """List all users ordered by ID."""
    users = await service.get_all_users()
    return [UserResponse.from_user(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    service: IUserService = Depends(get_user_service),
) -> UserResponse:
    """Get a specific user."""
    user = await service.get_user_by_id(user_id)
    return UserResponse.from_user(user)


@router.put("/{user_id}", status_code=204)
async def update_user(
    user_id: int,
    request: UserInput,
    service: IUserService = Depends(get_user_service),
) -> Response:
    """
    Update a user's name and email.

    Subscription state is never changed through this endpoint.
    """
    await service.update_user(user_id, request)
    return Response(status_code=204)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: int,
    service: IUserService = Depends(get_user_service),
) -> Response:
    """Delete a user."""
    await service.delete_user(user_id)
    return Response(status_code=204)


@router.post("/{user_id}/checkout-session", response_model=CheckoutSessionResponse)
async def create_checkout_session(
    user_id: int,
    service: IUserService = Depends(get_user_service),
) -> CheckoutSessionResponse:
    """
    Create a Stripe checkout session for a subscription.

    Returns 409 if the user's subscription is already active.
    """
    checkout_url = await service.create_checkout_session(user_id)
    return CheckoutSessionResponse(checkout_url=checkout_url)
