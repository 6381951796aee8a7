"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import hashlib
import hmac
import json
import time
from datetime import datetime, timezone

import pytest

from api.dependencies import reset_container
from shared.config import get_settings
from shared.database import reset_pool_cache
from modules.users.models import User


# Test webhook secret (only for testing)
TEST_WEBHOOK_SECRET = "whsec_test_secret_for_testing_only"


def sign_stripe_payload(
    payload: bytes,
    secret: str = TEST_WEBHOOK_SECRET,
    timestamp: int | None = None,
) -> str:
    """
    Build a Stripe-Signature header value for a payload.

    Uses Stripe's v1 scheme: HMAC-SHA256 over "<timestamp>.<payload>".
    """
    timestamp = timestamp or int(time.time())
    signed = f"{timestamp}.".encode() + payload
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def make_stripe_event(event_type: str, obj: dict, event_id: str = "evt_123") -> bytes:
    """Serialize a minimal Stripe event envelope."""
    return json.dumps({
        "id": event_id,
        "object": "event",
        "type": event_type,
        "data": {"object": obj},
    }).encode()


def make_user(
    user_id: int = 1,
    name: str = "Ana",
    email: str = "ana@x.com",
    **overrides,
) -> User:
    """Create a User with default subscription fields."""
    return User(id=user_id, name=name, email=email, **overrides)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, pool and service container around each test."""
    get_settings.cache_clear()
    reset_pool_cache()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_pool_cache()
    reset_container()


@pytest.fixture
def period_end() -> datetime:
    """A fixed billing period end."""
    return datetime(2030, 1, 31, 12, 0, tzinfo=timezone.utc)
