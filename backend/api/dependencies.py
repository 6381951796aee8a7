"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from psycopg2.pool import AbstractConnectionPool
    from modules.billing.interfaces import IPaymentProvider
    from modules.users.interfaces import IUserService
    from modules.users.repository import UserRepository
    from .telemetry import ITelemetrySink


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._pool: "AbstractConnectionPool | None" = None
        self._user_repository: "UserRepository | None" = None
        self._payments: "IPaymentProvider | None" = None
        self._user_service: "IUserService | None" = None
        self._telemetry: "ITelemetrySink | None" = None

    @property
    def pool(self) -> "AbstractConnectionPool":
        """Get the database connection pool."""
        if self._pool is None:
            from shared.database import get_connection_pool
            self._pool = get_connection_pool()
        return self._pool

    @property
    def user_repository(self) -> "UserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            from modules.users.repository import UserRepository
            self._user_repository = UserRepository(self.pool)
        return self._user_repository

    @property
    def payments(self) -> "IPaymentProvider":
        """Get the payment provider instance."""
        if self._payments is None:
            from modules.billing.provider import StripePaymentProvider
            from shared.config import get_settings
            settings = get_settings()
            self._payments = StripePaymentProvider(
                api_key=settings.stripe_secret_key,
                price_id=settings.stripe_price_id,
            )
        return self._payments

    @property
    def users(self) -> "IUserService":
        """Get the user service instance."""
        if self._user_service is None:
            from modules.users.service import UserService
            from shared.config import get_settings
            settings = get_settings()
            self._user_service = UserService(
                repository=self.user_repository,
                payments=self.payments,
                webhook_secret=settings.stripe_webhook_secret,
                checkout_success_url=settings.checkout_success_url,
                checkout_cancel_url=settings.checkout_cancel_url,
            )
        return self._user_service

    @property
    def telemetry(self) -> "ITelemetrySink":
        """Get the request telemetry sink."""
        if self._telemetry is None:
            from .telemetry import OpenTelemetrySink
            self._telemetry = OpenTelemetrySink()
        return self._telemetry

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._pool = None
        self._user_repository = None
        self._payments = None
        self._user_service = None
        self._telemetry = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_user_repository() -> "UserRepository":
    """FastAPI dependency for the user repository."""
    return get_container().user_repository


def get_user_service() -> "IUserService":
    """FastAPI dependency for user service."""
    return get_container().users
