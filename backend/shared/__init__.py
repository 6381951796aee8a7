"""
Shared infrastructure for the Users API backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: PostgreSQL connection pool factory
- repository: Base repository with the connection borrow/commit cycle
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_connection_pool, close_connection_pool, reset_pool_cache
from .exceptions import (
    ServiceError,
    NotFoundError,
    ValidationError,
    ConflictError,
    ExternalServiceError,
)

__all__ = [
    "Settings",
    "get_settings",
    "get_connection_pool",
    "close_connection_pool",
    "reset_pool_cache",
    "ServiceError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "ExternalServiceError",
]
