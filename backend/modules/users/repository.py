"""
User repository for database access.

Encapsulates all SQL statements and row mapping for the users table.
Lookups that match no row return None; every other failure is raised
as the driver's exception.
"""

from typing import Optional, Any

from shared.repository import BaseRepository
from .models import User, UserInput


_USER_COLUMNS = (
    "id, name, email, stripe_customer_id, stripe_subscription_id, "
    "subscription_status, subscription_current_period_end"
)


class UserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    Name/email and the subscription fields are written by separate
    statements. Callers that only know about name/email can therefore
    never clear subscription state.

    Note: This repository does NOT validate input.
    The service layer is responsible for enforcing field rules.
    """

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_by_id(self, user_id: int) -> Optional[User]:
        """
        Get a user by ID.

        Returns:
            The user, or None if no row matches.
        """
        with self._cursor() as cur:
            cur.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
                (user_id,),
            )
            row = cur.fetchone()

        if row is None:
            return None
        return self._map_to_user(row)

    def get_by_customer_id(self, customer_id: str) -> Optional[User]:
        """
        Get a user by Stripe customer ID.

        Returns:
            The user, or None if no row matches.
        """
        with self._cursor() as cur:
            cur.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE stripe_customer_id = %s",
                (customer_id,),
            )
            row = cur.fetchone()

        if row is None:
            return None
        return self._map_to_user(row)

    def get_all(self) -> list[User]:
        """List every user ordered by ID."""
        with self._cursor() as cur:
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY id")
            rows = cur.fetchall()

        return [self._map_to_user(row) for row in rows]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, user: UserInput) -> int:
        """
        Insert a new user. Subscription fields start at their column defaults.

        Returns:
            The generated user ID.
        """
        with self._cursor() as cur:
            cur.execute(
                "INSERT INTO users (name, email) VALUES (%s, %s) RETURNING id",
                (user.name, user.email),
            )
            row = cur.fetchone()

        return int(row["id"])

    def update(self, user_id: int, user: UserInput) -> None:
        """Update name and email only."""
        with self._cursor() as cur:
            cur.execute(
                "UPDATE users SET name = %s, email = %s WHERE id = %s",
                (user.name, user.email, user_id),
            )

    def update_subscription(self, user_id: int, user: User) -> None:
        """Update the four subscription fields only."""
        with self._cursor() as cur:
            cur.execute(
                """
                UPDATE users
                SET stripe_customer_id = %s,
                    stripe_subscription_id = %s,
                    subscription_status = %s,
                    subscription_current_period_end = %s
                WHERE id = %s
                """,
                (
                    user.stripe_customer_id,
                    user.stripe_subscription_id,
                    user.subscription_status,
                    user.subscription_current_period_end,
                    user_id,
                ),
            )

    def delete(self, user_id: int) -> None:
        """Delete a user by ID."""
        with self._cursor() as cur:
            cur.execute("DELETE FROM users WHERE id = %s", (user_id,))

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_user(self, row: dict[str, Any]) -> User:
        """Map a database row to a User model."""
        return User(
            id=int(row["id"]),
            name=row["name"],
            email=row["email"],
            stripe_customer_id=row.get("stripe_customer_id") or None,
            stripe_subscription_id=row.get("stripe_subscription_id") or None,
            subscription_status=row.get("subscription_status") or "inactive",
            subscription_current_period_end=row.get("subscription_current_period_end"),
        )
