"""
User repository over the fixed set of back-office accounts.
"""

from typing import Dict, Iterable, Optional
from rental_admin.models.user import User
import logging

logger = logging.getLogger(__name__)


class UserRepository:
    """Read-only lookup of users by e-mail or id."""

    def __init__(self, users: Iterable[User] = ()):
        self._users_by_email: Dict[str, User] = {}
        for user in users:
            if user.email in self._users_by_email:
                raise ValueError(f"Duplicate user e-mail: {user.email}")
            self._users_by_email[user.email] = user

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Get a user by exact e-mail match.

        Args:
            email: E-mail address, compared case-sensitively as stored

        Returns:
            User if found, None otherwise
        """
        return self._users_by_email.get(email)

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by id."""
        for user in self._users_by_email.values():
            if user.id == user_id:
                return user
        logger.debug(f"User with id {user_id} not found")
        return None

