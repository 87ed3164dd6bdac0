"""
User model for back-office administrators.
Users are read-only reference data; there is no self-service account management.
"""

from dataclasses import dataclass
from typing import Dict, Any
import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    ADMIN = "admin"


@dataclass(frozen=True)
class User:
    """Back-office user able to moderate listings."""

    id: int
    email: str
    password_hash: str
    role: UserRole = UserRole.ADMIN

    def __repr__(self) -> str:
        """String representation of the user (never includes the hash)."""
        return f"<User(id={self.id}, email={self.email}, role={self.role.value})>"

    def to_dict(self) -> Dict[str, Any]:
        """Convert user to dictionary without the password hash."""
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role.value,
        }
