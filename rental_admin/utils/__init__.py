"""
Utility modules for the rental listing moderation API.
"""

from .auth import (
    hash_password,
    verify_password,
    TokenPayload
)

from .exceptions import (
    APIException,
    BadRequestError,
    NotFoundError,
    UnauthorizedError,
    InternalServerError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserNotFoundError,
    ListingNotFoundError
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    # Auth utilities
    "hash_password",
    "verify_password",
    "TokenPayload",

    # Exceptions
    "APIException",
    "BadRequestError",
    "NotFoundError",
    "UnauthorizedError",
    "InternalServerError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "UserNotFoundError",
    "ListingNotFoundError",
]
