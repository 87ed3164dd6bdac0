"""
Token service issuing and validating signed, time-bound access tokens.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt

from rental_admin.config import Settings
from rental_admin.models.user import User
from rental_admin.utils.auth import TokenPayload
import logging

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"


class TokenService:
    """
    Issues HS256 JWT access tokens and validates them.

    Validation never raises: any bad signature, malformed payload or elapsed
    expiry yields None, and callers branch on the result.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 24 * 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.access_token_expire_minutes
        )

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return int(self.ttl.total_seconds())

    def issue(self, user: User, issued_at: Optional[datetime] = None) -> str:
        """
        Create a signed access token for a user.

        Args:
            user: Authenticated user
            issued_at: Issue time, defaults to now

        Returns:
            Encoded JWT token string
        """
        issued_at = issued_at or datetime.now(timezone.utc)

        to_encode = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
            "type": ACCESS_TOKEN_TYPE
        }

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def validate(self, token: Optional[str]) -> Optional[TokenPayload]:
        """
        Verify and decode an access token.

        Args:
            token: JWT token string

        Returns:
            TokenPayload if valid, None if invalid or expired
        """
        if not token:
            return None

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            return None

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            logger.debug("Token rejected: unexpected token type")
            return None

        if not payload.get("sub") or not payload.get("email"):
            logger.debug("Token rejected: missing subject or email claim")
            return None

        try:
            return TokenPayload.from_dict(payload)
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            logger.debug(f"Token rejected: malformed claims ({e})")
            return None
