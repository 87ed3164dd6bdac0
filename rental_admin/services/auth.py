"""
Authentication service for credential verification and the token gate.
"""

from typing import Optional, Tuple

from rental_admin.models.user import User
from rental_admin.repositories.user import UserRepository
from rental_admin.services.tokens import TokenService
from rental_admin.utils.auth import TokenPayload, pwd_context, verify_password
from rental_admin.utils.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    UnauthorizedError,
    UserNotFoundError
)
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for back-office administrators.
    Verifies credentials, issues tokens and resolves tokens back to claims and users.
    """

    def __init__(self, user_repository: UserRepository, token_service: TokenService):
        self.user_repo = user_repository
        self.token_service = token_service

    def verify_credentials(self, email: str, password: str) -> User:
        """
        Check an e-mail/password pair against the stored user record.

        Args:
            email: E-mail address, matched exactly
            password: Plain text password

        Returns:
            Matching User

        Raises:
            UserNotFoundError: If no user has this e-mail
            InvalidCredentialsError: If the password does not match
        """
        user = self.user_repo.get_by_email(email)
        if user is None:
            # Unknown e-mails still cost one hash comparison
            pwd_context.dummy_verify()
            raise UserNotFoundError(email)

        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        return user

    async def authenticate_user(self, email: str, password: str) -> User:
        """
        Authenticate user with email and password.

        Unknown e-mails and wrong passwords fail identically so callers
        cannot probe which accounts exist.

        Raises:
            InvalidCredentialsError: If credentials are invalid
        """
        try:
            user = self.verify_credentials(email, password)
        except UserNotFoundError:
            logger.warning(f"Failed authentication attempt for unknown email: {email}")
            raise InvalidCredentialsError()
        except InvalidCredentialsError:
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise

        logger.info(f"User authenticated successfully: {user.email}")
        return user

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate user and create an access token.

        Returns:
            Tuple of (user, access_token)
        """
        user = await self.authenticate_user(email, password)
        return user, self.token_service.issue(user)

    def inspect_token(self, token: Optional[str]) -> Optional[TokenPayload]:
        """Decode a token without raising; None when it is not valid."""
        return self.token_service.validate(token)

    def require_token(self, token: Optional[str]) -> TokenPayload:
        """
        Gate for protected operations.

        Raises:
            UnauthorizedError: If no token was supplied
            InvalidTokenError: If the token is invalid or expired
        """
        if not token:
            raise UnauthorizedError("Authentication token required")

        claims = self.token_service.validate(token)
        if claims is None:
            raise InvalidTokenError()
        return claims

    async def get_current_user(self, token: Optional[str]) -> User:
        """
        Get current user from access token.

        Raises:
            UnauthorizedError: If no token was supplied
            InvalidTokenError: If the token is invalid, expired or names an unknown user
        """
        claims = self.require_token(token)

        try:
            user_id = int(claims.user_id)
        except ValueError:
            raise InvalidTokenError()

        user = self.user_repo.get_by_id(user_id)
        if user is None or user.email != claims.email:
            raise InvalidTokenError()
        return user
