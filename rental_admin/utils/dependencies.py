"""
FastAPI dependency injection utilities.
Resolves the services built by the application factory and extracts bearer tokens.
"""

from typing import Optional
from fastapi import Cookie, Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from rental_admin.services.auth import AuthService
from rental_admin.services.moderation import ModerationService


# HTTP Bearer token security scheme; missing tokens are reported by the services
security = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    """Authentication service owned by the running application."""
    return request.app.state.auth_service


def get_moderation_service(request: Request) -> ModerationService:
    """Moderation service owned by the running application."""
    return request.app.state.moderation_service


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_cookie: Optional[str] = Cookie(None, alias="token")
) -> Optional[str]:
    """
    Get the raw token from an ``Authorization: Bearer <token>`` header,
    falling back to a ``token`` cookie.

    Returns:
        Token string, or None when neither carrier holds one
    """
    if credentials:
        return credentials.credentials
    return token_cookie or None
