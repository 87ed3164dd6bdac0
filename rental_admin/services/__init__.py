"""
Service layer for business logic implementation.
Contains services for tokens, authentication, moderation and error handling.
"""

from .tokens import TokenService
from .auth import AuthService
from .moderation import ModerationService
from .error_handler import ErrorHandlerService

__all__ = [
    "TokenService",
    "AuthService",
    "ModerationService",
    "ErrorHandlerService"
]
