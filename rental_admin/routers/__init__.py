"""
API route handlers for the rental listing moderation API.
"""

from .auth import router as auth_router
from .listings import router as listings_router
from .audit import router as audit_router

__all__ = ["auth_router", "listings_router", "audit_router"]
