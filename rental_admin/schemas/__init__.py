"""
Pydantic schemas for request/response validation.
"""

# Authentication schemas
from .auth import (
    LoginRequest,
    LoginResponse,
    CurrentUserResponse,
    TokenValidationResponse
)

# Listing schemas
from .listing import (
    ListingResponse,
    ListingListResponse,
    ListingStatsResponse,
    ListingUpdate,
    ModerationRequest
)

# Audit schemas
from .audit import AuditEntryResponse

__all__ = [
    # Authentication
    "LoginRequest",
    "LoginResponse",
    "CurrentUserResponse",
    "TokenValidationResponse",

    # Listing
    "ListingResponse",
    "ListingListResponse",
    "ListingStatsResponse",
    "ListingUpdate",
    "ModerationRequest",

    # Audit
    "AuditEntryResponse",
]
